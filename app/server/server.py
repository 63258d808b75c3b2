from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter, get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import get_locale_registry, get_settings
from server.lifespan import lifespan
from server.locale_middleware import LocaleMiddleware

logger = get_module_logger()
settings = get_settings()


handler = FastAPI(lifespan=lifespan)
setup_rate_limiter(handler)
limiter = get_limiter()


allow_origins = (
    ["*"]
    if settings.is_production
    else [
        settings.server.BACKEND_URL,
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    LocaleMiddleware,
    registry=get_locale_registry(),
    cookie_name=settings.i18n.COOKIE_NAME,
    cookie_max_age=settings.i18n.COOKIE_MAX_AGE,
    excluded_prefixes=settings.i18n.excluded_prefixes,
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


handler.include_router(api_router)
