from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from infrastructure.i18n.models import NegotiatedLocale
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.resolvers import LocaleNegotiator, is_probe_path
from infrastructure.logging import bind_request_context, get_module_logger

logger = get_module_logger()

DEFAULT_COOKIE_NAME = "NEXT_LOCALE"
DEFAULT_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


class LocaleMiddleware(BaseHTTPMiddleware):
    """Negotiates the locale of every page request.

    Probe paths are answered with a bodiless 404 before any locale logic.
    Excluded prefixes (API, health checks, assets) pass through untouched.
    Everything else is either redirected to a locale-qualified URL or
    served with ``request.state.locale`` set.
    """

    def __init__(
        self,
        app,
        registry: LocaleRegistry,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE,
        excluded_prefixes: Optional[Iterable[str]] = None,
    ):
        super().__init__(app)
        self.registry = registry
        self.negotiator = LocaleNegotiator(registry)
        self.cookie_name = cookie_name
        self.cookie_max_age = cookie_max_age
        self.excluded_prefixes = tuple(excluded_prefixes or ())

    def is_excluded(self, path: str) -> bool:
        for prefix in self.excluded_prefixes:
            prefix = prefix.rstrip("/")
            if path == prefix or path.startswith(prefix + "/"):
                return True
        return False

    def set_locale_cookie(self, response: Response, locale: str) -> None:
        response.set_cookie(
            self.cookie_name,
            locale,
            max_age=self.cookie_max_age,
            path="/",
            samesite="lax",
        )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if is_probe_path(path):
            logger.info("probe_path_rejected", path=path)
            return Response(status_code=404)

        if self.is_excluded(path):
            return await call_next(request)

        decision: NegotiatedLocale = self.negotiator.negotiate(
            path,
            cookie_locale=request.cookies.get(self.cookie_name),
            accept_language=request.headers.get("accept-language"),
            query=request.url.query,
        )

        if decision.requires_redirect:
            logger.info(
                "locale_redirect",
                path=path,
                state=decision.state.value,
                locale=decision.locale,
                redirect_to=decision.redirect_to,
            )
            response = RedirectResponse(url=decision.redirect_to, status_code=307)
            self.set_locale_cookie(response, decision.locale)
            return response

        request.state.locale = decision.locale
        with bind_request_context(
            correlation_id=request.headers.get("x-correlation-id"),
            request_path=path,
            request_method=request.method,
            locale=decision.locale,
        ):
            response = await call_next(request)

        if decision.write_cookie:
            self.set_locale_cookie(response, decision.locale)
        return response
