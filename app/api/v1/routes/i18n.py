from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.i18n.models import Namespace
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.logging import get_module_logger
from infrastructure.services import (
    LocaleRegistryDep,
    MessageStoreDep,
)
from models.i18n import LocalesResponse, MessagesResponse

logger = get_module_logger()
router = APIRouter(prefix="/i18n", tags=["i18n"])
limiter = get_limiter()


def parse_namespaces(
    raw: Optional[str], registry: LocaleRegistry
) -> list[Namespace]:
    """Parse a comma separated ``namespaces`` query value.

    An absent or empty value selects the registry's default namespaces.

    Raises:
        HTTPException: 422 when a name is not a known namespace.
    """
    names = [name.strip() for name in (raw or "").split(",") if name.strip()]
    if not names:
        return list(registry.default_namespaces)

    namespaces = []
    unknown = []
    for name in names:
        try:
            namespaces.append(Namespace.from_string(name))
        except ValueError:
            unknown.append(name)

    if unknown:
        logger.info("unknown_namespaces_requested", namespaces=unknown)
        raise HTTPException(
            status_code=422, detail=f"Unknown namespaces: {', '.join(unknown)}"
        )
    return namespaces


@router.get("/locales", response_model=LocalesResponse)
@limiter.limit("50/minute")
def get_locales(request: Request, registry: LocaleRegistryDep):  # pylint: disable=unused-argument
    """List supported locales and the namespaces every page loads."""
    return LocalesResponse(
        locales=list(registry.locales),
        default_locale=registry.default_locale,
        default_namespaces=[ns.value for ns in registry.default_namespaces],
    )


@router.get("/{locale}/messages", response_model=MessagesResponse)
@limiter.limit("50/minute")
async def get_messages(
    request: Request,  # pylint: disable=unused-argument
    locale: str,
    store: MessageStoreDep,
    registry: LocaleRegistryDep,
    namespaces: Optional[str] = Query(default=None),
):
    """Message set for client-rendered code.

    Args:
        request (Request): The incoming HTTP request.
        locale (str): Locale code; unsupported codes are served the default locale.
        namespaces (str, optional): Comma separated namespace names. Defaults to
            the registry's default namespaces.

    Raises:
        HTTPException: 422 if a namespace name is unknown.

    Returns:
        MessagesResponse: The locale served, its text direction and the merged trees.
    """
    requested = parse_namespaces(namespaces, registry)
    locale = registry.normalize(locale)
    loaded = await store.load_namespaces(locale, requested)
    return MessagesResponse(
        locale=locale,
        direction=registry.get_direction(locale).value,
        messages=loaded.to_dict(),
    )
