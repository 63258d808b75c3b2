from fastapi import APIRouter, HTTPException, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.i18n.context import provide_translations, use_translations
from infrastructure.i18n.navigation import current_pathname, switch_locale_href
from infrastructure.services import RequestLocaleDep, TranslationServiceDep
from models.i18n import LocaleLink, PageResponse

router = APIRouter(tags=["Pages"])
limiter = get_limiter()


async def render_page(
    request: Request, path_locale: str, locale: str, translations
) -> PageResponse:
    registry = translations.registry
    # Paths the locale middleware skipped (e.g. unknown /api routes).
    if not registry.is_valid_locale(path_locale):
        raise HTTPException(status_code=404, detail="Not Found")

    path = request.url.path
    context = await translations.create_route_context(locale, path)

    with provide_translations(context):
        t = use_translations("common")
        return PageResponse(
            locale=context.locale,
            direction=context.direction.value,
            pathname=current_pathname(path, registry),
            namespaces=[ns.value for ns in context.messages.namespaces],
            title=t("site.title"),
            alternates=[
                LocaleLink(locale=code, href=switch_locale_href(path, code, registry))
                for code in registry.locales
            ],
        )


# Registered last: these patterns match any locale-qualified page path.
@router.get("/{locale}", response_model=PageResponse)
@limiter.limit("50/minute")
async def get_locale_root(
    request: Request,
    locale: str,
    request_locale: RequestLocaleDep,
    translations: TranslationServiceDep,
):
    """Page context for a locale's root."""
    return await render_page(request, locale, request_locale, translations)


@router.get("/{locale}/{page_path:path}", response_model=PageResponse)
@limiter.limit("50/minute")
async def get_page(
    request: Request,
    locale: str,
    page_path: str,  # pylint: disable=unused-argument
    request_locale: RequestLocaleDep,
    translations: TranslationServiceDep,
):
    """Page context for a server-rendered page.

    Loads the namespaces the route declares, resolves the page title inside
    a TranslationContext and lists the same page in every other locale.
    """
    return await render_page(request, locale, request_locale, translations)
