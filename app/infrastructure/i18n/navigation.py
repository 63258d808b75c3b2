"""Locale-aware navigation helpers.

In-app paths carry the locale as their first segment (``/fr/dashboard``).
These helpers add, replace and strip that segment so handlers never build
locale-qualified URLs by hand. External links are never touched.

Usage:
    with provide_translations(context):
        localized_href("/dashboard")          # "/fr/dashboard"
        localized_href("/dashboard", "ar")    # "/ar/dashboard"
        localized_href("mailto:a@b.c")        # unchanged
"""

import re
from typing import Optional

from starlette.responses import RedirectResponse

from infrastructure.i18n.context import use_locale
from infrastructure.i18n.models import Locale
from infrastructure.i18n.registry import LocaleRegistry

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def _default_registry() -> LocaleRegistry:
    # Imported here: the provider module imports the i18n package.
    from infrastructure.services.providers import get_locale_registry

    return get_locale_registry()


def _split_suffix(href: str) -> tuple[str, str]:
    """Split ``href`` into its path and its ``?query#fragment`` suffix."""
    cut = len(href)
    for marker in ("?", "#"):
        index = href.find(marker)
        if index != -1:
            cut = min(cut, index)
    return href[:cut], href[cut:]


def _leading_segment(path: str) -> str:
    return path[1:].split("/", 1)[0]


def is_external_href(href: str) -> bool:
    """Check whether an href must never receive a locale prefix.

    Absolute URLs with a scheme (``https:``, ``mailto:``, ``tel:``, ...),
    protocol-relative URLs and bare ``#fragment`` links are external.
    """
    return bool(_SCHEME.match(href)) or href.startswith("//") or href.startswith("#")


def add_locale_prefix(
    path: str, locale: Locale, registry: Optional[LocaleRegistry] = None
) -> str:
    """Qualify an in-app path with ``locale``.

    A leading supported locale segment is replaced; otherwise ``/{locale}``
    is prepended. Relative paths and external hrefs pass through unchanged.
    Query strings and fragments are preserved.

    Args:
        path: Path to qualify.
        locale: Locale for the first segment.
        registry: LocaleRegistry (default: application registry).

    Returns:
        The locale-qualified path.
    """
    if not path.startswith("/") or is_external_href(path):
        return path

    registry = registry or _default_registry()
    path_part, suffix = _split_suffix(path)

    segment = _leading_segment(path_part)
    if registry.is_valid_locale(segment):
        path_part = path_part[len(segment) + 1 :]

    if path_part in ("", "/"):
        return f"/{locale}{suffix}"
    return f"/{locale}{path_part}{suffix}"


def remove_locale_prefix(path: str, registry: Optional[LocaleRegistry] = None) -> str:
    """Strip a leading supported locale segment.

    Returns "/" when nothing remains; paths without a locale segment are
    returned unchanged.
    """
    if not path.startswith("/") or is_external_href(path):
        return path

    registry = registry or _default_registry()
    path_part, suffix = _split_suffix(path)

    segment = _leading_segment(path_part)
    if not registry.is_valid_locale(segment):
        return path

    rest = path_part[len(segment) + 1 :]
    return f"{rest or '/'}{suffix}"


def localized_href(
    href: str,
    locale: Optional[Locale] = None,
    registry: Optional[LocaleRegistry] = None,
) -> str:
    """Link target for ``href`` in the ambient or explicit locale.

    Args:
        href: Target as written in the page.
        locale: Explicit locale override; defaults to the active context's.
        registry: LocaleRegistry (default: application registry).

    Returns:
        The href to render.

    Raises:
        MissingTranslationProviderError: If no locale is given and no
            TranslationContext is active.
    """
    if is_external_href(href) or not href.startswith("/"):
        return href
    return add_locale_prefix(href, locale or use_locale(), registry)


def localized_redirect(
    href: str,
    locale: Optional[Locale] = None,
    status_code: int = 307,
    registry: Optional[LocaleRegistry] = None,
) -> RedirectResponse:
    """RedirectResponse to ``href`` qualified like localized_href()."""
    return RedirectResponse(
        url=localized_href(href, locale, registry), status_code=status_code
    )


def current_pathname(path: str, registry: Optional[LocaleRegistry] = None) -> str:
    """Locale-less pathname of a request path, without query or fragment."""
    path_part, _ = _split_suffix(path)
    return remove_locale_prefix(path_part or "/", registry)


def switch_locale_href(
    path: str, locale: Locale, registry: Optional[LocaleRegistry] = None
) -> str:
    """Same page in another locale, for language switchers."""
    return add_locale_prefix(path, locale, registry)
