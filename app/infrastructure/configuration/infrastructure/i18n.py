"""Localization engine infrastructure settings."""

import re
from typing import Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings

_LIST_SEPARATORS = re.compile(r"[,\n]")


def split_list(raw: Optional[str]) -> list[str]:
    """Split a comma or newline separated environment value.

    Whitespace is trimmed, empty items dropped and duplicates removed while
    preserving the first occurrence order.
    """
    if not raw:
        return []
    items: list[str] = []
    for item in _LIST_SEPARATORS.split(raw):
        item = item.strip()
        if item and item not in items:
            items.append(item)
    return items


class I18nSettings(InfrastructureSettings):
    """Locale registry, message storage and negotiation configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Universal fallback locale (default: en)
        I18N_LOCALES: Supported locale codes, comma or newline separated.
            When empty the registry falls back to the default locale plus
            one alternate.
        I18N_DEFAULT_NAMESPACES: Namespaces loaded for every page
            (default: common,menu)
        I18N_MESSAGES_DIR: Directory holding message documents
            (default: auto-discover app/messages)
        I18N_ROUTE_MANIFEST: Optional route -> namespaces manifest file
        I18N_COOKIE_NAME: Name of the locale preference cookie
        I18N_COOKIE_MAX_AGE: Cookie lifetime in seconds (default: one year)
        I18N_EXCLUDED_PREFIXES: Path prefixes the negotiation middleware
            never touches (API, health checks, static assets)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        codes = settings.i18n.locale_codes
        cookie = settings.i18n.COOKIE_NAME
        ```
    """

    DEFAULT_LOCALE: str = Field(default="en", alias="I18N_DEFAULT_LOCALE")
    LOCALES: str = Field(default="", alias="I18N_LOCALES")
    DEFAULT_NAMESPACES: str = Field(
        default="common,menu", alias="I18N_DEFAULT_NAMESPACES"
    )
    MESSAGES_DIR: Optional[str] = Field(default=None, alias="I18N_MESSAGES_DIR")
    ROUTE_MANIFEST: Optional[str] = Field(default=None, alias="I18N_ROUTE_MANIFEST")
    COOKIE_NAME: str = Field(default="NEXT_LOCALE", alias="I18N_COOKIE_NAME")
    COOKIE_MAX_AGE: int = Field(default=60 * 60 * 24 * 365, alias="I18N_COOKIE_MAX_AGE")
    EXCLUDED_PREFIXES: str = Field(
        default="/api,/health,/version,/docs,/redoc,/openapi.json,/static,/favicon.ico",
        alias="I18N_EXCLUDED_PREFIXES",
    )

    @field_validator("DEFAULT_LOCALE", mode="before")
    @classmethod
    def validate_default_locale(cls, v: Optional[str]) -> str:
        """Blank values fall back to "en"."""
        if v is None or not str(v).strip():
            return "en"
        return str(v).strip()

    @property
    def locale_codes(self) -> list[str]:
        """Supported locale codes as configured (may be empty)."""
        return split_list(self.LOCALES)

    @property
    def default_namespace_names(self) -> list[str]:
        """Names of the always-loaded namespaces."""
        return split_list(self.DEFAULT_NAMESPACES)

    @property
    def excluded_prefixes(self) -> list[str]:
        """Path prefixes skipped by the negotiation middleware."""
        return split_list(self.EXCLUDED_PREFIXES)
