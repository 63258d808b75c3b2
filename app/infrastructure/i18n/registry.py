"""Locale registry: supported locales, default locale and default namespaces.

Derived once from configuration at process start and read by every other
i18n component.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, TYPE_CHECKING

import structlog

from infrastructure.i18n.models import Locale, Namespace, TextDirection

if TYPE_CHECKING:
    from infrastructure.configuration import I18nSettings

logger = structlog.get_logger().bind(component="i18n.registry")

DEFAULT_LOCALE: Locale = "en"

# Used when no locales are configured so the registry is never empty.
FALLBACK_ALTERNATE_LOCALE: Locale = "ar"

DEFAULT_NAMESPACES: tuple[Namespace, ...] = (Namespace.COMMON, Namespace.MENU)

# Base language subtags written right-to-left.
RTL_LANGUAGES = frozenset(
    {
        "ar",
        "arc",
        "dv",
        "fa",
        "he",
        "ku",
        "nqo",
        "ps",
        "sd",
        "ug",
        "ur",
        "yi",
    }
)


def is_rtl_locale(locale: Locale) -> bool:
    return locale.split("-")[0].lower() in RTL_LANGUAGES


def direction_for(locale: Locale) -> TextDirection:
    return TextDirection.RTL if is_rtl_locale(locale) else TextDirection.LTR


@dataclass(frozen=True)
class LocaleRegistry:
    """Static locale configuration.

    Attributes:
        locales: Supported locale codes, default locale first if it was not
            listed explicitly.
        default_locale: Universal fallback locale.
        default_namespaces: Namespaces loaded for every page.
    """

    locales: tuple[Locale, ...] = (DEFAULT_LOCALE, FALLBACK_ALTERNATE_LOCALE)
    default_locale: Locale = DEFAULT_LOCALE
    default_namespaces: tuple[Namespace, ...] = field(default=DEFAULT_NAMESPACES)

    def __post_init__(self) -> None:
        locales = tuple(dict.fromkeys(self.locales))
        if self.default_locale not in locales:
            locales = (self.default_locale,) + locales
        object.__setattr__(self, "locales", locales)
        object.__setattr__(
            self,
            "default_namespaces",
            tuple(dict.fromkeys(Namespace.coerce(ns) for ns in self.default_namespaces)),
        )

    @classmethod
    def create(
        cls,
        locale_codes: Optional[Iterable[str]] = None,
        default_locale: Optional[str] = None,
        namespace_names: Optional[Iterable[str]] = None,
    ) -> "LocaleRegistry":
        """Build a registry from raw configuration values.

        Args:
            locale_codes: Supported locale codes. Empty or None yields the
                minimal fallback set (default locale plus one alternate).
            default_locale: Default locale code (default: "en").
            namespace_names: Names of the always-loaded namespaces. Unknown
                names are dropped with a warning.

        Returns:
            LocaleRegistry instance.
        """
        default = (default_locale or "").strip() or DEFAULT_LOCALE
        codes = [code.strip() for code in (locale_codes or []) if code and code.strip()]

        if not codes:
            alternate = (
                FALLBACK_ALTERNATE_LOCALE
                if default != FALLBACK_ALTERNATE_LOCALE
                else DEFAULT_LOCALE
            )
            codes = [default, alternate]
            logger.info("using_fallback_locales", locales=codes)

        namespaces: list[Namespace] = []
        if namespace_names is None:
            namespaces = list(DEFAULT_NAMESPACES)
        else:
            for name in namespace_names:
                try:
                    namespaces.append(Namespace.from_string(name))
                except ValueError:
                    logger.warning("unknown_default_namespace", namespace=name)

        return cls(
            locales=tuple(codes),
            default_locale=default,
            default_namespaces=tuple(namespaces),
        )

    @classmethod
    def from_settings(cls, i18n_settings: "I18nSettings") -> "LocaleRegistry":
        """Build the registry from I18nSettings."""
        registry = cls.create(
            locale_codes=i18n_settings.locale_codes,
            default_locale=i18n_settings.DEFAULT_LOCALE,
            namespace_names=i18n_settings.default_namespace_names,
        )
        logger.info(
            "locale_registry_initialized",
            locales=list(registry.locales),
            default_locale=registry.default_locale,
            default_namespaces=[ns.value for ns in registry.default_namespaces],
        )
        return registry

    def is_valid_locale(self, code: Optional[str]) -> bool:
        """Check whether a code is a supported locale."""
        return bool(code) and code in self.locales

    def normalize(self, code: Optional[str]) -> Locale:
        """Return the code if supported, else the default locale."""
        if code and self.is_valid_locale(code):
            return code
        return self.default_locale

    def is_rtl(self, locale: Locale) -> bool:
        """Check whether a locale is written right-to-left."""
        return is_rtl_locale(locale)

    def get_direction(self, locale: Locale) -> TextDirection:
        """Text direction for a locale (reported only, never enforced)."""
        return direction_for(locale)
