"""Legacy call-site names.

Re-exports only. Every name here is the same object as its current
counterpart, so old imports keep working while call sites migrate:

    from infrastructure.i18n.compat import useTranslations
    # preferred
    from infrastructure.i18n import use_translations
"""

from infrastructure.i18n.context import (
    TranslationContext,
    use_formatter,
    use_locale,
    use_translations,
)
from infrastructure.i18n.navigation import (
    current_pathname,
    localized_href,
    localized_redirect,
)
from infrastructure.i18n.service import get_translations

useTranslations = use_translations
useLocale = use_locale
useFormatter = use_formatter
NextIntlClientProvider = TranslationContext
IntlProvider = TranslationContext
getTranslations = get_translations
Link = localized_href
redirect = localized_redirect
usePathname = current_pathname

__all__ = [
    "useTranslations",
    "useLocale",
    "useFormatter",
    "NextIntlClientProvider",
    "IntlProvider",
    "getTranslations",
    "Link",
    "redirect",
    "usePathname",
]
