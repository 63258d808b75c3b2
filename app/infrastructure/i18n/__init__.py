"""i18n system - localization engine.

Provides locale negotiation, namespace loading with single-flight caching,
message resolution (plural selection and interpolation), scoped and direct
translation accessors, and locale-aware navigation helpers.

Main components:
- registry: LocaleRegistry, supported locales and default namespaces
- sources / loader / manifest: MessageSource, MessageStore, RouteManifest
- translator: resolve() and the Translator shared by both accessors
- resolvers: Accept-Language parsing and LocaleNegotiator
- context: TranslationContext and provide_translations()
- service: TranslationService, the direct accessor
- navigation: add_locale_prefix, localized_href, ...
- formatting: Babel-backed dates, numbers and lists per locale
"""

from infrastructure.i18n.context import (
    MissingTranslationProviderError,
    TranslationContext,
    current_context,
    get_translation_context,
    provide_translations,
    use_formatter,
    use_locale,
    use_translations,
)
from infrastructure.i18n.factory import (
    create_locale_registry,
    create_message_store,
    create_translator,
)
from infrastructure.i18n.formatting import (
    LocaleFormatter,
    clear_formatting_caches,
    format_compact,
    format_currency,
    format_date,
    format_datetime,
    format_list,
    format_number,
    format_percent,
    format_relative_time,
    format_time,
    get_formatter,
)
from infrastructure.i18n.loader import MessageStore, deep_merge
from infrastructure.i18n.manifest import RouteManifest
from infrastructure.i18n.models import (
    LoadedMessageSet,
    Locale,
    MessageTree,
    Namespace,
    NegotiatedLocale,
    NegotiationState,
    TextDirection,
)
from infrastructure.i18n.navigation import (
    add_locale_prefix,
    current_pathname,
    is_external_href,
    localized_href,
    localized_redirect,
    remove_locale_prefix,
    switch_locale_href,
)
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.resolvers import (
    LocaleNegotiator,
    LocaleResolver,
    is_probe_path,
    parse_accept_language,
)
from infrastructure.i18n.service import TranslationService, get_translations
from infrastructure.i18n.sources import (
    FileMessageSource,
    InMemoryMessageSource,
    MessageSource,
)
from infrastructure.i18n.translator import Translator, resolve

__all__ = [
    "Locale",
    "Namespace",
    "MessageTree",
    "LoadedMessageSet",
    "TextDirection",
    "NegotiatedLocale",
    "NegotiationState",
    "LocaleRegistry",
    "MessageSource",
    "FileMessageSource",
    "InMemoryMessageSource",
    "MessageStore",
    "RouteManifest",
    "deep_merge",
    "Translator",
    "resolve",
    "LocaleResolver",
    "LocaleNegotiator",
    "parse_accept_language",
    "is_probe_path",
    "TranslationContext",
    "MissingTranslationProviderError",
    "provide_translations",
    "current_context",
    "use_translations",
    "use_locale",
    "use_formatter",
    "get_translation_context",
    "TranslationService",
    "get_translations",
    "add_locale_prefix",
    "remove_locale_prefix",
    "is_external_href",
    "localized_href",
    "localized_redirect",
    "current_pathname",
    "switch_locale_href",
    "create_locale_registry",
    "create_message_store",
    "create_translator",
    "LocaleFormatter",
    "get_formatter",
    "clear_formatting_caches",
    "format_date",
    "format_time",
    "format_datetime",
    "format_number",
    "format_currency",
    "format_percent",
    "format_compact",
    "format_relative_time",
    "format_list",
]
