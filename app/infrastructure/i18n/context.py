"""Scoped translation provider.

A TranslationContext is built once per (locale, loaded message set) near the
top of a request's rendering work and installed with provide_translations().
Code running inside that scope reads lookups through use_translations() and
use_locale() (and use_formatter()) without passing the locale around.

Usage:
    context = await service.create_context(locale, [Namespace.DASHBOARD])

    with provide_translations(context):
        t = use_translations("dashboard")
        title = t("title", {"name": user.name})
"""

import contextvars
from contextlib import contextmanager
from functools import lru_cache
from typing import Dict, Generator, Optional, Union

from infrastructure.i18n.formatting import LocaleFormatter, get_formatter
from infrastructure.i18n.models import LoadedMessageSet, Locale, Namespace, TextDirection
from infrastructure.i18n.registry import direction_for
from infrastructure.i18n.translator import Lookup, bind

_current_context: contextvars.ContextVar[Optional["TranslationContext"]] = (
    contextvars.ContextVar("translation_context", default=None)
)


class MissingTranslationProviderError(RuntimeError):
    """Raised when a scoped accessor is used outside provide_translations()."""

    def __init__(self, accessor: str):
        super().__init__(
            f"{accessor}() must be called inside provide_translations(); "
            "no TranslationContext is active"
        )
        self.accessor = accessor


class TranslationContext:
    """Translations for one locale and one loaded message set.

    Lookups are memoized per namespace, so the same callable is returned
    for as long as the context lives.

    Attributes:
        locale: Active locale.
        messages: LoadedMessageSet the lookups read from.
        direction: Text direction of the locale.
        diagnostics: Log missing keys (non-production).
    """

    def __init__(
        self,
        locale: Locale,
        messages: LoadedMessageSet,
        direction: Optional[TextDirection] = None,
        diagnostics: bool = False,
    ):
        self.locale = locale
        self.messages = messages
        self.direction = direction or direction_for(locale)
        self.diagnostics = diagnostics
        self._lookups: Dict[Namespace, Lookup] = {}

    def get_namespace_lookup(self, namespace: Union[str, Namespace]) -> Lookup:
        """Lookup bound to one namespace of this context.

        A namespace absent from the message set resolves every key to the
        key itself.

        Raises:
            ValueError: If ``namespace`` is not a known namespace.
        """
        namespace = Namespace.coerce(namespace)
        lookup = self._lookups.get(namespace)
        if lookup is None:
            lookup = bind(
                self.messages.get_tree(namespace),
                namespace,
                self.locale,
                self.diagnostics,
            )
            self._lookups[namespace] = lookup
        return lookup

    @property
    def formatter(self) -> LocaleFormatter:
        """Date, number and list formatting in this context's locale."""
        return get_formatter(self.locale)

    def __repr__(self) -> str:
        return (
            f"TranslationContext(locale={self.locale!r}, "
            f"namespaces={[ns.value for ns in self.messages.namespaces]})"
        )


@contextmanager
def provide_translations(context: TranslationContext) -> Generator[TranslationContext, None, None]:
    """Install ``context`` for the current task until the block exits.

    Nested providers restore the outer context on exit.
    """
    token = _current_context.set(context)
    try:
        yield context
    finally:
        _current_context.reset(token)


def current_context() -> TranslationContext:
    """Active TranslationContext.

    Raises:
        MissingTranslationProviderError: Outside provide_translations().
    """
    context = _current_context.get()
    if context is None:
        raise MissingTranslationProviderError("current_context")
    return context


def use_translations(namespace: Union[str, Namespace]) -> Lookup:
    """Lookup for a namespace of the active context.

    Raises:
        MissingTranslationProviderError: Outside provide_translations().
    """
    context = _current_context.get()
    if context is None:
        raise MissingTranslationProviderError("use_translations")
    return context.get_namespace_lookup(namespace)


def use_locale() -> Locale:
    """Locale of the active context.

    Raises:
        MissingTranslationProviderError: Outside provide_translations().
    """
    context = _current_context.get()
    if context is None:
        raise MissingTranslationProviderError("use_locale")
    return context.locale


def use_formatter() -> LocaleFormatter:
    """Formatter for the locale of the active context.

    Raises:
        MissingTranslationProviderError: Outside provide_translations().
    """
    context = _current_context.get()
    if context is None:
        raise MissingTranslationProviderError("use_formatter")
    return context.formatter


@lru_cache(maxsize=256)
def get_translation_context(
    locale: Locale, messages: LoadedMessageSet, diagnostics: bool = False
) -> TranslationContext:
    """Shared context for a (locale, message set) pair.

    Message sets compare by the identity of their trees: a set rebuilt from
    the store's cached trees reuses the context, reloaded trees get a new one.
    """
    return TranslationContext(locale, messages, diagnostics=diagnostics)
