"""Translation service for dependency injection.

Provides the direct accessor used by code that runs once per request outside
a provider scope, plus the entry point for building scoped contexts.
"""

from typing import Iterable, Optional, Union

from infrastructure.i18n.context import TranslationContext, get_translation_context
from infrastructure.i18n.factory import create_translator
from infrastructure.i18n.loader import MessageStore
from infrastructure.i18n.models import Locale, Namespace, TextDirection
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.translator import Lookup, Params, Translator


class TranslationService:
    """Class-based translation service.

    Wraps a Translator with a service interface to support dependency
    injection and easier testing with mocks. Lookups handed out here and by
    TranslationContext bind the same resolution function, so both paths
    resolve a given (locale, namespace, key, params) identically.

    Usage:
        # Via dependency injection
        from infrastructure.services import TranslationServiceDep

        @router.get("/greeting")
        async def greeting(translations: TranslationServiceDep, locale: RequestLocaleDep):
            t = await translations.get_translations(locale, "common")
            return {"message": t("welcome", {"name": "Ada"})}

        # Direct instantiation
        service = TranslationService()
        text = await service.translate("fr", "common", "welcome")
    """

    def __init__(
        self,
        translator: Optional[Translator] = None,
        full_catalog: bool = False,
    ):
        """Initialize translation service.

        Args:
            translator: Optional pre-configured Translator instance.
                If not provided, creates default via factory.
            full_catalog: Load every namespace for route contexts
                (development).
        """
        self._translator = translator or create_translator()
        self.full_catalog = full_catalog

    @property
    def store(self) -> MessageStore:
        return self._translator.store

    @property
    def registry(self) -> LocaleRegistry:
        return self._translator.store.registry

    async def get_translations(
        self, locale: Locale, namespace: Union[str, Namespace]
    ) -> Lookup:
        """Load a namespace and return a lookup bound to it.

        Args:
            locale: Locale code; unsupported codes use the default locale.
            namespace: Namespace or its identifier.

        Returns:
            A ``lookup(key, params=None) -> str`` callable.

        Raises:
            ValueError: If ``namespace`` is not a known namespace.
        """
        return await self._translator.get_lookup(locale, namespace)

    async def translate(
        self,
        locale: Locale,
        namespace: Union[str, Namespace],
        key: str,
        params: Optional[Params] = None,
    ) -> str:
        """Retrieve and resolve one message.

        Returns:
            Translated text, or the key itself when missing.
        """
        return await self._translator.translate_message(locale, namespace, key, params)

    async def create_context(
        self,
        locale: Locale,
        namespaces: Iterable[Union[str, Namespace]] = (),
    ) -> TranslationContext:
        """Build the scoped context for a request.

        The registry's default namespaces are always included.

        Args:
            locale: Locale code; unsupported codes use the default locale.
            namespaces: Extra namespaces the caller needs.

        Returns:
            TranslationContext over the loaded message set.
        """
        locale = self.registry.normalize(locale)
        messages = await self.store.load_namespaces(
            locale, list(self.registry.default_namespaces) + list(namespaces)
        )
        return get_translation_context(locale, messages, self._translator.diagnostics)

    async def create_route_context(self, locale: Locale, path: str) -> TranslationContext:
        """Build the scoped context for the page route serving ``path``."""
        locale = self.registry.normalize(locale)
        messages = await self.store.load_route_namespaces(
            locale, path, full_catalog=self.full_catalog
        )
        return get_translation_context(locale, messages, self._translator.diagnostics)

    def get_direction(self, locale: Locale) -> TextDirection:
        """Text direction for a locale."""
        return self.registry.get_direction(self.registry.normalize(locale))

    def get_available_locales(self) -> list[Locale]:
        """Supported locales, default first when it was not listed."""
        return list(self.registry.locales)

    @property
    def translator(self) -> Translator:
        """Access underlying Translator instance.

        Returns:
            The underlying Translator instance
        """
        return self._translator


async def get_translations(locale: Locale, namespace: Union[str, Namespace]) -> Lookup:
    """Direct accessor backed by the application-wide TranslationService.

    Usage:
        t = await get_translations("ar", "dashboard")
        t("title")
    """
    # Imported here: the provider module depends on this one.
    from infrastructure.services.providers import get_translation_service

    return await get_translation_service().get_translations(locale, namespace)
