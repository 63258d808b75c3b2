"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for the localization engine.
"""

from functools import lru_cache

from fastapi import Request

from infrastructure.configuration import Settings
from infrastructure.i18n.factory import create_message_store
from infrastructure.i18n.loader import MessageStore
from infrastructure.i18n.models import Locale
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.translator import Translator


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.i18n.DEFAULT_LOCALE

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_locale_registry() -> LocaleRegistry:
    """
    Get application-scoped locale registry singleton.

    Derived once from I18N_* settings at first use.

    Returns:
        LocaleRegistry: Cached registry instance.
    """
    return LocaleRegistry.from_settings(get_settings().i18n)


@lru_cache
def get_message_store() -> MessageStore:
    """
    Get application-scoped message store singleton.

    The store owns the process-wide namespace cache, so every request shares
    completed and in-flight loads.

    Returns:
        MessageStore: Cached store configured from application settings.
    """
    return create_message_store(settings=get_settings(), registry=get_locale_registry())


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get application-scoped translation service singleton.

    Returns:
        TranslationService: Cached service over the shared message store.

    Usage:
        @router.get("/greeting")
        async def greeting(translations: TranslationServiceDep, locale: RequestLocaleDep):
            return {"message": await translations.translate(locale, "common", "welcome")}
    """
    settings = get_settings()
    translator = Translator(
        store=get_message_store(), diagnostics=not settings.is_production
    )
    return TranslationService(
        translator=translator, full_catalog=not settings.is_production
    )


def get_request_locale(request: Request) -> Locale:
    """Locale negotiated for the current request.

    Set by LocaleMiddleware; requests it skipped (API paths) fall back to the
    registry default.
    """
    locale = getattr(request.state, "locale", None)
    return get_locale_registry().normalize(locale)
