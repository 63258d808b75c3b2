"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    LocaleRegistryDep,
    MessageStoreDep,
    TranslationServiceDep,
    RequestLocaleDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_locale_registry,
    get_message_store,
    get_translation_service,
    get_request_locale,
)

__all__ = [
    "SettingsDep",
    "LocaleRegistryDep",
    "MessageStoreDep",
    "TranslationServiceDep",
    "RequestLocaleDep",
    "get_settings",
    "get_locale_registry",
    "get_message_store",
    "get_translation_service",
    "get_request_locale",
]
