"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.i18n.loader import MessageStore
from infrastructure.i18n.models import Locale
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.service import TranslationService
from infrastructure.services.providers import (
    get_settings,
    get_locale_registry,
    get_message_store,
    get_translation_service,
    get_request_locale,
)

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Locale registry dependency
LocaleRegistryDep = Annotated[LocaleRegistry, Depends(get_locale_registry)]

# Message store dependency - shares the process-wide namespace cache
MessageStoreDep = Annotated[MessageStore, Depends(get_message_store)]

# Direct translation accessor
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]

# Locale negotiated by LocaleMiddleware for this request
RequestLocaleDep = Annotated[Locale, Depends(get_request_locale)]

__all__ = [
    "SettingsDep",
    "LocaleRegistryDep",
    "MessageStoreDep",
    "TranslationServiceDep",
    "RequestLocaleDep",
]
