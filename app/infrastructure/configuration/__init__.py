"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
localization service using Pydantic BaseSettings with domain-based
organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization engine settings class (for testing)
    ServerSettings: Server settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locales = settings.i18n.locale_codes
    cookie_name = settings.i18n.COOKIE_NAME
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure import I18nSettings, ServerSettings

__all__ = ["Settings", "settings", "I18nSettings", "ServerSettings"]
