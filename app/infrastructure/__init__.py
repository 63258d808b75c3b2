"""Infrastructure modules for the localization service.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings, ServerSettings)
- logging: Structured logging (get_module_logger, bind_request_context)
- i18n: Locale registry, message store, resolution engine, negotiation,
  distribution and navigation helpers
- services: Dependency injection services (SettingsDep, TranslationServiceDep, get_settings)
"""

from infrastructure.configuration import settings

__all__ = ["settings"]
