"""Factory functions for creating i18n components.

Provides convenience functions for building the registry, message store and
translator from application settings.
"""

from pathlib import Path
from typing import Optional

import structlog
from infrastructure.configuration import Settings
from infrastructure.configuration import settings as app_settings
from infrastructure.i18n.loader import MessageStore
from infrastructure.i18n.manifest import RouteManifest
from infrastructure.i18n.registry import LocaleRegistry
from infrastructure.i18n.sources import FileMessageSource, MessageSource
from infrastructure.i18n.translator import Translator

logger = structlog.get_logger()


def default_messages_dir() -> Path:
    """Bundled message directory (app/messages)."""
    # This file is at .../app/infrastructure/i18n/factory.py
    app_root = Path(__file__).resolve().parents[2]
    return app_root / "messages"


def _resolve_settings(settings: Optional[Settings]) -> Settings:
    return settings if settings is not None else app_settings


def create_locale_registry(settings: Optional[Settings] = None) -> LocaleRegistry:
    """Build the LocaleRegistry from settings (default: application settings)."""
    return LocaleRegistry.from_settings(_resolve_settings(settings).i18n)


def create_message_store(
    settings: Optional[Settings] = None,
    registry: Optional[LocaleRegistry] = None,
    source: Optional[MessageSource] = None,
    messages_dir: Optional[Path] = None,
) -> MessageStore:
    """Create and configure a MessageStore.

    If neither ``source`` nor ``messages_dir`` is provided, I18N_MESSAGES_DIR
    is used, falling back to the bundled app/messages directory. The route
    manifest is loaded from I18N_ROUTE_MANIFEST when set.

    Args:
        settings: Settings to read (default: application settings).
        registry: Pre-built registry (default: built from settings).
        source: Pre-built message source.
        messages_dir: Directory for a FileMessageSource.

    Returns:
        MessageStore: Configured store with an empty cache.

    Raises:
        ValueError: If the messages directory does not exist or the route
            manifest cannot be parsed.

    Usage:
        # Use defaults (settings, auto-discovered app/messages)
        store = create_message_store()

        # Custom directory
        store = create_message_store(messages_dir=Path("/srv/messages"))
    """
    settings = _resolve_settings(settings)
    registry = registry or LocaleRegistry.from_settings(settings.i18n)

    if source is None:
        if messages_dir is None:
            messages_dir = (
                Path(settings.i18n.MESSAGES_DIR)
                if settings.i18n.MESSAGES_DIR
                else default_messages_dir()
            )
        source = FileMessageSource(messages_dir)
        missing = sorted(set(registry.locales) - set(source.available_locales()))
        if missing:
            logger.warning(
                "locales_without_messages",
                locales=missing,
                messages_dir=str(messages_dir),
            )

    manifest = None
    if settings.i18n.ROUTE_MANIFEST:
        manifest = RouteManifest.from_file(
            Path(settings.i18n.ROUTE_MANIFEST), locales=registry.locales
        )

    store = MessageStore(
        source=source,
        registry=registry,
        manifest=manifest,
        diagnostics=not settings.is_production,
    )
    logger.info(
        "message_store_created",
        locales=list(registry.locales),
        production=settings.is_production,
    )
    return store


def create_translator(
    settings: Optional[Settings] = None,
    store: Optional[MessageStore] = None,
) -> Translator:
    """Create a Translator over a store (default: create_message_store())."""
    settings = _resolve_settings(settings)
    store = store or create_message_store(settings=settings)
    return Translator(store=store, diagnostics=not settings.is_production)
