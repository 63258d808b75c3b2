"""Feature-level fixtures for i18n system tests.

Provides registries, in-memory stores and on-disk message directories for
loading, resolution and negotiation scenarios.
"""

import json

import pytest
import yaml

from infrastructure.i18n import FileMessageSource, LocaleNegotiator
from tests.factories.i18n import (
    make_message_store,
    make_registry,
    make_translation_service,
)


@pytest.fixture
def registry():
    """Registry supporting en (default), fr and ar."""
    return make_registry()


@pytest.fixture
def store(registry):
    """MessageStore over the standard in-memory documents."""
    return make_message_store(registry=registry)


@pytest.fixture
def translation_service(store):
    """TranslationService over the standard in-memory store."""
    return make_translation_service(store=store)


@pytest.fixture
def negotiator(registry):
    """LocaleNegotiator for the standard registry."""
    return LocaleNegotiator(registry)


@pytest.fixture
def temp_messages_dir(tmp_path):
    """Create temporary directory with message documents in both layouts.

    Returns a directory structure like:
    - en/common.json
    - en/menu.yml
    - fr.yaml            (single file, namespaces at the top level)
    - ar/common.json     (malformed)
    """
    (tmp_path / "en").mkdir()
    with open(tmp_path / "en" / "common.json", "w", encoding="utf-8") as f:
        json.dump({"greeting": "Hello, {name}!", "buttons": {"submit": "Submit"}}, f)
    with open(tmp_path / "en" / "menu.yml", "w", encoding="utf-8") as f:
        yaml.dump({"home": "Home"}, f)

    with open(tmp_path / "fr.yaml", "w", encoding="utf-8") as f:
        yaml.dump(
            {
                "common": {"greeting": "Bonjour, {name} !"},
                "menu": {"home": "Accueil"},
                "dashboard": ["not", "a", "tree"],
            },
            f,
            allow_unicode=True,
        )

    (tmp_path / "ar").mkdir()
    (tmp_path / "ar" / "common.json").write_text("{not json", encoding="utf-8")

    return tmp_path


@pytest.fixture
def file_source(temp_messages_dir):
    """FileMessageSource for the temporary messages directory."""
    return FileMessageSource(temp_messages_dir)


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_fr": "fr",
        "regional_fr": "fr-CA",
        "with_quality": "de-DE,fr;q=0.9,en;q=0.8",
        "wildcard": "*,ar;q=0.5",
        "invalid_quality": "de;q=invalid,ar",
        "zero_quality": "fr;q=0,ar;q=0.3",
    }
