"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_documents,
    make_loaded_message_set,
    make_message_store,
    make_registry,
    make_translation_service,
)

__all__ = [
    "make_documents",
    "make_loaded_message_set",
    "make_message_store",
    "make_registry",
    "make_translation_service",
]
