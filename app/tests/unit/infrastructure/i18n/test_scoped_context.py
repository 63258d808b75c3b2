"""Tests for infrastructure.i18n.context module."""

import asyncio

import pytest

from infrastructure.i18n.context import (
    MissingTranslationProviderError,
    TranslationContext,
    current_context,
    get_translation_context,
    provide_translations,
    use_formatter,
    use_locale,
    use_translations,
)
from infrastructure.i18n.models import Namespace, TextDirection
from tests.factories.i18n import make_loaded_message_set


@pytest.mark.unit
class TestTranslationContext:
    """Tests for TranslationContext."""

    def test_lookup_resolves(self):
        """Lookups resolve against the context's message set."""
        context = TranslationContext("en", make_loaded_message_set())
        t = context.get_namespace_lookup("common")

        assert t("greeting", {"name": "Ada"}) == "Hello, Ada!"
        assert t("missing.key") == "missing.key"

    def test_lookup_is_memoized(self):
        """The same callable is returned for a namespace."""
        context = TranslationContext("en", make_loaded_message_set())

        assert context.get_namespace_lookup("common") is context.get_namespace_lookup(
            Namespace.COMMON
        )
        assert context.get_namespace_lookup("common") is not context.get_namespace_lookup(
            "menu"
        )

    def test_unloaded_namespace_returns_keys(self):
        """Namespaces outside the set resolve keys to themselves."""
        context = TranslationContext("en", make_loaded_message_set())
        assert context.get_namespace_lookup("dashboard")("title") == "title"

    def test_unknown_namespace_raises(self):
        """Unknown namespace identifiers are programming errors."""
        context = TranslationContext("en", make_loaded_message_set())
        with pytest.raises(ValueError):
            context.get_namespace_lookup("bogus")

    def test_direction(self):
        """Direction is derived from the locale."""
        assert TranslationContext("ar", make_loaded_message_set("ar")).direction is TextDirection.RTL
        assert TranslationContext("en", make_loaded_message_set()).direction is TextDirection.LTR


@pytest.mark.unit
class TestProvideTranslations:
    """Tests for provide_translations() and the scoped accessors."""

    def test_accessors_inside_provider(self):
        """Accessors read the active context."""
        context = TranslationContext("fr", make_loaded_message_set("fr"))

        with provide_translations(context) as provided:
            assert provided is context
            assert current_context() is context
            assert use_locale() == "fr"
            assert use_translations("menu") is context.get_namespace_lookup("menu")
            assert use_formatter() is context.formatter

    @pytest.mark.parametrize("accessor", [current_context, use_locale, use_formatter])
    def test_outside_provider_raises(self, accessor):
        """Accessors fail loudly outside a provider."""
        with pytest.raises(MissingTranslationProviderError, match="provide_translations"):
            accessor()

    def test_use_translations_outside_provider_raises(self):
        """use_translations() names itself in the error."""
        with pytest.raises(MissingTranslationProviderError, match="use_translations"):
            use_translations("common")

    def test_error_is_runtime_error(self):
        """The error is a RuntimeError subclass."""
        assert issubclass(MissingTranslationProviderError, RuntimeError)

    def test_nested_providers_restore_outer(self):
        """Leaving an inner provider restores the outer one."""
        outer = TranslationContext("en", make_loaded_message_set())
        inner = TranslationContext("ar", make_loaded_message_set("ar"))

        with provide_translations(outer):
            with provide_translations(inner):
                assert use_locale() == "ar"
            assert use_locale() == "en"

        with pytest.raises(MissingTranslationProviderError):
            use_locale()

    def test_reset_after_exception(self):
        """The context is removed even when the block raises."""
        context = TranslationContext("en", make_loaded_message_set())

        with pytest.raises(KeyError):
            with provide_translations(context):
                raise KeyError("boom")

        with pytest.raises(MissingTranslationProviderError):
            current_context()

    async def test_contexts_isolated_between_tasks(self):
        """Concurrent tasks never see each other's context."""

        async def render(locale):
            context = TranslationContext(locale, make_loaded_message_set(locale))
            with provide_translations(context):
                await asyncio.sleep(0.01)
                return use_locale()

        assert await asyncio.gather(render("en"), render("fr"), render("ar")) == [
            "en",
            "fr",
            "ar",
        ]


@pytest.mark.unit
class TestGetTranslationContext:
    """Tests for get_translation_context()."""

    def test_same_pair_same_context(self):
        """One context per (locale, message set)."""
        messages = make_loaded_message_set()

        first = get_translation_context("en", messages)
        second = get_translation_context("en", messages)

        assert first is second
        assert first.get_namespace_lookup("common") is second.get_namespace_lookup("common")

    def test_new_message_set_new_context(self):
        """A new message set gets a new context even with equal content."""
        first = get_translation_context("en", make_loaded_message_set())
        second = get_translation_context("en", make_loaded_message_set())

        assert first is not second
