"""Tests for infrastructure.i18n.service module."""

from unittest.mock import patch

import pytest

from infrastructure.i18n.context import provide_translations, use_translations
from infrastructure.i18n.models import Namespace, TextDirection
from infrastructure.i18n.service import TranslationService, get_translations
from infrastructure.i18n.translator import Translator
from infrastructure.i18n.manifest import RouteManifest
from tests.factories.i18n import make_message_store, make_translation_service


@pytest.mark.unit
class TestTranslationService:
    """Tests for the direct accessor."""

    async def test_get_translations(self, translation_service):
        """get_translations() returns a bound lookup."""
        t = await translation_service.get_translations("fr", "common")

        assert t("greeting", {"name": "Léa"}) == "Bonjour, Léa !"
        assert t("buttons.cancel") == "Cancel"
        assert t("nope") == "nope"

    async def test_translate(self, translation_service):
        """translate() resolves one key."""
        text = await translation_service.translate("en", Namespace.COMMON, "items", {"count": 1})
        assert text == "1 item"

    async def test_unsupported_locale(self, translation_service):
        """Unsupported locales are served the default locale."""
        assert await translation_service.translate("de", "menu", "home") == "Home"

    async def test_create_context_adds_defaults(self, translation_service):
        """Contexts always include the default namespaces."""
        context = await translation_service.create_context("ar", [Namespace.DASHBOARD])

        assert context.locale == "ar"
        assert context.direction is TextDirection.RTL
        assert context.messages.namespaces == (
            Namespace.COMMON,
            Namespace.MENU,
            Namespace.DASHBOARD,
        )

    async def test_create_context_normalizes_locale(self, translation_service):
        """Unsupported locales produce a default-locale context."""
        context = await translation_service.create_context("xx")
        assert context.locale == "en"

    async def test_repeated_contexts_are_reused(self, translation_service):
        """Contexts over the store's cached trees are shared across calls."""
        first = await translation_service.create_context("fr", [Namespace.DASHBOARD])
        second = await translation_service.create_context("fr", [Namespace.DASHBOARD])
        route = await translation_service.create_route_context("fr", "/fr/orders")
        again = await translation_service.create_route_context("fr", "/fr/orders")

        assert first is second
        assert route is again
        assert first.get_namespace_lookup("menu") is second.get_namespace_lookup("menu")

    async def test_cleared_cache_gets_new_context(self, translation_service):
        """Reloaded trees never reuse a stale context."""
        first = await translation_service.create_context("fr")
        translation_service.store.clear_cache()
        second = await translation_service.create_context("fr")

        assert first is not second

    async def test_create_route_context(self):
        """Route contexts load the manifest's namespaces."""
        manifest = RouteManifest.from_mapping(
            {"routes": {"/p2p": ["ext_p2p"]}}, locales=("en", "fr", "ar")
        )
        service = make_translation_service(store=make_message_store(manifest=manifest))

        context = await service.create_route_context("fr", "/fr/p2p/offer")

        assert Namespace.EXT_P2P in context.messages.namespaces
        assert Namespace.DASHBOARD not in context.messages.namespaces

    async def test_create_route_context_full_catalog(self):
        """Development services load the full catalog."""
        service = make_translation_service(full_catalog=True)
        context = await service.create_route_context("en", "/en/anything")
        assert context.messages.namespaces == tuple(Namespace)

    def test_get_direction(self, translation_service):
        """Direction is reported per locale."""
        assert translation_service.get_direction("ar") is TextDirection.RTL
        assert translation_service.get_direction("fr") is TextDirection.LTR

    def test_available_locales(self, translation_service):
        """Supported locales come from the registry."""
        assert translation_service.get_available_locales() == ["en", "fr", "ar"]

    def test_exposes_translator(self, store):
        """The underlying translator is reachable."""
        translator = Translator(store)
        service = TranslationService(translator=translator)

        assert service.translator is translator
        assert service.store is store


@pytest.mark.unit
class TestDirectAndScopedEquivalence:
    """Both distribution paths resolve identically."""

    @pytest.mark.parametrize(
        "locale,namespace,key,params",
        [
            ("fr", "common", "greeting", {"name": "Ana"}),
            ("fr", "common", "buttons.cancel", None),
            ("fr", "common", "items", {"count": 1}),
            ("ar", "common", "items", {"count": 0}),
            ("ar", "common", "footer", None),
            ("en", "menu", "missing.key", None),
            ("de", "menu", "home", None),
        ],
    )
    async def test_equivalent(self, translation_service, locale, namespace, key, params):
        """Direct lookups equal lookups through a provided context."""
        direct = await translation_service.get_translations(locale, namespace)
        context = await translation_service.create_context(locale, [namespace])

        with provide_translations(context):
            scoped = use_translations(namespace)

        assert direct(key, params) == scoped(key, params)


@pytest.mark.unit
class TestModuleGetTranslations:
    """Tests for the module-level direct accessor."""

    async def test_uses_application_service(self, translation_service):
        """get_translations() delegates to the provided service."""
        with patch(
            "infrastructure.services.providers.get_translation_service",
            return_value=translation_service,
        ):
            t = await get_translations("fr", "menu")

        assert t("home") == "Accueil"
