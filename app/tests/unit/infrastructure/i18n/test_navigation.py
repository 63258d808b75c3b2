"""Tests for infrastructure.i18n.navigation module."""

import pytest

from infrastructure.i18n.context import (
    MissingTranslationProviderError,
    TranslationContext,
    provide_translations,
)
from infrastructure.i18n.navigation import (
    add_locale_prefix,
    current_pathname,
    is_external_href,
    localized_href,
    localized_redirect,
    remove_locale_prefix,
    switch_locale_href,
)
from tests.factories.i18n import make_loaded_message_set

UNPREFIXED_PATHS = ["/", "/dashboard", "/dashboard/", "/p2p/offer/42", "/blog?page=2", "/faq#top"]


@pytest.mark.unit
class TestAddLocalePrefix:
    """Tests for add_locale_prefix()."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/", "/fr"),
            ("/dashboard", "/fr/dashboard"),
            ("/en/dashboard", "/fr/dashboard"),
            ("/en", "/fr"),
            ("/ar/", "/fr"),
            ("/dashboard?tab=2#top", "/fr/dashboard?tab=2#top"),
            ("/english/page", "/fr/english/page"),
        ],
    )
    def test_prefix(self, registry, path, expected):
        """Supported leading segments are replaced, others prefixed."""
        assert add_locale_prefix(path, "fr", registry) == expected

    @pytest.mark.parametrize("path", ["dashboard", "./x", "", "https://example.com/a", "//cdn.example.com/x.js"])
    def test_relative_and_external_unchanged(self, registry, path):
        """Relative and external hrefs pass through."""
        assert add_locale_prefix(path, "fr", registry) == path

    @pytest.mark.parametrize("path", UNPREFIXED_PATHS)
    def test_idempotent(self, registry, path):
        """Applying the same locale twice changes nothing."""
        once = add_locale_prefix(path, "ar", registry)
        assert add_locale_prefix(once, "ar", registry) == once


@pytest.mark.unit
class TestRemoveLocalePrefix:
    """Tests for remove_locale_prefix()."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/fr/dashboard", "/dashboard"),
            ("/fr", "/"),
            ("/fr/", "/"),
            ("/fr?x=1", "/?x=1"),
            ("/dashboard", "/dashboard"),
            ("/de/dashboard", "/de/dashboard"),
            ("relative", "relative"),
        ],
    )
    def test_remove(self, registry, path, expected):
        """Only a supported leading segment is stripped."""
        assert remove_locale_prefix(path, registry) == expected

    @pytest.mark.parametrize("path", UNPREFIXED_PATHS)
    def test_inverse_of_add(self, registry, path):
        """remove(add(p, L)) == p for unprefixed paths."""
        assert remove_locale_prefix(add_locale_prefix(path, "fr", registry), registry) == path

    @pytest.mark.parametrize("path", UNPREFIXED_PATHS + ["/en/dashboard", "/ar", "/fr/p2p/offer/42?x=1"])
    def test_add_after_remove(self, registry, path):
        """add(remove(p), L) == add(p, L) for paths with at most one locale segment."""
        assert add_locale_prefix(
            remove_locale_prefix(path, registry), "en", registry
        ) == add_locale_prefix(path, "en", registry)


@pytest.mark.unit
class TestIsExternalHref:
    """Tests for is_external_href()."""

    @pytest.mark.parametrize(
        "href",
        ["https://example.com", "http://x", "mailto:support@example.com", "tel:+15550100", "#section", "//cdn.example.com"],
    )
    def test_external(self, href):
        """Scheme URLs, protocol-relative URLs and fragments are external."""
        assert is_external_href(href) is True

    @pytest.mark.parametrize("href", ["/dashboard", "dashboard", "/en/x?y=z:1"])
    def test_internal(self, href):
        """Paths are internal."""
        assert is_external_href(href) is False


@pytest.mark.unit
class TestLocalizedHref:
    """Tests for the link and redirect wrappers."""

    def test_ambient_locale(self, registry):
        """The active context's locale is used."""
        with provide_translations(TranslationContext("ar", make_loaded_message_set("ar"))):
            assert localized_href("/wallet", registry=registry) == "/ar/wallet"

    def test_explicit_override(self, registry):
        """An explicit locale wins over the ambient one."""
        with provide_translations(TranslationContext("ar", make_loaded_message_set("ar"))):
            assert localized_href("/wallet", "fr", registry) == "/fr/wallet"

    def test_explicit_without_provider(self, registry):
        """An explicit locale needs no provider."""
        assert localized_href("/wallet", "fr", registry) == "/fr/wallet"

    def test_no_locale_no_provider_raises(self, registry):
        """Without locale or provider the call fails loudly."""
        with pytest.raises(MissingTranslationProviderError):
            localized_href("/wallet", registry=registry)

    @pytest.mark.parametrize("href", ["mailto:a@b.co", "tel:123", "#faq", "https://example.com/en"])
    def test_external_untouched(self, registry, href):
        """External links never receive a prefix."""
        assert localized_href(href, "fr", registry) == href

    def test_redirect(self, registry):
        """localized_redirect() builds a RedirectResponse."""
        response = localized_redirect("/login?next=/x", "fr", registry=registry)

        assert response.status_code == 307
        assert response.headers["location"] == "/fr/login?next=/x"

    def test_redirect_status_code(self, registry):
        """The status code can be overridden."""
        response = localized_redirect("/", "en", status_code=302, registry=registry)
        assert response.status_code == 302
        assert response.headers["location"] == "/en"


@pytest.mark.unit
class TestPathnameHelpers:
    """Tests for current_pathname() and switch_locale_href()."""

    @pytest.mark.parametrize(
        "path,expected",
        [("/fr/dashboard?tab=1", "/dashboard"), ("/fr", "/"), ("/about", "/about"), ("/ar#x", "/")],
    )
    def test_current_pathname(self, registry, path, expected):
        """The locale-less pathname excludes the query."""
        assert current_pathname(path, registry) == expected

    def test_switch_locale_preserves_query(self, registry):
        """Language switching keeps the page and query."""
        assert switch_locale_href("/fr/dashboard?tab=1", "ar", registry) == "/ar/dashboard?tab=1"

    def test_default_registry(self):
        """Without a registry the application registry is used."""
        assert switch_locale_href("/dashboard", "en") == "/en/dashboard"
