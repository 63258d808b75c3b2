"""Locale resolution and negotiation for inbound requests.

Provides Accept-Language parsing, the preferred-locale fallback chain and
the per-request negotiation state machine used by the locale middleware.
"""

import math
from typing import Optional

import structlog
from infrastructure.i18n.models import (
    LanguagePreference,
    Locale,
    NegotiatedLocale,
    NegotiationState,
)
from infrastructure.i18n.registry import LocaleRegistry

logger = structlog.get_logger().bind(component="i18n.resolver")

# First-segment heuristics for exploit scanners.
PROBE_SUFFIXES = (".php", ".asp", ".aspx", ".jsp", ".cgi")
PROBE_TOKENS = (
    "wp-admin",
    "wp-login",
    "wp-content",
    "wp-includes",
    "phpmyadmin",
    "cgi-bin",
    "xmlrpc",
)
ALLOWED_DOT_SEGMENTS = frozenset({".well-known"})


def parse_accept_language(accept_language: Optional[str]) -> list[LanguagePreference]:
    """Parse an Accept-Language header.

    "fr-CA,fr;q=0.9,en;q=0.8" -> [fr (1.0), fr (0.9), en (0.8)]

    Invalid weights (including nan and inf) count as 1.0, weights are clamped to [0, 1], entries
    with weight 0 and the "*" wildcard are dropped. Ties keep header order.

    Args:
        accept_language: Raw header value.

    Returns:
        Preferences sorted by descending weight.
    """
    if not accept_language:
        return []

    preferences = []
    for part in accept_language.split(","):
        pieces = part.split(";")
        lang_range = pieces[0].strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 1.0
                if not math.isfinite(quality):
                    quality = 1.0
        quality = min(max(quality, 0.0), 1.0)
        if quality == 0.0:
            continue

        language = lang_range.split("-")[0].split("_")[0].lower()
        preferences.append(LanguagePreference(language=language, quality=quality))

    return sorted(preferences, key=lambda pref: pref.quality, reverse=True)


def is_probe_path(path: str) -> bool:
    """Check a request path against the exploit-probe deny-list.

    Only the first path segment is inspected.
    """
    segment = path.lstrip("/").split("/", 1)[0].lower()
    if not segment:
        return False
    if segment.startswith(".") and segment not in ALLOWED_DOT_SEGMENTS:
        return True
    if segment.endswith(PROBE_SUFFIXES):
        return True
    return any(token in segment for token in PROBE_TOKENS)


class LocaleResolver:
    """Resolves the preferred locale of a request.

    Implements fallback chain:
    1. Persisted preference (cookie), if supported
    2. Accept-Language header, matched by base language subtag
    3. Registry default locale
    """

    def __init__(self, registry: LocaleRegistry):
        """Initialize locale resolver.

        Args:
            registry: LocaleRegistry listing supported locales.
        """
        self.registry = registry
        self.log = logger.bind(default_locale=registry.default_locale)

    def resolve_from_header(self, accept_language: Optional[str]) -> Optional[Locale]:
        """First supported locale from an Accept-Language header.

        A preference matches a locale whose base subtag equals the
        preference's base subtag ("fr-CA" matches "fr").

        Returns:
            Matching locale, or None when nothing matches.
        """
        for preference in parse_accept_language(accept_language):
            for locale in self.registry.locales:
                if locale.split("-")[0].lower() == preference.language:
                    self.log.debug("resolved_from_header", locale=locale)
                    return locale
        return None

    def preferred_locale(
        self,
        cookie_locale: Optional[str],
        accept_language: Optional[str],
    ) -> Locale:
        """Apply the fallback chain.

        Args:
            cookie_locale: Value of the preference cookie, if any.
            accept_language: Accept-Language header value, if any.

        Returns:
            Preferred supported locale.
        """
        if self.registry.is_valid_locale(cookie_locale):
            return cookie_locale  # type: ignore[return-value]

        if cookie_locale:
            self.log.debug("ignored_unsupported_cookie_locale", cookie_locale=cookie_locale)

        from_header = self.resolve_from_header(accept_language)
        if from_header:
            return from_header

        return self.registry.default_locale

    def locale_from_path(self, path: str) -> Optional[Locale]:
        """Supported locale in the first path segment, if any."""
        segment = path.lstrip("/").split("/", 1)[0]
        return segment if self.registry.is_valid_locale(segment) else None


class LocaleNegotiator:
    """Per-request negotiation state machine.

    States:
        ROOT_PATH: path is "/"; redirect to the preferred locale's root.
        PATH_HAS_LOCALE: first segment is a supported locale; the URL is
            authoritative and the cookie is rewritten only when it differs.
        PATH_MISSING_LOCALE: redirect to the same path prefixed with the
            preferred locale, query string preserved.
    """

    def __init__(self, registry: LocaleRegistry):
        """Initialize negotiator.

        Args:
            registry: LocaleRegistry listing supported locales.
        """
        self.registry = registry
        self.resolver = LocaleResolver(registry)

    def negotiate(
        self,
        path: str,
        cookie_locale: Optional[str] = None,
        accept_language: Optional[str] = None,
        query: str = "",
    ) -> NegotiatedLocale:
        """Decide the effective locale for a request.

        Args:
            path: Request path.
            cookie_locale: Current preference cookie value.
            accept_language: Accept-Language header value.
            query: Raw query string (without "?").

        Returns:
            NegotiatedLocale describing the decision.
        """
        suffix = f"?{query}" if query else ""

        if path in ("", "/"):
            locale = self.resolver.preferred_locale(cookie_locale, accept_language)
            return NegotiatedLocale(
                locale=locale,
                state=NegotiationState.ROOT_PATH,
                redirect_to=f"/{locale}{suffix}",
                write_cookie=True,
            )

        path_locale = self.resolver.locale_from_path(path)
        if path_locale is not None:
            return NegotiatedLocale(
                locale=path_locale,
                state=NegotiationState.PATH_HAS_LOCALE,
                write_cookie=cookie_locale != path_locale,
            )

        locale = self.resolver.preferred_locale(cookie_locale, accept_language)
        if not path.startswith("/"):
            path = f"/{path}"
        return NegotiatedLocale(
            locale=locale,
            state=NegotiationState.PATH_MISSING_LOCALE,
            redirect_to=f"/{locale}{path}{suffix}",
            write_cookie=True,
        )
