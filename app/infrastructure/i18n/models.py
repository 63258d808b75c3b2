"""Translation models for i18n system.

Defines core data structures for locales, namespaces, message trees and
negotiation outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

# Locales are opaque codes ("en", "ar"); validity is registry membership.
Locale = str

MessageTree = Mapping[str, Union[str, "MessageTree"]]


class Namespace(str, Enum):
    """Closed set of namespaces partitioning the message space."""

    COMMON = "common"
    MENU = "menu"
    COMPONENTS = "components"
    COMPONENTS_AUTH = "components_auth"
    COMPONENTS_BLOCKS = "components_blocks"
    DASHBOARD = "dashboard"
    DASHBOARD_ADMIN = "dashboard_admin"
    DASHBOARD_USER = "dashboard_user"
    ADMIN = "admin"
    BLOG_ADMIN = "blog_admin"
    BLOG_BLOG = "blog_blog"
    BINARY_COMPONENTS = "binary_components"
    TRADE_COMPONENTS = "trade_components"
    EXT = "ext"
    EXT_ADMIN = "ext_admin"
    EXT_ADMIN_FUTURES = "ext_admin_futures"
    EXT_AFFILIATE = "ext_affiliate"
    EXT_ECOMMERCE = "ext_ecommerce"
    EXT_FAQ = "ext_faq"
    EXT_FOREX = "ext_forex"
    EXT_GATEWAY = "ext_gateway"
    EXT_ICO = "ext_ico"
    EXT_P2P = "ext_p2p"
    EXT_STAKING = "ext_staking"

    @classmethod
    def from_string(cls, namespace_str: str) -> "Namespace":
        """Convert string to Namespace enum.

        Args:
            namespace_str: Namespace identifier (e.g., "common", "ext_p2p").

        Returns:
            Matching Namespace enum value.

        Raises:
            ValueError: If the identifier is not a known namespace.
        """
        try:
            return cls(namespace_str)
        except ValueError as e:
            raise ValueError(f"Unknown namespace: {namespace_str}") from e

    @classmethod
    def coerce(cls, namespace: Union[str, "Namespace"]) -> "Namespace":
        """Accept either a Namespace or its string value."""
        if isinstance(namespace, Namespace):
            return namespace
        return cls.from_string(namespace)

    def __str__(self) -> str:
        return self.value


class TextDirection(str, Enum):
    """Writing direction reported for a locale."""

    LTR = "ltr"
    RTL = "rtl"


class NegotiationState(str, Enum):
    """States of the per-request locale negotiation."""

    ROOT_PATH = "ROOT_PATH"
    PATH_HAS_LOCALE = "PATH_HAS_LOCALE"
    PATH_MISSING_LOCALE = "PATH_MISSING_LOCALE"


def freeze_tree(tree: Mapping[str, Any]) -> MessageTree:
    """Return a read-only deep copy of a message tree.

    Nested mappings become MappingProxyType views over private dicts so a
    cached tree cannot be patched in place by callers.
    """
    frozen: dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(value, Mapping):
            frozen[str(key)] = freeze_tree(value)
        else:
            frozen[str(key)] = value
    return MappingProxyType(frozen)


def thaw_tree(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Return a plain (JSON serializable) dict copy of a message tree."""
    return {
        key: thaw_tree(value) if isinstance(value, Mapping) else value
        for key, value in tree.items()
    }


@dataclass(frozen=True, eq=False)
class LoadedMessageSet:
    """Message trees for one locale, keyed by namespace.

    Never mutated. Two sets are equal when they hold the same tree objects
    for the same locale and namespaces, so sets rebuilt from cached trees
    share memoized contexts while reloaded trees never do.

    Attributes:
        locale: Locale the trees were loaded for.
        messages: Read-only mapping of Namespace to MessageTree.
    """

    locale: Locale
    messages: Mapping[Namespace, MessageTree] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "messages",
            MappingProxyType(
                {Namespace.coerce(ns): tree for ns, tree in self.messages.items()}
            ),
        )

    @property
    def namespaces(self) -> tuple[Namespace, ...]:
        """Namespaces present in this set, in load order."""
        return tuple(self.messages.keys())

    def get_tree(self, namespace: Union[str, Namespace]) -> Optional[MessageTree]:
        """Get the tree for a namespace, or None when it was not loaded."""
        return self.messages.get(Namespace.coerce(namespace))

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain dict keyed by namespace value, for JSON responses."""
        return {ns.value: thaw_tree(tree) for ns, tree in self.messages.items()}

    def _identity(self) -> tuple:
        return (
            self.locale,
            tuple((ns, id(tree)) for ns, tree in self.messages.items()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoadedMessageSet):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())


@dataclass(frozen=True)
class LanguagePreference:
    """One entry of an Accept-Language header.

    Attributes:
        language: Base language subtag, lower-cased (e.g. "fr" for "fr-CA").
        quality: Weight between 0 and 1.
    """

    language: str
    quality: float = 1.0


@dataclass(frozen=True)
class NegotiatedLocale:
    """Outcome of negotiating the locale for one inbound request.

    Attributes:
        locale: Effective locale for the request.
        state: Which negotiation branch produced the decision.
        redirect_to: Target URL when a redirect is required, else None.
        write_cookie: Whether the preference cookie must be (re)written.
    """

    locale: Locale
    state: NegotiationState
    redirect_to: Optional[str] = None
    write_cookie: bool = False

    @property
    def requires_redirect(self) -> bool:
        """True when the request must be answered with a redirect."""
        return self.redirect_to is not None
