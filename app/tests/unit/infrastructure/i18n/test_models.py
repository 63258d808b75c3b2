"""Tests for infrastructure.i18n.models module."""

from types import MappingProxyType

import pytest

from infrastructure.i18n.models import (
    LoadedMessageSet,
    Namespace,
    NegotiatedLocale,
    NegotiationState,
    freeze_tree,
    thaw_tree,
)


@pytest.mark.unit
class TestNamespace:
    """Tests for Namespace enum."""

    def test_from_string_known(self):
        """from_string() returns the matching member."""
        assert Namespace.from_string("ext_p2p") is Namespace.EXT_P2P

    def test_from_string_unknown_raises(self):
        """from_string() raises ValueError for unknown identifiers."""
        with pytest.raises(ValueError, match="Unknown namespace"):
            Namespace.from_string("not_a_namespace")

    def test_coerce_accepts_member_and_string(self):
        """coerce() accepts both forms."""
        assert Namespace.coerce(Namespace.MENU) is Namespace.MENU
        assert Namespace.coerce("menu") is Namespace.MENU

    def test_str_is_value(self):
        """str() renders the identifier."""
        assert str(Namespace.DASHBOARD_ADMIN) == "dashboard_admin"


@pytest.mark.unit
class TestFreezeTree:
    """Tests for freeze_tree() and thaw_tree()."""

    def test_nested_mappings_are_read_only(self):
        """Frozen trees reject assignment at every level."""
        frozen = freeze_tree({"a": {"b": "c"}})

        assert isinstance(frozen, MappingProxyType)
        with pytest.raises(TypeError):
            frozen["a"]["b"] = "x"  # type: ignore[index]

    def test_freeze_copies_input(self):
        """Later changes to the source dict do not leak into the frozen tree."""
        source = {"a": {"b": "c"}}
        frozen = freeze_tree(source)
        source["a"]["b"] = "changed"

        assert frozen["a"]["b"] == "c"

    def test_thaw_returns_plain_dicts(self):
        """thaw_tree() produces plain dicts."""
        thawed = thaw_tree(freeze_tree({"a": {"b": "c"}}))

        assert thawed == {"a": {"b": "c"}}
        assert type(thawed["a"]) is dict


@pytest.mark.unit
class TestLoadedMessageSet:
    """Tests for LoadedMessageSet."""

    def test_keys_are_coerced_to_namespaces(self):
        """String keys become Namespace members."""
        message_set = LoadedMessageSet(locale="en", messages={"common": {"a": "b"}})

        assert message_set.namespaces == (Namespace.COMMON,)
        assert message_set.get_tree("common") == {"a": "b"}
        assert message_set.get_tree(Namespace.COMMON) == {"a": "b"}

    def test_missing_namespace_returns_none(self):
        """get_tree() returns None for namespaces that were not loaded."""
        message_set = LoadedMessageSet(locale="en", messages={})
        assert message_set.get_tree(Namespace.MENU) is None

    def test_messages_mapping_is_read_only(self):
        """The namespace mapping cannot be modified."""
        message_set = LoadedMessageSet(locale="en", messages={"common": {}})
        with pytest.raises(TypeError):
            message_set.messages[Namespace.MENU] = {}  # type: ignore[index]

    def test_equal_content_in_new_trees_is_distinct(self):
        """Sets built from different tree objects are never equal."""
        first = LoadedMessageSet(locale="en", messages={"common": {}})
        second = LoadedMessageSet(locale="en", messages={"common": {}})

        assert first != second
        assert first == first

    def test_shared_trees_compare_equal(self):
        """Sets rebuilt from the same tree objects are equal and hash alike."""
        tree = freeze_tree({"home": "Home"})
        first = LoadedMessageSet(locale="en", messages={"menu": tree})
        second = LoadedMessageSet(locale="en", messages={Namespace.MENU: tree})

        assert first == second
        assert hash(first) == hash(second)
        assert first != LoadedMessageSet(locale="fr", messages={"menu": tree})

    def test_to_dict_keys_by_value(self):
        """to_dict() is JSON friendly."""
        message_set = LoadedMessageSet(
            locale="en", messages={Namespace.MENU: freeze_tree({"home": "Home"})}
        )
        assert message_set.to_dict() == {"menu": {"home": "Home"}}


@pytest.mark.unit
class TestNegotiatedLocale:
    """Tests for NegotiatedLocale."""

    def test_requires_redirect(self):
        """requires_redirect reflects redirect_to."""
        redirect = NegotiatedLocale("en", NegotiationState.ROOT_PATH, "/en", True)
        stay = NegotiatedLocale("en", NegotiationState.PATH_HAS_LOCALE)

        assert redirect.requires_redirect is True
        assert stay.requires_redirect is False
        assert stay.write_cookie is False
