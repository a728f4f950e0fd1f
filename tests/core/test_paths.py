"""
Tests for dot-notation path addressing.

Covers get/set/delete semantics, auto-vivification, strict failures
that leave the tree untouched, and empty-segment handling.
"""

import copy as _copy

import pytest as _pytest

import jsonsmith.core as core

# =============================================================================
# split_path
# =============================================================================


class TestSplitPath:
    """Tests for path splitting."""

    def test_splits_on_dots(self) -> None:
        assert core.split_path("a.b.c") == ["a", "b", "c"]

    def test_single_segment(self) -> None:
        assert core.split_path("a") == ["a"]

    def test_keeps_empty_segments(self) -> None:
        """Leading, trailing and doubled dots produce "" segments."""
        assert core.split_path(".a") == ["", "a"]
        assert core.split_path("a.") == ["a", ""]
        assert core.split_path("a..b") == ["a", "", "b"]

    def test_empty_path_raises(self) -> None:
        with _pytest.raises(core.InvalidPathError) as exc_info:
            core.split_path("")
        assert exc_info.value.path == ""

    def test_non_string_raises(self) -> None:
        with _pytest.raises(core.InvalidPathError, match="must be a string"):
            core.split_path(None)  # type: ignore[arg-type]

    def test_errors_are_value_errors(self) -> None:
        """The whole taxonomy derives from ValueError."""
        assert issubclass(core.PathError, ValueError)
        for cls in (core.InvalidPathError, core.NotTraversableError, core.PathNotFoundError):
            assert issubclass(cls, core.PathError)


# =============================================================================
# get_value
# =============================================================================


class TestGetValue:
    """Tests for strict reads."""

    def test_reads_nested_value(self) -> None:
        doc = {"common": {"welcome": "Welcome", "goodbye": "Bye"}}
        assert core.get_value(doc, "common.welcome") == "Welcome"

    def test_reads_subtree(self) -> None:
        doc = {"a": {"b": {"c": 1}}}
        assert core.get_value(doc, "a.b") == {"c": 1}

    def test_reads_falsy_values(self) -> None:
        """null, false, 0 and "" are values, not absences."""
        doc = {"n": None, "f": False, "z": 0, "s": ""}
        assert core.get_value(doc, "n") is None
        assert core.get_value(doc, "f") is False
        assert core.get_value(doc, "z") == 0
        assert core.get_value(doc, "s") == ""

    def test_missing_key_raises_not_found(self) -> None:
        doc = {"common": {"welcome": "Welcome"}}
        with _pytest.raises(core.PathNotFoundError) as exc_info:
            core.get_value(doc, "common.missing")
        assert exc_info.value.path == "common.missing"
        assert exc_info.value.segment == "missing"
        assert "common.missing" in str(exc_info.value)

    def test_lookup_in_primitive_raises_not_traversable(self) -> None:
        doc = {"a": "text"}
        with _pytest.raises(core.NotTraversableError) as exc_info:
            core.get_value(doc, "a.b")
        assert exc_info.value.segment == "b"
        assert "string" in str(exc_info.value)

    def test_arrays_are_not_indexed(self) -> None:
        doc = {"items": [1, 2, 3]}
        with _pytest.raises(core.NotTraversableError):
            core.get_value(doc, "items.0")

    def test_root_must_be_object(self) -> None:
        with _pytest.raises(core.NotTraversableError):
            core.get_value([1, 2], "a")

    def test_leading_dot_raises_not_found(self) -> None:
        with _pytest.raises(core.PathNotFoundError) as exc_info:
            core.get_value({"a": 1}, ".a")
        assert exc_info.value.segment == ""

    def test_trailing_dot_raises_not_found(self) -> None:
        with _pytest.raises(core.PathNotFoundError):
            core.get_value({"a": {"b": 1}}, "a.")

    def test_empty_key_is_addressable(self) -> None:
        """A real "" key is found like any other."""
        assert core.get_value({"": {"x": 1}}, ".x") == 1

    def test_has_value(self) -> None:
        doc = {"a": {"b": None}}
        assert core.has_value(doc, "a.b") is True
        assert core.has_value(doc, "a.c") is False
        assert core.has_value(doc, "a.b.c") is False

    def test_has_value_still_rejects_empty_path(self) -> None:
        with _pytest.raises(core.InvalidPathError):
            core.has_value({}, "")


# =============================================================================
# set_value
# =============================================================================


class TestSetValue:
    """Tests for permissive writes."""

    def test_overwrites_existing_leaf(self) -> None:
        doc = {"a": {"b": 1}}
        core.set_value(doc, "a.b", 2)
        assert doc == {"a": {"b": 2}}

    def test_adds_sibling(self) -> None:
        doc = {"common": {"welcome": "Welcome"}}
        core.set_value(doc, "common.goodbye", "Bye")
        assert doc == {"common": {"welcome": "Welcome", "goodbye": "Bye"}}

    def test_auto_vivifies_missing_intermediates(self) -> None:
        doc: dict = {}
        core.set_value(doc, "a.b.c", 5)
        assert doc == {"a": {"b": {"c": 5}}}

    def test_replaces_primitive_intermediate(self) -> None:
        """Non-object data at an intermediate position is discarded."""
        doc = {"a": "text", "keep": True}
        core.set_value(doc, "a.b", 1)
        assert doc == {"a": {"b": 1}, "keep": True}

    def test_replaces_array_intermediate(self) -> None:
        doc = {"a": [1, 2]}
        core.set_value(doc, "a.b", 1)
        assert doc == {"a": {"b": 1}}

    def test_sets_any_value_kind(self) -> None:
        doc: dict = {}
        for key, value in [("n", None), ("l", [1, {"x": 2}]), ("o", {}), ("b", False)]:
            core.set_value(doc, key, value)
        assert doc == {"n": None, "l": [1, {"x": 2}], "o": {}, "b": False}

    def test_only_touches_addressed_path(self) -> None:
        doc = {"a": {"b": 1, "c": {"d": 2}}, "e": [1]}
        before = _copy.deepcopy(doc)
        core.set_value(doc, "a.c.x", 3)
        assert doc["e"] == before["e"]
        assert doc["a"]["b"] == 1
        assert doc["a"]["c"] == {"d": 2, "x": 3}

    def test_set_then_get_round_trips(self) -> None:
        doc = {"x": {"y": 0}}
        for path, value in [("x.y", 1), ("p.q.r", "s"), ("x", [1, 2]), ("t", None)]:
            core.set_value(doc, path, value)
            assert core.get_value(doc, path) == value

    def test_empty_segment_creates_empty_key(self) -> None:
        doc: dict = {}
        core.set_value(doc, "a..b", 1)
        assert doc == {"a": {"": {"b": 1}}}

    def test_non_object_root_raises(self) -> None:
        with _pytest.raises(core.NotTraversableError, match="root"):
            core.set_value([], "a", 1)

    def test_empty_path_raises(self) -> None:
        doc = {"a": 1}
        with _pytest.raises(core.InvalidPathError):
            core.set_value(doc, "", 2)
        assert doc == {"a": 1}


# =============================================================================
# delete_value
# =============================================================================


class TestDeleteValue:
    """Tests for strict deletes."""

    def test_removes_key(self) -> None:
        doc = {"common": {"welcome": "Welcome", "goodbye": "Bye"}}
        core.delete_value(doc, "common.goodbye")
        assert doc == {"common": {"welcome": "Welcome"}}

    def test_removes_subtree(self) -> None:
        doc = {"a": {"b": {"c": 1}}, "d": 2}
        core.delete_value(doc, "a")
        assert doc == {"d": 2}

    def test_leaves_empty_parent(self) -> None:
        doc = {"a": {"b": 1}}
        core.delete_value(doc, "a.b")
        assert doc == {"a": {}}

    def test_missing_leaf_raises_and_leaves_tree(self) -> None:
        doc = {"a": {"b": 1}}
        before = _copy.deepcopy(doc)
        with _pytest.raises(core.PathNotFoundError):
            core.delete_value(doc, "a.x")
        assert doc == before

    def test_missing_intermediate_raises_and_leaves_tree(self) -> None:
        doc = {"a": {"b": 1}}
        before = _copy.deepcopy(doc)
        with _pytest.raises(core.PathNotFoundError):
            core.delete_value(doc, "x.b")
        assert doc == before

    def test_primitive_parent_raises_not_traversable(self) -> None:
        doc = {"a": 5}
        with _pytest.raises(core.NotTraversableError):
            core.delete_value(doc, "a.b")
        assert doc == {"a": 5}

    def test_get_after_delete_fails(self) -> None:
        doc = {"a": {"b": 1}}
        core.delete_value(doc, "a.b")
        assert not core.has_value(doc, "a.b")

    def test_empty_path_raises(self) -> None:
        with _pytest.raises(core.InvalidPathError):
            core.delete_value({"a": 1}, "")
