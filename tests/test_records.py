"""Tests for edit records: construction, validation, str(), and the legacy dict shape."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from deep_diff.errors import MalformedEditError
from deep_diff.records import (
    DiffArray,
    DiffDeleted,
    DiffEdit,
    DiffNew,
    Kind,
    as_diff,
    diff_from_dict,
    make_diff_edit,
    make_diff_new,
    rebase,
)

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_kinds(self) -> None:
        assert DiffNew(1).kind is Kind.NEW
        assert DiffDeleted(1).kind is Kind.DELETED
        assert DiffEdit(1, 2).kind is Kind.EDITED
        assert DiffArray(0, DiffNew(1)).kind is Kind.ARRAY

    def test_kind_values_are_legacy_letters(self) -> None:
        assert [str(kind) for kind in Kind] == ["N", "D", "E", "A"]

    def test_records_are_frozen(self) -> None:
        change = DiffEdit(1, 2, path=("a",))
        with pytest.raises(FrozenInstanceError):
            change.rhs = 3  # type: ignore[misc]

    def test_records_are_hashable_when_values_are(self) -> None:
        assert len({DiffEdit(1, 2, path=("a",)), DiffEdit(1, 2, path=("a",))}) == 1

    def test_factories_normalise_empty_path(self) -> None:
        assert make_diff_new((), 1).path is None
        assert make_diff_edit([], 1, 2).path is None
        assert make_diff_new(["a", 0], 1).path == ("a", 0)


class TestDiffArrayValidation:
    def test_negative_index_rejected(self) -> None:
        with pytest.raises(MalformedEditError, match=">= 0"):
            DiffArray(-1, DiffNew(1))

    def test_bool_index_rejected(self) -> None:
        with pytest.raises(MalformedEditError, match="int"):
            DiffArray(True, DiffNew(1))

    def test_string_index_rejected(self) -> None:
        with pytest.raises(MalformedEditError, match="int"):
            DiffArray("0", DiffNew(1))  # type: ignore[arg-type]

    def test_item_must_be_record(self) -> None:
        with pytest.raises(MalformedEditError, match="item"):
            DiffArray(0, {"kind": "N", "rhs": 1})  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# str()
# ---------------------------------------------------------------------------


class TestStr:
    def test_edit(self) -> None:
        assert str(DiffEdit(1, 2, path=("a", "b"))) == "E at a/b: 1 -> 2"

    def test_root(self) -> None:
        assert str(DiffNew("x")) == "N at (root): 'x'"

    def test_deleted(self) -> None:
        assert str(DiffDeleted([1], path=("k",))) == "D at k: [1]"

    def test_array(self) -> None:
        change = DiffArray(2, DiffEdit(3, 4), path=("list",))
        assert str(change) == "A at list[2]: E at (root): 3 -> 4"


# ---------------------------------------------------------------------------
# rebase
# ---------------------------------------------------------------------------


class TestRebase:
    def test_strips_prefix(self) -> None:
        assert rebase(DiffEdit(1, 2, path=("key", 0, "A")), ("key", 0)).path == ("A",)

    def test_full_prefix_becomes_none(self) -> None:
        assert rebase(DiffEdit(1, 2, path=("key", 0)), ("key", 0)).path is None

    def test_mismatched_prefix_rejected(self) -> None:
        with pytest.raises(MalformedEditError):
            rebase(DiffEdit(1, 2, path=("other",)), ("key",))


# ---------------------------------------------------------------------------
# Legacy dict shape
# ---------------------------------------------------------------------------


class TestToDict:
    def test_edit(self) -> None:
        assert DiffEdit(2, 3, path=("b",)).to_dict() == {
            "kind": "E",
            "path": ["b"],
            "lhs": 2,
            "rhs": 3,
        }

    def test_root_omits_path(self) -> None:
        assert DiffNew(5).to_dict() == {"kind": "N", "rhs": 5}

    def test_array_nests_item(self) -> None:
        assert DiffArray(1, DiffDeleted("x"), path=("l",)).to_dict() == {
            "kind": "A",
            "path": ["l"],
            "index": 1,
            "item": {"kind": "D", "lhs": "x"},
        }


class TestFromDict:
    def test_edit(self) -> None:
        change = diff_from_dict({"kind": "E", "path": ["b"], "lhs": 2, "rhs": 3})
        assert change == DiffEdit(2, 3, path=("b",))

    def test_array_with_nested_item(self) -> None:
        change = diff_from_dict(
            {"kind": "A", "path": ["l"], "index": 0, "item": {"kind": "N", "rhs": 1}}
        )
        assert change == DiffArray(0, DiffNew(1), path=("l",))

    def test_empty_path_is_root(self) -> None:
        assert diff_from_dict({"kind": "D", "path": [], "lhs": 1}).path is None

    def test_null_values_are_present(self) -> None:
        assert diff_from_dict({"kind": "N", "rhs": None}) == DiffNew(None)

    def test_unknown_kind(self) -> None:
        with pytest.raises(MalformedEditError, match="unknown edit kind"):
            diff_from_dict({"kind": "X"})

    def test_missing_kind(self) -> None:
        with pytest.raises(MalformedEditError, match="unknown edit kind"):
            diff_from_dict({"lhs": 1})

    def test_missing_field(self) -> None:
        with pytest.raises(MalformedEditError, match="missing rhs"):
            diff_from_dict({"kind": "E", "lhs": 1})

    def test_missing_item(self) -> None:
        with pytest.raises(MalformedEditError, match="missing item"):
            diff_from_dict({"kind": "A", "index": 0})

    def test_round_trip(self) -> None:
        change = DiffArray(0, DiffEdit(0, 9, path=("A",)), path=("key",))
        assert diff_from_dict(change.to_dict()) == change


class TestAsDiff:
    def test_record_passes_through(self) -> None:
        change = DiffNew(1)
        assert as_diff(change) is change

    def test_mapping_converted(self) -> None:
        assert as_diff({"kind": "N", "rhs": 1}) == DiffNew(1)

    def test_other_types_rejected(self) -> None:
        with pytest.raises(MalformedEditError, match="expected an edit record"):
            as_diff(42)

    def test_malformed_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            as_diff("E")
