"""Edit records: the closed set of change types produced by a diff.

Four frozen dataclasses form the ``Diff`` union, each tagged with a ``Kind``:

- ``DiffNew``     (``N``): a path now holds ``rhs`` where nothing was before.
- ``DiffDeleted`` (``D``): the value ``lhs`` at a path no longer exists.
- ``DiffEdit``    (``E``): the value at a path changed from ``lhs`` to ``rhs``.
- ``DiffArray``   (``A``): slot ``index`` of the array at a path changed;
  ``item`` is itself a record describing the change, with a path relative
  to that slot.

``path`` is a tuple of keys/indices from the comparison root, or ``None``
when the change is at the root itself (never an empty tuple).

Records round-trip through the legacy dict shape used by JSON consumers::

    {"kind": "E", "path": ["b"], "lhs": 2, "rhs": 3}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, ClassVar

from deep_diff.errors import MalformedEditError

__all__ = [
    "Diff",
    "DiffArray",
    "DiffDeleted",
    "DiffEdit",
    "DiffNew",
    "Kind",
    "Path",
    "as_diff",
    "diff_from_dict",
    "make_diff_array",
    "make_diff_deleted",
    "make_diff_edit",
    "make_diff_new",
    "rebase",
]

Path = tuple[Any, ...]


class Kind(StrEnum):
    """Legacy one-letter discriminators for edit records."""

    NEW = "N"
    DELETED = "D"
    EDITED = "E"
    ARRAY = "A"


def _format_path(path: Path | None) -> str:
    if not path:
        return "(root)"
    return "/".join(str(step) for step in path)


@dataclass(frozen=True, slots=True)
class DiffNew:
    """A value appeared at ``path``."""

    rhs: Any
    path: Path | None = None
    kind: ClassVar[Kind] = Kind.NEW

    def to_dict(self) -> dict[str, Any]:
        data = _with_path({"kind": str(self.kind)}, self.path)
        data["rhs"] = self.rhs
        return data

    def __str__(self) -> str:
        return f"N at {_format_path(self.path)}: {self.rhs!r}"


@dataclass(frozen=True, slots=True)
class DiffDeleted:
    """The value ``lhs`` at ``path`` was removed."""

    lhs: Any
    path: Path | None = None
    kind: ClassVar[Kind] = Kind.DELETED

    def to_dict(self) -> dict[str, Any]:
        data = _with_path({"kind": str(self.kind)}, self.path)
        data["lhs"] = self.lhs
        return data

    def __str__(self) -> str:
        return f"D at {_format_path(self.path)}: {self.lhs!r}"


@dataclass(frozen=True, slots=True)
class DiffEdit:
    """The value at ``path`` changed from ``lhs`` to ``rhs``."""

    lhs: Any
    rhs: Any
    path: Path | None = None
    kind: ClassVar[Kind] = Kind.EDITED

    def to_dict(self) -> dict[str, Any]:
        data = _with_path({"kind": str(self.kind)}, self.path)
        data["lhs"] = self.lhs
        data["rhs"] = self.rhs
        return data

    def __str__(self) -> str:
        return f"E at {_format_path(self.path)}: {self.lhs!r} -> {self.rhs!r}"


@dataclass(frozen=True, slots=True)
class DiffArray:
    """Slot ``index`` of the array at ``path`` changed as described by ``item``.

    Attributes:
        index: Slot index in the array as it stood when it was compared.
        item:  Nested record; its ``path`` is relative to the slot.
        path:  Path to the array itself, or None for a root array.
    """

    index: int
    item: Diff
    path: Path | None = None
    kind: ClassVar[Kind] = Kind.ARRAY

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            msg = f"DiffArray index must be an int, got {self.index!r}"
            raise MalformedEditError(msg)
        if self.index < 0:
            msg = f"DiffArray index must be >= 0, got {self.index}"
            raise MalformedEditError(msg)
        if not isinstance(self.item, _DIFF_TYPES):
            msg = f"DiffArray item must be an edit record, got {type(self.item)!r}"
            raise MalformedEditError(msg)

    def to_dict(self) -> dict[str, Any]:
        data = _with_path({"kind": str(self.kind)}, self.path)
        data["index"] = self.index
        data["item"] = self.item.to_dict()
        return data

    def __str__(self) -> str:
        return f"A at {_format_path(self.path)}[{self.index}]: {self.item}"


Diff = DiffNew | DiffDeleted | DiffEdit | DiffArray
_DIFF_TYPES = (DiffNew, DiffDeleted, DiffEdit, DiffArray)


def _with_path(data: dict[str, Any], path: Path | None) -> dict[str, Any]:
    if path:
        data["path"] = list(path)
    return data


def _normalize_path(path: Iterable[Any] | None) -> Path | None:
    if path is None:
        return None
    steps = tuple(path)
    return steps or None


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def make_diff_new(path: Iterable[Any] | None, rhs: Any) -> DiffNew:
    """Build a ``DiffNew``; an empty path becomes None."""
    return DiffNew(rhs=rhs, path=_normalize_path(path))


def make_diff_deleted(path: Iterable[Any] | None, lhs: Any) -> DiffDeleted:
    """Build a ``DiffDeleted``; an empty path becomes None."""
    return DiffDeleted(lhs=lhs, path=_normalize_path(path))


def make_diff_edit(path: Iterable[Any] | None, lhs: Any, rhs: Any) -> DiffEdit:
    """Build a ``DiffEdit``; an empty path becomes None."""
    return DiffEdit(lhs=lhs, rhs=rhs, path=_normalize_path(path))


def make_diff_array(path: Iterable[Any] | None, index: int, item: Diff) -> DiffArray:
    """Build a ``DiffArray``; an empty path becomes None."""
    return DiffArray(index=index, item=item, path=_normalize_path(path))


def rebase(change: Diff, prefix: Path) -> Diff:
    """Return *change* with *prefix* stripped from the front of its path.

    Used to turn a record found below an array slot into the slot-relative
    ``item`` of a ``DiffArray``.
    """
    path = change.path or ()
    if path[: len(prefix)] != prefix:
        msg = f"path {path!r} does not start with {prefix!r}"
        raise MalformedEditError(msg)
    return replace(change, path=_normalize_path(path[len(prefix) :]))


# ---------------------------------------------------------------------------
# Legacy dict shape
# ---------------------------------------------------------------------------

_REQUIRED_FIELDS: dict[Kind, tuple[str, ...]] = {
    Kind.NEW: ("rhs",),
    Kind.DELETED: ("lhs",),
    Kind.EDITED: ("lhs", "rhs"),
    Kind.ARRAY: ("index", "item"),
}


def diff_from_dict(data: Mapping[str, Any]) -> Diff:
    """Build an edit record from its legacy dict shape.

    Args:
        data: Mapping with a ``kind`` of ``N``/``D``/``E``/``A``, an optional
            ``path`` list and the fields that kind requires.

    Returns:
        The corresponding record.

    Raises:
        MalformedEditError: If the kind is unknown or a required field is
            missing.
    """
    raw_kind = data.get("kind")
    try:
        kind = Kind(raw_kind)
    except ValueError:
        msg = f"unknown edit kind {raw_kind!r}"
        raise MalformedEditError(msg) from None

    missing = [name for name in _REQUIRED_FIELDS[kind] if name not in data]
    if missing:
        msg = f"edit of kind {kind!s} is missing {', '.join(missing)}"
        raise MalformedEditError(msg)

    path = data.get("path")
    if kind is Kind.NEW:
        return make_diff_new(path, data["rhs"])
    if kind is Kind.DELETED:
        return make_diff_deleted(path, data["lhs"])
    if kind is Kind.EDITED:
        return make_diff_edit(path, data["lhs"], data["rhs"])
    return make_diff_array(path, data["index"], as_diff(data["item"]))


def as_diff(change: Any) -> Diff:
    """Coerce a record or its legacy dict shape into a record."""
    if isinstance(change, _DIFF_TYPES):
        return change
    if isinstance(change, Mapping):
        return diff_from_dict(change)
    msg = f"expected an edit record, got {type(change)!r}"
    raise MalformedEditError(msg)
