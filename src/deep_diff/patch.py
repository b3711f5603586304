"""Apply and revert edit records against a live structure, in place.

``apply_change`` replays one record onto a target; ``revert_change`` undoes
one.  ``apply_diff`` diffs a target against a source and replays every
record, optionally filtered.  All three mutate the target and return None.

Path traversal walks every step but the last.  A missing intermediate is
created on the fly: when applying, as a list if the *next* step is an
integer and as a dict otherwise; when reverting, with the shape found at the
same step in the source when there is one.  An intermediate holding a
non-container value is replaced by a fresh container, or raises
``PathMismatchError`` under ``DiffConfig(strict=True)``.

Tuples and numpy arrays below the root cannot be edited in place.  They are
copied into lists for the duration of one record and rebuilt as their
original type once the record has been applied.  A root ndarray keeps its
identity, so only same-length slot edits apply to it.

Leaf semantics:

========  =======================  ==================================
Kind      apply                    revert
========  =======================  ==================================
N         set ``rhs``              delete (array slot: remove, shift)
E         set ``rhs``              set ``lhs``
D         delete (slot: remove)    set ``lhs``
A         recurse into the slot    recurse into the slot
========  =======================  ==================================

Records are applied exactly as recorded; nothing is recomputed between
records of one sequence.  Reverting a sequence works in emission order.
"""

from __future__ import annotations

import builtins
import logging
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from deep_diff.algorithm.classifier import UNDEFINED, ValueType, real_type_of
from deep_diff.algorithm.config import DiffConfig
from deep_diff.algorithm.engine import DiffEngine
from deep_diff.errors import MalformedEditError, PathMismatchError
from deep_diff.protocols import ChangeFilter
from deep_diff.records import (
    Diff,
    DiffArray,
    DiffDeleted,
    DiffEdit,
    DiffNew,
    Path,
    as_diff,
)

__all__ = ["apply_change", "apply_diff", "is_conflict", "revert_change"]

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_warn = _log.warning

# Ambient flag consulted by is_conflict(); nothing in this package sets it.
_CONFLICT_FLAG = "$conflict"


# ---------------------------------------------------------------------------
# Container access
# ---------------------------------------------------------------------------


def _is_container(value: Any) -> bool:
    if isinstance(value, (MutableMapping, list)):
        return True
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return real_type_of(value) is ValueType.OBJECT and hasattr(value, "__dict__")


def _is_frozen_sequence(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return isinstance(value, tuple)


def _is_index(step: Any) -> bool:
    return isinstance(step, (int, np.integer)) and not isinstance(step, bool)


def _reject(msg: str, config: DiffConfig, path: Path = (), step: Any = None) -> None:
    if config.strict:
        raise PathMismatchError(msg, path, step)
    _log_warn("Skipping change: %s", msg)


def _get(container: Any, step: Any) -> Any:
    if isinstance(container, Mapping):
        return container.get(step, UNDEFINED)
    if isinstance(container, (list, tuple, np.ndarray)):
        if _is_index(step) and -len(container) <= step < len(container):
            return container[step]
        return UNDEFINED
    if isinstance(step, str):
        return getattr(container, step, UNDEFINED)
    return UNDEFINED


def _set(container: Any, step: Any, value: Any, config: DiffConfig) -> None:
    if isinstance(container, MutableMapping):
        container[step] = value
    elif isinstance(container, list):
        if not _is_index(step):
            _reject(f"list step must be an integer, got {step!r}", config, step=step)
        elif step >= len(container):
            container.extend([config.array_fill] * (step - len(container)))
            container.append(value)
        else:
            container[step] = value
    elif isinstance(container, np.ndarray):
        if _is_index(step) and -len(container) <= step < len(container):
            container[step] = value
        else:
            _reject(f"cannot grow a root ndarray to index {step!r}", config, step=step)
    elif isinstance(step, str):
        setattr(container, step, value)
    else:
        _reject(f"attribute step must be a string, got {step!r}", config, step=step)


def _delete(container: Any, step: Any, config: DiffConfig) -> None:
    if isinstance(container, MutableMapping):
        container.pop(step, None)
    elif isinstance(container, list):
        if _is_index(step) and -len(container) <= step < len(container):
            del container[step]
    elif isinstance(container, np.ndarray):
        _reject(f"cannot remove index {step!r} from a root ndarray", config, step=step)
    elif isinstance(step, str) and hasattr(container, step):
        delattr(container, step)


def _refreeze(original: Any, items: list[Any]) -> Any:
    """Rebuild *items* as the sequence type of *original*."""
    if isinstance(original, np.ndarray):
        try:
            return np.array(items, dtype=original.dtype)
        except (TypeError, ValueError):
            _log_debug("Rebuilding %s ndarray with object dtype", original.dtype)
            return np.array(items, dtype=object)
    make = getattr(type(original), "_make", None)
    if make is not None:
        try:
            return make(items)
        except TypeError:
            _log_debug("Rebuilding %s as a plain tuple", type(original).__name__)
            return tuple(items)
    try:
        return type(original)(items)
    except TypeError:
        return tuple(items)


def _replace_contents(target: Any, value: Any, path: Path, config: DiffConfig) -> None:
    """Make a root *target* hold *value*, since the root itself cannot be rebound."""
    if isinstance(target, MutableMapping) and isinstance(value, Mapping):
        target.clear()
        target.update(value)
    elif isinstance(target, list) and (
        isinstance(value, np.ndarray)
        or (isinstance(value, Sequence) and not isinstance(value, str))
    ):
        target[:] = list(value)
    elif isinstance(target, (MutableMapping, list)) and value is UNDEFINED:
        target.clear()
    else:
        msg = (
            f"cannot replace root {type(target).__name__} in place "
            f"with {type(value).__name__}"
        )
        _reject(msg, config, path)


def _lookahead_shape(path: Path, n: int) -> Callable[[], Any]:
    if n + 1 < len(path) and _is_index(path[n + 1]):
        return list
    return dict


def _check_target(target: Any, change: Diff, config: DiffConfig) -> bool:
    if _is_container(target):
        return True
    _reject(
        f"cannot apply {change.kind!s} record to a {type(target).__name__}",
        config,
        change.path or (),
    )
    return False


# ---------------------------------------------------------------------------
# One record against one target
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _Patch:
    """State of applying or reverting a single record.

    ``thawed`` remembers every tuple/ndarray swapped for a list on the way
    down as ``(parent, step, original)``; ``refreeze()`` restores their types
    innermost first.
    """

    config: DiffConfig
    thawed: list[tuple[Any, Any, Any]] = field(default_factory=list)

    def refreeze(self) -> None:
        for parent, step, original in reversed(self.thawed):
            items = _get(parent, step)
            if isinstance(items, list):
                _set(parent, step, _refreeze(original, items), self.config)
        self.thawed.clear()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def ensure_container(
        self,
        parent: Any,
        step: Any,
        make: Callable[[], Any],
        path: Path,
    ) -> Any:
        """Return the container at ``parent[step]``, creating it if needed."""
        value = _get(parent, step)
        if _is_frozen_sequence(value):
            items = list(value)
            _set(parent, step, items, self.config)
            self.thawed.append((parent, step, value))
            return items
        if _is_container(value):
            return value
        if value is not UNDEFINED:
            if self.config.strict:
                msg = f"step {step!r} of {path!r} holds a {type(value).__name__}, not a container"
                raise PathMismatchError(msg, path, step)
            _log_debug("Replacing %s at step %r of %r", type(value).__name__, step, path)
        created = make()
        _log_debug("Creating %s at step %r of %r", type(created).__name__, step, path)
        _set(parent, step, created, self.config)
        return created

    def walk(self, target: Any, path: Path, source: Any = UNDEFINED) -> Any:
        """Walk *target* through all but the last step of *path*.

        When *source* is given (reverting), missing containers copy its shape
        at the same step before falling back to the lookahead rule.
        """
        it = target
        mirror = source
        for n, step in enumerate(path[:-1]):
            mirror = _get(mirror, step) if mirror is not UNDEFINED else UNDEFINED
            if isinstance(mirror, (list, tuple, np.ndarray)):
                make: Callable[[], Any] = list
            elif isinstance(mirror, Mapping):
                make = dict
            else:
                make = _lookahead_shape(path, n)
            it = self.ensure_container(it, step, make, path)
        return it

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------

    def apply_leaf(self, parent: Any, key: Any, change: Diff, path: Path) -> None:
        if isinstance(change, DiffArray):
            array = self.ensure_container(parent, key, list, path)
            self.apply_slot(array, change.index, change.item, path)
        elif isinstance(change, DiffDeleted):
            _delete(parent, key, self.config)
        elif isinstance(change, (DiffEdit, DiffNew)):
            _set(parent, key, change.rhs, self.config)

    def apply_slot(self, array: Any, index: int, item: Diff, path: Path) -> None:
        """Apply *item* at slot *index* of *array*; *item*'s path is slot-relative."""
        if item.path:
            item_path = (index,) + item.path
            parent = self.walk(array, item_path)
            self.apply_leaf(parent, item_path[-1], item, path + item_path[:-1])
        elif isinstance(item, DiffArray):
            inner = self.ensure_container(array, index, list, path)
            self.apply_slot(inner, item.index, item.item, path + (index,))
        elif isinstance(item, DiffDeleted):
            _delete(array, index, self.config)
        elif isinstance(item, (DiffEdit, DiffNew)):
            _set(array, index, item.rhs, self.config)

    # ------------------------------------------------------------------
    # Revert
    # ------------------------------------------------------------------

    def revert_leaf(self, parent: Any, key: Any, change: Diff, path: Path) -> None:
        if isinstance(change, DiffArray):
            array = self.ensure_container(parent, key, list, path)
            self.revert_slot(array, change.index, change.item, path)
        elif isinstance(change, DiffNew):
            _delete(parent, key, self.config)
        elif isinstance(change, (DiffDeleted, DiffEdit)):
            _set(parent, key, change.lhs, self.config)

    def revert_slot(self, array: Any, index: int, item: Diff, path: Path) -> None:
        if item.path:
            item_path = (index,) + item.path
            parent = self.walk(array, item_path)
            self.revert_leaf(parent, item_path[-1], item, path + item_path[:-1])
        elif isinstance(item, DiffArray):
            inner = self.ensure_container(array, index, list, path)
            self.revert_slot(inner, item.index, item.item, path + (index,))
        elif isinstance(item, DiffNew):
            _delete(array, index, self.config)
        elif isinstance(item, (DiffDeleted, DiffEdit)):
            _set(array, index, item.lhs, self.config)


# ---------------------------------------------------------------------------
# Public operations
# ---------------------------------------------------------------------------


def apply_change(
    target: Any,
    source: Any,
    change: Any = None,
    *,
    config: DiffConfig | None = None,
) -> None:
    """Apply one edit record to *target* in place.

    The legacy two-argument form ``apply_change(target, change)`` is accepted:
    when *change* is omitted and *source* is itself a record (or a dict with a
    valid ``kind``), it is used as the change.

    Args:
        target: Mutable structure to modify.
        source: Reference structure (unused by apply), or the record itself.
        change: Record to apply; a ``Diff`` or its legacy dict shape.
        config: ``strict`` and ``array_fill`` are honoured.  Defaults to
            ``DiffConfig()``.

    Raises:
        MalformedEditError: If no usable record was supplied.
        PathMismatchError: In strict mode, when the record's path runs through
            a non-container value.
    """
    if change is None:
        if source is None:
            msg = "apply_change() needs an edit record"
            raise MalformedEditError(msg)
        change = source
    change = as_diff(change)
    config = config if config is not None else DiffConfig()
    if not _check_target(target, change, config):
        return

    path = change.path or ()
    patch = _Patch(config)
    try:
        if path:
            parent = patch.walk(target, path)
            patch.apply_leaf(parent, path[-1], change, path[:-1])
        elif isinstance(change, DiffArray):
            patch.apply_slot(target, change.index, change.item, ())
        elif isinstance(change, DiffDeleted):
            _replace_contents(target, UNDEFINED, path, config)
        elif isinstance(change, (DiffEdit, DiffNew)):
            _replace_contents(target, change.rhs, path, config)
    finally:
        patch.refreeze()


def revert_change(
    target: Any,
    source: Any,
    change: Any,
    *,
    config: DiffConfig | None = None,
) -> None:
    """Undo one previously applied edit record on *target* in place.

    Args:
        target: Mutable structure to modify.
        source: Structure the record was computed from (may be None); used
            only to decide the shape of missing intermediate containers.
        change: Record to undo; a ``Diff`` or its legacy dict shape.
        config: ``strict`` and ``array_fill`` are honoured.  Defaults to
            ``DiffConfig()``.

    Raises:
        MalformedEditError: If *change* is not a usable record.
        PathMismatchError: In strict mode, when the record's path runs through
            a non-container value.
    """
    change = as_diff(change)
    config = config if config is not None else DiffConfig()
    if not _check_target(target, change, config):
        return

    path = change.path or ()
    patch = _Patch(config)
    try:
        if path:
            mirror = source if source is not None else UNDEFINED
            parent = patch.walk(target, path, source=mirror)
            patch.revert_leaf(parent, path[-1], change, path[:-1])
        elif isinstance(change, DiffArray):
            patch.revert_slot(target, change.index, change.item, ())
        elif isinstance(change, DiffNew):
            _replace_contents(target, UNDEFINED, path, config)
        elif isinstance(change, (DiffDeleted, DiffEdit)):
            _replace_contents(target, change.lhs, path, config)
    finally:
        patch.refreeze()


def apply_diff(
    target: Any,
    source: Any,
    filter: ChangeFilter | None = None,
    *,
    config: DiffConfig | None = None,
) -> None:
    """Diff *target* against *source* and apply the records to *target*.

    The full record sequence is computed first, then applied in emission
    order.  Unfiltered, *target* ends up deep-equal to *source*.

    Args:
        target: Mutable structure to bring in line with *source*.
        source: Desired end state.
        filter: Optional ``(target, source, change) -> bool``; records for
            which it returns False are skipped.
        config: Passed to both the diff engine and ``apply_change``.
    """
    config = config if config is not None else DiffConfig()
    changes = DiffEngine(config).compute(target, source)
    for change in changes:
        if filter is not None and not filter(target, source, change):
            _log_debug("Filter rejected %s", change)
            continue
        apply_change(target, source, change, config=config)


def is_conflict() -> bool:
    """Legacy conflict check.

    Reports whether the ambient builtin ``$conflict`` has been set.  Nothing in
    this package ever sets it, so in practice this returns False.
    """
    return hasattr(builtins, _CONFLICT_FLAG)
