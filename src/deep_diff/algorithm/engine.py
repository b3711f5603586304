"""DiffEngine: recursive structural comparison producing edit records.

Walks two values simultaneously and emits an ordered list of ``Diff``
records describing how to turn ``lhs`` into ``rhs``.

Per node, in precedence order:
- Present on one side only          -> ``DiffNew`` / ``DiffDeleted``.
- Classified types differ           -> ``DiffEdit`` (two regexp-like values
  are first replaced by their string forms and compared as strings).
- Both dates                        -> ``DiffEdit`` if the instants differ.
- Both arrays / walkable objects    -> recurse, unless ``lhs`` is already on
  the visitation stack (a cycle): then ``DiffEdit`` if the two values are
  not the same object, otherwise nothing.
- Anything else                     -> ``DiffEdit`` unless equal; NaN equals
  NaN.

Presence is decided by the value (``UNDEFINED`` means nothing there) and,
for the immediate parent only, by an own-key check, so a key explicitly
holding ``UNDEFINED`` is distinct from a missing key.

Record order:
- Arrays: RHS-only tail slots (descending), then LHS-only tail slots
  (descending), then shared slots from the high end down to 0.  Every
  record found below a shared slot is wrapped in a ``DiffArray`` for that
  slot, with its path rebased to be slot-relative.
- Objects: LHS keys in declaration order, then RHS-only keys in theirs.

UNORDERED mode sorts both arrays by order-independent hash before
aligning them.  By default the caller's lists are sorted in place so the
emitted indices stay valid against them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Any

import numpy as np

from deep_diff.algorithm.classifier import (
    UNDEFINED,
    ValueType,
    get_own,
    has_own,
    is_enumerable,
    own_keys,
    real_type_of,
    string_form,
)
from deep_diff.algorithm.config import DiffConfig
from deep_diff.algorithm.hasher import order_independent_hash
from deep_diff.cache import HashCache
from deep_diff.records import (
    Diff,
    Path,
    make_diff_array,
    make_diff_deleted,
    make_diff_edit,
    make_diff_new,
    rebase,
)

__all__ = ["DiffEngine"]

_log = logging.getLogger(__name__)

_log_debug = _log.debug

_CONTAINER_TYPES = (ValueType.ARRAY, ValueType.OBJECT)


@dataclass(slots=True)
class _Frame:
    """One entry of the visitation stack: the pair currently being walked."""

    lhs: Any
    rhs: Any


def _as_aware(value: Any) -> datetime:
    # Plain dates are midnight; naive datetimes are read as UTC.
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _instants_differ(lhs: Any, rhs: Any) -> bool:
    return (_as_aware(lhs) - _as_aware(rhs)).total_seconds() != 0


def _values_differ(value_type: ValueType, lhs: Any, rhs: Any) -> bool:
    if lhs is rhs:
        return False
    # NaN is the only number not equal to itself
    if value_type is ValueType.NUMBER and lhs != lhs and rhs != rhs:
        return False
    return bool(lhs != rhs)


class DiffEngine:
    """Recursive deep-diff engine.

    Each ``compute()`` call owns a fresh visitation stack and, in UNORDERED
    mode, a fresh ``HashCache``; the engine itself holds only configuration,
    so one instance can be reused freely.

    Example::

        from deep_diff.algorithm.engine import DiffEngine

        engine = DiffEngine()
        engine.compute({"a": 1, "b": 2}, {"a": 1, "b": 3, "c": 4})
        # [DiffEdit(lhs=2, rhs=3, path=('b',)), DiffNew(rhs=4, path=('c',))]
    """

    def __init__(self, config: DiffConfig | None = None) -> None:
        """Initialise the engine.

        Args:
            config: Engine parameters.  Defaults to ``DiffConfig()`` (ordered
                arrays, in-place sorting when unordered).
        """
        self._config: DiffConfig = config if config is not None else DiffConfig()

    @property
    def config(self) -> DiffConfig:
        """The configuration this engine compares with."""
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(self, lhs: Any, rhs: Any, prefilter: Any = None) -> list[Diff]:
        """Compare *lhs* with *rhs* and return the edit records.

        Args:
            lhs:       Baseline value.
            rhs:       Value compared against the baseline.
            prefilter: Optional ``(path, key) -> bool`` predicate, or an object
                with ``prefilter`` and/or ``normalize`` attributes.

        Returns:
            Records in emission order; empty when the values are equal.
        """
        return _Comparison(self._config, prefilter).run(lhs, rhs)


class _Comparison:
    """State of one top-level ``compute()`` call."""

    def __init__(self, config: DiffConfig, prefilter: Any) -> None:
        self._config = config
        self._skip: Callable[[Path, Any], bool] | None
        self._normalize: Callable[[Path, Any, Any, Any], Any] | None
        if prefilter is None:
            self._skip = self._normalize = None
        elif callable(prefilter):
            self._skip, self._normalize = prefilter, None
        else:
            self._skip = getattr(prefilter, "prefilter", None)
            self._normalize = getattr(prefilter, "normalize", None)
        self._stack: list[_Frame] = []
        self._cache: HashCache | None = None
        if config.order_independent and config.hash_cache_size > 0:
            self._cache = HashCache(max_size=config.hash_cache_size)

    def run(self, lhs: Any, rhs: Any) -> list[Diff]:
        changes: list[Diff] = []
        self._visit(lhs, rhs, changes, (), UNDEFINED)
        return changes

    # ------------------------------------------------------------------
    # Node comparison
    # ------------------------------------------------------------------

    def _visit(
        self,
        lhs: Any,
        rhs: Any,
        changes: list[Diff],
        path: Path,
        key: Any,
    ) -> None:
        """Compare one pair of values reached from *path* via *key*.

        ``key`` is ``UNDEFINED`` only for the root pair.
        """
        current = path
        if key is not UNDEFINED:
            if self._skip is not None and self._skip(path, key):
                return
            if self._normalize is not None:
                alternate = self._normalize(path, key, lhs, rhs)
                if alternate is not None:
                    lhs, rhs = alternate
            current = path + (key,)

        ltype = real_type_of(lhs)
        rtype = real_type_of(rhs)
        if ltype is ValueType.REGEXP and rtype is ValueType.REGEXP:
            lhs, rhs = string_form(lhs), string_form(rhs)
            ltype = rtype = ValueType.STRING

        parent = self._stack[-1] if self._stack else None
        ldefined = ltype is not ValueType.UNDEFINED or (
            parent is not None and has_own(parent.lhs, key)
        )
        rdefined = rtype is not ValueType.UNDEFINED or (
            parent is not None and has_own(parent.rhs, key)
        )

        if not ldefined and rdefined:
            changes.append(make_diff_new(current, rhs))
        elif not rdefined and ldefined:
            changes.append(make_diff_deleted(current, lhs))
        elif ltype is not rtype:
            changes.append(make_diff_edit(current, lhs, rhs))
        elif ltype is ValueType.DATE:
            if _instants_differ(lhs, rhs):
                changes.append(make_diff_edit(current, lhs, rhs))
        elif ltype in _CONTAINER_TYPES and is_enumerable(lhs) and is_enumerable(rhs):
            self._visit_container(ltype, lhs, rhs, changes, current)
        elif _values_differ(ltype, lhs, rhs):
            changes.append(make_diff_edit(current, lhs, rhs))

    def _visit_container(
        self,
        value_type: ValueType,
        lhs: Any,
        rhs: Any,
        changes: list[Diff],
        path: Path,
    ) -> None:
        for frame in reversed(self._stack):
            if frame.lhs is lhs:
                _log_debug("Cycle detected at %r; not descending", path)
                if lhs is not rhs:
                    changes.append(make_diff_edit(path, lhs, rhs))
                return

        self._stack.append(_Frame(lhs, rhs))
        if value_type is ValueType.ARRAY:
            self._visit_arrays(lhs, rhs, changes, path)
        else:
            self._visit_objects(lhs, rhs, changes, path)
        self._stack.pop()

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _visit_arrays(self, lhs: Any, rhs: Any, changes: list[Diff], path: Path) -> None:
        if self._config.order_independent:
            lhs = self._sort_by_hash(lhs)
            rhs = self._sort_by_hash(rhs)

        i = len(rhs) - 1
        j = len(lhs) - 1
        while i > j:
            changes.append(make_diff_array(path, i, make_diff_new(None, rhs[i])))
            i -= 1
        while j > i:
            changes.append(make_diff_array(path, j, make_diff_deleted(None, lhs[j])))
            j -= 1

        for index in range(i, -1, -1):
            slot_changes: list[Diff] = []
            self._visit(lhs[index], rhs[index], slot_changes, path, index)
            slot = path + (index,)
            for change in slot_changes:
                changes.append(make_diff_array(path, index, rebase(change, slot)))

    def _hash(self, value: Any) -> int:
        return order_independent_hash(value, self._cache)

    def _sort_by_hash(self, values: Any) -> Any:
        """Order *values* by ascending order-independent hash (stable).

        Lists and numpy arrays are reordered in place unless the config asks
        for copies; tuples are always copied.
        """
        in_place = self._config.sort_arrays_in_place
        if isinstance(values, list) and in_place:
            values.sort(key=self._hash)
            return values
        order = sorted(range(len(values)), key=lambda n: self._hash(values[n]))
        if isinstance(values, np.ndarray):
            if in_place:
                values[:] = values[order]
                return values
            return values[order]
        # Plain tuple: subclass constructors (namedtuples) take fields, not an iterable
        items = [values[n] for n in order]
        return tuple(items) if isinstance(values, tuple) else items

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _visit_objects(self, lhs: Any, rhs: Any, changes: list[Diff], path: Path) -> None:
        pending = dict.fromkeys(own_keys(rhs))
        for key in own_keys(lhs):
            if key in pending:
                del pending[key]
                self._visit(get_own(lhs, key), get_own(rhs, key), changes, path, key)
            else:
                self._visit(get_own(lhs, key), UNDEFINED, changes, path, key)
        for key in pending:
            self._visit(UNDEFINED, get_own(rhs, key), changes, path, key)
