"""Public API functions for deep-diff.

This module provides the user-facing operations: ``compare``,
``compare_observable``, ``compare_order_independent``,
``order_independent_hash``, ``apply_change``, ``revert_change``,
``apply_diff`` and ``is_conflict``.  Each comparison creates a fresh
``DiffEngine`` so no state survives between calls.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from deep_diff.algorithm.config import ArrayComparisonMode, DiffConfig
from deep_diff.algorithm.engine import DiffEngine
from deep_diff.algorithm.hasher import order_independent_hash
from deep_diff.patch import apply_change, apply_diff, is_conflict, revert_change
from deep_diff.protocols import Accumulator, Observer
from deep_diff.records import Diff

__all__ = [
    "apply_change",
    "apply_diff",
    "compare",
    "compare_observable",
    "compare_order_independent",
    "is_conflict",
    "order_independent_hash",
    "revert_change",
]


def _with_mode(config: DiffConfig | None, mode: ArrayComparisonMode) -> DiffConfig:
    base = config if config is not None else DiffConfig()
    if base.array_comparison_mode is mode:
        return base
    return replace(base, array_comparison_mode=mode)


def _accumulate(
    changes: list[Diff], accumulator: Accumulator | None
) -> list[Diff] | Accumulator | None:
    if accumulator is not None:
        for change in changes:
            accumulator.append(change)
        return accumulator
    return changes or None


def compare_observable(
    lhs: Any,
    rhs: Any,
    observer: Observer | None = None,
    prefilter: Any = None,
    order_independent: bool = False,
    *,
    config: DiffConfig | None = None,
) -> list[Diff]:
    """Compare two values, reporting each record to *observer*.

    The observer is called synchronously, once per record, in emission order,
    after the whole comparison has finished and before this function returns.

    Args:
        lhs:               Baseline value.
        rhs:               Value compared against the baseline.
        observer:          Optional ``(change) -> None`` callback.
        prefilter:         Optional predicate or ``PreFilter`` hooks.
        order_independent: Compare arrays as unordered multisets.  Sorts the
                           inputs' lists in place unless the config says not to.
        config:            Engine parameters.  Defaults to ``DiffConfig()``.

    Returns:
        The list of records (possibly empty).
    """
    if order_independent:
        config = _with_mode(config, ArrayComparisonMode.UNORDERED)
    changes = DiffEngine(config).compute(lhs, rhs, prefilter)
    if observer is not None:
        for change in changes:
            observer(change)
    return changes


def compare(
    lhs: Any,
    rhs: Any,
    prefilter: Any = None,
    accumulator: Accumulator | None = None,
    *,
    config: DiffConfig | None = None,
) -> list[Diff] | Accumulator | None:
    """Compare two values and return their edit records.

    Args:
        lhs:         Baseline value.
        rhs:         Value compared against the baseline.
        prefilter:   Optional ``(path, key) -> bool`` predicate, or an object with
                     ``prefilter`` and/or ``normalize`` attributes.
        accumulator: Optional object with ``append``; receives every record and
                     is returned in place of a list.
        config:      Engine parameters.  Defaults to ``DiffConfig()``.

    Returns:
        The accumulator when one was given; otherwise the list of records, or
        None when the values are equal.
    """
    changes = compare_observable(lhs, rhs, prefilter=prefilter, config=config)
    return _accumulate(changes, accumulator)


def compare_order_independent(
    lhs: Any,
    rhs: Any,
    prefilter: Any = None,
    accumulator: Accumulator | None = None,
    *,
    config: DiffConfig | None = None,
) -> list[Diff] | Accumulator | None:
    """Like ``compare``, but arrays are compared as unordered multisets.

    Both sides' arrays are sorted by ``order_independent_hash`` before they are
    aligned, so permutations of the same elements yield no records.  With the
    default config the caller's lists are sorted in place.

    Returns:
        The accumulator when one was given; otherwise the list of records, or
        None when the values are equal up to array order.
    """
    changes = compare_observable(
        lhs,
        rhs,
        prefilter=prefilter,
        config=_with_mode(config, ArrayComparisonMode.UNORDERED),
    )
    return _accumulate(changes, accumulator)
