"""Callback contracts for deep-diff's extension points.

- Prefilters: a plain ``(path, key) -> bool`` predicate, or any object with
  ``prefilter`` and/or ``normalize`` attributes (``PreFilter`` is a ready-made
  container; ``PreFilterHooks`` is the structural protocol it satisfies).
- Observers receive each record once a comparison is complete.
- Change filters decide per record whether ``apply_diff`` applies it.
- Accumulators are any object with ``append`` (a ``list`` qualifies).

Example::

    from deep_diff import PreFilter, compare

    hooks = PreFilter(
        prefilter=lambda path, key: key == "updated_at",
        normalize=lambda path, key, lhs, rhs: (
            (lhs.lower(), rhs.lower()) if key == "email" else None
        ),
    )
    compare(old_user, new_user, hooks)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from deep_diff.records import Diff, Path

__all__ = [
    "Accumulator",
    "ChangeFilter",
    "NormalizeFunction",
    "Observer",
    "PreFilter",
    "PreFilterFunction",
    "PreFilterHooks",
]

PreFilterFunction = Callable[[Path, Any], bool]
NormalizeFunction = Callable[[Path, Any, Any, Any], tuple[Any, Any] | None]
Observer = Callable[[Diff], None]
ChangeFilter = Callable[[Any, Any, Diff], bool]


@runtime_checkable
class PreFilterHooks(Protocol):
    """Structural protocol for object-form prefilters.

    Either attribute may be None.  ``prefilter(path, key)`` returning True
    skips ``key`` entirely; ``normalize(path, key, lhs, rhs)`` may return a
    ``(lhs, rhs)`` pair to compare in place of the originals.
    """

    prefilter: PreFilterFunction | None
    normalize: NormalizeFunction | None


@runtime_checkable
class Accumulator(Protocol):
    """Anything that collects records via ``append``."""

    def append(self, change: Diff, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class PreFilter:
    """Object-form prefilter bundling a skip predicate and a normalize hook.

    Attributes:
        prefilter: ``(path, key) -> bool``; True skips the key.
        normalize: ``(path, key, lhs, rhs) -> (lhs, rhs) | None``; a returned
            pair replaces the values compared at ``key``.
    """

    prefilter: PreFilterFunction | None = None
    normalize: NormalizeFunction | None = None
