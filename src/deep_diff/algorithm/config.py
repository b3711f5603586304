"""DiffConfig and ArrayComparisonMode for diff/patch configuration.

DiffConfig is a frozen (immutable) dataclass holding the engine parameters.
ArrayComparisonMode selects how arrays are compared: ordered (positional)
or unordered (multiset-like, via order-independent hash sorting).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any


class ArrayComparisonMode(StrEnum):
    """How to compare arrays during a diff.

    - ORDERED:   Index-aligned comparison; element order matters.
    - UNORDERED: Both arrays are sorted by order-independent hash first, so
                 permutations of the same elements produce no records.
    """

    ORDERED = auto()
    UNORDERED = auto()


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for the diff and patch engines.

    Attributes:
        array_comparison_mode: How arrays are compared.
        sort_arrays_in_place: In UNORDERED mode, sort the caller's lists in
            place (legacy behaviour).  When False, sorted copies are compared
            and the inputs are left untouched.  Default True.
        strict: When True, applying or reverting a record whose path runs
            through a non-container value raises ``PathMismatchError``.  When
            False (default) the value is replaced by a fresh container.
        array_fill: Value used to pad a list when a record writes past its end.
            Default None.
        hash_cache_size: Maximum number of container hashes memoised per
            comparison in UNORDERED mode (>= 0; 0 disables caching).
    """

    array_comparison_mode: ArrayComparisonMode = ArrayComparisonMode.ORDERED
    sort_arrays_in_place: bool = True
    strict: bool = False
    array_fill: Any = None
    hash_cache_size: int = 1024

    def __post_init__(self) -> None:
        if not isinstance(self.array_comparison_mode, ArrayComparisonMode):
            msg = (
                "array_comparison_mode must be an ArrayComparisonMode, "
                f"got {self.array_comparison_mode!r}"
            )
            raise TypeError(msg)
        if not isinstance(self.sort_arrays_in_place, bool):
            msg = f"sort_arrays_in_place must be a bool, got {self.sort_arrays_in_place!r}"
            raise TypeError(msg)
        if not isinstance(self.strict, bool):
            msg = f"strict must be a bool, got {self.strict!r}"
            raise TypeError(msg)
        if self.hash_cache_size < 0:
            msg = f"hash_cache_size must be >= 0, got {self.hash_cache_size}"
            raise ValueError(msg)

    @property
    def order_independent(self) -> bool:
        """True when arrays are compared as unordered multisets."""
        return self.array_comparison_mode is ArrayComparisonMode.UNORDERED
