"""deep-diff - structural differences between nested values, and their replay."""

from __future__ import annotations

from deep_diff.algorithm.classifier import UNDEFINED, ValueType, real_type_of
from deep_diff.algorithm.config import ArrayComparisonMode, DiffConfig
from deep_diff.algorithm.engine import DiffEngine
from deep_diff.api import (
    apply_change,
    apply_diff,
    compare,
    compare_observable,
    compare_order_independent,
    is_conflict,
    order_independent_hash,
    revert_change,
)
from deep_diff.errors import DeepDiffError, MalformedEditError, PathMismatchError
from deep_diff.protocols import PreFilter
from deep_diff.records import (
    Diff,
    DiffArray,
    DiffDeleted,
    DiffEdit,
    DiffNew,
    Kind,
    as_diff,
    diff_from_dict,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "UNDEFINED",
    "ArrayComparisonMode",
    "DeepDiffError",
    "Diff",
    "DiffArray",
    "DiffConfig",
    "DiffDeleted",
    "DiffEdit",
    "DiffEngine",
    "DiffNew",
    "Kind",
    "MalformedEditError",
    "PathMismatchError",
    "PreFilter",
    "ValueType",
    "apply_change",
    "apply_diff",
    "as_diff",
    "compare",
    "compare_observable",
    "compare_order_independent",
    "diff_from_dict",
    "is_conflict",
    "order_independent_hash",
    "real_type_of",
    "revert_change",
]
