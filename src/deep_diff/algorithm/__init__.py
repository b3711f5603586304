"""algorithm subpackage: public API for the comparison core.

Provides the value classifier, the order-independent hasher, the diff
engine and its configuration.  Import from this module (not from
sub-modules directly) to stay on the stable public interface.

Example::

    from deep_diff.algorithm import ArrayComparisonMode, DiffConfig, DiffEngine

    engine = DiffEngine(DiffConfig(array_comparison_mode=ArrayComparisonMode.UNORDERED))
    engine.compute([1, 2, 3], [3, 1, 2])
    # []
"""

from __future__ import annotations

from deep_diff.algorithm.classifier import UNDEFINED, ValueType, real_type_of
from deep_diff.algorithm.config import ArrayComparisonMode, DiffConfig
from deep_diff.algorithm.engine import DiffEngine
from deep_diff.algorithm.hasher import hash_string, order_independent_hash

__all__ = [
    "UNDEFINED",
    "ArrayComparisonMode",
    "DiffConfig",
    "DiffEngine",
    "ValueType",
    "hash_string",
    "order_independent_hash",
    "real_type_of",
]
