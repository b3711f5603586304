"""HashCache: LRU-backed memo of order-independent hashes for containers.

UNORDERED comparison sorts every array it meets by element hash, and every
level of a nested structure re-hashes the levels below it.  Memoising
container hashes by object identity makes that linear per comparison.

Entries hold a reference to the hashed object, so an ``id()`` can never be
recycled for a different object while its entry is alive.  LRU eviction is
silent.  Each ``HashCache`` instance owns its own ``LRUCache``; the engine
creates a fresh one per comparison call.

Example::

    from deep_diff.algorithm.hasher import order_independent_hash
    from deep_diff.cache import HashCache

    cache = HashCache(max_size=256)
    doc = {"tags": ["b", "a"], "nested": [[1, 2], [3]]}

    first = order_independent_hash(doc, cache)   # populates the cache
    second = order_independent_hash(doc, cache)  # served from memory
"""

from __future__ import annotations

from typing import Any

from cachetools import LRUCache

__all__ = ["HashCache"]


class HashCache:
    """Identity-keyed LRU cache of container hashes.

    Args:
        max_size: Maximum number of containers to remember.  Must be >= 1.
            Defaults to 1024.
    """

    def __init__(self, max_size: int = 1024) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        self._cache: LRUCache[int, tuple[Any, int]] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup / store
    # ------------------------------------------------------------------

    def get(self, value: Any) -> int | None:
        """Return the remembered hash of *value*, or None on a miss."""
        entry = self._cache.get(id(value))
        if entry is None or entry[0] is not value:
            return None
        return entry[1]

    def put(self, value: Any, hash_value: int) -> None:
        """Remember *hash_value* for *value* (keyed by identity)."""
        self._cache[id(value)] = (value, hash_value)

    def clear(self) -> None:
        """Drop every entry."""
        self._cache.clear()
