"""Order-independent hashing of arbitrary nested values.

The hash is invariant under array element order and object key order:
containers combine their children's hashes by summation, which commutes.
It is a heuristic, not collision-free.  UNORDERED array comparison sorts
both arrays by this hash before aligning them, so the exact arithmetic
matters for parity and must not be "improved".

String hashing is the classic 31-multiplier rolling hash over UTF-16 code
units, truncated to a signed 32-bit integer after every step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from deep_diff.algorithm.classifier import (
    ValueType,
    get_own,
    is_enumerable,
    own_keys,
    real_type_of,
    string_form,
)

if TYPE_CHECKING:
    from deep_diff.cache import HashCache

__all__ = ["hash_string", "order_independent_hash"]

_MASK_32 = 0xFFFFFFFF
_SIGN_32 = 0x80000000


def _to_int32(value: int) -> int:
    value &= _MASK_32
    return value - 0x100000000 if value & _SIGN_32 else value


def hash_string(text: str) -> int:
    """Return the signed 32-bit rolling hash of *text*.

    Equivalent to ``h = (h << 5) - h + unit`` over the UTF-16 code units of
    the string, truncating to 32 bits after each step.  The empty string
    hashes to 0.
    """
    h = 0
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & _MASK_32
    return _to_int32(h)


def order_independent_hash(value: Any, cache: HashCache | None = None) -> int:
    """Return a deterministic hash of *value* that ignores element/key order.

    - Arrays: the sum of the element hashes, plus the string hash of a tag
      embedding that sum (so ``[]`` and ``[x]`` differ from scalars).
    - Objects: the sum, over own keys, of the string hash of a tag embedding
      the key and the recursive hash of its value.
    - Everything else: the string hash of a tag embedding the type name and
      the legacy string form of the value.

    Args:
        value: Any Python value.
        cache: Optional ``HashCache`` memoising container hashes by identity.
            Only safe while the hashed containers are not mutated (sorting an
            array in place does not change its hash).

    Returns:
        A signed 32-bit integer.
    """
    value_type = real_type_of(value)

    if value_type is ValueType.ARRAY:
        if cache is not None:
            cached = cache.get(value)
            if cached is not None:
                return cached
        accum = sum(order_independent_hash(item, cache) for item in value)
        result = _to_int32(accum + hash_string(f"[type: array, hash: {accum}]"))
        if cache is not None:
            cache.put(value, result)
        return result

    if value_type is ValueType.OBJECT and is_enumerable(value):
        if cache is not None:
            cached = cache.get(value)
            if cached is not None:
                return cached
        accum = 0
        for key in own_keys(value):
            child = order_independent_hash(get_own(value, key), cache)
            accum += hash_string(
                f"[ type: object, key: {string_form(key)}, value hash: {child}]"
            )
        result = _to_int32(accum)
        if cache is not None:
            cache.put(value, result)
        return result

    return hash_string(f"[ type: {value_type} ; value: {string_form(value)}]")
