"""Value classification for the diff engine and the order-independent hasher.

``real_type_of`` maps any Python value onto the small closed set of semantic
types the engine reasons about.  The dispatch order is critical:

- ``bool`` MUST be checked before numbers (``isinstance(True, int)`` is True).
- ``enum.Enum`` members are checked before numbers so ``IntEnum`` members are
  identity tokens, not integers.
- The ``math`` module is special-cased ahead of generic object detection.
- ``regexp`` detection deliberately accepts any value whose class overrides
  ``__str__`` with output shaped like ``/pattern/flags``.  That is a legacy
  quirk kept for behavioural parity; ``re.Pattern`` objects are rendered into
  the same form.

The module also owns the ``UNDEFINED`` sentinel ("no value here") and the
own-key accessors shared by the engine and the hasher.
"""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from enum import Enum, StrEnum, auto
from typing import Any

import numpy as np

__all__ = [
    "UNDEFINED",
    "ValueType",
    "get_own",
    "has_own",
    "is_enumerable",
    "own_keys",
    "real_type_of",
    "string_form",
]

# Legacy test: the string form starts with "/" and contains a later "/".
_REGEXP_FORM = re.compile(r"^/.*/")

# Flag letters in rendering order; re.UNICODE is implicit for str patterns.
_REGEXP_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.LOCALE, "L"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


class _Undefined:
    """Singleton type of ``UNDEFINED``."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


#: Marker for "no value": a missing side of a comparison, or a slot that is
#: present but explicitly holds nothing.  Distinct from ``None`` (``null``).
UNDEFINED: Any = _Undefined()


class ValueType(StrEnum):
    """Semantic value types recognised by the classifier.

    StrEnum values are the lowercased member names.  ``REGEXP`` covers both
    real ``re.Pattern`` objects and regexp-like values (see module docstring).
    """

    UNDEFINED = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    FUNCTION = auto()
    SYMBOL = auto()
    NULL = auto()
    ARRAY = auto()
    DATE = auto()
    REGEXP = auto()
    MATH = auto()
    OBJECT = auto()


def real_type_of(subject: Any) -> ValueType:
    """Return the semantic type of *subject*.

    Args:
        subject: Any Python value.

    Returns:
        The ``ValueType`` the engine uses to decide how to compare it.
    """
    if subject is UNDEFINED:
        return ValueType.UNDEFINED
    # CRITICAL: bool before numbers
    if isinstance(subject, (bool, np.bool_)):
        return ValueType.BOOLEAN
    if isinstance(subject, Enum):
        return ValueType.SYMBOL
    if isinstance(subject, (numbers.Number, np.number)):
        return ValueType.NUMBER
    if isinstance(subject, str):
        return ValueType.STRING
    if subject is math:
        return ValueType.MATH
    if subject is None:
        return ValueType.NULL
    if _is_sequence(subject):
        return ValueType.ARRAY
    if isinstance(subject, date):
        return ValueType.DATE
    if _is_regexp_like(subject):
        return ValueType.REGEXP
    if callable(subject):
        return ValueType.FUNCTION
    return ValueType.OBJECT


def _is_sequence(subject: Any) -> bool:
    if isinstance(subject, np.ndarray):
        return subject.ndim > 0
    return isinstance(subject, (list, tuple))


def _is_regexp_like(subject: Any) -> bool:
    if isinstance(subject, re.Pattern):
        return True
    if type(subject).__str__ is object.__str__:
        return False
    return _REGEXP_FORM.match(str(subject)) is not None


def _regexp_source(pattern: re.Pattern[Any]) -> str:
    source = pattern.pattern
    if isinstance(source, bytes):
        source = source.decode("latin-1")
    flags = "".join(letter for flag, letter in _REGEXP_FLAGS if pattern.flags & flag)
    return f"/{source}/{flags}"


def _number_string(value: Any) -> str:
    """Render a number the way ECMAScript ``Number.prototype.toString`` does."""
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, Decimal) or not isinstance(value, numbers.Real):
        return str(value)
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(number)).as_tuple()
    all_digits = "".join(str(d) for d in digit_tuple)
    # value == 0.<all_digits> * 10**point
    point = int(exponent) + len(all_digits)
    digits = all_digits.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        exp = point - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        text = f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"
    return f"-{text}" if sign else text


def string_form(value: Any) -> str:
    """Return the legacy string form of *value*.

    Used for regexp comparison and for hashing primitives.  Booleans, null,
    undefined and numbers follow ECMAScript ``String()`` so hashes stay
    stable across the two implementations; everything else uses ``str()``.
    """
    value_type = real_type_of(value)
    if value_type is ValueType.UNDEFINED:
        return "undefined"
    if value_type is ValueType.NULL:
        return "null"
    if value_type is ValueType.BOOLEAN:
        return "true" if value else "false"
    if value_type is ValueType.NUMBER:
        return _number_string(value)
    if value_type is ValueType.REGEXP and isinstance(value, re.Pattern):
        return _regexp_source(value)
    if value_type is ValueType.MATH:
        return "[object Math]"
    return str(value)


# ---------------------------------------------------------------------------
# Own-key access
# ---------------------------------------------------------------------------


def is_enumerable(value: Any) -> bool:
    """Return True if *value* exposes own keys the engine can walk."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    if isinstance(value, (list, tuple)):
        return True
    return hasattr(value, "__dict__") and not isinstance(value, type)


def own_keys(value: Any) -> list[Any]:
    """Return the own keys of *value* in declaration order.

    Mappings yield their keys, sequences their indices, plain objects their
    instance attribute names.  Opaque values yield nothing.
    """
    if isinstance(value, Mapping):
        return list(value.keys())
    if _is_sequence(value):
        return list(range(len(value)))
    if is_enumerable(value):
        return list(vars(value))
    return []


def has_own(container: Any, key: Any) -> bool:
    """Presence check: does *container* itself hold *key*?"""
    if isinstance(container, Mapping):
        try:
            return key in container
        except TypeError:
            return False
    if _is_sequence(container):
        return (
            isinstance(key, (int, np.integer))
            and not isinstance(key, bool)
            and 0 <= key < len(container)
        )
    if isinstance(key, str) and is_enumerable(container):
        return key in vars(container)
    return False


def get_own(container: Any, key: Any) -> Any:
    """Return ``container[key]`` (or the attribute), or ``UNDEFINED`` if absent."""
    if not has_own(container, key):
        return UNDEFINED
    if isinstance(container, (Mapping, list, tuple, np.ndarray)):
        return container[key]
    return vars(container)[key]
