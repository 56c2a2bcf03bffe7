"""ValueKind StrEnum and runtime shape classification.

Every value reaching the comparison engine is classified into one of six
kinds.  The classification depends only on the runtime type of the value,
never on the declared type of the field holding it.

Dispatch order matters:
- str/bytes are Sequences but compare as scalars.
- named tuples are tuples but compare field by field.
- numpy arrays are neither Sequence nor scalar; they are fixed-size ordered
  containers (0-d arrays are scalars).
"""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum, StrEnum, auto
from fractions import Fraction
from numbers import Number
from pathlib import PurePath
from typing import Any

import numpy as np

__all__ = [
    "ORDERED_COLLECTION_TYPES",
    "ValueKind",
    "is_container",
    "is_empty_container",
    "kind_of",
]


class ValueKind(StrEnum):
    """Runtime shape of a compared value.

    - NONE      -> "none"      : the value is None
    - SCALAR    -> "scalar"    : compared with ==
    - OBJECT    -> "object"    : compared field by field
    - MAP       -> "map"       : key/value container
    - ORDERED   -> "ordered"   : positional container (list, tuple, ndarray)
    - UNORDERED -> "unordered" : set-like container
    """

    NONE = auto()
    SCALAR = auto()
    OBJECT = auto()
    MAP = auto()
    ORDERED = auto()
    UNORDERED = auto()


# dict views keep insertion order even though dict_keys/dict_items are Sets.
_DICT_VIEW_TYPES: tuple[type, ...] = (
    type({}.keys()),
    type({}.values()),
    type({}.items()),
)

ORDERED_COLLECTION_TYPES: tuple[type, ...] = (Sequence, np.ndarray, *_DICT_VIEW_TYPES)

_STRING_TYPES: tuple[type, ...] = (str, bytes, bytearray)

_SCALAR_TYPES: tuple[type, ...] = (
    Number,
    Enum,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    PurePath,
    np.generic,
    type,
)


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and isinstance(getattr(type(value), "_fields", None), tuple)


def kind_of(value: Any) -> ValueKind:
    """Classify *value* by its runtime shape.

    Args:
        value: Any Python value.

    Returns:
        The ValueKind of the value.
    """
    if value is None:
        return ValueKind.NONE

    if isinstance(value, _STRING_TYPES):
        return ValueKind.SCALAR

    if isinstance(value, np.ndarray):
        return ValueKind.SCALAR if value.ndim == 0 else ValueKind.ORDERED

    if _is_named_tuple(value):
        return ValueKind.OBJECT

    if isinstance(value, Mapping):
        return ValueKind.MAP

    if isinstance(value, ORDERED_COLLECTION_TYPES):
        return ValueKind.ORDERED

    if isinstance(value, Set):
        return ValueKind.UNORDERED

    if isinstance(value, _SCALAR_TYPES):
        return ValueKind.SCALAR

    return ValueKind.OBJECT


def is_container(value: Any) -> bool:
    """Return True for maps, ordered and unordered containers."""
    return kind_of(value) in (ValueKind.MAP, ValueKind.ORDERED, ValueKind.UNORDERED)


def is_empty_container(value: Any) -> bool:
    """Return True when *value* is a container holding no element."""
    if not is_container(value):
        return False
    if isinstance(value, np.ndarray):
        return value.size == 0
    return len(value) == 0
