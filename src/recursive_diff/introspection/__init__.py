"""Introspection subpackage for recursive-diff.

Two strategies ship with the package, selected through
``ComparisonConfiguration.introspection_strategy``:

    IntrospectionStrategy.FIELDS     # DeclaredFieldsIntrospector (default)
    IntrospectionStrategy.ACCESSORS  # AccessorIntrospector

Both satisfy the ``TypeIntrospector`` Protocol structurally; a custom one can
be passed as ``ComparisonConfiguration.introspector``.
"""

from __future__ import annotations

from enum import StrEnum, auto

from recursive_diff.introspection.accessors import AccessorIntrospector
from recursive_diff.introspection.fields import DeclaredFieldsIntrospector
from recursive_diff.protocols import TypeIntrospector

__all__ = [
    "AccessorIntrospector",
    "DeclaredFieldsIntrospector",
    "IntrospectionStrategy",
    "introspector_for",
]


class IntrospectionStrategy(StrEnum):
    """How the fields of compared objects are enumerated and read.

    - FIELDS:    declared fields (dataclass, attrs, named tuple, slots) and
                 instance attributes, private ones included.
    - ACCESSORS: public properties and public instance attributes.
    """

    FIELDS = auto()
    ACCESSORS = auto()


# Both strategies are stateless, safe to share.
_INTROSPECTORS: dict[IntrospectionStrategy, TypeIntrospector] = {
    IntrospectionStrategy.FIELDS: DeclaredFieldsIntrospector(),
    IntrospectionStrategy.ACCESSORS: AccessorIntrospector(),
}


def introspector_for(strategy: IntrospectionStrategy) -> TypeIntrospector:
    """Return the shared introspector implementing *strategy*."""
    return _INTROSPECTORS[IntrospectionStrategy(strategy)]
