"""Structural protocols for the recursive-diff extension points.

- ``TypeIntrospector``: how the fields of an object are enumerated and read.
- ``ValueComparator``: a custom equality used in place of the default
  recursive comparison for a field location or a type.

Neither requires inheritance.  Any class with conformant methods passes
``isinstance`` checks; any plain function ``(actual, expected) -> bool`` is a
``ValueComparator``.

Example::

    from recursive_diff.protocols import TypeIntrospector

    class ColumnsIntrospector:
        def type_fields(self, cls: type) -> tuple[str, ...]:
            return tuple(getattr(cls, "COLUMNS", ()))

        def instance_fields(self, obj: object) -> tuple[str, ...]:
            return ()

        def field_value(self, obj: object, name: str) -> object:
            return getattr(obj, name)

    assert isinstance(ColumnsIntrospector(), TypeIntrospector)  # True
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TypeIntrospector(Protocol):
    """Structural protocol for field enumeration strategies.

    The engine asks for the fields of a value in two steps:
    - ``type_fields(cls)`` returns the fields the type itself declares, in a
      stable order.  The result is cached per type for a traversal, so it must
      not depend on any instance.
    - ``instance_fields(obj)`` returns fields that only exist on the instance
      (e.g. entries of ``__dict__``).  It is called for every value.

    ``field_value`` reads one field and may raise; the engine turns any such
    exception into a ``ComparisonEvaluationError``.
    """

    def type_fields(self, cls: type) -> tuple[str, ...]: ...

    def instance_fields(self, obj: Any) -> tuple[str, ...]: ...

    def field_value(self, obj: Any, name: str) -> Any: ...


@runtime_checkable
class ValueComparator(Protocol):
    """A callable deciding whether two values are equal.

    Returns a truthy value when ``actual`` and ``expected`` are considered
    equal.  The comparator's verdict is final for the node: the engine does
    not look inside the values afterwards.
    """

    def __call__(self, actual: Any, expected: Any) -> bool: ...
