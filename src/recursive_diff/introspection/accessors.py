"""AccessorIntrospector: compares objects through their public accessors.

Where DeclaredFieldsIntrospector reads storage, this strategy reads the
public surface of an object:
- type level:     public ``property`` and ``functools.cached_property``
                  attributes, collected over the MRO, base classes first.
- instance level: public entries of the instance ``__dict__``.

Names starting with an underscore are never compared.  Reading a property
runs user code; any exception it raises aborts the comparison (see
ComparisonEvaluationError).
"""

from __future__ import annotations

import functools
from typing import Any

_ACCESSOR_TYPES = (property, functools.cached_property)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


class AccessorIntrospector:
    """Enumerates public properties and public instance attributes.

    Example::

        class Temperature:
            def __init__(self, kelvin: float) -> None:
                self._kelvin = kelvin

            @property
            def celsius(self) -> float:
                return self._kelvin - 273.15

        AccessorIntrospector().type_fields(Temperature)   # ("celsius",)
    """

    def type_fields(self, cls: type) -> tuple[str, ...]:
        """Return the public properties of *cls*, base classes first."""
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            names.extend(
                name
                for name, attribute in vars(klass).items()
                if _is_public(name) and isinstance(attribute, _ACCESSOR_TYPES)
            )
        return tuple(dict.fromkeys(names))

    def instance_fields(self, obj: Any) -> tuple[str, ...]:
        """Return the public attributes stored on the instance."""
        try:
            attributes = vars(obj)
        except TypeError:
            return ()
        return tuple(name for name in attributes if _is_public(name))

    def field_value(self, obj: Any, name: str) -> Any:
        return getattr(obj, name)
