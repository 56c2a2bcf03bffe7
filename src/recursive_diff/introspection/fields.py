"""DeclaredFieldsIntrospector: compares objects by their declared fields.

Type-level fields are looked up in this order, first hit wins:
1. dataclass fields (``dataclasses.fields``), in declaration order.
2. attrs fields (``__attrs_attrs__``), without importing attrs.
3. named tuple fields (``_fields``).
4. ``__slots__`` collected over the MRO, base classes first.

Instance-level fields are the keys of the instance ``__dict__`` (when it has
one), so plain classes that assign attributes in ``__init__`` are compared by
those attributes.

This introspector satisfies the TypeIntrospector Protocol structurally
without inheriting from it.
"""

from __future__ import annotations

import dataclasses
from typing import Any

_SLOT_EXCLUSIONS = frozenset({"__dict__", "__weakref__"})


def _slots_of(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in _SLOT_EXCLUSIONS)
    return tuple(dict.fromkeys(names))


class DeclaredFieldsIntrospector:
    """Enumerates dataclass/attrs/named-tuple/slot fields, then ``__dict__``.

    Example::

        @dataclass
        class Author:
            name: str

        DeclaredFieldsIntrospector().type_fields(Author)   # ("name",)
    """

    def type_fields(self, cls: type) -> tuple[str, ...]:
        """Return the fields declared by *cls*, in declaration order."""
        if dataclasses.is_dataclass(cls):
            return tuple(f.name for f in dataclasses.fields(cls))

        attrs_fields = getattr(cls, "__attrs_attrs__", None)
        if attrs_fields is not None:
            return tuple(a.name for a in attrs_fields)

        named_fields = getattr(cls, "_fields", None)
        if issubclass(cls, tuple) and isinstance(named_fields, tuple):
            return tuple(named_fields)

        return _slots_of(cls)

    def instance_fields(self, obj: Any) -> tuple[str, ...]:
        """Return the attributes stored in the instance ``__dict__``."""
        try:
            return tuple(vars(obj))
        except TypeError:
            # No __dict__ (builtins, slotted classes).
            return ()

    def field_value(self, obj: Any, name: str) -> Any:
        """Read a field; an unset slot raises AttributeError."""
        return getattr(obj, name)
