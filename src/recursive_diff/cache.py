"""FieldCache: LRU-backed caching proxy for any TypeIntrospector.

Wraps any TypeIntrospector-conformant object and caches the type-level field
list of every runtime type it sees, so a traversal visiting thousands of
instances of the same class introspects that class once.  LRU eviction
occurs silently when ``max_size`` is exceeded: an evicted type is simply
introspected again on its next visit.

A FieldCache is created per traversal and never shared between compare()
calls, so it needs no locking even when a configuration is shared between
threads.

Example::

    from recursive_diff.cache import FieldCache
    from recursive_diff.introspection import DeclaredFieldsIntrospector

    fields = FieldCache(DeclaredFieldsIntrospector(), max_size=256)
    fields.fields_of(author)   # introspects type(author)
    fields.fields_of(other)    # same type: served from memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from recursive_diff.protocols import TypeIntrospector


class FieldCache:
    """LRU-backed caching proxy around any TypeIntrospector.

    Satisfies the ``TypeIntrospector`` Protocol structurally (no inheritance
    required) and adds ``fields_of``, the merged field list the engine uses.

    Args:
        introspector: Any object satisfying the ``TypeIntrospector`` Protocol.
        max_size: Maximum number of runtime types whose field lists are held
            in memory.  Defaults to 256.
    """

    def __init__(self, introspector: TypeIntrospector, max_size: int = 256) -> None:
        self._introspector: Any = introspector
        self._cache: LRUCache[type, tuple[str, ...]] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of types this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of types stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # TypeIntrospector Protocol surface
    # ------------------------------------------------------------------

    def type_fields(self, cls: type) -> tuple[str, ...]:
        """Return the type-level fields of *cls*; only uncached types hit the introspector."""
        try:
            return self._cache[cls]
        except KeyError:
            names = tuple(self._introspector.type_fields(cls))
            self._cache[cls] = names
            return names

    def instance_fields(self, obj: Any) -> tuple[str, ...]:
        return tuple(self._introspector.instance_fields(obj))

    def field_value(self, obj: Any, name: str) -> Any:
        return self._introspector.field_value(obj, name)

    # ------------------------------------------------------------------
    # Engine surface
    # ------------------------------------------------------------------

    def fields_of(self, value: Any) -> tuple[str, ...]:
        """Return type fields then instance fields of *value*, deduplicated in order."""
        names = self.type_fields(type(value)) + self.instance_fields(value)
        return tuple(dict.fromkeys(names))
