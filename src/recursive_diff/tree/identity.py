"""Identity helpers for cycle detection.

Cycles are broken on the identity of BOTH compared references, never on
structural hashing: two separately allocated but equal objects are distinct
keys.

``VisitedPairs`` retains a reference to every pair it records.  Without this
a temporary value (e.g. a property returning a fresh list) could be freed
mid-traversal and its ``id()`` recycled by an unrelated object, which would
then be mistaken for an already-visited pair.
"""

from __future__ import annotations

from typing import Any

__all__ = ["VisitedPairs", "identity_key"]


def identity_key(actual: Any, expected: Any) -> tuple[int, int]:
    """Return the identity pair used as the cycle-breaking key."""
    return id(actual), id(expected)


class VisitedPairs:
    """Set of (actual, expected) reference pairs already compared.

    A branch (see ``branch()``) sees every pair recorded by its parents but
    records new pairs locally, so the trial comparisons run during unordered
    matching never leak visited pairs back into the main traversal.
    """

    __slots__ = ("_pairs", "_parent")

    def __init__(self, parent: VisitedPairs | None = None) -> None:
        self._pairs: dict[tuple[int, int], tuple[Any, Any]] = {}
        self._parent = parent

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self._has_key(identity_key(*pair))

    def __len__(self) -> int:
        own = len(self._pairs)
        return own + len(self._parent) if self._parent is not None else own

    def _has_key(self, key: tuple[int, int]) -> bool:
        if key in self._pairs:
            return True
        return self._parent is not None and self._parent._has_key(key)

    def visit(self, actual: Any, expected: Any) -> bool:
        """Record the pair; return False when it had already been visited."""
        key = identity_key(actual, expected)
        if self._has_key(key):
            return False
        self._pairs[key] = (actual, expected)
        return True

    def branch(self) -> VisitedPairs:
        """Return a child set layered on top of this one."""
        return VisitedPairs(parent=self)
