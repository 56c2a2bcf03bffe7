"""DualValue dataclass and path rendering helpers.

A DualValue is the unit of work of the comparison engine: the pair of
sub-values found at the same path in the actual and expected graphs.

Paths are tuples of segments:
- a field name:          ``("group", "name")``
- an index segment:      ``("group", "[0]")``
- a mapping key segment: ``("prices", "EUR")``  (``str(key)``)

``render_path`` joins them into ``group[0].name``; ``field_location`` drops
index segments (``group.name``) and is what ignore rules and field
comparators are matched against.

Children only hold a link to their parent and their own segment.  The full
path tuple is assembled on first access, so expanding a node costs the same
at any depth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from recursive_diff.tree.kinds import ValueKind, kind_of

__all__ = ["DualValue", "Path", "field_location", "render_path"]

Path = tuple[str, ...]

_CONTAINER_KINDS = (ValueKind.MAP, ValueKind.ORDERED, ValueKind.UNORDERED)


def _is_index_segment(segment: str) -> bool:
    return segment.startswith("[") and segment.endswith("]")


def render_path(path: Path) -> str:
    """Render a path as ``group[0].name``; the root path renders as ``""``."""
    rendered = ""
    for segment in path:
        if _is_index_segment(segment) or not rendered:
            rendered += segment
        else:
            rendered += "." + segment
    return rendered


def field_location(path: Path) -> str:
    """Render a path without its index segments, e.g. ``group.name``."""
    return ".".join(segment for segment in path if not _is_index_segment(segment))


@dataclass(frozen=True, slots=True, eq=False)
class DualValue:
    """A matched pair of sub-values at a given path.

    Attributes:
        segments: Path segments below *parent*, or the whole path when
                  *parent* is None; ``()`` with no parent is the root.
        actual:   Sub-value of the actual graph (may be None).
        expected: Sub-value of the expected graph (may be None).
        parent:   The node this one was expanded from, if any.
    """

    segments: Path
    actual: Any
    expected: Any
    parent: DualValue | None = field(default=None, repr=False)
    _path: Path | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.parent is None:
            object.__setattr__(self, "_path", tuple(self.segments))

    # ------------------------------------------------------------------
    # Path views
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        """Immutable tuple of path segments from the root."""
        if self._path is not None:
            return self._path
        pending: list[Path] = []
        node: DualValue = self
        while node._path is None:
            pending.append(node.segments)
            node = node.parent  # type: ignore[assignment]
        path = node._path
        for segments in reversed(pending):
            path += segments
        object.__setattr__(self, "_path", path)
        return path

    @property
    def concatenated_path(self) -> str:
        return render_path(self.path)

    @property
    def field_location(self) -> str:
        return field_location(self.path)

    @property
    def is_root(self) -> bool:
        return self.parent is None and not self.segments

    # ------------------------------------------------------------------
    # Shape queries
    # ------------------------------------------------------------------

    @property
    def actual_kind(self) -> ValueKind:
        return kind_of(self.actual)

    @property
    def expected_kind(self) -> ValueKind:
        return kind_of(self.expected)

    def is_actual_a_map(self) -> bool:
        return self.actual_kind == ValueKind.MAP

    def is_expected_a_map(self) -> bool:
        return self.expected_kind == ValueKind.MAP

    def is_actual_an_ordered_collection(self) -> bool:
        return self.actual_kind == ValueKind.ORDERED

    def is_expected_an_ordered_collection(self) -> bool:
        return self.expected_kind == ValueKind.ORDERED

    def is_actual_an_unordered_collection(self) -> bool:
        return self.actual_kind == ValueKind.UNORDERED

    def is_expected_an_unordered_collection(self) -> bool:
        return self.expected_kind == ValueKind.UNORDERED

    def is_actual_a_container(self) -> bool:
        return self.actual_kind in _CONTAINER_KINDS

    def is_expected_a_container(self) -> bool:
        return self.expected_kind in _CONTAINER_KINDS

    def are_both_none(self) -> bool:
        return self.actual is None and self.expected is None

    def have_same_container_kind(self) -> bool:
        """True when both values are containers of the same kind."""
        kind = self.actual_kind
        return kind in _CONTAINER_KINDS and kind == self.expected_kind

    # ------------------------------------------------------------------
    # Child factories
    # ------------------------------------------------------------------

    def field_child(self, name: str, actual: Any, expected: Any) -> DualValue:
        return DualValue((name,), actual, expected, self)

    def index_child(self, index: int, actual: Any, expected: Any) -> DualValue:
        return DualValue((f"[{index}]",), actual, expected, self)

    def key_child(self, key: Any, actual: Any, expected: Any) -> DualValue:
        return DualValue((str(key),), actual, expected, self)

    def sibling(self, actual: Any, expected: Any) -> DualValue:
        """Return another pair of values at the same path."""
        return DualValue(self.segments, actual, expected, self.parent)

    def __repr__(self) -> str:
        return (
            f"DualValue(path={self.concatenated_path!r}, "
            f"actual={self.actual!r}, expected={self.expected!r})"
        )
