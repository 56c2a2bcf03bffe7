"""Tree subpackage: comparison-tree primitives.

Re-exports the public API for the tree module:
- DualValue: the (path, actual, expected) unit of work of the engine
- ValueKind: StrEnum of the six runtime shapes (NONE, SCALAR, OBJECT, MAP, ORDERED, UNORDERED)
- VisitedPairs: identity-pair set used to break cycles
- render_path / field_location: path rendering helpers
"""

from recursive_diff.tree.dual_value import DualValue, Path, field_location, render_path
from recursive_diff.tree.identity import VisitedPairs, identity_key
from recursive_diff.tree.kinds import ValueKind, is_container, is_empty_container, kind_of

__all__ = [
    "DualValue",
    "Path",
    "ValueKind",
    "VisitedPairs",
    "field_location",
    "identity_key",
    "is_container",
    "is_empty_container",
    "kind_of",
    "render_path",
]
