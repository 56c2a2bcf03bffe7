"""ComparisonDifference dataclass for recursive comparison output.

This module provides the record type returned (in a list) by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from recursive_diff.tree.dual_value import Path, render_path

__all__ = ["ComparisonDifference"]


@dataclass(frozen=True, slots=True)
class ComparisonDifference:
    """A located inequality between the actual and expected graphs.

    Attributes:
        path:        Path segments of the differing node; ``()`` is the root.
        actual:      The actual value at ``path``.
        expected:    The expected value at ``path``.
        description: Optional free text explaining why the values differ, e.g.
            "actual and expected values are collections of different size, ...".
            None for plain value mismatches.

    Two differences are equal when path, both values and description are equal.
    """

    path: Path
    actual: Any
    expected: Any
    description: str | None = None

    @property
    def concatenated_path(self) -> str:
        """Dotted/bracketed rendering of the path, e.g. ``group[0].name``."""
        return render_path(self.path)

    @property
    def is_root(self) -> bool:
        return not self.path
