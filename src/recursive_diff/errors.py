"""Exception types raised by recursive-diff.

Ordinary inequality is never an exception: it is reported as a
``ComparisonDifference``.  The exceptions below signal programmer errors that
make any partial diff untrustworthy, so they abort the whole comparison.
"""

from __future__ import annotations

from recursive_diff.tree.dual_value import Path, render_path

__all__ = ["ComparisonEvaluationError", "RecursiveComparisonError"]


class RecursiveComparisonError(Exception):
    """Base class of every recursive-diff error."""


class ComparisonEvaluationError(RecursiveComparisonError):
    """A value could not be evaluated during the traversal.

    Raised when a custom comparator raises, when a field cannot be read, or
    when a value's own ``==`` raises.  The original exception is chained as
    ``__cause__``.

    Attributes:
        path:   Path of the node being evaluated when the failure happened.
        reason: Short explanation of what was being evaluated.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        location = render_path(path) or "<root>"
        super().__init__(f"error while comparing {location}: {reason}")
