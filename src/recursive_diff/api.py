"""Public API functions for recursive-diff.

This module provides the two user-facing functions: compare and
is_recursively_equal.  Each call creates a fresh RecursiveComparator to
guarantee zero global state mutation between calls.

The configuration defaults to ``ComparisonConfiguration()``; passing
``config=None`` explicitly is a caller error and raises ``TypeError``.
"""

from __future__ import annotations

from typing import Any

from recursive_diff.algorithm.config import ComparisonConfiguration
from recursive_diff.comparator import RecursiveComparator
from recursive_diff.result import ComparisonDifference

__all__ = ["compare", "is_recursively_equal"]

_DEFAULT_CONFIG = ComparisonConfiguration()


def compare(
    actual: Any,
    expected: Any,
    config: ComparisonConfiguration = _DEFAULT_CONFIG,
) -> list[ComparisonDifference]:
    """Compare two object graphs and return every difference found.

    Args:
        actual:   The value under test (any object, container or scalar).
        expected: The reference value.
        config:   Comparison rules.  Defaults to ``ComparisonConfiguration()``.

    Returns:
        The differences in traversal order.  An empty list means the two
        graphs are recursively equal.

    Raises:
        TypeError: If config is None.
        ComparisonEvaluationError: If a comparator, a field read or an ``==``
            raised during the comparison.
    """
    comparator = RecursiveComparator(config)
    return comparator.compare(actual, expected)


def is_recursively_equal(
    actual: Any,
    expected: Any,
    config: ComparisonConfiguration = _DEFAULT_CONFIG,
) -> bool:
    """Return True if the two object graphs are recursively equal.

    Args:
        actual:   The value under test.
        expected: The reference value.
        config:   Comparison rules.  Defaults to ``ComparisonConfiguration()``.

    Returns:
        True if ``compare(actual, expected, config)`` is empty.
    """
    return not compare(actual, expected, config=config)
