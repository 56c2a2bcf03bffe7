"""Recursive diff - field-by-field comparison of in-memory object graphs."""

from __future__ import annotations

from recursive_diff.algorithm.config import ComparisonConfiguration, IntrospectionStrategy
from recursive_diff.api import compare, is_recursively_equal
from recursive_diff.comparator import RecursiveComparator
from recursive_diff.errors import ComparisonEvaluationError, RecursiveComparisonError
from recursive_diff.result import ComparisonDifference

__version__: str = "0.1.0"
__all__: list[str] = [
    "ComparisonConfiguration",
    "ComparisonDifference",
    "ComparisonEvaluationError",
    "IntrospectionStrategy",
    "RecursiveComparator",
    "RecursiveComparisonError",
    "compare",
    "is_recursively_equal",
]
