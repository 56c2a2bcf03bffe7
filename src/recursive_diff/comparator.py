"""RecursiveComparator: orchestrator around RecursiveComparisonEngine.

This is the wiring layer between the raw engine and the public API.  It
validates the configuration up front, times each comparison and logs its
outcome at DEBUG level.

A RecursiveComparator is itself a ValueComparator: it can be registered in
``type_comparators`` or ``field_comparators`` of another configuration to
compare part of a graph with different rules.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from recursive_diff.algorithm.config import ComparisonConfiguration
from recursive_diff.algorithm.engine import RecursiveComparisonEngine
from recursive_diff.result import ComparisonDifference

__all__ = ["RecursiveComparator"]

logger = logging.getLogger(__name__)


class RecursiveComparator:
    """Recursive comparison bound to one configuration.

    The comparator holds no per-call state: the work list, visited pairs and
    field cache live inside each ``compare()`` call, so one instance may be
    used from several threads at once.

    Example::

        from recursive_diff import ComparisonConfiguration, RecursiveComparator

        cmp = RecursiveComparator(ComparisonConfiguration(ignored_fields={"id"}))
        cmp.compare(Author(id=1, name="Terry"), Author(id=2, name="Terry"))   # []
        cmp(Author(id=1, name="Terry"), Author(id=2, name="Terry"))           # True
    """

    def __init__(
        self,
        config: ComparisonConfiguration,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the comparator.

        Args:
            config: The comparison rules.  None is rejected immediately.
            max_cache_size: Maximum number of runtime types whose field lists
                are cached during one comparison.  Defaults to 256.
                This is an infrastructure parameter, it is NOT part of
                ``ComparisonConfiguration`` (which governs comparison rules only).

        Raises:
            TypeError: If config is None.
        """
        self._engine = RecursiveComparisonEngine(config, max_cache_size=max_cache_size)
        self._config = config

    @property
    def config(self) -> ComparisonConfiguration:
        return self._config

    @property
    def description(self) -> str:
        """Name of the comparator followed by its configuration description."""
        return "RecursiveComparator with the following configuration:\n" + self._config.describe()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, actual: Any, expected: Any) -> list[ComparisonDifference]:
        """Return every difference between *actual* and *expected*.

        Calling this method twice with the same inputs returns the same
        differences in the same order.

        Args:
            actual:   The value under test.
            expected: The reference value.

        Returns:
            The differences in traversal order; empty when recursively equal.
        """
        t0 = time.perf_counter()
        differences = self._engine.compare(actual, expected)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "recursive comparison found %d difference(s) in %.3f ms",
            len(differences),
            elapsed_ms,
        )
        return differences

    def is_equal(self, actual: Any, expected: Any) -> bool:
        return not self.compare(actual, expected)

    def __call__(self, actual: Any, expected: Any) -> bool:
        return self.is_equal(actual, expected)

    def __repr__(self) -> str:
        return f"RecursiveComparator(config={self._config!r})"
