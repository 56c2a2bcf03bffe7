"""RecursiveComparisonEngine: work-list traversal producing located differences.

Walks the actual and expected graphs in lock-step and reports every
difference instead of stopping at the first one.

Architecture:
- A FIFO deque of DualValue nodes replaces native recursion, so deep graphs
  never exhaust the call stack.  Nodes are resolved in pop order, which makes
  the output breadth-first: top-level differences come before nested ones.
- Each popped node resolves to "equal", to one ComparisonDifference, or to
  children pushed on the deque.  A node that yields a difference is never
  expanded.
- Cycles are broken with VisitedPairs, keyed on the identity of both sides.
- Unordered containers run one nested traversal per (actual, expected)
  element pair on a branch of the visited pairs, then pair elements with the
  Hungarian solver (see matcher.match_elements).

Resolution order for a node, first match wins:
ignored -> same reference -> already visited -> None handling -> custom
comparator -> strict type check -> shape mismatch -> map -> ordered ->
unordered -> scalar/object.

Descriptions embedding values are built by concatenating ``repr()``s; they
are never passed through ``%`` or ``str.format`` so values containing ``%``
or braces are safe.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

import numpy as np

from recursive_diff.algorithm.config import ComparisonConfiguration
from recursive_diff.algorithm.matcher import match_elements
from recursive_diff.cache import FieldCache
from recursive_diff.errors import ComparisonEvaluationError
from recursive_diff.result import ComparisonDifference
from recursive_diff.tree.dual_value import DualValue
from recursive_diff.tree.identity import VisitedPairs
from recursive_diff.tree.kinds import (
    ORDERED_COLLECTION_TYPES,
    ValueKind,
    is_empty_container,
    kind_of,
)

if TYPE_CHECKING:
    from recursive_diff.protocols import ValueComparator

__all__ = ["RecursiveComparisonEngine"]

logger = logging.getLogger(__name__)

# Kinds whose identity pairs are recorded for cycle detection.  Scalars are
# excluded: small ints and interned strings share identities across the graph.
_TRACKED_KINDS = frozenset(
    {ValueKind.OBJECT, ValueKind.MAP, ValueKind.ORDERED, ValueKind.UNORDERED}
)
_COLLECTION_KINDS = frozenset({ValueKind.ORDERED, ValueKind.UNORDERED})
_NO_KEY = object()

_ORDERED_COLLECTION_NAMES = (
    "[" + ", ".join(t.__name__ for t in ORDERED_COLLECTION_TYPES) + "]"
)


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return cls.__module__ + "." + cls.__qualname__


def _repr_list(values: Any) -> str:
    return "[" + ", ".join(repr(v) for v in values) + "]"


def _is_nan(value: Any) -> bool:
    return isinstance(value, (float, np.floating)) and bool(np.isnan(value))


def _values_equal(actual: Any, expected: Any) -> bool:
    if _is_nan(actual) and _is_nan(expected):
        return True
    result = actual == expected
    if isinstance(result, np.ndarray):
        # Only a 0-d result is a single truth value.
        return result.ndim == 0 and bool(result)
    return bool(result)


class RecursiveComparisonEngine:
    """Breadth-first recursive comparison of two object graphs.

    Example::

        from recursive_diff.algorithm import ComparisonConfiguration, RecursiveComparisonEngine

        engine = RecursiveComparisonEngine(ComparisonConfiguration())
        engine.compare(["Pratchett"], ["Martin"])
        # [ComparisonDifference(path=('[0]',), actual='Pratchett', expected='Martin', description=None)]
    """

    def __init__(
        self,
        config: ComparisonConfiguration,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the engine.

        Args:
            config: The comparison rules.  Must not be None.
            max_cache_size: Maximum number of runtime types whose field lists
                are cached during one traversal.

        Raises:
            TypeError: If config is None or not a ComparisonConfiguration.
        """
        if config is None:
            msg = "config must not be None"
            raise TypeError(msg)
        if not isinstance(config, ComparisonConfiguration):
            msg = f"config must be a ComparisonConfiguration, got {type(config).__qualname__}"
            raise TypeError(msg)
        self._config = config
        self._max_cache_size = max_cache_size

    @property
    def config(self) -> ComparisonConfiguration:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, actual: Any, expected: Any) -> list[ComparisonDifference]:
        """Return every difference between *actual* and *expected*.

        Args:
            actual:   Root of the actual graph.
            expected: Root of the expected graph.

        Returns:
            Differences in emission order; empty when recursively equal.

        Raises:
            ComparisonEvaluationError: If a comparator, a field read or an
                ``==`` raised during the traversal.
        """
        fields = FieldCache(self._config.type_introspector(), max_size=self._max_cache_size)
        return self._traverse(DualValue((), actual, expected), VisitedPairs(), fields)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _traverse(
        self,
        root: DualValue,
        visited: VisitedPairs,
        fields: FieldCache,
        stop_at_first: bool = False,
    ) -> list[ComparisonDifference]:
        differences: list[ComparisonDifference] = []
        queue: deque[DualValue] = deque([root])
        while queue:
            dual_value = queue.popleft()
            difference = self._resolve(dual_value, queue, visited, fields)
            if difference is None:
                continue
            differences.append(difference)
            if stop_at_first:
                break
        return differences

    def _resolve(
        self,
        dual_value: DualValue,
        queue: deque[DualValue],
        visited: VisitedPairs,
        fields: FieldCache,
    ) -> ComparisonDifference | None:
        """Resolve one node; push its children when it must be expanded."""
        config = self._config
        if config.should_ignore(dual_value):
            return None

        actual = dual_value.actual
        expected = dual_value.expected
        if actual is expected:
            return None

        actual_kind = kind_of(actual)
        expected_kind = kind_of(expected)

        if actual_kind in _TRACKED_KINDS and expected_kind in _TRACKED_KINDS:
            if not visited.visit(actual, expected):
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "already visited pair at %r, skipping", dual_value.concatenated_path
                    )
                return None

        if actual is None or expected is None:
            other = expected if actual is None else actual
            if config.treats_null_and_empty_as_equal and is_empty_container(other):
                return None
            return self._difference(dual_value)

        comparator = config.comparator_for(dual_value)
        if comparator is not None:
            return self._compare_with_comparator(dual_value, comparator)

        if config.strict_type_checking and not isinstance(expected, type(actual)):
            return self._difference(
                dual_value,
                "actual and expected are considered different since the comparison "
                "enforces strict type check and expected type "
                + _type_name(expected)
                + " is not a subtype of actual type "
                + _type_name(actual),
            )

        shape_difference = self._check_shapes(dual_value, actual_kind, expected_kind)
        if shape_difference is not None:
            return shape_difference

        if expected_kind == ValueKind.MAP:
            return self._compare_maps(dual_value, queue)

        if expected_kind == ValueKind.ORDERED and not config.is_order_ignored_at(dual_value):
            return self._compare_ordered(dual_value, queue)

        if expected_kind in _COLLECTION_KINDS:
            return self._compare_unordered(dual_value, visited, fields)

        return self._compare_values(dual_value, actual_kind, expected_kind, queue, fields)

    # ------------------------------------------------------------------
    # Node resolution helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _difference(
        dual_value: DualValue, description: str | None = None
    ) -> ComparisonDifference:
        return ComparisonDifference(
            path=dual_value.path,
            actual=dual_value.actual,
            expected=dual_value.expected,
            description=description,
        )

    def _compare_with_comparator(
        self, dual_value: DualValue, comparator: ValueComparator
    ) -> ComparisonDifference | None:
        name = getattr(comparator, "__qualname__", None) or type(comparator).__qualname__
        try:
            equal = comparator(dual_value.actual, dual_value.expected)
        except Exception as exc:
            raise ComparisonEvaluationError(
                dual_value.path, "comparator " + name + " raised " + repr(exc)
            ) from exc
        if equal:
            return None
        return self._difference(dual_value, "values differ when compared with " + name)

    def _check_shapes(
        self,
        dual_value: DualValue,
        actual_kind: ValueKind,
        expected_kind: ValueKind,
    ) -> ComparisonDifference | None:
        """Report container shapes that cannot be compared with each other.

        An ordered actual may be compared to an unordered expected; the
        converse needs collection order to be ignored, since an unordered
        source carries no position to compare.
        A collection never equals a scalar or an object, whichever side it is on.
        """
        actual_type = _type_name(dual_value.actual)

        if (
            expected_kind == ValueKind.ORDERED
            and actual_kind != ValueKind.ORDERED
            and not self._config.is_order_ignored_at(dual_value)
        ):
            return self._difference(
                dual_value,
                "expected value is an ordered collection but actual value is not ("
                + actual_type
                + "), ordered collections are: "
                + _ORDERED_COLLECTION_NAMES,
            )

        if expected_kind in _COLLECTION_KINDS and actual_kind not in _COLLECTION_KINDS:
            return self._difference(
                dual_value,
                "expected value is an iterable but actual value is not (" + actual_type + ")",
            )

        if expected_kind == ValueKind.MAP and actual_kind != ValueKind.MAP:
            return self._difference(
                dual_value,
                "expected value is a map but actual value is not (" + actual_type + ")",
            )

        if actual_kind == ValueKind.MAP and expected_kind != ValueKind.MAP:
            return self._difference(
                dual_value,
                "actual value is a map but expected value is not ("
                + _type_name(dual_value.expected)
                + ")",
            )

        if actual_kind in _COLLECTION_KINDS and expected_kind not in _COLLECTION_KINDS:
            shape = "an ordered collection" if actual_kind == ValueKind.ORDERED else "an iterable"
            return self._difference(
                dual_value,
                "actual value is "
                + shape
                + " but expected value is not ("
                + _type_name(dual_value.expected)
                + ")",
            )

        return None

    def _compare_maps(
        self, dual_value: DualValue, queue: deque[DualValue]
    ) -> ComparisonDifference | None:
        actual = dual_value.actual
        expected = dual_value.expected

        missing_keys = [key for key in expected if key not in actual]
        if missing_keys:
            return self._difference(
                dual_value,
                "The following keys were not found in the actual map value:\n  "
                + _repr_list(missing_keys),
            )

        if len(actual) != len(expected):
            unexpected_keys = [key for key in actual if key not in expected]
            return self._difference(
                dual_value,
                "actual and expected values are maps of different size, actual size="
                + str(len(actual))
                + " when expected size="
                + str(len(expected))
                + ", actual has these unexpected keys: "
                + _repr_list(unexpected_keys),
            )

        for key in expected:
            queue.append(dual_value.key_child(key, actual[key], expected[key]))
        return None

    @staticmethod
    def _size_difference(
        dual_value: DualValue, actual_size: int, expected_size: int
    ) -> ComparisonDifference:
        return RecursiveComparisonEngine._difference(
            dual_value,
            "actual and expected values are collections of different size, actual size="
            + str(actual_size)
            + " when expected size="
            + str(expected_size),
        )

    def _compare_ordered(
        self, dual_value: DualValue, queue: deque[DualValue]
    ) -> ComparisonDifference | None:
        actual_elements = list(dual_value.actual)
        expected_elements = list(dual_value.expected)
        if len(actual_elements) != len(expected_elements):
            return self._size_difference(
                dual_value, len(actual_elements), len(expected_elements)
            )
        for index, (actual_element, expected_element) in enumerate(
            zip(actual_elements, expected_elements, strict=True)
        ):
            queue.append(dual_value.index_child(index, actual_element, expected_element))
        return None

    def _compare_unordered(
        self,
        dual_value: DualValue,
        visited: VisitedPairs,
        fields: FieldCache,
    ) -> ComparisonDifference | None:
        actual_elements = list(dual_value.actual)
        expected_elements = list(dual_value.expected)
        if len(actual_elements) != len(expected_elements):
            return self._size_difference(
                dual_value, len(actual_elements), len(expected_elements)
            )

        actual_left, expected_left = self._pair_equal_scalars(actual_elements, expected_elements)
        if not expected_left:
            return None

        def is_match(actual_element: Any, expected_element: Any) -> bool:
            trial = dual_value.sibling(actual_element, expected_element)
            return not self._traverse(trial, visited.branch(), fields, stop_at_first=True)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "matching %d of %d unordered elements at %r",
                len(expected_left),
                len(expected_elements),
                dual_value.concatenated_path,
            )
        _, unmatched = match_elements(
            [actual_elements[i] for i in actual_left],
            [expected_elements[j] for j in expected_left],
            is_match,
        )
        if not unmatched:
            return None
        return self._difference(
            dual_value,
            "The following expected elements were not matched in the actual "
            + type(dual_value.actual).__name__
            + ":\n  "
            + _repr_list(expected_elements[expected_left[k]] for k in unmatched),
        )

    def _pair_equal_scalars(
        self, actual_elements: list[Any], expected_elements: list[Any]
    ) -> tuple[list[int], list[int]]:
        """Pair hashable scalar elements that are equal, through a dict lookup.

        Only elements no comparator or ignored type applies to take part.
        Returns the indices of the elements left for the matcher, in order.
        """
        config = self._config

        def key_of(element: Any) -> Any:
            if (
                kind_of(element) != ValueKind.SCALAR
                or not isinstance(element, Hashable)
                or config.is_ignored_type(element)
                or config.type_comparator_for(element) is not None
            ):
                return _NO_KEY
            # strict type checking must not pair 1 with 1.0
            return (type(element), element) if config.strict_type_checking else element

        candidates: dict[Any, list[int]] = {}
        actual_left: list[int] = []
        for i, element in enumerate(actual_elements):
            key = key_of(element)
            if key is _NO_KEY:
                actual_left.append(i)
            else:
                candidates.setdefault(key, []).append(i)

        expected_left: list[int] = []
        for j, element in enumerate(expected_elements):
            key = key_of(element)
            indices = candidates.get(key) if key is not _NO_KEY else None
            if indices:
                indices.pop()
            else:
                expected_left.append(j)

        for indices in candidates.values():
            actual_left.extend(indices)
        actual_left.sort()
        return actual_left, expected_left

    def _compare_values(
        self,
        dual_value: DualValue,
        actual_kind: ValueKind,
        expected_kind: ValueKind,
        queue: deque[DualValue],
        fields: FieldCache,
    ) -> ComparisonDifference | None:
        """Compare scalars with ``==`` and objects field by field."""
        actual = dual_value.actual
        if (
            actual_kind == ValueKind.OBJECT
            and expected_kind == ValueKind.OBJECT
            and not self._config.should_compare_with_equals(actual)
        ):
            actual_fields = fields.fields_of(actual)
            if actual_fields:
                return self._compare_fields(dual_value, actual_fields, queue, fields)
            expected = dual_value.expected
            if (
                type(expected) is type(actual)
                and type(actual).__eq__ is object.__eq__
                and not fields.fields_of(expected)
            ):
                # nothing to compare field by field, and == would only test identity
                return None
        return self._compare_with_equals(dual_value)

    def _compare_with_equals(self, dual_value: DualValue) -> ComparisonDifference | None:
        try:
            equal = _values_equal(dual_value.actual, dual_value.expected)
        except Exception as exc:
            raise ComparisonEvaluationError(
                dual_value.path, "== raised " + repr(exc)
            ) from exc
        return None if equal else self._difference(dual_value)

    def _compare_fields(
        self,
        dual_value: DualValue,
        actual_fields: tuple[str, ...],
        queue: deque[DualValue],
        fields: FieldCache,
    ) -> ComparisonDifference | None:
        actual = dual_value.actual
        expected = dual_value.expected
        names = [
            name
            for name in actual_fields
            if not self._config.is_ignored_field(dual_value, name)
        ]

        expected_fields = set(fields.fields_of(expected))
        lacking = [name for name in names if name not in expected_fields]
        if lacking:
            actual_type = _type_name(actual)
            expected_type = _type_name(expected)
            return self._difference(
                dual_value,
                actual_type
                + " can't be compared to "
                + expected_type
                + " as "
                + expected_type
                + " does not declare all "
                + actual_type
                + " fields, it lacks these: ["
                + ", ".join(lacking)
                + "]",
            )

        for name in names:
            queue.append(
                dual_value.field_child(
                    name,
                    self._read_field(dual_value, actual, name, fields),
                    self._read_field(dual_value, expected, name, fields),
                )
            )
        return None

    @staticmethod
    def _read_field(dual_value: DualValue, obj: Any, name: str, fields: FieldCache) -> Any:
        try:
            return fields.field_value(obj, name)
        except Exception as exc:
            raise ComparisonEvaluationError(
                (*dual_value.path, name),
                "cannot read field " + repr(name) + " of " + _type_name(obj) + ": " + repr(exc),
            ) from exc
