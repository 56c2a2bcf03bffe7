"""Multiset matching for unordered container comparison.

``hungarian_match`` wraps scipy's ``linear_sum_assignment`` so that
infinite-cost cells never reach the solver (which would raise
``ValueError``).  After assignment, pairs that landed on originally-infinite
positions are filtered out.

Guard value formula: ``finite_max * 2.0 + 1.0``

``match_elements`` builds a 0/inf cost matrix from a pairwise equality
predicate and returns a maximum matching: every expected element left out
has no actual counterpart in any optimal pairing, which a first-fit greedy
pass cannot guarantee when the predicate is not transitive (custom
comparators, ignored fields).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["hungarian_match", "match_elements"]


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute optimal bipartite assignment with np.inf guard.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays giving the
        optimal assignment, with any pair whose *original* cost was
        infinite removed.  Empty arrays are returned when no valid
        assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)

    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind


def match_elements(
    actual: Sequence[Any],
    expected: Sequence[Any],
    is_match: Callable[[Any, Any], bool],
) -> tuple[list[tuple[int, int]], list[int]]:
    """Pair actual and expected elements so that as many as possible match.

    Args:
        actual:   Actual elements, in iteration order.
        expected: Expected elements, in iteration order.
        is_match: Predicate called once per (actual, expected) pair.

    Returns:
        A 2-tuple ``(pairs, unmatched_expected)``:
        - pairs: ``(actual_index, expected_index)`` tuples, sorted by
          expected index.
        - unmatched_expected: indices of expected elements with no matching
          actual element, ascending.
    """
    m = len(actual)
    n = len(expected)
    if n == 0:
        return [], []
    if m == 0:
        return [], list(range(n))

    cost_matrix = np.full((m, n), np.inf)
    for i, actual_element in enumerate(actual):
        for j, expected_element in enumerate(expected):
            if is_match(actual_element, expected_element):
                cost_matrix[i, j] = 0.0

    row_ind, col_ind = hungarian_match(cost_matrix)
    pairs = sorted(
        zip(row_ind.tolist(), col_ind.tolist(), strict=True), key=lambda pair: pair[1]
    )
    matched_expected = {j for _, j in pairs}
    unmatched = [j for j in range(n) if j not in matched_expected]
    return pairs, unmatched
