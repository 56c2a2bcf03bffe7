"""Test suite for hungarian_match and match_elements.

Tests the np.inf guard, rectangular and empty matrices, and the maximum
matching guarantee of match_elements for non-transitive predicates.
"""

from __future__ import annotations

import numpy as np

from recursive_diff.algorithm.matcher import hungarian_match, match_elements


def _same(a: object, b: object) -> bool:
    return a == b


# ---------------------------------------------------------------------------
# hungarian_match
# ---------------------------------------------------------------------------


class TestHungarianEmpty:
    """Empty and all-infinite cost matrices."""

    def test_zero_by_three_returns_empty_arrays(self) -> None:
        row_ind, col_ind = hungarian_match(np.empty((0, 3), dtype=float))
        assert len(row_ind) == 0
        assert len(col_ind) == 0

    def test_empty_result_dtype_is_integer(self) -> None:
        row_ind, col_ind = hungarian_match(np.empty((0, 0), dtype=float))
        assert np.issubdtype(row_ind.dtype, np.integer)
        assert np.issubdtype(col_ind.dtype, np.integer)

    def test_all_inf_returns_empty(self) -> None:
        row_ind, col_ind = hungarian_match(np.full((2, 4), np.inf))
        assert len(row_ind) == 0
        assert len(col_ind) == 0


class TestHungarianAssignment:
    def test_square_optimal_assignment(self) -> None:
        cost = np.array([[4.0, 1.0], [2.0, 8.0]])
        row_ind, col_ind = hungarian_match(cost)
        assert cost[row_ind, col_ind].sum() == 3.0

    def test_rectangular_assigns_min_dimension(self) -> None:
        cost = np.array([[1.0, 2.0, 3.0], [3.0, 2.0, 1.0]])
        row_ind, _ = hungarian_match(cost)
        assert len(row_ind) == 2

    def test_inf_does_not_raise(self) -> None:
        cost = np.array([[np.inf, 1.0], [1.0, np.inf]])
        row_ind, col_ind = hungarian_match(cost)
        assert list(zip(row_ind.tolist(), col_ind.tolist(), strict=True)) == [(0, 1), (1, 0)]

    def test_inf_pairs_are_filtered_out(self) -> None:
        # row 1 can only be assigned to an infinite cell
        cost = np.array([[0.0, np.inf], [np.inf, np.inf]])
        row_ind, col_ind = hungarian_match(cost)
        assert row_ind.tolist() == [0]
        assert col_ind.tolist() == [0]

    def test_integer_matrix_is_coerced(self) -> None:
        row_ind, col_ind = hungarian_match(np.array([[1, 0], [0, 1]]))
        assert sorted(zip(row_ind.tolist(), col_ind.tolist(), strict=True)) == [(0, 1), (1, 0)]


# ---------------------------------------------------------------------------
# match_elements
# ---------------------------------------------------------------------------


class TestMatchElements:
    def test_identical_sequences_pair_up(self) -> None:
        pairs, unmatched = match_elements([1, 2, 3], [1, 2, 3], _same)
        assert pairs == [(0, 0), (1, 1), (2, 2)]
        assert unmatched == []

    def test_permutation_pairs_by_value(self) -> None:
        pairs, unmatched = match_elements(["b", "a"], ["a", "b"], _same)
        assert pairs == [(1, 0), (0, 1)]
        assert unmatched == []

    def test_pairs_sorted_by_expected_index(self) -> None:
        pairs, _ = match_elements([3, 2, 1], [1, 2, 3], _same)
        assert [j for _, j in pairs] == [0, 1, 2]

    def test_unmatched_expected_reported(self) -> None:
        _, unmatched = match_elements(["aaa", "aaa"], ["aaa", "bbb"], _same)
        assert unmatched == [1]

    def test_duplicates_are_consumed_once(self) -> None:
        pairs, unmatched = match_elements(["a"], ["a", "a"], _same)
        assert len(pairs) == 1
        assert len(unmatched) == 1

    def test_empty_expected(self) -> None:
        assert match_elements([1, 2], [], _same) == ([], [])

    def test_empty_actual(self) -> None:
        assert match_elements([], [1, 2], _same) == ([], [0, 1])

    def test_non_transitive_predicate_gets_maximum_matching(self) -> None:
        # actual 0 matches both expected; actual 1 matches expected 0 only.
        # First-fit would give actual 0 -> expected 0 and leave expected 1 out.
        def is_match(a: str, e: str) -> bool:
            return a == "wild" or a == e

        pairs, unmatched = match_elements(["wild", "x"], ["x", "y"], is_match)
        assert unmatched == []
        assert pairs == [(1, 0), (0, 1)]

    def test_predicate_called_once_per_pair(self) -> None:
        calls: list[tuple[int, int]] = []

        def is_match(a: int, e: int) -> bool:
            calls.append((a, e))
            return a == e

        match_elements([1, 2], [1, 2, 3], is_match)
        assert len(calls) == 6
