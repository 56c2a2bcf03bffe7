"""Tests for identity_key and VisitedPairs.

Covers:
- Keys are built from both identities, not from equality
- visit() returns False on the second visit of a pair
- Equal but distinct objects are different keys
- Branches see parent pairs but never leak their own
- Recorded pairs keep their objects alive
"""

from __future__ import annotations

import gc

from recursive_diff.tree.identity import VisitedPairs, identity_key


class TestIdentityKey:
    def test_uses_both_identities(self) -> None:
        a, b = [1], [1]
        assert identity_key(a, b) == (id(a), id(b))

    def test_is_ordered(self) -> None:
        a, b = [1], [2]
        assert identity_key(a, b) != identity_key(b, a)


class TestVisitedPairs:
    def test_first_visit_returns_true(self) -> None:
        visited = VisitedPairs()
        assert visited.visit([1], [1])

    def test_second_visit_returns_false(self) -> None:
        visited = VisitedPairs()
        a, b = [1], [1]
        visited.visit(a, b)
        assert not visited.visit(a, b)

    def test_equal_but_distinct_objects_are_distinct_pairs(self) -> None:
        visited = VisitedPairs()
        a, b = [1], [1]
        visited.visit(a, b)
        assert visited.visit([1], [1])

    def test_contains(self) -> None:
        visited = VisitedPairs()
        a, b = {"k": 1}, {"k": 1}
        visited.visit(a, b)
        assert (a, b) in visited
        assert (b, a) not in visited
        assert "not a pair" not in visited

    def test_len(self) -> None:
        visited = VisitedPairs()
        visited.visit([1], [2])
        visited.visit([3], [4])
        assert len(visited) == 2

    def test_keeps_recorded_objects_alive(self) -> None:
        visited = VisitedPairs()
        visited.visit([1, 2, 3], [1, 2, 3])
        gc.collect()
        # A fresh temporary must never collide with the recorded identities.
        assert visited.visit([1, 2, 3], [1, 2, 3])


class TestBranch:
    def test_branch_sees_parent_pairs(self) -> None:
        parent = VisitedPairs()
        a, b = [1], [2]
        parent.visit(a, b)
        assert not parent.branch().visit(a, b)

    def test_branch_does_not_leak_into_parent(self) -> None:
        parent = VisitedPairs()
        a, b = [1], [2]
        parent.branch().visit(a, b)
        assert parent.visit(a, b)

    def test_sibling_branches_are_independent(self) -> None:
        parent = VisitedPairs()
        a, b = [1], [2]
        parent.branch().visit(a, b)
        assert parent.branch().visit(a, b)

    def test_branch_len_includes_parent(self) -> None:
        parent = VisitedPairs()
        parent.visit([1], [2])
        child = parent.branch()
        child.visit([3], [4])
        assert len(child) == 2
        assert len(parent) == 1
