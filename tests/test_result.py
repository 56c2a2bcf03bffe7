"""Tests for the ComparisonDifference frozen dataclass."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from recursive_diff import ComparisonDifference


class TestComparisonDifference:
    def test_description_defaults_to_none(self) -> None:
        assert ComparisonDifference(("name",), "a", "b").description is None

    def test_concatenated_path(self) -> None:
        difference = ComparisonDifference(("group", "[0]", "name"), "a", "b")
        assert difference.concatenated_path == "group[0].name"

    def test_root(self) -> None:
        difference = ComparisonDifference((), 1, 2)
        assert difference.is_root
        assert difference.concatenated_path == ""

    def test_equality_includes_description(self) -> None:
        assert ComparisonDifference(("a",), 1, 2) == ComparisonDifference(("a",), 1, 2)
        assert ComparisonDifference(("a",), 1, 2) != ComparisonDifference(("a",), 1, 2, "x")

    def test_frozen(self) -> None:
        difference = ComparisonDifference(("a",), 1, 2)
        with pytest.raises(FrozenInstanceError):
            difference.actual = 3  # type: ignore[misc]
