"""Tests for RecursiveComparator: wiring, description, logging, nesting."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from recursive_diff import ComparisonConfiguration, RecursiveComparator


@dataclass
class Author:
    name: str
    id: int = 0


@dataclass
class Book:
    title: str
    author: Author


class TestConstruction:
    def test_none_config_rejected(self) -> None:
        with pytest.raises(TypeError):
            RecursiveComparator(None)  # type: ignore[arg-type]

    def test_config_property(self) -> None:
        config = ComparisonConfiguration()
        assert RecursiveComparator(config).config is config

    def test_repr(self) -> None:
        assert repr(RecursiveComparator(ComparisonConfiguration())).startswith(
            "RecursiveComparator(config=ComparisonConfiguration("
        )


class TestCompare:
    def test_equal(self) -> None:
        comparator = RecursiveComparator(ComparisonConfiguration())
        assert comparator.compare(Author("Terry"), Author("Terry")) == []
        assert comparator.is_equal(Author("Terry"), Author("Terry"))

    def test_ignored_field(self) -> None:
        comparator = RecursiveComparator(ComparisonConfiguration(ignored_fields={"id"}))
        assert comparator(Author("Terry", 1), Author("Terry", 2))

    def test_not_equal(self) -> None:
        comparator = RecursiveComparator(ComparisonConfiguration())
        assert not comparator(Author("Terry"), Author("George"))

    def test_logs_outcome_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        comparator = RecursiveComparator(ComparisonConfiguration())
        with caplog.at_level(logging.DEBUG, logger="recursive_diff"):
            comparator.compare(Author("Terry"), Author("George"))
        assert "found 1 difference(s)" in caplog.text


class TestDescription:
    def test_description_names_comparator_and_rules(self) -> None:
        comparator = RecursiveComparator(ComparisonConfiguration(ignored_fields={"id"}))
        lines = comparator.description.splitlines()
        assert lines[0] == "RecursiveComparator with the following configuration:"
        assert "- the following fields were ignored in the comparison: id" in lines


class TestNesting:
    def test_used_as_type_comparator(self) -> None:
        lenient_authors = RecursiveComparator(ComparisonConfiguration(ignored_fields={"id"}))
        config = ComparisonConfiguration(type_comparators={Author: lenient_authors})
        comparator = RecursiveComparator(config)
        assert comparator(Book("Mort", Author("Terry", 1)), Book("Mort", Author("Terry", 2)))

    def test_nested_comparator_named_in_description(self) -> None:
        lenient_authors = RecursiveComparator(ComparisonConfiguration(ignored_fields={"id"}))
        config = ComparisonConfiguration(type_comparators={Author: lenient_authors})
        differences = RecursiveComparator(config).compare(
            Book("Mort", Author("Terry")), Book("Mort", Author("George"))
        )
        assert differences[0].concatenated_path == "author"
        assert differences[0].description == (
            "values differ when compared with RecursiveComparator"
        )
