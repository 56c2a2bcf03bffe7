"""Tests for AccessorIntrospector and the ACCESSORS strategy end to end."""

from __future__ import annotations

import functools

import pytest

from recursive_diff import ComparisonConfiguration, IntrospectionStrategy, compare
from recursive_diff.introspection import AccessorIntrospector
from recursive_diff.protocols import TypeIntrospector


class Temperature:
    def __init__(self, kelvin: float) -> None:
        self._kelvin = kelvin
        self.unit = "K"

    @property
    def celsius(self) -> float:
        return round(self._kelvin - 273.15, 2)

    @property
    def _internal(self) -> float:
        return self._kelvin


class Reading(Temperature):
    @functools.cached_property
    def fahrenheit(self) -> float:
        return round(self.celsius * 9 / 5 + 32, 2)


ACCESSORS = ComparisonConfiguration(introspection_strategy=IntrospectionStrategy.ACCESSORS)


@pytest.fixture
def introspector() -> AccessorIntrospector:
    return AccessorIntrospector()


class TestAccessorIntrospector:
    def test_public_properties_only(self, introspector: AccessorIntrospector) -> None:
        assert introspector.type_fields(Temperature) == ("celsius",)

    def test_base_class_properties_first(self, introspector: AccessorIntrospector) -> None:
        assert introspector.type_fields(Reading) == ("celsius", "fahrenheit")

    def test_public_instance_attributes(self, introspector: AccessorIntrospector) -> None:
        assert introspector.instance_fields(Temperature(300.0)) == ("unit",)

    def test_builtin_has_no_instance_fields(self, introspector: AccessorIntrospector) -> None:
        assert introspector.instance_fields(1.5) == ()

    def test_reads_property(self, introspector: AccessorIntrospector) -> None:
        assert introspector.field_value(Temperature(273.15), "celsius") == 0.0

    def test_satisfies_protocol(self, introspector: AccessorIntrospector) -> None:
        assert isinstance(introspector, TypeIntrospector)


class TestAccessorStrategy:
    def test_compares_through_properties(self) -> None:
        differences = compare(Temperature(300.0), Temperature(301.0), config=ACCESSORS)
        assert [d.concatenated_path for d in differences] == ["celsius"]

    def test_private_storage_not_compared(self) -> None:
        # same public view, different private state
        a = Temperature(300.0)
        b = Temperature(300.0)
        b._kelvin = 300.001
        assert compare(a, b, config=ACCESSORS) == []

    def test_fields_strategy_sees_private_storage(self) -> None:
        a = Temperature(300.0)
        b = Temperature(300.0)
        b._kelvin = 300.001
        differences = compare(a, b)
        assert [d.concatenated_path for d in differences] == ["_kelvin"]
