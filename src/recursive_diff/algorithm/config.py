"""ComparisonConfiguration: the policy object of the recursive comparison.

ComparisonConfiguration is a frozen (immutable) dataclass holding every rule
the engine consults: which nodes to skip, which nodes to compare with a
custom comparator, where collection order does not matter, how ``None`` and
empty containers relate, and how objects are introspected.

Its query methods are pure, so one configuration can be shared by any number
of concurrent compare() calls.  Mapping options are copied into read-only
proxies at construction time; a configuration never changes once built.
Derive variants with ``dataclasses.replace``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from recursive_diff.introspection import IntrospectionStrategy, introspector_for
from recursive_diff.protocols import TypeIntrospector, ValueComparator
from recursive_diff.tree.dual_value import DualValue, Path, field_location

__all__ = ["ComparisonConfiguration", "IntrospectionStrategy"]


def _comparator_name(comparator: Any) -> str:
    return getattr(comparator, "__qualname__", None) or type(comparator).__qualname__


def _overrides_eq(cls: type) -> bool:
    return cls.__eq__ is not object.__eq__


@dataclass(frozen=True, slots=True)
class ComparisonConfiguration:
    """Immutable configuration for the recursive comparison engine.

    Field locations are paths rendered without index segments, e.g. the
    ``name`` of every element of ``group`` is ``"group.name"``.

    Attributes:
        ignored_fields: Field locations never compared nor expanded.
        ignored_fields_regexes: Regexes; a field location fully matching one
            of them is ignored.
        ignored_types: A node whose actual value (or expected value, when
            actual is None) is an instance of one of these types is ignored.
        compared_fields: When non-empty, only these field locations, their
            parents and their children are compared.
        field_comparators: Field location -> comparator used at that location.
        type_comparators: Type -> comparator used for values of that type
            (subclasses included, nearest class in the MRO wins).
        ignore_collection_order: Compare every ordered container as a multiset.
        ignored_collection_order_in_fields: Field locations whose ordered
            containers are compared as multisets.
        ignored_collection_order_in_fields_regexes: Same, by regex.
        treat_null_and_empty_iterables_as_equal: None and an empty container
            at the same path are equal.  Default False.
        ignore_all_actual_null_fields: Skip nodes whose actual value is None.
        ignore_all_expected_null_fields: Skip nodes whose expected value is None.
        introspection_strategy: How object fields are enumerated.
        introspector: Custom TypeIntrospector; overrides introspection_strategy.
        use_overridden_equals: Compare objects whose type overrides ``__eq__``
            with ``==`` instead of field by field.  Default False.
        compared_by_equals_types: Types always compared with ``==``.
        strict_type_checking: Expected values must be instances of the actual
            value's type.  Default False.
    """

    ignored_fields: frozenset[str] = frozenset()
    ignored_fields_regexes: tuple[str, ...] = ()
    ignored_types: tuple[type, ...] = ()
    compared_fields: frozenset[str] = frozenset()
    field_comparators: Mapping[str, ValueComparator] = field(default_factory=dict)
    type_comparators: Mapping[type, ValueComparator] = field(default_factory=dict)
    ignore_collection_order: bool = False
    ignored_collection_order_in_fields: frozenset[str] = frozenset()
    ignored_collection_order_in_fields_regexes: tuple[str, ...] = ()
    treat_null_and_empty_iterables_as_equal: bool = False
    ignore_all_actual_null_fields: bool = False
    ignore_all_expected_null_fields: bool = False
    introspection_strategy: IntrospectionStrategy = IntrospectionStrategy.FIELDS
    introspector: TypeIntrospector | None = None
    use_overridden_equals: bool = False
    compared_by_equals_types: tuple[type, ...] = ()
    strict_type_checking: bool = False

    def __post_init__(self) -> None:
        # Normalize collections so callers may pass lists/sets/dicts.
        object.__setattr__(self, "ignored_fields", frozenset(self.ignored_fields))
        object.__setattr__(self, "compared_fields", frozenset(self.compared_fields))
        object.__setattr__(
            self,
            "ignored_collection_order_in_fields",
            frozenset(self.ignored_collection_order_in_fields),
        )
        for name in (
            "ignored_fields_regexes",
            "ignored_collection_order_in_fields_regexes",
            "ignored_types",
            "compared_by_equals_types",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        for pattern in (
            *self.ignored_fields_regexes,
            *self.ignored_collection_order_in_fields_regexes,
        ):
            try:
                re.compile(pattern)
            except re.error as exc:
                msg = f"invalid field regex {pattern!r}: {exc}"
                raise ValueError(msg) from exc

        for name in ("ignored_types", "compared_by_equals_types"):
            for cls in getattr(self, name):
                if not isinstance(cls, type):
                    msg = f"{name} must only contain types, got {cls!r}"
                    raise TypeError(msg)

        for location, comparator in self.field_comparators.items():
            self._check_comparator(comparator, f"field {location!r}")
        for cls, comparator in self.type_comparators.items():
            if not isinstance(cls, type):
                msg = f"type_comparators keys must be types, got {cls!r}"
                raise TypeError(msg)
            self._check_comparator(comparator, f"type {cls.__qualname__}")
        object.__setattr__(
            self, "field_comparators", MappingProxyType(dict(self.field_comparators))
        )
        object.__setattr__(
            self, "type_comparators", MappingProxyType(dict(self.type_comparators))
        )

        object.__setattr__(
            self,
            "introspection_strategy",
            IntrospectionStrategy(self.introspection_strategy),
        )
        if self.introspector is not None and not isinstance(
            self.introspector, TypeIntrospector
        ):
            msg = f"introspector does not implement TypeIntrospector: {self.introspector!r}"
            raise TypeError(msg)

    @staticmethod
    def _check_comparator(comparator: Any, target: str) -> None:
        if comparator is None:
            msg = f"comparator registered for {target} must not be None"
            raise ValueError(msg)
        if not callable(comparator):
            msg = f"comparator registered for {target} is not callable: {comparator!r}"
            raise TypeError(msg)

    # ------------------------------------------------------------------
    # Ignore rules
    # ------------------------------------------------------------------

    def is_ignored_location(self, path: Path) -> bool:
        """True when the field location of *path* matches an ignore rule.

        The root is never ignored.
        """
        if not path or not self._has_location_rules():
            return False
        location = field_location(path)
        if not location:
            # Elements of a root-level container.
            return False
        if self.compared_fields and not self._is_compared_location(location):
            return True
        if location in self.ignored_fields:
            return True
        return any(re.fullmatch(p, location) for p in self.ignored_fields_regexes)

    def _has_location_rules(self) -> bool:
        return bool(self.compared_fields or self.ignored_fields or self.ignored_fields_regexes)

    def is_ignored_field(self, dual_value: DualValue, name: str) -> bool:
        """True when field *name* of the node is ignored by location."""
        if not self._has_location_rules():
            return False
        return self.is_ignored_location((*dual_value.path, name))

    def _is_compared_location(self, location: str) -> bool:
        for compared in self.compared_fields:
            if location == compared:
                return True
            # parent of a compared field, or child of a compared field
            if compared.startswith(location + ".") or location.startswith(compared + "."):
                return True
        return False

    def is_ignored_type(self, value: Any) -> bool:
        return bool(self.ignored_types) and isinstance(value, self.ignored_types)

    def should_ignore(self, dual_value: DualValue) -> bool:
        """True when the node must be skipped: neither compared nor expanded."""
        if dual_value.is_root:
            return False
        if self.ignore_all_actual_null_fields and dual_value.actual is None:
            return True
        if self.ignore_all_expected_null_fields and dual_value.expected is None:
            return True
        if self._has_location_rules() and self.is_ignored_location(dual_value.path):
            return True
        value = dual_value.actual if dual_value.actual is not None else dual_value.expected
        return self.is_ignored_type(value)

    # ------------------------------------------------------------------
    # Comparators
    # ------------------------------------------------------------------

    def comparator_for(self, dual_value: DualValue) -> ValueComparator | None:
        """Return the comparator for the node, field comparators first."""
        if self.field_comparators:
            comparator = self.field_comparators.get(dual_value.field_location)
            if comparator is not None:
                return comparator
        value = dual_value.actual if dual_value.actual is not None else dual_value.expected
        return self.type_comparator_for(value)

    def type_comparator_for(self, value: Any) -> ValueComparator | None:
        """Return the type comparator for *value*, nearest base class first."""
        if self.type_comparators:
            for cls in type(value).__mro__:
                comparator = self.type_comparators.get(cls)
                if comparator is not None:
                    return comparator
        return None

    # ------------------------------------------------------------------
    # Collection order and null handling
    # ------------------------------------------------------------------

    def is_order_ignored_for(self, path: Path) -> bool:
        if self.ignore_collection_order:
            return True
        if not self._has_order_rules():
            return False
        location = field_location(path)
        if location in self.ignored_collection_order_in_fields:
            return True
        return any(
            re.fullmatch(p, location)
            for p in self.ignored_collection_order_in_fields_regexes
        )

    def is_order_ignored_at(self, dual_value: DualValue) -> bool:
        """Like is_order_ignored_for, reading the path only when a rule needs it."""
        if self.ignore_collection_order:
            return True
        if not self._has_order_rules():
            return False
        return self.is_order_ignored_for(dual_value.path)

    def _has_order_rules(self) -> bool:
        return bool(
            self.ignored_collection_order_in_fields
            or self.ignored_collection_order_in_fields_regexes
        )

    @property
    def treats_null_and_empty_as_equal(self) -> bool:
        return self.treat_null_and_empty_iterables_as_equal

    # ------------------------------------------------------------------
    # Object comparison strategy
    # ------------------------------------------------------------------

    def should_compare_with_equals(self, value: Any) -> bool:
        """True when *value* must be compared with ``==`` instead of by field."""
        if self.compared_by_equals_types and isinstance(value, self.compared_by_equals_types):
            return True
        return self.use_overridden_equals and _overrides_eq(type(value))

    def type_introspector(self) -> TypeIntrospector:
        if self.introspector is not None:
            return self.introspector
        return introspector_for(self.introspection_strategy)

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def describe(self) -> str:
        """Return a multi-line, human-readable description of the active rules."""
        lines: list[str] = []
        if self.ignore_all_actual_null_fields:
            lines.append("- all actual null fields were ignored in the comparison")
        if self.ignore_all_expected_null_fields:
            lines.append("- all expected null fields were ignored in the comparison")
        if self.ignored_fields:
            lines.append(
                "- the following fields were ignored in the comparison: "
                + ", ".join(sorted(self.ignored_fields))
            )
        if self.ignored_fields_regexes:
            lines.append(
                "- the fields matching the following regexes were ignored in the comparison: "
                + ", ".join(self.ignored_fields_regexes)
            )
        if self.ignored_types:
            lines.append(
                "- the following types were ignored in the comparison: "
                + ", ".join(t.__qualname__ for t in self.ignored_types)
            )
        if self.compared_fields:
            lines.append(
                "- the comparison was performed on the following fields: "
                + ", ".join(sorted(self.compared_fields))
            )
        if self.ignore_collection_order:
            lines.append("- collection order was ignored in all fields in the comparison")
        if self.ignored_collection_order_in_fields:
            lines.append(
                "- collection order was ignored in the following fields in the comparison: "
                + ", ".join(sorted(self.ignored_collection_order_in_fields))
            )
        if self.ignored_collection_order_in_fields_regexes:
            lines.append(
                "- collection order was ignored in the fields matching the following regexes: "
                + ", ".join(self.ignored_collection_order_in_fields_regexes)
            )
        if self.treat_null_and_empty_iterables_as_equal:
            lines.append("- null and empty iterables were considered equal")
        if self.field_comparators:
            lines.append("- these fields were compared with the following comparators:")
            lines.extend(
                "  - " + location + " -> " + _comparator_name(comparator)
                for location, comparator in sorted(self.field_comparators.items())
            )
        if self.type_comparators:
            lines.append("- these types were compared with the following comparators:")
            lines.extend(
                "  - " + cls.__qualname__ + " -> " + _comparator_name(comparator)
                for cls, comparator in self.type_comparators.items()
            )
        if self.use_overridden_equals:
            lines.append("- overridden equals methods were used in the comparison")
        else:
            lines.append("- no overridden equals methods were used in the comparison")
        if self.compared_by_equals_types:
            lines.append(
                "- the following types were compared with ==: "
                + ", ".join(t.__qualname__ for t in self.compared_by_equals_types)
            )
        if self.strict_type_checking:
            lines.append(
                "- actual and expected objects and their fields were required to be "
                "of compatible types (strict type checking)"
            )
        else:
            lines.append(
                "- actual and expected objects and their fields were compared field by "
                "field recursively even if they were not of the same type"
            )
        strategy = (
            type(self.introspector).__qualname__
            if self.introspector is not None
            else str(self.introspection_strategy)
        )
        lines.append("- objects were introspected with the " + strategy + " strategy")
        return "\n".join(lines)
