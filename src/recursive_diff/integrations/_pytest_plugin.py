"""pytest plugin for recursive-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from recursive_diff import ComparisonConfiguration, ComparisonDifference, compare


def _describe_difference(difference: ComparisonDifference) -> str:
    location = difference.concatenated_path or "<root>"
    lines = [
        f"field/property '{location}' differ:",
        f"  - actual value  : {difference.actual!r}",
        f"  - expected value: {difference.expected!r}",
    ]
    if difference.description is not None:
        lines.append(f"  {difference.description}")
    return "\n".join(lines)


@pytest.fixture(scope="session")
def assert_recursively_equal() -> Any:
    """Fixture that returns a callable recursive-equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh RecursiveComparator per call).

    Usage in tests::

        def test_author(assert_recursively_equal):
            assert_recursively_equal(Author("Terry"), Author("Terry"))

        def test_renamed(assert_recursively_equal):
            with pytest.raises(AssertionError, match=r"'name' differ"):
                assert_recursively_equal(Author("Terry"), Author("George"))

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` when the graphs differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: ComparisonConfiguration | None = None,
    ) -> None:
        """Assert that two object graphs are recursively equal.

        Args:
            actual:   The value produced by the code under test.
            expected: The reference value.
            config:   Optional ComparisonConfiguration; defaults to
                      ``ComparisonConfiguration()``.

        Raises:
            AssertionError: When differences were found, listing each of them
                followed by the comparison configuration.
        """
        effective = config if config is not None else ComparisonConfiguration()
        differences = compare(actual, expected, config=effective)
        if differences:
            details = "\n\n".join(_describe_difference(d) for d in differences)
            raise AssertionError(
                f"Expecting actual:\n  {actual!r}\n"
                f"to be equal to:\n  {expected!r}\n"
                f"when recursively comparing field by field, but found the following "
                f"{len(differences)} difference(s):\n\n"
                f"{details}\n\n"
                f"The recursive comparison was performed with this configuration:\n"
                f"{effective.describe()}"
            )

    return _assert
