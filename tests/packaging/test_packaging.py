"""Packaging correctness verification for recursive-diff.

Tests validate:
- Base install imports without optional dependencies
- py.typed marker is present in the source tree
- Pytest plugin entry point is declared and registered
- Package metadata is correct
"""

from __future__ import annotations

import importlib
import tomllib
from importlib.metadata import entry_points
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _pyproject() -> dict:  # type: ignore[type-arg]
    with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)


class TestBaseInstall:
    """Verify the top-level package and its subpackages import."""

    def test_import_recursive_diff(self):  # type: ignore[no-untyped-def]
        import recursive_diff

        assert hasattr(recursive_diff, "compare")
        assert hasattr(recursive_diff, "is_recursively_equal")

    def test_compare_basic(self):  # type: ignore[no-untyped-def]
        from recursive_diff import compare

        assert compare({"a": 1}, {"a": 1}) == []

    def test_subpackages_import(self):  # type: ignore[no-untyped-def]
        for name in (
            "recursive_diff.algorithm",
            "recursive_diff.introspection",
            "recursive_diff.tree",
            "recursive_diff.integrations",
        ):
            assert importlib.import_module(name) is not None


class TestSourceTree:
    def test_py_typed_marker(self):  # type: ignore[no-untyped-def]
        assert (PROJECT_ROOT / "src" / "recursive_diff" / "py.typed").is_file()

    def test_py_typed_included_in_build(self):  # type: ignore[no-untyped-def]
        includes = _pyproject()["tool"]["poetry"]["include"]
        assert any(i["path"].endswith("py.typed") for i in includes)


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_declared(self):  # type: ignore[no-untyped-def]
        eps = _pyproject()["project"]["entry-points"]["pytest11"]
        assert eps == {"recursive_diff": "recursive_diff.integrations._pytest_plugin"}

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        pytest11_eps = entry_points(group="pytest11")
        rd_eps = [ep for ep in pytest11_eps if "recursive_diff" in str(ep.value)]
        assert rd_eps, (
            f"No pytest11 entry point found for recursive-diff. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        mod = importlib.import_module("recursive_diff.integrations._pytest_plugin")
        assert hasattr(mod, "assert_recursively_equal")
        assert callable(mod.assert_recursively_equal)


class TestPackageMetadata:
    def test_version(self):  # type: ignore[no-untyped-def]
        import recursive_diff

        assert recursive_diff.__version__ == "0.1.0"
        assert _pyproject()["project"]["version"] == "0.1.0"

    def test_runtime_dependencies(self):  # type: ignore[no-untyped-def]
        deps = {d.split(">=")[0] for d in _pyproject()["project"]["dependencies"]}
        assert deps == {"numpy", "scipy", "cachetools"}
