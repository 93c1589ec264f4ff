"""Packaging correctness verification for object-tree-projector.

Tests validate that:
- The package imports with only its declared runtime dependencies
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install imports and works."""

    def test_import_object_tree(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import object_tree

        assert hasattr(object_tree, "project")
        assert hasattr(object_tree, "commit")
        assert hasattr(object_tree, "GraphProjector")

    def test_project_basic(self):  # type: ignore[no-untyped-def]
        """project() works with the default introspector."""
        from dataclasses import dataclass

        from object_tree import project

        @dataclass
        class Point:
            x: int = 1

        nodes = project(Point())
        assert [n.name for n in nodes] == ["Point", "x"]

    def test_introspectors_import(self):  # type: ignore[no-untyped-def]
        """introspectors package imports with all built-in introspectors."""
        from object_tree.introspectors import (
            ChainIntrospector,
            PydanticIntrospector,
            ReflectionIntrospector,
            SchemaIntrospector,
        )

        assert ChainIntrospector(
            PydanticIntrospector(), ReflectionIntrospector(), SchemaIntrospector()
        )


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            py_typed_files = [n for n in names if n.endswith("py.typed")]
            assert py_typed_files, f"py.typed not found in wheel. Contents: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "object_tree/__init__.py",
            "object_tree/api.py",
            "object_tree/cache.py",
            "object_tree/errors.py",
            "object_tree/projector.py",
            "object_tree/protocols.py",
            "object_tree/result.py",
            "object_tree/introspectors/__init__.py",
            "object_tree/introspectors/chain.py",
            "object_tree/introspectors/pydantic.py",
            "object_tree/introspectors/reflection.py",
            "object_tree/introspectors/schema.py",
            "object_tree/projection/__init__.py",
            "object_tree/projection/classifier.py",
            "object_tree/projection/coercion.py",
            "object_tree/projection/config.py",
            "object_tree/projection/formatting.py",
            "object_tree/projection/typenames.py",
            "object_tree/tree/__init__.py",
            "object_tree/tree/binding.py",
            "object_tree/tree/nodes.py",
            "object_tree/tree/targets.py",
            "object_tree/integrations/__init__.py",
            "object_tree/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "object-tree-projector" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for object-tree-projector."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")

        ot_eps = [ep for ep in pytest11_eps if "object_tree" in str(ep.value)]
        assert ot_eps, (
            f"No pytest11 entry point found for object-tree-projector. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixtures_available(self):  # type: ignore[no-untyped-def]
        """Plugin fixtures must be importable from the plugin module."""
        import importlib

        mod = importlib.import_module("object_tree.integrations._pytest_plugin")
        assert callable(mod.assert_valid_tree)
        assert callable(mod.tree_projector)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        """pytest --fixtures should list the plugin fixtures."""
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "assert_valid_tree" in result.stdout, (
            f"Fixture not found in pytest fixtures list. stdout: {result.stdout[:500]}"
        )
        assert "tree_projector" in result.stdout


class TestPackageMetadata:
    """Verify pyproject.toml metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import object_tree

        assert object_tree.__version__ == "0.1.0"

    def test_all_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import object_tree

        expected = {
            "CoercionError",
            "CommitResult",
            "CommitStatus",
            "FailurePolicy",
            "FieldDescriptor",
            "GraphProjector",
            "IntrospectionCache",
            "IntrospectionFailure",
            "Introspector",
            "NodeKind",
            "ObjectTreeError",
            "ProjectorConfig",
            "TreeNode",
            "TypeSchema",
            "commit",
            "project",
        }
        actual = set(object_tree.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
