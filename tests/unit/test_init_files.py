"""
Unit tests for __init__.py files

This module provides tests for package initialization files to ensure:
- Version attributes are defined
- __all__ exports are correct
- Module imports work without errors
"""

import importlib

import pytest


class TestSnapshotDiffInit:
    """Test src/snapshot_diff/__init__.py"""

    def test_version_attribute_exists(self):
        """Test that __version__ attribute is defined"""
        import snapshot_diff

        assert snapshot_diff.__version__ == "1.0.0"

    def test_all_lists_subpackages(self):
        import snapshot_diff

        for name in ("document", "compare", "runner", "templates", "report", "cli"):
            assert name in snapshot_diff.__all__

    @pytest.mark.parametrize("name", [
        "snapshot_diff.document",
        "snapshot_diff.compare",
        "snapshot_diff.runner",
        "snapshot_diff.templates",
        "snapshot_diff.report",
        "snapshot_diff.cli",
        "snapshot_diff.config",
        "snapshot_diff.errors",
    ])
    def test_submodules_import(self, name):
        module = importlib.import_module(name)

        for exported in getattr(module, "__all__", []):
            assert hasattr(module, exported), f"{name} does not define {exported}"


class TestUtilsInit:
    """Test src/utils/__init__.py"""

    def test_version_attribute_exists(self):
        import utils

        assert utils.__version__ == "1.0.0"

    def test_all_attribute(self):
        import utils

        assert set(utils.__all__) == {"logging", "tracing", "metrics"}

    @pytest.mark.parametrize("name", ["utils.logging", "utils.tracing", "utils.metrics"])
    def test_submodules_export_what_they_declare(self, name):
        module = importlib.import_module(name)

        for exported in module.__all__:
            assert hasattr(module, exported)
