"""
Pytest configuration and fixtures for snapshot-diff tests.
Provides shared fixtures for writing CSV snapshots and isolating the environment.
"""

import csv
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from snapshot_diff.config import ReconciliationConfig


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "property: mark test as property-based")


@pytest.fixture(autouse=True)
def clean_snapshot_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables that would leak into ReconciliationConfig.from_env()."""
    for name in (
        "SNAPSHOT_DIFF_IDENTIFIER_DIGITS",
        "SNAPSHOT_DIFF_IDENTIFIER_SUFFIX",
        "SNAPSHOT_DIFF_MIN_TIME",
        "SNAPSHOT_DIFF_DELIMITER",
        "SNAPSHOT_DIFF_ENCODING",
        "SNAPSHOT_DIFF_TEMPLATE_FILE",
        "LOG_LEVEL",
        "LOG_FILE",
        "LOG_JSON",
        "LOG_CONSOLE",
        "OTLP_ENDPOINT",
        "TRACE_CONSOLE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory writing a CSV file under tmp_path.

    Usage:
        path = write_csv("first.csv", ["ID", "Name"], [["1", "A"]])
    """

    def _write(
        name: str,
        headers: Sequence[str] | None,
        rows: Sequence[Sequence[str]] = (),
    ) -> Path:
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            if headers is not None:
                writer.writerow(headers)
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def fast_config() -> ReconciliationConfig:
    """Config with no minimum run time."""
    return ReconciliationConfig(minimum_execution_seconds=0)


@pytest.fixture
def short_id_config() -> ReconciliationConfig:
    """Config whose identifiers are a single digit with no suffix."""
    return ReconciliationConfig(
        identifier_digits=1,
        identifier_suffix="",
        minimum_execution_seconds=0,
    )
