"""
Report generation for reconciliation results.

Turns a CombinedResult into a plain dictionary summary that the formatters
can print or serialize.
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..compare import CombinedResult, RowState


class ReportStatus:
    """Constants for overall report status."""

    CHANGED = "CHANGED"
    UNCHANGED = "UNCHANGED"


def format_timestamp(timestamp: datetime) -> str:
    """
    Format timestamp for reports

    Args:
        timestamp: DateTime object

    Returns:
        ISO 8601 formatted timestamp string
    """
    return timestamp.isoformat()


def generate_report(
    result: CombinedResult,
    first_path: str | Path | None = None,
    second_path: str | Path | None = None,
) -> dict[str, Any]:
    """
    Generate a summary report from a reconciliation result

    Args:
        result: Result of ReconciliationEngine.reconcile()
        first_path: Path of the older snapshot, if known
        second_path: Path of the newer snapshot, if known

    Returns:
        Dictionary containing:
        - status: CHANGED or UNCHANGED
        - first / second: snapshot paths (or None)
        - strategy: matching strategy used
        - format_fingerprint: fingerprint of the compared layout
        - headers: column names
        - total_rows, added, removed, unchanged: row counts
        - summary: Human-readable summary
        - timestamp: Report generation timestamp
    """
    status = ReportStatus.CHANGED if result.has_changes else ReportStatus.UNCHANGED

    return {
        "status": status,
        "first": str(first_path) if first_path is not None else None,
        "second": str(second_path) if second_path is not None else None,
        "strategy": result.strategy.value,
        "format_fingerprint": result.format_fingerprint,
        "headers": list(result.headers),
        "total_rows": result.row_count,
        "added": result.added_count,
        "removed": result.removed_count,
        "unchanged": result.unchanged_count,
        "summary": _generate_summary(result),
        "timestamp": format_timestamp(datetime.now(UTC)),
    }


def _generate_summary(result: CombinedResult) -> str:
    if not result.has_changes:
        return f"No changes: all {result.row_count} rows are present in both snapshots."

    return (
        f"{result.added_count} row(s) added and {result.removed_count} row(s) removed; "
        f"{result.unchanged_count} row(s) unchanged."
    )


def state_label(state: RowState) -> str:
    """Lower-case name of a row state, as written to exports."""
    return state.name.lower()
