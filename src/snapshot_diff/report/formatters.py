"""
Report formatting and export utilities.

This module provides functions to export reconciliation reports and the
classified rows in various formats: JSON, CSV, and console/terminal output.
"""

import csv
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..compare import CombinedResult
from .generator import state_label

logger = logging.getLogger(__name__)


def _selected_columns(result: CombinedResult, columns: Sequence[int] | None) -> list[int]:
    if columns is None:
        return list(range(result.column_count))

    for column in columns:
        if not 0 <= column < result.column_count:
            raise IndexError(
                f"Column {column} is out of range for {result.column_count} columns"
            )
    return list(columns)


def export_report_json(report: dict[str, Any], output_path: str | Path) -> None:
    """
    Export report to JSON file

    Args:
        report: Report dictionary
        output_path: Path to output file
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    logger.debug(f"Wrote JSON report to {output_path}")


def export_rows_csv(
    result: CombinedResult,
    output_path: str | Path,
    columns: Sequence[int] | None = None,
) -> int:
    """
    Export the classified rows to a CSV file

    The first column is the row state (added, removed, unchanged), followed
    by the selected columns in the order given.

    Args:
        result: Reconciliation result
        output_path: Path to output file
        columns: Column indices to export (default: all)

    Returns:
        Number of data rows written

    Raises:
        IndexError: If a column index is out of range
    """
    selected = _selected_columns(result, columns)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["state"] + [result.headers[column] for column in selected])

        for record in result.rows:
            writer.writerow(
                [state_label(record.state)]
                + [record.cells[column] if column < len(record.cells) else "" for column in selected]
            )

    logger.debug(f"Wrote {result.row_count} rows to {output_path}")
    return result.row_count


def format_report_console(report: dict[str, Any]) -> str:
    """
    Format report for console output

    Args:
        report: Report dictionary

    Returns:
        Formatted string for console display
    """
    lines = []

    lines.append("=" * 80)
    lines.append("SNAPSHOT RECONCILIATION REPORT")
    lines.append("=" * 80)
    lines.append(f"Status: {report['status']}")
    lines.append(f"Timestamp: {report['timestamp']}")
    if report.get("first"):
        lines.append(f"First: {report['first']}")
    if report.get("second"):
        lines.append(f"Second: {report['second']}")
    lines.append(f"Strategy: {report['strategy']}")
    lines.append(f"Format: {report['format_fingerprint'][:16]}")
    lines.append(f"Total Rows: {report['total_rows']:,}")
    lines.append(f"Added: {report['added']:,}")
    lines.append(f"Removed: {report['removed']:,}")
    lines.append(f"Unchanged: {report['unchanged']:,}")
    lines.append("")

    lines.append("SUMMARY")
    lines.append("-" * 80)
    lines.append(report["summary"])
    lines.append("")

    lines.append("=" * 80)

    return "\n".join(lines)
