"""
Excel export of a reconciliation result.

Writes the selected columns of every row, colouring Added and Removed rows
so changes stand out when the workbook is opened.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..compare import CombinedResult, RowState

logger = logging.getLogger(__name__)

ADDED_FILL_COLOR = "248046"
REMOVED_FILL_COLOR = "DA373C"

_STATE_FILLS = {
    RowState.ADDED: PatternFill(
        start_color=ADDED_FILL_COLOR, end_color=ADDED_FILL_COLOR, fill_type="solid"
    ),
    RowState.REMOVED: PatternFill(
        start_color=REMOVED_FILL_COLOR, end_color=REMOVED_FILL_COLOR, fill_type="solid"
    ),
}


def xlsx_path(path: str | Path) -> Path:
    """Append ``.xlsx`` unless the path already ends with it."""
    path = Path(path)
    if path.suffix.lower() != ".xlsx":
        path = path.with_name(path.name + ".xlsx")
    return path


def autosize_columns(ws: Worksheet, max_width: int = 60) -> None:
    for col_idx, col_cells in enumerate(ws.columns, start=1):
        max_len = 0
        for cell in col_cells:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, max_width)


def export_xlsx(result: CombinedResult, path: str | Path, columns: Sequence[int]) -> Path:
    """
    Write the result's rows, restricted to ``columns``, to an .xlsx workbook.

    Args:
        result: Reconciliation result
        path: Target file; ``.xlsx`` is appended if missing
        columns: Column indices to export, in output order

    Returns:
        The path actually written

    Raises:
        ValueError: If ``columns`` is empty or the result has no rows
        IndexError: If a column index is out of range
    """
    if not columns:
        raise ValueError("At least one column must be selected for export")
    if result.row_count == 0:
        raise ValueError("The result has no rows to export")
    for column in columns:
        if not 0 <= column < result.column_count:
            raise IndexError(
                f"Column {column} is out of range for {result.column_count} columns"
            )

    target = xlsx_path(path)

    wb = Workbook()
    ws = wb.active
    ws.title = "Reconciliation"
    ws.append([result.headers[column] for column in columns])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row_idx, record in enumerate(result.rows, start=2):
        fill = _STATE_FILLS.get(record.state)
        for col_idx, column in enumerate(columns, start=1):
            value = record.cells[column] if column < len(record.cells) else ""
            cell = ws.cell(row=row_idx, column=col_idx, value=value)
            if fill is not None:
                cell.fill = fill

    ws.freeze_panes = "A2"
    autosize_columns(ws)

    wb.save(target)
    logger.info(f"Exported {result.row_count} rows x {len(columns)} columns to {target}")
    return target
