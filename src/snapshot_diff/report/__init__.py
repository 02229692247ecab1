"""
Reconciliation report generation and formatting.

This submodule builds summaries from reconciliation results and exports
them, or the classified rows, as console text, JSON, CSV, or Excel.
"""

from .formatters import export_report_json, export_rows_csv, format_report_console
from .generator import ReportStatus, format_timestamp, generate_report, state_label
from .xlsx import ADDED_FILL_COLOR, REMOVED_FILL_COLOR, export_xlsx, xlsx_path

__all__ = [
    'generate_report',
    'format_timestamp',
    'state_label',
    'ReportStatus',
    'export_report_json',
    'export_rows_csv',
    'format_report_console',
    'export_xlsx',
    'xlsx_path',
    'ADDED_FILL_COLOR',
    'REMOVED_FILL_COLOR',
]
