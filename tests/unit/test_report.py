"""
Unit tests for snapshot_diff.report

Tests cover:
- Report dictionary generation
- Console formatting
- JSON and CSV exports
- Excel export with state colouring
"""

import csv
import json

import pytest
from openpyxl import load_workbook

from snapshot_diff.compare import ReconciliationEngine
from snapshot_diff.document import TabularDocument
from snapshot_diff.report import (
    ADDED_FILL_COLOR,
    REMOVED_FILL_COLOR,
    ReportStatus,
    export_report_json,
    export_rows_csv,
    export_xlsx,
    format_report_console,
    generate_report,
    xlsx_path,
)


@pytest.fixture
def changed_result(short_id_config):
    first = TabularDocument(["ID", "Name", "City"], [["1", "A", "Oslo"], ["2", "B", "Rome"]])
    second = TabularDocument(["ID", "Name", "City"], [["2", "B", "Rome"], ["3", "C", "Lima"]])
    return ReconciliationEngine(short_id_config).reconcile(first, second)


@pytest.fixture
def unchanged_result(short_id_config):
    doc = TabularDocument(["ID", "Name", "City"], [["1", "A", "Oslo"]])
    return ReconciliationEngine(short_id_config).reconcile(doc, doc)


class TestGenerateReport:
    """Test generate_report()"""

    def test_changed(self, changed_result):
        report = generate_report(changed_result, "a.csv", "b.csv")

        assert report["status"] == ReportStatus.CHANGED
        assert report["first"] == "a.csv"
        assert report["second"] == "b.csv"
        assert report["strategy"] == "KEY"
        assert report["format_fingerprint"] == changed_result.format_fingerprint
        assert report["headers"] == ["ID", "Name", "City"]
        assert report["total_rows"] == 3
        assert report["added"] == 1
        assert report["removed"] == 1
        assert report["unchanged"] == 1
        assert "1 row(s) added" in report["summary"]
        assert "timestamp" in report

    def test_unchanged(self, unchanged_result):
        report = generate_report(unchanged_result)

        assert report["status"] == ReportStatus.UNCHANGED
        assert report["first"] is None
        assert report["added"] == 0
        assert "No changes" in report["summary"]

    def test_report_is_json_serializable(self, changed_result):
        json.dumps(generate_report(changed_result, "a.csv", "b.csv"))


class TestFormatReportConsole:
    def test_contains_counts(self, changed_result):
        text = format_report_console(generate_report(changed_result, "a.csv", "b.csv"))

        assert "SNAPSHOT RECONCILIATION REPORT" in text
        assert "Status: CHANGED" in text
        assert "Added: 1" in text
        assert "Removed: 1" in text
        assert "Unchanged: 1" in text
        assert "First: a.csv" in text

    def test_omits_unknown_paths(self, unchanged_result):
        text = format_report_console(generate_report(unchanged_result))

        assert "First:" not in text
        assert "Status: UNCHANGED" in text


class TestJsonExport:
    def test_export_report_json(self, changed_result, tmp_path):
        report = generate_report(changed_result, "a.csv", "b.csv")
        output = tmp_path / "report.json"

        export_report_json(report, output)

        assert json.loads(output.read_text(encoding="utf-8")) == report


class TestCsvExport:
    """Test export_rows_csv()"""

    def test_all_columns(self, changed_result, tmp_path):
        output = tmp_path / "rows.csv"

        written = export_rows_csv(changed_result, output)

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert written == 3
        assert rows == [
            ["state", "ID", "Name", "City"],
            ["added", "3", "C", "Lima"],
            ["removed", "1", "A", "Oslo"],
            ["unchanged", "2", "B", "Rome"],
        ]

    def test_selected_columns_in_given_order(self, changed_result, tmp_path):
        output = tmp_path / "rows.csv"

        export_rows_csv(changed_result, output, columns=[2, 0])

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["state", "City", "ID"]
        assert rows[1] == ["added", "Lima", "3"]

    def test_out_of_range_column(self, changed_result, tmp_path):
        with pytest.raises(IndexError):
            export_rows_csv(changed_result, tmp_path / "rows.csv", columns=[3])

    def test_short_row_padded_with_blank(self, engine_result_with_short_row, tmp_path):
        output = tmp_path / "rows.csv"

        export_rows_csv(engine_result_with_short_row, output)

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        assert ["removed", "9", ""] in rows


@pytest.fixture
def engine_result_with_short_row(short_id_config):
    first = TabularDocument(["ID", "Name"], [["1", "A"], ["9"]])
    second = TabularDocument(["ID", "Name"], [["1", "A"]])
    return ReconciliationEngine(short_id_config).reconcile(first, second)


class TestXlsxExport:
    """Test export_xlsx()"""

    def test_xlsx_path(self, tmp_path):
        assert xlsx_path(tmp_path / "out") == tmp_path / "out.xlsx"
        assert xlsx_path(tmp_path / "out.xlsx") == tmp_path / "out.xlsx"
        assert xlsx_path(tmp_path / "out.csv") == tmp_path / "out.csv.xlsx"

    def test_writes_selected_columns_and_colours(self, changed_result, tmp_path):
        target = export_xlsx(changed_result, tmp_path / "diff", [0, 2])

        assert target == tmp_path / "diff.xlsx"
        ws = load_workbook(target).active
        values = [[cell.value for cell in row] for row in ws.iter_rows()]
        assert values == [
            ["ID", "City"],
            ["3", "Lima"],
            ["1", "Oslo"],
            ["2", "Rome"],
        ]

        assert ws.cell(row=2, column=1).fill.start_color.rgb.endswith(ADDED_FILL_COLOR)
        assert ws.cell(row=2, column=2).fill.start_color.rgb.endswith(ADDED_FILL_COLOR)
        assert ws.cell(row=3, column=1).fill.start_color.rgb.endswith(REMOVED_FILL_COLOR)
        assert ws.cell(row=4, column=1).fill.fill_type is None

    def test_header_row_bold(self, changed_result, tmp_path):
        target = export_xlsx(changed_result, tmp_path / "diff.xlsx", [1])

        ws = load_workbook(target).active
        assert ws.cell(row=1, column=1).font.bold

    def test_empty_columns_rejected(self, changed_result, tmp_path):
        with pytest.raises(ValueError):
            export_xlsx(changed_result, tmp_path / "diff", [])

        assert not (tmp_path / "diff.xlsx").exists()

    def test_empty_result_rejected(self, short_id_config, tmp_path):
        result = ReconciliationEngine(short_id_config).reconcile(
            TabularDocument(["ID", "Name"]), TabularDocument(["ID", "Name"], [["1", "A"]])
        )
        empty = type(result)(
            format_fingerprint=result.format_fingerprint,
            headers=result.headers,
            rows=(),
            added_count=0,
            removed_count=0,
            strategy=result.strategy,
        )

        with pytest.raises(ValueError):
            export_xlsx(empty, tmp_path / "diff", [0])

    def test_out_of_range_column(self, changed_result, tmp_path):
        with pytest.raises(IndexError):
            export_xlsx(changed_result, tmp_path / "diff", [0, 7])
