"""
Unit tests for snapshot_diff.document

Tests cover:
- Building documents in memory
- Parsing CSV files (quoting, blank lines, BOM, empty files)
- Load failures surfacing as DocumentLoadError
- Bounds-checked cell access and ragged-row accounting
"""

import pytest

from snapshot_diff.document import TabularDocument
from snapshot_diff.errors import DocumentLoadError


class TestTabularDocumentInMemory:
    """Test documents built from sequences"""

    def test_counts(self):
        """Test row and column counts exclude the header"""
        doc = TabularDocument(["ID", "Name"], [["1", "A"], ["2", "B"]])

        assert doc.row_count == 2
        assert doc.column_count == 2
        assert doc.headers == ("ID", "Name")
        assert doc.rows == (("1", "A"), ("2", "B"))

    def test_default_document_is_empty(self):
        """Test a document with no records at all is empty"""
        doc = TabularDocument()

        assert doc.is_empty()
        assert doc.row_count == 0
        assert doc.column_count == 0

    def test_header_only_document_is_not_empty(self):
        """Test a header row alone still counts as content"""
        doc = TabularDocument(["ID", "Name"])

        assert not doc.is_empty()
        assert doc.row_count == 0
        assert doc.column_count == 2

    def test_rows_without_headers_rejected(self):
        """Test data rows require a header row"""
        with pytest.raises(ValueError, match="header"):
            TabularDocument([], [["1", "A"]])

    def test_rows_are_copied(self):
        """Test later mutation of the input does not leak into the document"""
        rows = [["1", "A"]]
        doc = TabularDocument(["ID", "Name"], rows)

        rows[0][1] = "Z"
        rows.append(["2", "B"])

        assert doc.rows == (("1", "A"),)

    def test_cell_access(self):
        """Test cell() reads by row and column"""
        doc = TabularDocument(["ID", "Name"], [["1", "A"], ["2", "B"]])

        assert doc.cell(0, 0) == "1"
        assert doc.cell(1, 1) == "B"

    @pytest.mark.parametrize("row,column", [(2, 0), (0, 2), (-1, 0), (0, -1)])
    def test_cell_out_of_range(self, row, column):
        """Test cell() raises IndexError outside the document"""
        doc = TabularDocument(["ID", "Name"], [["1", "A"], ["2", "B"]])

        with pytest.raises(IndexError):
            doc.cell(row, column)

    def test_cell_beyond_short_row(self):
        """Test a column past the end of a short row is out of range"""
        doc = TabularDocument(["ID", "Name", "City"], [["1", "A"]])

        with pytest.raises(IndexError):
            doc.cell(0, 2)

    def test_ragged_rows_counted(self):
        """Test rows whose width differs from the header are counted"""
        doc = TabularDocument(
            ["ID", "Name"],
            [["1", "A"], ["2"], ["3", "C", "extra"]],
        )

        assert doc.ragged_rows == 2
        assert doc.row_count == 3

    def test_repr_mentions_shape(self):
        doc = TabularDocument(["ID", "Name"], [["1", "A"]], source="a.csv")

        text = repr(doc)

        assert "a.csv" in text
        assert "1" in text


class TestTabularDocumentFromPath:
    """Test parsing documents from CSV files"""

    def test_parse_basic_file(self, write_csv):
        """Test header and rows are split from a simple file"""
        path = write_csv("basic.csv", ["ID", "Name"], [["1", "A"], ["2", "B"]])

        doc = TabularDocument.from_path(path)

        assert doc.headers == ("ID", "Name")
        assert doc.rows == (("1", "A"), ("2", "B"))
        assert doc.source == str(path)

    def test_quoted_fields(self, tmp_path):
        """Test quoted fields keep embedded delimiters, quotes and newlines"""
        path = tmp_path / "quoted.csv"
        path.write_text(
            'ID,Note\n1,"a, b"\n2,"say ""hi"""\n3,"line1\nline2"\n',
            encoding="utf-8",
        )

        doc = TabularDocument.from_path(path)

        assert doc.rows == (
            ("1", "a, b"),
            ("2", 'say "hi"'),
            ("3", "line1\nline2"),
        )

    def test_blank_lines_skipped(self, tmp_path):
        """Test blank lines do not become rows"""
        path = tmp_path / "blank.csv"
        path.write_text("ID,Name\n\n1,A\n\n2,B\n\n", encoding="utf-8")

        doc = TabularDocument.from_path(path)

        assert doc.row_count == 2

    def test_utf8_bom_stripped(self, tmp_path):
        """Test a UTF-8 byte order mark is not part of the first header"""
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffID,Name\n1,A\n".encode())

        doc = TabularDocument.from_path(path)

        assert doc.headers == ("ID", "Name")

    def test_custom_delimiter(self, tmp_path):
        """Test a non-comma delimiter"""
        path = tmp_path / "semi.csv"
        path.write_text("ID;Name\n1;A\n", encoding="utf-8")

        doc = TabularDocument.from_path(path, delimiter=";")

        assert doc.headers == ("ID", "Name")
        assert doc.rows == (("1", "A"),)

    def test_empty_file_gives_empty_document(self, tmp_path):
        """Test an empty file is an empty document, not an error"""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")

        doc = TabularDocument.from_path(path)

        assert doc.is_empty()
        assert doc.source == str(path)

    def test_header_only_file(self, write_csv):
        """Test a file with only a header row"""
        path = write_csv("header.csv", ["ID", "Name"])

        doc = TabularDocument.from_path(path)

        assert doc.headers == ("ID", "Name")
        assert doc.row_count == 0

    def test_missing_file_raises_load_error(self, tmp_path):
        """Test a missing file raises DocumentLoadError carrying the path"""
        path = tmp_path / "missing.csv"

        with pytest.raises(DocumentLoadError) as exc_info:
            TabularDocument.from_path(path)

        assert exc_info.value.path == str(path)
        assert exc_info.value.code == "DOCUMENT_LOAD"

    def test_undecodable_file_raises_load_error(self, tmp_path):
        """Test bytes invalid in the configured encoding raise DocumentLoadError"""
        path = tmp_path / "latin1.csv"
        path.write_bytes(b"ID,Name\n1,\xe9\xff\n")

        with pytest.raises(DocumentLoadError):
            TabularDocument.from_path(path, encoding="utf-8")

    def test_other_encoding(self, tmp_path):
        """Test reading a file in a non-UTF-8 encoding"""
        path = tmp_path / "latin1.csv"
        path.write_bytes("ID,Name\n1,Ren\xe9\n".encode("latin-1"))

        doc = TabularDocument.from_path(path, encoding="latin-1")

        assert doc.rows == (("1", "René"),)
