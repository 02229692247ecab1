"""
In-memory tabular snapshot.

A TabularDocument is one parsed CSV export: the first record is the header
row and every later record is a data row. Documents are immutable once built.
"""

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from opentelemetry import trace

from utils.tracing import trace_operation

from ..errors import DocumentLoadError

logger = logging.getLogger(__name__)


class TabularDocument:
    """
    Header row plus data rows, all cells kept as strings.

    Rows are not forced to the header width. ``ragged_rows`` counts the ones
    that differ, and ``cell()`` is bounds-checked so a short row never turns
    into a silent out-of-range read.
    """

    __slots__ = ("_headers", "_rows", "_source", "_ragged_rows")

    def __init__(
        self,
        headers: Sequence[str] = (),
        rows: Iterable[Sequence[str]] = (),
        source: str | None = None,
    ):
        self._headers = tuple(headers)
        self._rows = tuple(tuple(row) for row in rows)
        self._source = source

        if not self._headers and self._rows:
            raise ValueError("A document with data rows must have a header row")

        width = len(self._headers)
        self._ragged_rows = sum(1 for row in self._rows if len(row) != width)
        if self._ragged_rows:
            logger.warning(
                f"{self._ragged_rows} row(s) in {source or '<memory>'} do not have "
                f"{width} cells; they will never match another row"
            )

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        delimiter: str = ",",
        encoding: str = "utf-8-sig",
    ) -> "TabularDocument":
        """
        Parse a delimited text file.

        Blank lines are skipped. A file with no records at all yields an
        empty document rather than an error.

        Args:
            path: File to read
            delimiter: Field delimiter
            encoding: Text encoding; the default strips a UTF-8 BOM

        Returns:
            The parsed document

        Raises:
            DocumentLoadError: If the file cannot be opened, decoded or parsed
        """
        path = Path(path)

        with trace_operation("load_document", kind=trace.SpanKind.INTERNAL, path=path) as span:
            try:
                with path.open("r", encoding=encoding, newline="") as handle:
                    records = [record for record in csv.reader(handle, delimiter=delimiter) if record]
            except (OSError, UnicodeDecodeError, csv.Error) as e:
                raise DocumentLoadError(str(path), str(e)) from e

            if not records:
                logger.warning(f"Empty csv file: {path}")
                span.set_attribute("rows", "0")
                return cls(source=str(path))

            document = cls(headers=records[0], rows=records[1:], source=str(path))
            span.set_attribute("rows", str(document.row_count))
            span.set_attribute("columns", str(document.column_count))

            logger.debug(
                f"Loaded {path}: {document.row_count} rows, {document.column_count} columns"
            )
            return document

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        return self._rows

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def row_count(self) -> int:
        """Number of data rows, header excluded."""
        return len(self._rows)

    @property
    def column_count(self) -> int:
        """Number of header columns."""
        return len(self._headers)

    @property
    def ragged_rows(self) -> int:
        """Number of data rows whose width differs from the header."""
        return self._ragged_rows

    def is_empty(self) -> bool:
        """True when the file had no records, not even a header."""
        return not self._headers and not self._rows

    def cell(self, row: int, column: int) -> str:
        """
        Return one cell.

        Raises:
            IndexError: If ``row`` or ``column`` is outside this document,
                including a column beyond the end of a short row
        """
        if not 0 <= row < len(self._rows):
            raise IndexError(f"Row {row} out of range (0..{len(self._rows) - 1})")

        record = self._rows[row]
        if not 0 <= column < len(record):
            raise IndexError(
                f"Column {column} out of range for row {row} with {len(record)} cells"
            )
        return record[column]

    def __repr__(self) -> str:
        return (
            f"TabularDocument(source={self._source!r}, "
            f"rows={self.row_count}, columns={self.column_count})"
        )
