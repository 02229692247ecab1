"""
Snapshot reconciliation engine.

Classifies every row of two snapshots of the same dataset as Added (only in
the second), Removed (only in the first) or Unchanged (in both) and
assembles one CombinedResult, ordered so the changes come first.
"""

import enum
import logging
from dataclasses import dataclass

from opentelemetry import trace

from utils.tracing import add_span_attributes, trace_operation

from ..config import ReconciliationConfig
from ..document import TabularDocument
from ..errors import BothEmptyError, DifferentFormatError
from .fingerprint import fingerprint
from .identity import NO_IDENTITY_COLUMN, IdentifierPattern, IdentityKeyLocator
from .matching import MatchStrategy, RowIndex
from .metrics import RECONCILIATION_SECONDS, RECONCILIATIONS_TOTAL, ROWS_CLASSIFIED_TOTAL

logger = logging.getLogger(__name__)


class RowState(enum.IntEnum):
    """Classification of a row; the value is its position in the result."""

    ADDED = 0
    REMOVED = 1
    UNCHANGED = 2


@dataclass(frozen=True)
class RowRecord:
    """One classified row and its cells, as read from its source document."""

    state: RowState
    cells: tuple[str, ...]


@dataclass(frozen=True)
class CombinedResult:
    """
    Outcome of one reconciliation run.

    ``rows`` holds every Added record, then every Removed record, then every
    Unchanged record, each group in source-document order. Headers and the
    format fingerprint come from the second (newer) document.
    """

    format_fingerprint: str
    headers: tuple[str, ...]
    rows: tuple[RowRecord, ...]
    added_count: int
    removed_count: int
    strategy: MatchStrategy

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def unchanged_count(self) -> int:
        return len(self.rows) - self.added_count - self.removed_count

    @property
    def has_changes(self) -> bool:
        return self.added_count > 0 or self.removed_count > 0

    def rows_in_state(self, state: RowState) -> list[RowRecord]:
        return [record for record in self.rows if record.state is state]


class ReconciliationEngine:
    """
    Partitions the rows of two TabularDocuments.

    Matching uses the identifier column when both documents expose the same
    single one, and the order-insensitive content set otherwise.
    """

    def __init__(self, config: ReconciliationConfig | None = None):
        self.config = config or ReconciliationConfig()
        self.locator = IdentityKeyLocator(
            IdentifierPattern(
                digits=self.config.identifier_digits,
                suffix=self.config.identifier_suffix,
            )
        )

    def select_strategy(
        self, first: TabularDocument, second: TabularDocument
    ) -> tuple[MatchStrategy, int | None]:
        """
        Pick the matching strategy for a pair of documents.

        Returns:
            (KEY, column) when both documents locate the same identifier
            column, otherwise (CONTENT_SET, None)
        """
        first_key = self.locator.locate(first)
        second_key = self.locator.locate(second)

        if first_key != NO_IDENTITY_COLUMN and first_key == second_key:
            return MatchStrategy.KEY, first_key

        logger.debug(
            f"Falling back to content matching "
            f"(identifier columns: first={first_key}, second={second_key})"
        )
        return MatchStrategy.CONTENT_SET, None

    def reconcile(self, first: TabularDocument, second: TabularDocument) -> CombinedResult:
        """
        Reconcile an older snapshot against a newer one.

        Args:
            first: The older snapshot
            second: The newer snapshot

        Returns:
            The combined, state-ordered result

        Raises:
            BothEmptyError: If both files had no records at all
            DifferentFormatError: If the column counts differ
        """
        with trace_operation(
            "reconcile_snapshots",
            kind=trace.SpanKind.INTERNAL,
            first_rows=first.row_count,
            second_rows=second.row_count,
        ):
            if first.is_empty() and second.is_empty():
                RECONCILIATIONS_TOTAL.labels(status="both_empty").inc()
                raise BothEmptyError()

            if first.column_count != second.column_count:
                RECONCILIATIONS_TOTAL.labels(status="different_format").inc()
                raise DifferentFormatError(first.column_count, second.column_count)

            strategy, key_column = self.select_strategy(first, second)

            with RECONCILIATION_SECONDS.labels(strategy=strategy.value).time():
                records, added_count, removed_count = self._partition(
                    first, second, strategy, key_column
                )

            result = CombinedResult(
                format_fingerprint=fingerprint(second.headers),
                headers=second.headers,
                rows=tuple(records),
                added_count=added_count,
                removed_count=removed_count,
                strategy=strategy,
            )

            RECONCILIATIONS_TOTAL.labels(status="success").inc()
            ROWS_CLASSIFIED_TOTAL.labels(state="added").inc(result.added_count)
            ROWS_CLASSIFIED_TOTAL.labels(state="removed").inc(result.removed_count)
            ROWS_CLASSIFIED_TOTAL.labels(state="unchanged").inc(result.unchanged_count)

            add_span_attributes(
                strategy=strategy.value,
                added=result.added_count,
                removed=result.removed_count,
                unchanged=result.unchanged_count,
            )
            logger.info(
                f"Reconciled {first.row_count} -> {second.row_count} rows using {strategy.value}: "
                f"{result.added_count} added, {result.removed_count} removed, "
                f"{result.unchanged_count} unchanged"
            )
            return result

    def _partition(
        self,
        first: TabularDocument,
        second: TabularDocument,
        strategy: MatchStrategy,
        key_column: int | None,
    ) -> tuple[list[RowRecord], int, int]:
        first_index = RowIndex(first, strategy, key_column)
        second_index = RowIndex(second, strategy, key_column)

        records: list[RowRecord] = []
        added_count = 0
        for row in second.rows:
            if first_index.contains(row):
                records.append(RowRecord(RowState.UNCHANGED, row))
            else:
                records.append(RowRecord(RowState.ADDED, row))
                added_count += 1

        # Rows present in both were already emitted as Unchanged above
        removed_count = 0
        for row in first.rows:
            if not second_index.contains(row):
                records.append(RowRecord(RowState.REMOVED, row))
                removed_count += 1

        # sort() is stable, so each group keeps its source order
        records.sort(key=lambda record: record.state)
        return records, added_count, removed_count
