"""
Row identity strategies.

KEY: two rows are the same record when their identifier cells are equal.
CONTENT_SET: two rows are the same record when the unordered sets of their
cell values are equal. Column order and repeated values are ignored, so
``["1234", "5678"]`` and ``["5678", "1234"]`` are the same record.

Each strategy is backed by a hash index over the searched document, making
one lookup O(row width) instead of a scan of the whole document.
"""

import enum
import logging
from collections.abc import Sequence

from ..document import TabularDocument

logger = logging.getLogger(__name__)


class MatchStrategy(str, enum.Enum):
    """How rows of the two snapshots are paired."""

    KEY = "KEY"
    CONTENT_SET = "CONTENT_SET"


class RowIndex:
    """
    Membership index over the rows of one document.

    Rows whose width differs from the document's header width are left out
    of the index, and a looked-up row of the wrong width is never found. A
    malformed row therefore ends up Added or Removed instead of raising.
    """

    def __init__(
        self,
        document: TabularDocument,
        strategy: MatchStrategy,
        key_column: int | None = None,
    ):
        if strategy is MatchStrategy.KEY and (key_column is None or key_column < 0):
            raise ValueError(f"KEY matching needs a valid key column, got {key_column}")

        self.strategy = strategy
        self.key_column = key_column
        self.width = document.column_count

        well_formed = [row for row in document.rows if len(row) == self.width]
        if strategy is MatchStrategy.KEY:
            self._entries = frozenset(
                row[key_column] for row in well_formed if key_column < len(row)
            )
        else:
            self._entries = frozenset(frozenset(row) for row in well_formed)

        skipped = document.row_count - len(well_formed)
        if skipped:
            logger.debug(f"{skipped} malformed row(s) excluded from {strategy.value} index")

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, row: Sequence[str]) -> bool:
        """True when a row of the indexed document is the same record as ``row``."""
        if len(row) != self.width:
            return False

        if self.strategy is MatchStrategy.KEY:
            if self.key_column >= len(row):
                return False
            return row[self.key_column] in self._entries

        return frozenset(row) in self._entries
