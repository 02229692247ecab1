"""
Identity column discovery.

Decides whether exactly one column of a document carries a per-row
identifier token (by default nine digits followed by "CL"), so rows can be
matched on that single value instead of on their full content.
"""

import logging
import re
from dataclasses import dataclass, field

from ..document import TabularDocument

logger = logging.getLogger(__name__)

NO_IDENTITY_COLUMN = -1


@dataclass(frozen=True)
class IdentifierPattern:
    """
    Fixed-shape identifier: ``digits`` ASCII digits then ``suffix``.

    The whole cell has to match; a longer value that merely starts with an
    identifier is not one.
    """

    digits: int = 9
    suffix: str = "CL"
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.digits <= 0:
            raise ValueError(f"digits must be positive, got {self.digits}")
        object.__setattr__(
            self, "_regex", re.compile(rf"[0-9]{{{self.digits}}}{re.escape(self.suffix)}")
        )

    def matches(self, value: str) -> bool:
        return self._regex.fullmatch(value) is not None


class IdentityKeyLocator:
    """Find the single identifier column of a document, if there is one."""

    def __init__(self, pattern: IdentifierPattern | None = None):
        self.pattern = pattern or IdentifierPattern()

    def locate(self, document: TabularDocument) -> int:
        """
        Return the index of the only column whose first-row cell is an identifier.

        Only the first data row is inspected.

        Returns:
            The column index, or NO_IDENTITY_COLUMN when the document has no
            data rows or zero or several columns match
        """
        if document.row_count == 0:
            return NO_IDENTITY_COLUMN

        first_row = document.rows[0]
        matching = [index for index, value in enumerate(first_row) if self.pattern.matches(value)]

        if len(matching) != 1:
            logger.debug(
                f"No single identifier column in {document.source or '<memory>'}: "
                f"{len(matching)} candidate(s)"
            )
            return NO_IDENTITY_COLUMN

        logger.debug(f"Identifier column {matching[0]} found in {document.source or '<memory>'}")
        return matching[0]
