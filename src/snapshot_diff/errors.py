"""
Exception hierarchy for snapshot-diff.

Input problems are raised before any background work starts; reconciliation
failures are raised in place of a result and carry a stable ``code`` the CLI
and report layer can branch on.
"""


class SnapshotDiffError(Exception):
    """Base class for every error raised by this package."""

    code = "ERROR"


class InputError(SnapshotDiffError):
    """A snapshot path is empty, missing, or unreadable."""

    code = "INPUT"


class RunInProgressError(SnapshotDiffError):
    """A runner was asked to start while its previous run is still going."""

    code = "RUN_IN_PROGRESS"


class DocumentLoadError(SnapshotDiffError):
    """A snapshot file could not be opened, decoded, or parsed."""

    code = "DOCUMENT_LOAD"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ReconciliationError(SnapshotDiffError):
    """Two documents could not be reconciled."""

    code = "RECONCILIATION"


class BothEmptyError(ReconciliationError):
    """Neither snapshot file had any record, not even a header."""

    code = "BOTH_EMPTY"

    def __init__(self):
        super().__init__("Both documents are empty, nothing to compare")


class DifferentFormatError(ReconciliationError):
    """The snapshots do not have the same number of columns."""

    code = "DIFFERENT_FORMAT"

    def __init__(self, first_columns: int, second_columns: int):
        super().__init__(
            f"Documents have different formats: "
            f"{first_columns} columns vs {second_columns} columns"
        )
        self.first_columns = first_columns
        self.second_columns = second_columns


class TemplateStoreError(SnapshotDiffError):
    """The template file exists but is not a valid template document."""

    code = "TEMPLATE_STORE"
