"""
Snapshot comparison.

This submodule provides:
- Identifier column discovery (IdentityKeyLocator)
- Row identity strategies (key and content-set matching)
- The reconciliation engine and its CombinedResult
- Header fingerprints
"""

from .engine import CombinedResult, ReconciliationEngine, RowRecord, RowState
from .fingerprint import fingerprint
from .identity import NO_IDENTITY_COLUMN, IdentifierPattern, IdentityKeyLocator
from .matching import MatchStrategy, RowIndex

__all__ = [
    "ReconciliationEngine",
    "CombinedResult",
    "RowRecord",
    "RowState",
    "IdentityKeyLocator",
    "IdentifierPattern",
    "NO_IDENTITY_COLUMN",
    "MatchStrategy",
    "RowIndex",
    "fingerprint",
]
