"""
Header-row fingerprints.

Two documents with the same fingerprint share a column layout. The value is
also the lookup key for saved column templates.
"""

import hashlib
from collections.abc import Sequence


def fingerprint(headers: Sequence[str]) -> str:
    """
    Compute the format fingerprint of a header row.

    The header names are concatenated without a separator and hashed with
    SHA256 over their UTF-8 bytes.

    Args:
        headers: Header names in column order

    Returns:
        Lowercase hex digest, or "" when there are no headers
    """
    if not headers:
        return ""

    return hashlib.sha256("".join(headers).encode("utf-8")).hexdigest()
