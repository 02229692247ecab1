"""
Property-based tests for header fingerprints.
"""

import hashlib

from hypothesis import assume, given
from hypothesis import strategies as st

from snapshot_diff.compare import fingerprint

headers = st.lists(st.text(max_size=20), min_size=1, max_size=10)


@given(values=headers)
def test_fingerprint_is_deterministic(values):
    assert fingerprint(values) == fingerprint(list(values))


@given(values=headers)
def test_fingerprint_is_sha256_of_concatenation(values):
    expected = hashlib.sha256("".join(values).encode("utf-8")).hexdigest()

    assert fingerprint(values) == expected


@given(a=st.text(min_size=1, max_size=10), b=st.text(min_size=1, max_size=10))
def test_fingerprint_is_order_sensitive(a, b):
    assume(a + b != b + a)

    assert fingerprint([a, b]) != fingerprint([b, a])


def test_fingerprint_of_no_headers_is_empty():
    assert fingerprint([]) == ""
