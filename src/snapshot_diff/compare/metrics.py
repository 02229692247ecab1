"""
Prometheus metrics for snapshot reconciliation.
"""

from prometheus_client import Counter, Histogram

from utils.metrics import get_or_create_metric

RECONCILIATIONS_TOTAL = get_or_create_metric(
    lambda: Counter(
        "snapshot_reconciliations_total",
        "Snapshot reconciliations by outcome",
        ["status"],  # success, both_empty, different_format
    ),
    "snapshot_reconciliations_total",
)

ROWS_CLASSIFIED_TOTAL = get_or_create_metric(
    lambda: Counter(
        "snapshot_rows_classified_total",
        "Rows classified by reconciliation",
        ["state"],  # added, removed, unchanged
    ),
    "snapshot_rows_classified_total",
)

RECONCILIATION_SECONDS = get_or_create_metric(
    lambda: Histogram(
        "snapshot_reconciliation_seconds",
        "Time spent partitioning rows of two snapshots",
        ["strategy"],
        buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5, 10, 30],
    ),
    "snapshot_reconciliation_seconds",
)
