"""
Prometheus metrics for background reconciliation runs.
"""

from prometheus_client import Counter, Gauge, Histogram

from utils.metrics import get_or_create_metric

RUNS_TOTAL = get_or_create_metric(
    lambda: Counter(
        "snapshot_runner_runs_total",
        "Background reconciliation runs by outcome",
        ["status"],  # success, failed, rejected
    ),
    "snapshot_runner_runs_total",
)

RUN_SECONDS = get_or_create_metric(
    lambda: Histogram(
        "snapshot_runner_run_seconds",
        "Wall-clock time of a background run, padding included",
        buckets=[0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60],
    ),
    "snapshot_runner_run_seconds",
)

RUN_PADDING_SECONDS = get_or_create_metric(
    lambda: Histogram(
        "snapshot_runner_padding_seconds",
        "Time a fast run was held back to honour the minimum execution time",
        buckets=[0, 0.05, 0.1, 0.2, 0.3, 0.4, 0.5, 1],
    ),
    "snapshot_runner_padding_seconds",
)

RUNS_IN_FLIGHT = get_or_create_metric(
    lambda: Gauge(
        "snapshot_runner_in_flight",
        "Background reconciliation runs currently executing",
    ),
    "snapshot_runner_in_flight",
)
