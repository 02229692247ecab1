"""
Unit tests for utils.metrics and the metric objects it creates
"""

import pytest
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from snapshot_diff.compare import metrics as compare_metrics
from snapshot_diff.runner import metrics as runner_metrics
from utils.metrics import get_or_create_metric


class TestGetOrCreateMetric:
    """Test get_or_create_metric()"""

    def test_creates_metric(self):
        registry = CollectorRegistry()

        counter = get_or_create_metric(
            lambda: Counter("test_created_total", "help", registry=registry),
            "test_created_total",
            registry,
        )

        counter.inc()
        assert registry.get_sample_value("test_created_total") == 1.0

    def test_returns_existing_on_duplicate(self):
        registry = CollectorRegistry()

        def factory():
            return Counter("test_duplicate_total", "help", registry=registry)

        first = get_or_create_metric(factory, "test_duplicate_total", registry)
        second = get_or_create_metric(factory, "test_duplicate_total", registry)

        assert first is second

    def test_reraises_unrelated_value_error(self):
        registry = CollectorRegistry()

        def factory():
            raise ValueError("invalid metric")

        with pytest.raises(ValueError, match="invalid metric"):
            get_or_create_metric(factory, "never_registered", registry)


class TestDomainMetrics:
    """Test the module-level metrics are real prometheus objects"""

    def test_compare_metrics(self):
        assert isinstance(compare_metrics.RECONCILIATIONS_TOTAL, Counter)
        assert isinstance(compare_metrics.ROWS_CLASSIFIED_TOTAL, Counter)
        assert isinstance(compare_metrics.RECONCILIATION_SECONDS, Histogram)

    def test_runner_metrics(self):
        assert isinstance(runner_metrics.RUNS_TOTAL, Counter)
        assert isinstance(runner_metrics.RUN_SECONDS, Histogram)
        assert isinstance(runner_metrics.RUN_PADDING_SECONDS, Histogram)
        assert isinstance(runner_metrics.RUNS_IN_FLIGHT, Gauge)

    def test_module_reload_reuses_metrics(self):
        import importlib

        before = compare_metrics.RECONCILIATIONS_TOTAL
        reloaded = importlib.reload(compare_metrics)

        assert reloaded.RECONCILIATIONS_TOTAL is before
