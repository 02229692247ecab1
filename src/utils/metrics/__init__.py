"""
Prometheus metric helpers.

Metrics live on the default registry so a scrape endpoint or a test can read
them with ``REGISTRY.get_sample_value``.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from prometheus_client import REGISTRY, CollectorRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_or_create_metric(
    metric_factory: Callable[[], T],
    metric_name: str,
    registry: CollectorRegistry = REGISTRY,
) -> T:
    """
    Create a metric, or return the one already registered under that name.

    Module reloads (tests, interactive sessions) would otherwise fail with a
    duplicate timeseries ValueError.

    Example:
        RUNS = get_or_create_metric(
            lambda: Counter("runs_total", "Total runs", ["status"]),
            "runs_total",
        )
    """
    try:
        return metric_factory()
    except ValueError:
        existing = registry._names_to_collectors.get(metric_name)
        if existing is not None:
            logger.debug(f"Reusing registered metric {metric_name}")
            return existing
        raise


__all__ = ["get_or_create_metric"]
