"""
Shared utilities for snapshot-diff

Provides:
- logging: structured logging setup and formatters
- tracing: OpenTelemetry span helpers
- metrics: Prometheus metric registration helpers
"""

__version__ = "1.0.0"
__all__ = ["logging", "tracing", "metrics"]
