"""
Background execution of snapshot reconciliation.

Features:
- Worker-thread execution with a single-use completion Future
- One run in flight per runner; concurrent starts are rejected
- Minimum visible run time to avoid loading-indicator flicker
- asyncio integration through run_async()
"""

from .runner import AsyncReconciliationRunner, RunOutcome

__all__ = ["AsyncReconciliationRunner", "RunOutcome"]
