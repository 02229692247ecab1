"""
Background reconciliation runner.

Loads two snapshot files and reconciles them on a worker thread so the
caller never blocks. Each run completes exactly once, through the Future
returned by ``start()`` and an optional callback.
"""

import asyncio
import logging
import os
import threading
import time
import uuid
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from opentelemetry import trace

from utils.logging import ContextLogger
from utils.tracing import trace_operation

from ..compare import CombinedResult, ReconciliationEngine
from ..config import ReconciliationConfig
from ..document import TabularDocument
from ..errors import InputError, RunInProgressError
from .metrics import RUN_PADDING_SECONDS, RUN_SECONDS, RUNS_IN_FLIGHT, RUNS_TOTAL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOutcome:
    """What a finished run delivered, plus its timing."""

    run_id: str
    result: CombinedResult | None
    error: Exception | None
    elapsed_seconds: float
    padding_seconds: float

    @property
    def ok(self) -> bool:
        return self.error is None


def _normalize_path(path: str | Path | None, label: str) -> Path:
    """
    Validate a snapshot path before any work is scheduled.

    ``file://`` URLs, as handed over by file pickers, are accepted.

    Raises:
        InputError: If the path is empty, missing, not a file, or unreadable
    """
    if path is None or not str(path).strip():
        raise InputError(f"The {label} snapshot path is empty")

    text = str(path).strip()
    if text.startswith("file://"):
        text = unquote(urlparse(text).path)

    candidate = Path(text)
    if not candidate.exists():
        raise InputError(f"The {label} snapshot does not exist: {candidate}")
    if not candidate.is_file():
        raise InputError(f"The {label} snapshot is not a file: {candidate}")
    if not os.access(candidate, os.R_OK):
        raise InputError(f"The {label} snapshot is not readable: {candidate}")
    return candidate


class AsyncReconciliationRunner:
    """
    Runs one reconciliation at a time off the caller's thread.

    Starting a run while another is in flight raises RunInProgressError; the
    first run is unaffected. When the reconcile step itself finishes faster
    than ``config.minimum_execution_seconds`` the worker is held until that
    much time has passed, so a loading indicator never just flickers. File
    loading is not counted, and runs that fail are delivered without delay.

    Callbacks run on the worker thread. Code on an event loop should use
    ``run_async()`` instead, which resolves on the caller's loop.
    """

    def __init__(
        self,
        config: ReconciliationConfig | None = None,
        engine: ReconciliationEngine | None = None,
        executor: Executor | None = None,
    ):
        """
        Args:
            config: Runtime settings (default: ReconciliationConfig())
            engine: Engine to run (default: one built from ``config``)
            executor: Executor to submit work to; when omitted the runner
                owns a single-thread pool and shuts it down in ``shutdown()``
        """
        self.config = config or ReconciliationConfig()
        self.engine = engine or ReconciliationEngine(self.config)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="snapshot-diff"
        )
        self._lock = threading.Lock()
        self._current: Future | None = None
        self._last_completion: Future | None = None
        self._last_outcome: RunOutcome | None = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._current is not None

    @property
    def last_outcome(self) -> RunOutcome | None:
        with self._lock:
            return self._last_outcome

    def start(
        self,
        first_path: str | Path,
        second_path: str | Path,
        callback: Callable[[RunOutcome], None] | None = None,
    ) -> Future:
        """
        Start reconciling two snapshot files in the background.

        Args:
            first_path: The older snapshot
            second_path: The newer snapshot
            callback: Invoked once with the RunOutcome when the run finishes

        Returns:
            Future resolving to the CombinedResult, or raising the
            ReconciliationError / DocumentLoadError of the run. It cannot
            be cancelled.

        Raises:
            InputError: If either path is invalid; nothing is started
            RunInProgressError: If a previous run has not finished yet
        """
        first = _normalize_path(first_path, "first")
        second = _normalize_path(second_path, "second")

        completion: Future = Future()
        # Marks the future as running so cancel() is refused
        completion.set_running_or_notify_cancel()
        run_id = uuid.uuid4().hex[:12]

        with self._lock:
            if self._current is not None:
                RUNS_TOTAL.labels(status="rejected").inc()
                raise RunInProgressError(
                    "A reconciliation is already running; wait for it to finish"
                )
            previous = self._last_completion
            self._current = completion
            self._last_completion = completion
        RUNS_IN_FLIGHT.inc()

        try:
            self._executor.submit(self._run, run_id, first, second, completion, callback)
        except RuntimeError:
            # Executor already shut down
            RUNS_IN_FLIGHT.dec()
            with self._lock:
                self._current = None
                self._last_completion = previous
            raise

        logger.info(f"Started reconciliation run {run_id}: {first} -> {second}")
        return completion

    async def run_async(self, first_path: str | Path, second_path: str | Path) -> CombinedResult:
        """Start a run and await its result on the current event loop."""
        return await asyncio.wrap_future(self.start(first_path, second_path))

    def wait(self, timeout: float | None = None) -> CombinedResult | None:
        """
        Block until the latest run finishes and return its result.

        Returns None when no run was ever started. Errors of the run are raised.
        """
        with self._lock:
            current = self._current or self._last_completion
        if current is None:
            return None
        return current.result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Release the worker thread if this runner created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "AsyncReconciliationRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    def _run(
        self,
        run_id: str,
        first: Path,
        second: Path,
        completion: Future,
        callback: Callable[[RunOutcome], None] | None,
    ) -> None:
        log = ContextLogger(__name__, run_id=run_id)
        started = time.monotonic()
        result: CombinedResult | None = None
        error: Exception | None = None
        padding = 0.0

        try:
            result, padding = self._execute(first, second)
        except Exception as e:
            # Handed to the caller through the future below
            error = e
            log.warning(f"Reconciliation run failed: {type(e).__name__}: {e}")

        elapsed = time.monotonic() - started
        outcome = RunOutcome(
            run_id=run_id,
            result=result,
            error=error,
            elapsed_seconds=elapsed,
            padding_seconds=padding,
        )

        RUN_SECONDS.observe(elapsed)
        RUN_PADDING_SECONDS.observe(padding)
        RUNS_TOTAL.labels(status="success" if error is None else "failed").inc()
        RUNS_IN_FLIGHT.dec()

        # Free the slot first so a callback may start the next run
        with self._lock:
            self._current = None
            self._last_outcome = outcome

        if error is None:
            completion.set_result(result)
        else:
            completion.set_exception(error)

        log.info(
            f"Reconciliation run finished in {elapsed:.3f}s "
            f"(padding {padding:.3f}s, ok={outcome.ok})"
        )

        if callback is not None:
            try:
                callback(outcome)
            except Exception:
                log.error("Completion callback raised", exc_info=True)

    def _execute(self, first: Path, second: Path) -> tuple[CombinedResult, float]:
        """Load and reconcile; return the result and the padding slept."""
        with trace_operation(
            "background_reconciliation",
            kind=trace.SpanKind.INTERNAL,
            first=first,
            second=second,
        ):
            first_document = TabularDocument.from_path(
                first, delimiter=self.config.delimiter, encoding=self.config.encoding
            )
            second_document = TabularDocument.from_path(
                second, delimiter=self.config.delimiter, encoding=self.config.encoding
            )

            # Only the reconcile call counts towards the minimum
            started = time.monotonic()
            result = self.engine.reconcile(first_document, second_document)
            return result, self._pad(started)

    def _pad(self, started: float) -> float:
        """Sleep out the rest of the minimum execution time; return the time slept."""
        remaining = self.config.minimum_execution_seconds - (time.monotonic() - started)
        if remaining <= 0:
            return 0.0

        logger.debug(f"Run finished early, waiting {remaining:.3f}s")
        time.sleep(remaining)
        return remaining
