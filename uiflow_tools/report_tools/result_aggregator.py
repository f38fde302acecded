"""
================================================================================
Result Aggregator
================================================================================

Process-wide collection of test outcomes with exactly-once initialization
and exactly-once flush.

State machine:

    UNINITIALIZED -> INITIALIZING -> READY -> FLUSHED

    - The first `ensure_initialized()` performs the initialization; concurrent
      and later callers observe READY and skip it.
    - `record()` appends one TestOutcome in READY; counts move with the append.
    - `flush()` runs the reporters once. The normal end-of-run hook and the
      abrupt-termination hook (ShutdownHook) may both call it, in any order
      and from any thread; only the first caller flushes.
    - FLUSHED is terminal.

All state is guarded by one re-entrant lock. A signal handler interrupts the
main thread between bytecodes, possibly in the middle of an update; the
ShutdownHook therefore goes through `run_outside_lock()`, which defers its
flush until that update is complete, so a flush never sees a half-applied
initialization or a recorded outcome that is not yet counted.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import atexit
import os
import signal
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger


class TestStatus(str, Enum):
    """Final status of one test unit."""

    PASS = "Pass"
    FAIL = "Fail"
    SKIP = "Skip"


TestStatus.__test__ = False


class AggregatorState(str, Enum):
    """Lifecycle states of a ResultAggregator."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FLUSHED = "flushed"


class FlushTrigger(str, Enum):
    """What caused a flush attempt."""

    SESSION_FINISH = "session_finish"
    SIGNAL = "signal"
    EXIT = "atexit"
    MANUAL = "manual"


class AggregatorRaceViolation(AssertionError):
    """An illegal state transition was attempted."""
    pass


# ================================================================================
# Data
# ================================================================================

@dataclass(frozen=True)
class TestOutcome:
    """
    Outcome of one finished test unit.

    Attributes:
        name: Test node id
        status: Pass, Fail or Skip
        start_time: When the test started
        end_time: When the test finished
        duration_ms: Wall time in milliseconds
        failure_detail: Failure cause for Fail (and skip reason for Skip)
    """
    __test__ = False

    name: str
    status: TestStatus
    start_time: datetime
    end_time: datetime
    duration_ms: float
    failure_detail: Optional[str] = None

    @classmethod
    def finished(
        cls,
        name: str,
        status: TestStatus,
        start_time: datetime,
        end_time: datetime,
        failure_detail: Optional[str] = None,
    ) -> "TestOutcome":
        """Build an outcome, deriving the duration from the two timestamps."""
        duration_ms = max((end_time - start_time).total_seconds() * 1000.0, 0.0)
        return cls(name, TestStatus(status), start_time, end_time, duration_ms, failure_detail)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_ms": round(self.duration_ms, 3),
            "failure_detail": self.failure_detail,
        }


@dataclass(frozen=True)
class RunSummary:
    """Immutable snapshot handed to reporters at flush time."""
    outcomes: Tuple[TestOutcome, ...]
    total: int
    passed: int
    failed: int
    skipped: int
    duration_ms: float
    started_at: Optional[datetime]
    finished_at: datetime
    environment: Optional[str] = None

    @property
    def pass_rate(self) -> float:
        """Pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    @property
    def status(self) -> str:
        return "PASSED" if self.failed == 0 else "FAILED"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "environment": self.environment,
            "status": self.status,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": round(self.duration_ms, 3),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat(),
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }


Reporter = Callable[[RunSummary], Any]


# ================================================================================
# Aggregator
# ================================================================================

class ResultAggregator:
    """
    Collects TestOutcomes for one process and flushes them once.

    The aggregator is owned by whoever creates it (normally the pytest
    plugin) and passed explicitly to the hooks that need it.

    Usage:
        aggregator = ResultAggregator(reporters=[LogSummaryReporter()], environment="dev")
        aggregator.ensure_initialized()
        aggregator.record(TestOutcome.finished("test_login", TestStatus.PASS, start, end))
        aggregator.flush(FlushTrigger.SESSION_FINISH)
    """

    def __init__(
        self,
        reporters: Optional[Iterable[Reporter]] = None,
        environment: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize aggregator.

        Args:
            reporters: Callables invoked in order with the RunSummary on flush
            environment: Environment name carried into the summary
            clock: Timestamp source
        """
        self.environment = environment
        self._reporters: List[Reporter] = list(reporters or [])
        self._clock = clock
        self._lock = threading.RLock()
        # Per thread: how deep it is inside guarded sections, and work deferred until it leaves them
        self._local = threading.local()
        self._state = AggregatorState.UNINITIALIZED
        self._outcomes: List[TestOutcome] = []
        self._counts: Dict[TestStatus, int] = {status: 0 for status in TestStatus}
        self._started_at: Optional[datetime] = None
        self.summary: Optional[RunSummary] = None

    @property
    def state(self) -> AggregatorState:
        with self._guarded():
            return self._state

    @property
    def outcomes(self) -> Tuple[TestOutcome, ...]:
        with self._guarded():
            return tuple(self._outcomes)

    def add_reporter(self, reporter: Reporter) -> None:
        with self._guarded():
            if self._state is AggregatorState.FLUSHED:
                raise AggregatorRaceViolation("Cannot add a reporter after flush")
            self._reporters.append(reporter)

    def counts(self) -> Dict[str, int]:
        """Current totals: total, passed, failed, skipped."""
        with self._guarded():
            return {
                "total": len(self._outcomes),
                "passed": self._counts[TestStatus.PASS],
                "failed": self._counts[TestStatus.FAIL],
                "skipped": self._counts[TestStatus.SKIP],
            }

    # =========================================================================
    # Transitions
    # =========================================================================

    def ensure_initialized(self) -> bool:
        """
        Initialize on first call.

        Returns:
            True if this call performed the initialization
        """
        with self._guarded():
            if self._state is not AggregatorState.UNINITIALIZED:
                return False
            self._transition(AggregatorState.UNINITIALIZED, AggregatorState.INITIALIZING)
            self._started_at = self._clock()
            self._transition(AggregatorState.INITIALIZING, AggregatorState.READY)
            logger.info(f"Result aggregator initialized (environment={self.environment})")
            return True

    def record(self, outcome: TestOutcome) -> bool:
        """
        Append one outcome.

        Initializes lazily if needed. Outcomes arriving after the flush are
        dropped with a warning.

        Returns:
            True if the outcome was recorded
        """
        with self._guarded():
            if self._state is AggregatorState.FLUSHED:
                logger.warning(f"Outcome for {outcome.name} arrived after flush; ignored")
                return False
            self.ensure_initialized()
            self._outcomes.append(outcome)
            self._counts[outcome.status] += 1
            logger.debug(f"Recorded {outcome.status.value}: {outcome.name}")
            return True

    def flush(self, trigger: FlushTrigger = FlushTrigger.MANUAL) -> bool:
        """
        Finalize the run and hand the summary to every reporter.

        Only the first call flushes; later calls from any trigger are no-ops.
        A flush before any test was initialized closes the aggregator
        without calling the reporters.

        Returns:
            True if this call performed the flush
        """
        with self._guarded():
            if self._state is AggregatorState.FLUSHED:
                logger.debug(f"Flush via {trigger.value} skipped: already flushed")
                return False

            previous = self._state
            self._transition(previous, AggregatorState.FLUSHED)

            if previous is AggregatorState.UNINITIALIZED:
                logger.info(f"Flush via {trigger.value}: no tests were run, nothing to report")
                return True

            self.summary = self._snapshot()
            logger.info(
                f"Flushing results via {trigger.value}: "
                f"{self.summary.total} total, {self.summary.passed} passed, "
                f"{self.summary.failed} failed, {self.summary.skipped} skipped"
            )
            for reporter in self._reporters:
                name = getattr(reporter, "__name__", type(reporter).__name__)
                try:
                    reporter(self.summary)
                except Exception as e:
                    logger.error(f"Reporter {name} failed: {e}")
            return True

    def run_outside_lock(self, callback: Callable[[], Any]) -> bool:
        """
        Run `callback` now, or as soon as the current thread leaves the
        aggregator's guarded sections.

        Signal handlers run on the main thread between two bytecodes, possibly
        halfway through `ensure_initialized()` or `record()`. Anything they do
        to the aggregator goes through here, so it only ever sees a complete
        update.

        Returns:
            True if the callback ran immediately
        """
        local = self._local
        if getattr(local, "depth", 0) > 0:
            if not hasattr(local, "deferred"):
                local.deferred = []
            local.deferred.append(callback)
            return False
        callback()
        return True

    @contextmanager
    def _guarded(self) -> Iterator[None]:
        # Depth goes up before the lock is taken and down after it is released,
        # so "depth == 0" always means this thread holds no aggregator state.
        local = self._local
        local.depth = getattr(local, "depth", 0) + 1
        try:
            with self._lock:
                yield
        finally:
            local.depth -= 1
            if local.depth == 0:
                self._run_deferred()

    def _run_deferred(self) -> None:
        pending = getattr(self._local, "deferred", None)
        while pending:
            pending.pop(0)()

    def _transition(self, expected: AggregatorState, target: AggregatorState) -> None:
        if self._state is not expected:
            raise AggregatorRaceViolation(
                f"Illegal transition {self._state.value} -> {target.value} "
                f"(expected from {expected.value})"
            )
        logger.debug(f"Aggregator state: {expected.value} -> {target.value}")
        self._state = target

    def _snapshot(self) -> RunSummary:
        finished_at = self._clock()
        counts = self.counts()
        duration_ms = 0.0
        if self._started_at is not None:
            duration_ms = max((finished_at - self._started_at).total_seconds() * 1000.0, 0.0)
        return RunSummary(
            outcomes=tuple(self._outcomes),
            total=counts["total"],
            passed=counts["passed"],
            failed=counts["failed"],
            skipped=counts["skipped"],
            duration_ms=duration_ms,
            started_at=self._started_at,
            finished_at=finished_at,
            environment=self.environment,
        )


# ================================================================================
# Abrupt termination
# ================================================================================

class ShutdownHook:
    """
    Flushes an aggregator when the process is terminated or exits.

    Installs an `atexit` callback and handlers for the given signals
    (SIGTERM by default). After flushing, a signal is passed on to the
    handler that was installed before, or re-raised with the default
    disposition so the process still terminates.

    Signal handlers can only be installed from the main thread; elsewhere
    only the `atexit` callback is registered.
    """

    def __init__(self, aggregator: ResultAggregator, signals: Tuple[int, ...] = (signal.SIGTERM,)):
        self.aggregator = aggregator
        self._signals = signals
        self._previous: Dict[int, Any] = {}
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> "ShutdownHook":
        if self._installed:
            return self
        atexit.register(self.handle_exit)
        if threading.current_thread() is threading.main_thread():
            for signum in self._signals:
                self._previous[signum] = signal.getsignal(signum)
                signal.signal(signum, self.handle_signal)
        else:
            logger.warning("Shutdown hook installed off the main thread: signal handlers skipped")
        self._installed = True
        logger.debug("Shutdown hook installed")
        return self

    def uninstall(self) -> None:
        if not self._installed:
            return
        atexit.unregister(self.handle_exit)
        if threading.current_thread() is threading.main_thread():
            for signum, previous in self._previous.items():
                signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()
        self._installed = False
        logger.debug("Shutdown hook uninstalled")

    def handle_exit(self) -> None:
        self.aggregator.flush(FlushTrigger.EXIT)

    def handle_signal(self, signum: int, frame: Any) -> None:
        # Flushing and passing the signal on both wait until an interrupted
        # aggregator update on this thread has completed.
        self.aggregator.run_outside_lock(lambda: self._terminate(signum, frame))

    def _terminate(self, signum: int, frame: Any) -> None:
        logger.warning(f"Received {signal.Signals(signum).name}: flushing test results")
        self.aggregator.flush(FlushTrigger.SIGNAL)

        previous = self._previous.get(signum)
        if callable(previous):
            previous(signum, frame)
            return
        if previous == signal.SIG_IGN:
            return

        signal.signal(signum, signal.SIG_DFL)
        os.kill(os.getpid(), signum)


__all__ = [
    "TestStatus",
    "TestOutcome",
    "RunSummary",
    "AggregatorState",
    "AggregatorRaceViolation",
    "FlushTrigger",
    "Reporter",
    "ResultAggregator",
    "ShutdownHook",
]
