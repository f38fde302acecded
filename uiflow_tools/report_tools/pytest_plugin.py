# ================================================================================
# Result Collector Plugin
# ================================================================================
#
# Pytest plugin that feeds a ResultAggregator:
#
#   pytest_runtest_logstart   -> aggregator.ensure_initialized()
#   pytest_runtest_logreport  -> collect setup/call/teardown reports
#   pytest_runtest_logfinish  -> record one TestOutcome per test
#   pytest_sessionfinish      -> aggregator.flush()  (normal end of run)
#
# The abrupt-termination path (SIGTERM / interpreter exit) is covered by a
# ShutdownHook installed next to this plugin. Registered from the root
# conftest.py.
#
# ================================================================================

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

import pytest
from loguru import logger

from .result_aggregator import FlushTrigger, ResultAggregator, TestOutcome, TestStatus


PLUGIN_NAME = "uiflow-result-collector"


def _skip_reason(report) -> Optional[str]:
    if hasattr(report, "wasxfail"):
        return f"xfail: {report.wasxfail}" if report.wasxfail else "xfail"
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == 3:
        return str(longrepr[2])
    return str(longrepr) if longrepr else None


def build_outcome(
    nodeid: str,
    reports: Sequence,
    start_time: datetime,
    end_time: datetime,
) -> TestOutcome:
    """
    Collapse the phase reports of one test into a single TestOutcome.

    A failure in any phase makes the test Fail, with that phase's report
    text as the failure detail. Otherwise a skipped (or xfailed) phase makes
    it Skip. Everything else is Pass.
    """
    for report in reports:
        if report.failed:
            detail = report.longreprtext or f"{report.when} failed"
            if report.when != "call":
                detail = f"[{report.when}] {detail}"
            return TestOutcome.finished(nodeid, TestStatus.FAIL, start_time, end_time, detail)

    for report in reports:
        if report.skipped:
            return TestOutcome.finished(nodeid, TestStatus.SKIP, start_time, end_time, _skip_reason(report))

    return TestOutcome.finished(nodeid, TestStatus.PASS, start_time, end_time)


class ResultCollector:
    """Pytest hook implementations bound to one ResultAggregator."""

    def __init__(self, aggregator: ResultAggregator, clock: Callable[[], datetime] = datetime.now):
        self.aggregator = aggregator
        self._clock = clock
        self._reports: Dict[str, List] = {}
        self._started: Dict[str, datetime] = {}

    def pytest_runtest_logstart(self, nodeid, location):
        self.aggregator.ensure_initialized()
        self._started[nodeid] = self._clock()

    def pytest_runtest_logreport(self, report):
        self._reports.setdefault(report.nodeid, []).append(report)

    def pytest_runtest_logfinish(self, nodeid, location):
        end_time = self._clock()
        start_time = self._started.pop(nodeid, end_time)
        reports = self._reports.pop(nodeid, [])
        if not reports:
            logger.debug(f"No reports collected for {nodeid}")
            return
        self.aggregator.record(build_outcome(nodeid, reports, start_time, end_time))

    @pytest.hookimpl(trylast=True)
    def pytest_sessionfinish(self, session, exitstatus):
        self.aggregator.flush(FlushTrigger.SESSION_FINISH)


__all__ = [
    "PLUGIN_NAME",
    "ResultCollector",
    "build_outcome",
]
