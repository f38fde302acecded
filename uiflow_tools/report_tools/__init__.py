"""
================================================================================
Report Tools
================================================================================

Run-level result collection and reporting.

Exports:
    - ResultAggregator: Exactly-once init / exactly-once flush outcome store
    - ShutdownHook: Flush on SIGTERM or interpreter exit
    - TestOutcome, TestStatus, RunSummary: Result data
    - LogSummaryReporter, JsonSummaryReporter, AllureEnvironmentReporter
    - ResultCollector: Pytest plugin feeding the aggregator

================================================================================
"""

from .result_aggregator import (
    AggregatorRaceViolation,
    AggregatorState,
    FlushTrigger,
    ResultAggregator,
    RunSummary,
    ShutdownHook,
    TestOutcome,
    TestStatus,
)
from .reporters import AllureEnvironmentReporter, JsonSummaryReporter, LogSummaryReporter
from .pytest_plugin import PLUGIN_NAME, ResultCollector, build_outcome

__all__ = [
    "AggregatorRaceViolation",
    "AggregatorState",
    "FlushTrigger",
    "ResultAggregator",
    "RunSummary",
    "ShutdownHook",
    "TestOutcome",
    "TestStatus",
    "AllureEnvironmentReporter",
    "JsonSummaryReporter",
    "LogSummaryReporter",
    "PLUGIN_NAME",
    "ResultCollector",
    "build_outcome",
]
