"""
================================================================================
UIFlow Tools
================================================================================

Run-level infrastructure for the UI automation suites.

Modules:
    - common: Logging setup and shared helpers
    - report_tools: Result aggregation, summary reporters and the pytest plugin
    - notification: Slack run-summary notifications

Example:
    from uiflow_tools.report_tools import ResultAggregator, LogSummaryReporter

    aggregator = ResultAggregator(reporters=[LogSummaryReporter()])
    aggregator.ensure_initialized()
    aggregator.record(outcome)
    aggregator.flush()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
    "notification",
]
