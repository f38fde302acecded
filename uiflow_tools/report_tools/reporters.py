"""
================================================================================
Summary Reporters
================================================================================

Consumers of the RunSummary produced by ResultAggregator.flush().

Every reporter is a plain callable `reporter(summary)`. The aggregator calls
them in order, once per process.

Features:
- Console summary through loguru
- JSON summary file with per-test rows
- Allure `environment.properties` for the report's Environment widget

================================================================================
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from uiflow_tools.common import ensure_directory, format_duration

from .result_aggregator import RunSummary, TestStatus


class LogSummaryReporter:
    """Logs the execution summary block."""

    def __call__(self, summary: RunSummary) -> None:
        status_emoji = "✅" if summary.status == "PASSED" else "❌"
        logger.info("=" * 60)
        logger.info("TEST EXECUTION SUMMARY")
        logger.info("=" * 60)
        if summary.environment:
            logger.info(f"Environment:    {summary.environment.upper()}")
        logger.info(f"Total Tests:    {summary.total}")
        logger.info(f"Passed:         {summary.passed} ✅")
        logger.info(f"Failed:         {summary.failed} ❌")
        logger.info(f"Skipped:        {summary.skipped} ⏭️")
        logger.info(f"Pass Rate:      {summary.pass_rate:.2f}%")
        logger.info(f"Duration:       {format_duration(summary.duration_ms)}")
        logger.info(f"Status:         {summary.status} {status_emoji}")
        logger.info("=" * 60)

        for outcome in summary.outcomes:
            if outcome.status is TestStatus.FAIL:
                lines = (outcome.failure_detail or "").strip().splitlines()
                logger.info(f"FAILED {outcome.name}: {lines[-1] if lines else 'no detail'}")


class JsonSummaryReporter:
    """
    Writes `run_summary_<timestamp>.json` under the output directory.

    Attributes:
        last_path: Path of the most recent file written, if any
    """

    def __init__(self, output_dir: Union[str, Path] = "reports"):
        self.output_dir = Path(output_dir)
        self.last_path: Optional[Path] = None

    def __call__(self, summary: RunSummary) -> Path:
        ensure_directory(str(self.output_dir))
        timestamp = summary.finished_at.strftime("%Y%m%d_%H%M%S")
        path = self.output_dir / f"run_summary_{timestamp}.json"

        payload = summary.to_dict()
        payload["generated_at"] = datetime.now().isoformat()
        payload["duration"] = format_duration(summary.duration_ms)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        self.last_path = path
        logger.info(f"Run summary written: {path}")
        return path


class AllureEnvironmentReporter:
    """
    Writes `environment.properties` into the Allure results directory.

    Does nothing when no results directory is configured.
    """

    def __init__(self, results_dir: Optional[Union[str, Path]], browser: Optional[str] = None):
        self.results_dir = Path(results_dir) if results_dir else None
        self.browser = browser

    def __call__(self, summary: RunSummary) -> Optional[Path]:
        if self.results_dir is None:
            logger.debug("Allure results directory not configured; environment.properties skipped")
            return None

        properties = {
            "Environment": (summary.environment or "unknown").upper(),
            "Total": summary.total,
            "Passed": summary.passed,
            "Failed": summary.failed,
            "Skipped": summary.skipped,
            "Pass.Rate": f"{summary.pass_rate:.2f}%",
            "Duration": format_duration(summary.duration_ms),
        }
        if self.browser:
            properties["Browser"] = self.browser

        ensure_directory(str(self.results_dir))
        path = self.results_dir / "environment.properties"
        with open(path, "w", encoding="utf-8") as f:
            for key, value in properties.items():
                f.write(f"{key}={value}\n")

        logger.debug(f"Allure environment written: {path}")
        return path


__all__ = [
    "LogSummaryReporter",
    "JsonSummaryReporter",
    "AllureEnvironmentReporter",
]
