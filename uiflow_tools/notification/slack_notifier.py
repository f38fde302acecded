"""
================================================================================
Slack Notifier
================================================================================

Posts a plain-text run summary to a Slack incoming webhook.

Message format:

    ✅ Test Execution PASSED
    Environment: DEV
    Total: 3  |  Passed: 3  |  Failed: 0  |  Skipped: 0
    Duration: 1m 5s
    Timestamp: 2026-01-01 10:00:00
    Report: <https://ci.example.com/reports/run.json|Click here to view the run summary>

Configuration (EnvironmentConfig keys):
    slack.enabled          Send only when true (default: false)
    slack.webhook_url      Incoming webhook URL (env: SLACK_WEBHOOK_URL)
    slack.report_base_url  Public base URL for report links (optional)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx
from loguru import logger

from uiflow_tools.common import format_duration
from uiflow_tools.report_tools.result_aggregator import RunSummary


DEFAULT_TIMEOUT = 10.0
REPORT_LINK_TEXT = "Click here to view the run summary"


@dataclass(frozen=True)
class NotificationSummary:
    """Plain-text payload fields for one run."""
    status: str
    environment: str
    total: int
    passed: int
    failed: int
    skipped: int
    duration: str
    timestamp: str
    report_link: Optional[str] = None

    def to_text(self) -> str:
        emoji = "❌" if self.status == "FAILED" else "✅"
        lines = [
            f"{emoji} Test Execution {self.status}",
            f"Environment: {self.environment}",
            f"Total: {self.total}  |  Passed: {self.passed}  |  "
            f"Failed: {self.failed}  |  Skipped: {self.skipped}",
            f"Duration: {self.duration}",
            f"Timestamp: {self.timestamp}",
        ]
        if self.report_link:
            lines.append(f"Report: {self.report_link}")
        return "\n".join(lines) + "\n"


class SlackNotifier:
    """
    Slack webhook notifier.

    Usable as a ResultAggregator reporter: calling it with a RunSummary
    builds the notification and sends it.

    Usage:
        >>> notifier = SlackNotifier.from_config(env_config)
        >>> notifier.send_message("Connectivity check")
    """

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        enabled: bool = False,
        environment: str = "dev",
        report_base_url: Optional[str] = None,
        report_path: Optional[Callable[[], Optional[Union[str, Path]]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize notifier.

        Args:
            webhook_url: Slack incoming webhook URL
            enabled: Master switch for run notifications
            environment: Environment name shown in the message
            report_base_url: Public base URL; the report file name is appended
            report_path: Returns the local report path at send time
            timeout: HTTP timeout in seconds
            transport: Custom httpx transport (mainly for tests)
        """
        self.webhook_url = (webhook_url or "").strip() or None
        self.enabled = enabled
        self.environment = environment
        self.report_base_url = (report_base_url or "").strip() or None
        self._report_path = report_path
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "SlackNotifier":
        """Build a notifier from an EnvironmentConfig."""
        return cls(
            webhook_url=config.get("slack.webhook_url"),
            enabled=bool(config.get("slack.enabled", False)),
            environment=config.environment,
            report_base_url=config.get("slack.report_base_url"),
            **kwargs,
        )

    # =========================================================================
    # Message building
    # =========================================================================

    def report_link(self, report_path: Optional[Union[str, Path]]) -> Optional[str]:
        """Slack-formatted link to the report, or its absolute local path."""
        if not report_path or not str(report_path).strip():
            return None
        path = Path(report_path)
        if self.report_base_url:
            base = self.report_base_url if self.report_base_url.endswith("/") else self.report_base_url + "/"
            return f"<{base}{path.name}|{REPORT_LINK_TEXT}>"
        return str(path.absolute())

    def build_summary(
        self,
        summary: RunSummary,
        report_path: Optional[Union[str, Path]] = None,
        timestamp: Optional[datetime] = None,
    ) -> NotificationSummary:
        environment = summary.environment or self.environment
        return NotificationSummary(
            status=summary.status,
            environment=environment.upper(),
            total=summary.total,
            passed=summary.passed,
            failed=summary.failed,
            skipped=summary.skipped,
            duration=format_duration(summary.duration_ms),
            timestamp=(timestamp or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
            report_link=self.report_link(report_path),
        )

    # =========================================================================
    # Sending
    # =========================================================================

    def __call__(self, summary: RunSummary) -> bool:
        report_path = self._report_path() if self._report_path else None
        return self.send(self.build_summary(summary, report_path))

    def send(self, notification: NotificationSummary) -> bool:
        """
        Send a run summary.

        Returns:
            True if Slack accepted the message
        """
        if not self.enabled:
            logger.info("Slack notifications are disabled. Set slack.enabled=true to enable.")
            return False
        sent = self.send_message(notification.to_text())
        if sent:
            logger.info("Test results sent to Slack successfully")
        return sent

    def send_message(self, text: str) -> bool:
        """
        Post arbitrary text to the webhook.

        HTTP errors are logged and reported as False.
        """
        if not self.webhook_url:
            logger.error("Slack webhook URL not configured. Set slack.webhook_url or SLACK_WEBHOOK_URL")
            return False

        try:
            with httpx.Client(timeout=httpx.Timeout(self.timeout), transport=self._transport) as client:
                response = client.post(self.webhook_url, json={"text": text})
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Slack webhook request failed: {e.response.status_code} - {e.response.text}"
            )
            return False
        except httpx.HTTPError as e:
            logger.error(f"Failed to send Slack message: {e}")
            return False

        logger.debug(f"Slack response: HTTP {response.status_code}")
        return True


__all__ = [
    "NotificationSummary",
    "SlackNotifier",
]
