"""
Run-summary notifications.

Exports:
    - SlackNotifier: Slack incoming-webhook notifier
    - NotificationSummary: Plain-text summary payload
"""

from .slack_notifier import NotificationSummary, SlackNotifier

__all__ = [
    "NotificationSummary",
    "SlackNotifier",
]
