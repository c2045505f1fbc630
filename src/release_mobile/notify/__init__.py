"""Release notifications (Slack, Jira)."""

from __future__ import annotations

from release_mobile.notify.jira import build_jira_payload, send_jira_changelog
from release_mobile.notify.slack import (
    build_changelog_message,
    build_error_message,
    send_slack_message,
)
from release_mobile.notify.webhook import post_json

__all__ = [
    "build_changelog_message",
    "build_error_message",
    "build_jira_payload",
    "post_json",
    "send_jira_changelog",
    "send_slack_message",
]
