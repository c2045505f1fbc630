"""Command implementations."""

from __future__ import annotations

from release_mobile.cli.commands.changelog import run_changelog, run_prod_changelog
from release_mobile.cli.commands.invalidate import run_invalidate
from release_mobile.cli.commands.notify import (
    run_jira_changelog,
    run_notify_slack,
    run_notify_slack_error,
)
from release_mobile.cli.commands.release import ReleaseOptions, run_release

__all__ = [
    "ReleaseOptions",
    "run_changelog",
    "run_invalidate",
    "run_jira_changelog",
    "run_notify_slack",
    "run_notify_slack_error",
    "run_prod_changelog",
    "run_release",
]
