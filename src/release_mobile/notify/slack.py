"""Slack release notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_mobile.notify.webhook import post_json

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx


def build_changelog_message(section: Sequence[str], message: str | None = None) -> str:
    """Format a changelog section, optionally followed by a custom message."""
    text = "\n".join(section) + "\n"
    if message:
        text = f"{text}\n{message}"
    return text


def build_error_message(version: str, app_name: str) -> str:
    return (
        f"Something went wrong during the creation of version: {version} "
        f"for project: {app_name}\n"
    )


def send_slack_message(
    webhook_url: str,
    text: str,
    *,
    client: httpx.Client | None = None,
) -> int:
    """Send ``text`` to a Slack incoming webhook and return the HTTP status."""
    return post_json(webhook_url, {"text": text}, client=client).status_code
