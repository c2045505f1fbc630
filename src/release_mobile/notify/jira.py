"""Jira automation webhook for release changelogs.

The webhook receives the changelog of a release together with the issue
numbers referenced in it (``[1234]`` markers), so a Jira automation rule
can set the fix version on those issues.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from release_mobile.notify.webhook import post_json

if TYPE_CHECKING:
    import httpx

TOKEN_HEADER = "X-Automation-Webhook-Token"

_ISSUE_NUMBER = re.compile(r"\[(\d+)\]")


def extract_issue_numbers(changelog: str) -> list[str]:
    """Return the issue numbers of every ``[digits]`` marker, in order."""
    return _ISSUE_NUMBER.findall(changelog)


def build_jira_payload(changelog: str, release_version: str) -> dict[str, Any]:
    return {
        "issues": extract_issue_numbers(changelog),
        "data": {
            "changelog": changelog,
            "releaseVersion": release_version,
        },
    }


def send_jira_changelog(
    webhook_url: str,
    token: str,
    payload: dict[str, Any],
    *,
    client: httpx.Client | None = None,
) -> httpx.Response:
    """Deliver ``payload`` to the Jira automation webhook."""
    headers = {"Accept": "application/json", TOKEN_HEADER: token}
    return post_json(webhook_url, payload, headers, client=client)
