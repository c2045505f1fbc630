"""Configuration loading from the process environment.

Recognized variables:

- ``SLACK_WEBHOOK_<APP>``: Slack webhook URL of an app
- ``JIRA_WEBHOOK_URL`` / ``JIRA_WEBHOOK_TOKEN``: Jira automation webhook
- ``CLOUD_DISTRIBUTION``: CloudFront distribution id
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from release_mobile.config.models import (
    CloudConfig,
    JiraConfig,
    ProjectConfig,
    ReleaseMobileConfig,
    SlackConfig,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

SLACK_WEBHOOK_PREFIX = "SLACK_WEBHOOK_"
JIRA_WEBHOOK_URL = "JIRA_WEBHOOK_URL"
JIRA_WEBHOOK_TOKEN = "JIRA_WEBHOOK_TOKEN"
CLOUD_DISTRIBUTION = "CLOUD_DISTRIBUTION"


def extract_slack_webhooks(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect ``SLACK_WEBHOOK_<APP>`` variables keyed by app name."""
    return {
        key[len(SLACK_WEBHOOK_PREFIX) :]: value
        for key, value in environ.items()
        if key.startswith(SLACK_WEBHOOK_PREFIX) and len(key) > len(SLACK_WEBHOOK_PREFIX)
    }


def load_config(
    root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReleaseMobileConfig:
    """Build the configuration.

    Args:
        root: Project root, defaults to the current directory
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        The configuration
    """
    env = os.environ if environ is None else environ
    return ReleaseMobileConfig(
        project=ProjectConfig(root=root or Path.cwd()),
        slack=SlackConfig(webhooks=extract_slack_webhooks(env)),
        jira=JiraConfig(
            webhook_url=env.get(JIRA_WEBHOOK_URL) or None,
            token=env.get(JIRA_WEBHOOK_TOKEN) or None,
        ),
        cloud=CloudConfig(distribution_id=env.get(CLOUD_DISTRIBUTION) or None),
    )
