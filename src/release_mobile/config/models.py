"""Configuration models for release-mobile.

The configuration is built once at process start (see
:func:`release_mobile.config.loader.load_config`) and passed explicitly to
the commands that need it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from release_mobile.exceptions import WebhookConfigError, WebhookNotFoundError


class ProjectConfig(BaseModel):
    """Files and git conventions of the project being released."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(default_factory=Path.cwd)
    manifest_path: Path = Path("pubspec.yaml")
    changelog_path: Path = Path("CHANGELOG.md")
    default_branch: str = "develop"
    release_commit_message: str = "Pre-release updates"
    remote: str = "origin"
    ci_remote: str = "originSSH"

    @property
    def manifest_file(self) -> Path:
        return self.root / self.manifest_path

    @property
    def changelog_file(self) -> Path:
        return self.root / self.changelog_path


class SlackConfig(BaseModel):
    """Incoming Slack webhooks, one per app."""

    model_config = ConfigDict(frozen=True)

    webhooks: dict[str, str] = Field(default_factory=dict)

    @property
    def available_apps(self) -> list[str]:
        return sorted(self.webhooks)

    def webhook_for(self, app_name: str) -> str:
        """Resolve the webhook URL of ``app_name``.

        The name is looked up as given, then upper-cased.

        Raises:
            WebhookConfigError: If no Slack webhook is configured at all
            WebhookNotFoundError: If none is configured for this app
        """
        if not self.webhooks:
            raise WebhookConfigError(
                "No webhooks configured. Required format: SLACK_WEBHOOK_APPNAME"
            )
        url = self.webhooks.get(app_name) or self.webhooks.get(app_name.upper())
        if not url:
            raise WebhookNotFoundError(app_name, self.available_apps)
        return url


class JiraConfig(BaseModel):
    """Jira automation webhook."""

    model_config = ConfigDict(frozen=True)

    webhook_url: str | None = None
    token: str | None = None

    def require_webhook(self) -> tuple[str, str]:
        """Return ``(url, token)``.

        Raises:
            WebhookConfigError: If the URL or the token is missing
        """
        if not self.webhook_url:
            raise WebhookConfigError("No Jira webhook configured. Required: JIRA_WEBHOOK_URL")
        if not self.token:
            raise WebhookConfigError("Jira token not provided. Required: JIRA_WEBHOOK_TOKEN")
        return self.webhook_url, self.token


class CloudConfig(BaseModel):
    """AWS CloudFront settings."""

    model_config = ConfigDict(frozen=True)

    distribution_id: str | None = None


class ReleaseMobileConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(frozen=True)

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    jira: JiraConfig = Field(default_factory=JiraConfig)
    cloud: CloudConfig = Field(default_factory=CloudConfig)
