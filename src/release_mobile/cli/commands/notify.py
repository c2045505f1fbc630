"""Implementation of the Slack and Jira notification commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_mobile.cli.commands.changelog import print_plain
from release_mobile.cli.errors import exit_on_error
from release_mobile.core.changelog import extract_section, head_section, read_changelog
from release_mobile.exceptions import VersionNotFoundError
from release_mobile.notify.jira import build_jira_payload, send_jira_changelog
from release_mobile.notify.slack import (
    build_changelog_message,
    build_error_message,
    send_slack_message,
)
from release_mobile.project.manifest import read_manifest_version

if TYPE_CHECKING:
    import httpx
    from rich.console import Console

    from release_mobile.config.models import ReleaseMobileConfig


def run_notify_slack(
    app_name: str,
    message: str | None,
    with_changelog: bool,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
    client: httpx.Client | None = None,
) -> str:
    """Run the notify_slack command.

    A custom message alone is sent as is. Otherwise the newest changelog
    section, which must belong to the manifest's current version, is sent,
    followed by the custom message when ``with_changelog`` is set.

    Args:
        app_name: App whose webhook to use (``SLACK_WEBHOOK_<APP>``)
        message: Optional custom message
        with_changelog: Send the custom message together with the changelog
        config: Release configuration
        console: Console for standard output
        err_console: Console for error output
        client: Optional HTTP client

    Returns:
        The text that was sent
    """
    with exit_on_error(err_console):
        webhook_url = config.slack.webhook_for(app_name)

        if message is not None and not with_changelog:
            console.print(f'Sending message: "{message}"', markup=False)
            send_slack_message(webhook_url, message, client=client)
            console.print("  [green]✓[/] Message sent")
            return message

        version = read_manifest_version(config.project.manifest_file).base
        document = read_changelog(config.project.changelog_file)
        section = head_section(document, version)

        text = build_changelog_message(section, message if with_changelog else None)
        console.print("Sending changelog...")
        send_slack_message(webhook_url, text, client=client)
        console.print("  [green]✓[/] Changelog sent")
        return text


def run_notify_slack_error(
    app_name: str,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
    client: httpx.Client | None = None,
) -> str:
    """Run the notify_slack_error command.

    Returns:
        The text that was sent
    """
    with exit_on_error(err_console):
        webhook_url = config.slack.webhook_for(app_name)
        version = read_manifest_version(config.project.manifest_file).base
        text = build_error_message(version, app_name)
        send_slack_message(webhook_url, text, client=client)

    console.print("  [green]✓[/] Error notification sent")
    return text


def run_jira_changelog(
    release_version: str,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
    client: httpx.Client | None = None,
) -> int:
    """Run the jira_changelog command.

    Args:
        release_version: Version whose changelog section to send
        config: Release configuration
        console: Console for standard output
        err_console: Console for error output
        client: Optional HTTP client

    Returns:
        HTTP status of the webhook response
    """
    with exit_on_error(err_console):
        webhook_url, token = config.jira.require_webhook()

        document = read_changelog(config.project.changelog_file)
        section = extract_section(document, release_version)
        if not section.found:
            raise VersionNotFoundError(release_version)

        changelog = "\n".join([section.header, *section.lines])
        print_plain(console, changelog)

        payload = build_jira_payload(changelog, release_version)
        response = send_jira_changelog(webhook_url, token, payload, client=client)

    console.print(f"Response status: {response.status_code}")
    print_plain(console, f"Response body: {response.text}")
    return response.status_code
