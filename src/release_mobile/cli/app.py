"""Command-line entry point for release-mobile."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from release_mobile import __version__
from release_mobile.cli.commands import (
    ReleaseOptions,
    run_changelog,
    run_invalidate,
    run_jira_changelog,
    run_notify_slack,
    run_notify_slack_error,
    run_prod_changelog,
    run_release,
)
from release_mobile.config import ReleaseMobileConfig, load_config
from release_mobile.exceptions import ExitCode

PROG_NAME = "release-mobile"

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send diagnostic logging to stderr; ``--verbose`` shows every executed command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


ci_option = click.option(
    "--ci",
    is_flag=True,
    help="Indicates that the command is running in a CI environment.",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.option(
    "--verbose",
    is_flag=True,
    hidden=True,
    help="Enables verbose logging, including all executed shell commands.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Release automation for mobile and web app projects."""
    configure_logging(verbose)
    ctx.obj = load_config()


@cli.command("release")
@ci_option
@click.option("--branch", help="Branch to switch to before releasing.")
@click.option("--set-version", "set_version", help="Sets a specific version for the release.")
@click.option("--set-bn", "set_bn", help="Sets a specific build number for the release.")
@click.option("--tag-prefix", "tag_prefix", help="Sets a prefix for the release tag.")
@click.pass_obj
def release_cmd(
    config: ReleaseMobileConfig,
    ci: bool,
    branch: str | None,
    set_version: str | None,
    set_bn: str | None,
    tag_prefix: str | None,
) -> None:
    """Bump the version, update the changelog, then commit, tag and push."""
    options = ReleaseOptions(
        ci=ci,
        branch=branch,
        version=set_version,
        build_number=set_bn,
        tag_prefix=tag_prefix,
    )
    run_release(options, config, console, err_console)


@cli.command("prod_changelog")
@ci_option
@click.option(
    "--version",
    "version",
    required=True,
    help="Last version released to production.",
)
@click.pass_obj
def prod_changelog_cmd(config: ReleaseMobileConfig, ci: bool, version: str) -> None:
    """Print the production changelog since a version."""
    if not version:
        raise click.UsageError("Version argument is required")
    run_prod_changelog(version, config, console, err_console)


@cli.command("changelog")
@click.option("--ci", is_flag=True, hidden=True)
@click.argument("version")
@click.pass_obj
def changelog_cmd(config: ReleaseMobileConfig, ci: bool, version: str) -> None:
    """Print the changelog of a specific version."""
    run_changelog(version, config, console, err_console)


@cli.command("notify_slack")
@ci_option
@click.option("--appName", "app_name", required=True, help="Application name.")
@click.option("--message", help="Custom message.")
@click.option(
    "--messageWithChangelog",
    "message_with_changelog",
    default="false",
    help="Set to 'true' to send the custom message together with the changelog.",
)
@click.pass_obj
def notify_slack_cmd(
    config: ReleaseMobileConfig,
    ci: bool,
    app_name: str,
    message: str | None,
    message_with_changelog: str,
) -> None:
    """Send the current changelog or a custom message to Slack."""
    run_notify_slack(
        app_name,
        message,
        message_with_changelog == "true",
        config,
        console,
        err_console,
    )


@cli.command("notify_slack_error")
@ci_option
@click.option("--appName", "app_name", required=True, help="Application name.")
@click.pass_obj
def notify_slack_error_cmd(config: ReleaseMobileConfig, ci: bool, app_name: str) -> None:
    """Send an error notification to Slack."""
    run_notify_slack_error(app_name, config, console, err_console)


@cli.command("jira_changelog")
@ci_option
@click.argument("version")
@click.pass_obj
def jira_changelog_cmd(config: ReleaseMobileConfig, ci: bool, version: str) -> None:
    """Send the changelog of a version to the Jira automation webhook."""
    run_jira_changelog(version, config, console, err_console)


@cli.command("invalidate")
@ci_option
@click.pass_obj
def invalidate_cmd(config: ReleaseMobileConfig, ci: bool) -> None:
    """Invalidate the CloudFront cache."""
    run_invalidate(config, console, err_console)


def main(argv: list[str] | None = None) -> None:
    """Console script entry point.

    Usage errors exit with ``ExitCode.USAGE``; command errors exit with the
    code chosen at the command boundary.
    """
    try:
        cli.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(int(ExitCode.USAGE))
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        err_console.print("Aborted!")
        sys.exit(1)
