"""Implementation of the 'release' command.

The release command bumps the version, records the changelog, then commits,
tags and pushes the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_mobile.cli.errors import exit_on_error
from release_mobile.core.changelog import update_changelog
from release_mobile.core.version import compute_next_version
from release_mobile.project.manifest import (
    read_manifest_version_line,
    update_manifest_version,
)
from release_mobile.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_mobile.config.models import ReleaseMobileConfig
    from release_mobile.core.version import Version


@dataclass(frozen=True)
class ReleaseOptions:
    """Command-line options of a release."""

    ci: bool = False
    branch: str | None = None
    version: str | None = None
    build_number: str | None = None
    tag_prefix: str | None = None

    def tag_for(self, version: Version) -> str:
        """Git tag of ``version``: ``{prefix}_X.Y.Z``, or ``X.Y.Z`` without a prefix."""
        if self.tag_prefix:
            return f"{self.tag_prefix}_{version.base}"
        return version.base


def run_release(
    options: ReleaseOptions,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
    repo: GitRepository | None = None,
) -> Version:
    """Run the release command.

    Args:
        options: Parsed command-line options
        config: Release configuration
        console: Console for standard output
        err_console: Console for error output
        repo: Git repository (defaults to the project root)

    Returns:
        The released version
    """
    project = config.project
    branch = options.branch or project.default_branch

    with exit_on_error(err_console):
        repo = repo or GitRepository(project.root)

        console.print(f"Checking out to branch [cyan]{branch}[/]")
        repo.checkout(branch)
        console.print(f"  [green]✓[/] Switched to branch {branch}")

        console.print("Updating build number...")
        current_line = read_manifest_version_line(project.manifest_file)
        next_version = compute_next_version(
            current_line,
            explicit_version=options.version,
            explicit_build_number=options.build_number,
        )
        update_manifest_version(project.manifest_file, next_version)
        console.print(f"  [green]✓[/] Updated build number to [green]{next_version}[/]")

        console.print("Updating changelog...")
        entries = update_changelog(
            repo,
            project.changelog_file,
            next_version,
            scope=options.tag_prefix,
        )
        console.print(f"  [green]✓[/] Updated changelog ({len(entries)} entries)")

        console.print("Committing pre-release updates...")
        repo.commit_all(project.release_commit_message)
        console.print("  [green]✓[/] Changes committed")

        tag = options.tag_for(next_version)
        console.print("Creating tag...")
        repo.create_tag(tag)
        console.print(f"  [green]✓[/] Tag [cyan]{tag}[/] created")

        console.print("Pushing changes...")
        remote = repo.push_release(
            tag,
            ci=options.ci,
            remote=project.remote,
            ci_remote=project.ci_remote,
        )
        console.print(f"  [green]✓[/] Changes pushed to {remote}")

    console.print(f"\n[green]Released version {next_version}![/]")
    return next_version
