"""Implementation of the 'changelog' and 'prod_changelog' commands.

Both commands only read the changelog. 'changelog' prints the section of
one version as written; 'prod_changelog' prints the cleaned,
production-facing changes made since the last production version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_mobile.cli.errors import exit_on_error
from release_mobile.core.changelog import (
    extract_production_changes,
    extract_section,
    read_changelog,
)
from release_mobile.exceptions import MissingChangelogError, VersionNotFoundError

if TYPE_CHECKING:
    from rich.console import Console

    from release_mobile.config.models import ReleaseMobileConfig


def print_plain(console: Console, text: str) -> None:
    """Print changelog text as is (no markup, highlighting or wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def run_changelog(
    version: str,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
) -> list[str]:
    """Run the changelog command.

    Args:
        version: Version whose section to print
        config: Release configuration
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The printed lines, header first
    """
    with exit_on_error(err_console):
        document = read_changelog(config.project.changelog_file)
        section = extract_section(document, version)
        if not section.found:
            raise VersionNotFoundError(version)

    output = [section.header, *section.lines]
    print_plain(console, f"Changelog for version {version}:\n")
    print_plain(console, "\n".join(output))
    return output


def run_prod_changelog(
    version: str,
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
) -> list[str]:
    """Run the prod_changelog command.

    Args:
        version: Last version released to production
        config: Release configuration
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The cleaned changelog lines
    """
    changelog_file = config.project.changelog_file

    with exit_on_error(err_console):
        document = read_changelog(changelog_file)
        if not document:
            raise MissingChangelogError(changelog_file.name, empty=True)

        console.print("Reading changes...")
        changes = extract_production_changes(document, version)
        console.print("  [green]✓[/] Changes have been read")

    console.print("[green]Logging final changelog:[/]\n")
    print_plain(console, "\n".join(changes) + "\n")
    return changes
