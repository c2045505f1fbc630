"""Implementation of the 'invalidate' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_mobile.cli.errors import exit_on_error
from release_mobile.cloud import invalidate_distribution

if TYPE_CHECKING:
    from rich.console import Console

    from release_mobile.config.models import ReleaseMobileConfig


def run_invalidate(
    config: ReleaseMobileConfig,
    console: Console,
    err_console: Console,
) -> None:
    """Invalidate every path of the configured CloudFront distribution."""
    with exit_on_error(err_console):
        console.print("Invalidating CloudFront cache...")
        invalidate_distribution(config.cloud.distribution_id)

    console.print("  [green]✓[/] Cache successfully invalidated")
