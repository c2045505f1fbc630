"""Command-line interface for release-mobile."""

from __future__ import annotations

from release_mobile.cli.app import cli, main

__all__ = ["cli", "main"]
