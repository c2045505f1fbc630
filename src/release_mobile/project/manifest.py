"""Manifest (pubspec.yaml) version manipulation.

This module reads and rewrites the ``version:`` line of the project
manifest. It works line by line instead of parsing YAML so that comments,
ordering and formatting of every other line are preserved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from release_mobile.core.lines import read_lines, write_lines
from release_mobile.core.version import VERSION_KEY, Version, parse_version_line
from release_mobile.exceptions import MalformedManifestError, MissingManifestError

if TYPE_CHECKING:
    from pathlib import Path


def _read_lines(path: Path) -> list[str]:
    if not path.is_file():
        raise MissingManifestError(path)
    return read_lines(path)


def _version_line_index(lines: list[str], path: Path) -> int:
    for index, line in enumerate(lines):
        if line.startswith(VERSION_KEY):
            return index
    raise MalformedManifestError(f"no version line in {path}")


def read_manifest_version_line(path: Path) -> str:
    """Get the raw version line from the manifest.

    Args:
        path: Path to pubspec.yaml

    Returns:
        The first line starting with ``version``

    Raises:
        MissingManifestError: If the manifest does not exist
        MalformedManifestError: If it has no version line
    """
    lines = _read_lines(path)
    return lines[_version_line_index(lines, path)]


def read_manifest_version(path: Path) -> Version:
    """Get the parsed version from the manifest."""
    return parse_version_line(read_manifest_version_line(path))


def update_manifest_version(path: Path, version: Version | str) -> Path:
    """Replace the version line of the manifest.

    Every other line is written back unchanged and in the same order. The
    file always ends with a newline.

    Args:
        path: Path to pubspec.yaml
        version: New version

    Returns:
        Path to the updated manifest

    Raises:
        MissingManifestError: If the manifest does not exist
        MalformedManifestError: If it has no version line
    """
    lines = _read_lines(path)
    index = _version_line_index(lines, path)
    lines[index] = f"{VERSION_KEY}: {version}"
    write_lines(path, lines)
    return path
