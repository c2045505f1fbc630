"""Project manifest handling."""

from __future__ import annotations

from release_mobile.project.manifest import (
    read_manifest_version,
    read_manifest_version_line,
    update_manifest_version,
)

__all__ = [
    "read_manifest_version",
    "read_manifest_version_line",
    "update_manifest_version",
]
