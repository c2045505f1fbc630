"""Core business logic for release-mobile.

This module contains the fundamental building blocks:
- Version parsing and next-version arithmetic
- Commit message classification by change-kind markers
- Changelog rendering and section extraction
"""

from __future__ import annotations

from release_mobile.core.changelog import (
    ChangelogSection,
    extract_production_changes,
    extract_section,
    head_section,
    prepend_section,
    update_changelog,
)
from release_mobile.core.commits import (
    ChangeEntry,
    ChangeKind,
    CommitRecord,
    classify,
    classify_line,
)
from release_mobile.core.version import Version, compute_next_version, parse_version_line

__all__ = [
    "ChangeEntry",
    "ChangeKind",
    "ChangelogSection",
    "CommitRecord",
    "Version",
    "classify",
    "classify_line",
    "compute_next_version",
    "extract_production_changes",
    "extract_section",
    "head_section",
    "parse_version_line",
    "prepend_section",
    "update_changelog",
]
