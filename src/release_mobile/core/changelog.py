"""Changelog rendering and extraction.

The changelog is a plain text file with one section per release, newest
first::

    # 1.2.4+17 [05.03.2024 14:30]

    - [feature] Add login screen
    - [fix] Crash on start [1234]
    # 1.2.3+16 [01.03.2024 09:12]
    ...

New sections are always inserted at the top. Sections are read back either
verbatim (``changelog``) or cleaned for production release notes
(``prod_changelog``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from release_mobile.core.commits import classify
from release_mobile.core.lines import read_lines, write_lines
from release_mobile.exceptions import MissingChangelogError, NoNewChangesError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from release_mobile.core.commits import ChangeEntry
    from release_mobile.core.version import Version
    from release_mobile.vcs.git import GitRepository

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M"
SECTION_BOUNDARY = "# "

_HEADER_LIKE = re.compile(r"#.*\[")
_DEV_ENTRY = re.compile(r"^- \[dev-")
_WORD_MARKER = re.compile(r"\[[a-z]+\]")
_NUMBER_MARKER = re.compile(r"\[[0-9]+\]")


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``dd.MM.yyyy HH:mm``."""
    return moment.strftime(TIMESTAMP_FORMAT)


def section_header(version: Version | str, moment: datetime) -> str:
    return f"# {version} [{format_timestamp(moment)}]"


# =============================================================================
# File access
# =============================================================================


def read_changelog(path: Path) -> list[str]:
    """Read the changelog as a list of lines.

    Raises:
        MissingChangelogError: If the file does not exist
    """
    if not path.is_file():
        raise MissingChangelogError(path.name)
    return read_lines(path)


def write_changelog(path: Path, lines: Sequence[str]) -> None:
    write_lines(path, lines)


# =============================================================================
# Rendering
# =============================================================================


def prepend_section(
    document: Sequence[str],
    version: Version | str,
    entries: Iterable[ChangeEntry | str],
    moment: datetime,
) -> list[str]:
    """Insert a new version section at the top of the changelog.

    The section is the header, one blank line, then the entries in the
    given order. Existing lines are kept as they are.

    Args:
        document: Current changelog lines
        version: Version the section is for
        entries: Entry lines (already sorted by the classifier)
        moment: Release time, rendered in the header

    Returns:
        The new changelog lines
    """
    section = [section_header(version, moment), "", *(str(entry) for entry in entries)]
    return [*section, *document]


def update_changelog(
    repo: GitRepository,
    changelog_path: Path,
    version: Version,
    scope: str | None = None,
    now: datetime | None = None,
) -> list[ChangeEntry]:
    """Add a section for ``version`` built from the commits since the last changelog edit.

    Args:
        repo: Git repository holding the changelog
        changelog_path: Path of the changelog file
        version: Version being released
        scope: Optional scope token narrowing the commits (the tag prefix)
        now: Release time, defaults to the current local time

    Returns:
        The entries written to the new section

    Raises:
        MissingChangelogError: If the changelog does not exist
        ExternalCommandError: If a git command fails
    """
    document = read_changelog(changelog_path)

    last_edit = repo.last_commit_touching(changelog_path)
    commits = repo.get_commits_since(last_edit)
    logger.debug("Found %d commit(s) since %s", len(commits), last_edit or "the first commit")

    entries = classify(commits, scope)
    updated = prepend_section(document, version, entries, now or datetime.now())
    write_changelog(changelog_path, updated)
    return entries


# =============================================================================
# Extraction
# =============================================================================


@dataclass
class ChangelogSection:
    """Result of looking up a version in the changelog."""

    version: str
    header: str | None = None
    lines: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.header is not None


def extract_section(document: Iterable[str], version: str) -> ChangelogSection:
    """Return the section of ``version``.

    The section starts at the first line containing ``# {version} [``. This
    is a substring check, so ``1.2.3`` also matches a ``# 11.2.3 [...]``
    header. It ends before the next line starting with ``# ``. Blank lines
    are skipped.

    Args:
        document: Changelog lines
        version: Version to look up, as written in the header

    Returns:
        The section; ``found`` is False when no header matched
    """
    section = ChangelogSection(version=version)
    opening = f"# {version} ["

    for line in document:
        if not section.found:
            if opening in line:
                section.header = line
            continue
        if line.startswith(SECTION_BOUNDARY):
            break
        if line:
            section.lines.append(line)

    return section


def _is_version_header(line: str, version: str) -> bool:
    return f"# {version} [" in line or f"# {version}+" in line


def clean_entry(line: str) -> str:
    """Remove ``[word]`` tag markers and ``[123]`` issue markers from a line."""
    return _NUMBER_MARKER.sub("", _WORD_MARKER.sub("", line))


def extract_production_changes(document: Sequence[str], version: str) -> list[str]:
    """Collect the production-facing changes made after ``version``.

    ``version`` is the last version shipped to production. Every section
    above it contributes its entries, minus development-only entries
    (``- [dev-...]``), with tag and issue markers stripped.

    Args:
        document: Changelog lines, newest section first
        version: Last production version

    Returns:
        Cleaned, non-empty lines

    Raises:
        MissingChangelogError: If the document is empty
        NoNewChangesError: If the newest section already is ``version``
    """
    if not document:
        raise MissingChangelogError("CHANGELOG.md", empty=True)
    if _is_version_header(document[0], version):
        raise NoNewChangesError(version)

    changes: list[str] = []
    for line in document[1:]:
        if _is_version_header(line, version):
            break
        if _HEADER_LIKE.search(line) or _DEV_ENTRY.match(line):
            continue
        cleaned = clean_entry(line)
        if cleaned.strip():
            changes.append(cleaned)
    return changes


def head_section(document: Sequence[str], version: str) -> list[str]:
    """Return the newest section, header included, if it belongs to ``version``.

    Raises:
        NoNewChangesError: If the newest section is for another version
    """
    if not document or version not in document[0]:
        raise NoNewChangesError(version)

    section = [document[0]]
    for line in document[1:]:
        if "#" in line:
            break
        section.append(line)
    return section
