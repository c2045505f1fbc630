"""Commit message classification.

Changelog-worthy commit lines start with a bracketed change-kind marker,
optionally preceded by a bracketed scope (the app name in a monorepo)::

    [feature] Add login screen
    [app1] [fix] Crash on start [1234]

Every line of a commit message is checked on its own, so one commit may
contribute several changelog entries.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

ENTRY_PREFIX = "- "


class ChangeKind(enum.Enum):
    """Change-kind markers, in matching order."""

    FEATURE = "feature"
    FIX = "fix"
    REVERT = "revert"
    IMPROVEMENT = "improvement"
    REFACTOR = "refactor"
    DEV_FEATURE = "dev-feature"
    DEV_FIX = "dev-fix"
    DEV_IMPROVEMENT = "dev-improvement"

    @property
    def marker(self) -> str:
        return f"[{self.value}]"

    @property
    def is_dev(self) -> bool:
        """Development-only changes are left out of production changelogs."""
        return self.value.startswith("dev-")


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit as read from git history."""

    sha: str
    raw_message: str

    @property
    def lines(self) -> list[str]:
        return [line.strip() for line in self.raw_message.strip().split("\n")]


@dataclass(frozen=True, slots=True)
class ChangeEntry:
    """A single changelog line derived from a commit message line."""

    kind: ChangeKind
    text: str
    scope: str | None = None

    def __str__(self) -> str:
        return self.text


FALLBACK_ENTRY = ChangeEntry(
    kind=ChangeKind.DEV_IMPROVEMENT,
    text=f"{ENTRY_PREFIX}{ChangeKind.DEV_IMPROVEMENT.marker} Developer changes.",
)


def _as_entry_text(line: str) -> str:
    if line.startswith(ENTRY_PREFIX):
        return line
    return f"{ENTRY_PREFIX}{line}"


def classify_line(line: str, scope: str | None = None) -> ChangeEntry | None:
    """Classify one commit message line.

    Two independent rules decide whether a line qualifies when a scope is
    given:

    1. The line starts with ``[scope]`` and the rest starts with a marker.
    2. The line starts with a marker and the text after it mentions the
       scope anywhere.

    Without a scope, any line starting with a marker qualifies.

    Args:
        line: A single line of a commit message
        scope: Optional scope token (e.g. the tag prefix of an app)

    Returns:
        The entry, or None if the line is not changelog-worthy
    """
    stripped = line.strip()

    if scope and stripped.startswith(f"[{scope}]"):
        rest = stripped[len(scope) + 2 :].strip()
        for kind in ChangeKind:
            if rest.startswith(kind.marker):
                return ChangeEntry(kind=kind, text=_as_entry_text(stripped), scope=scope)
        return None

    for kind in ChangeKind:
        if not stripped.startswith(kind.marker):
            continue
        if not scope:
            return ChangeEntry(kind=kind, text=_as_entry_text(stripped))
        if scope in stripped[len(kind.marker) :]:
            return ChangeEntry(kind=kind, text=_as_entry_text(stripped), scope=scope)
        return None

    return None


def classify(
    commits: Iterable[CommitRecord],
    scope: str | None = None,
) -> list[ChangeEntry]:
    """Collect the changelog entries of a set of commits.

    Entries are sorted by their text so the changelog does not depend on
    commit order. Duplicates are kept. When nothing qualifies, a single
    ``[dev-improvement] Developer changes.`` entry is returned.

    Args:
        commits: Commits to classify
        scope: Optional scope token narrowing the selection

    Returns:
        Sorted, non-empty list of entries
    """
    entries = [
        entry
        for commit in commits
        for line in commit.lines
        if (entry := classify_line(line, scope)) is not None
    ]
    if not entries:
        return [FALLBACK_ENTRY]
    return sorted(entries, key=lambda entry: entry.text)
