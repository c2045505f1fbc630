"""Shared fixtures for release-mobile tests."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from release_mobile.config.loader import load_config
from release_mobile.core.commits import CommitRecord
from release_mobile.vcs.git import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

    from release_mobile.config.models import ReleaseMobileConfig

SAMPLE_PUBSPEC = """\
name: sample_app
description: A sample Flutter app.
# Keep the version in sync with the stores.
version: 1.2.3+41

environment:
  sdk: ">=3.0.0 <4.0.0"
"""

SAMPLE_CHANGELOG = """\
# 1.2.3+41 [01.03.2024 10:00]

- [feature] Add login screen [1201]
- [dev-fix] Fix flaky widget test
- [fix] Crash on start [1202]
# 1.2.2+40 [20.02.2024 09:30]

- [improvement] Faster image loading
# 1.2.1+39 [10.02.2024 16:45]

- [fix] Wrong currency symbol [1100]
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a pubspec.yaml and a CHANGELOG.md."""
    (tmp_path / "pubspec.yaml").write_text(SAMPLE_PUBSPEC)
    (tmp_path / "CHANGELOG.md").write_text(SAMPLE_CHANGELOG)
    return tmp_path


@pytest.fixture
def config(project_dir: Path) -> ReleaseMobileConfig:
    """Configuration rooted at the sample project, with no webhooks."""
    return load_config(project_dir, environ={})


@pytest.fixture
def sample_commits() -> list[CommitRecord]:
    """Commits with tagged, scoped and untagged message lines."""
    return [
        CommitRecord("a1", "[feature] Add login screen"),
        CommitRecord("b2", "Merge branch 'develop'\n\n[fix] Crash on start\n[dev-fix] Flaky test"),
        CommitRecord("c3", "Update dependencies"),
        CommitRecord("d4", "[app1] [improvement] Faster sync [1300]"),
    ]


@pytest.fixture
def mock_repo(tmp_path: Path) -> MagicMock:
    """Create a mock GitRepository."""
    repo = MagicMock(spec=GitRepository)
    repo.path = tmp_path
    repo.last_commit_touching.return_value = "abc123"
    repo.get_commits_since.return_value = []
    repo.push_release.return_value = "origin"
    return repo


def _git(path: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git():
    """Run a git command in a directory and return its output."""
    return _git


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """A git repository on branch ``develop`` with the sample project committed."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "commit.gpgsign", "false")
    _git(repo, "config", "tag.gpgsign", "false")
    (repo / "pubspec.yaml").write_text(SAMPLE_PUBSPEC)
    (repo / "CHANGELOG.md").write_text(SAMPLE_CHANGELOG)
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")
    _git(repo, "checkout", "-b", "develop")
    return repo
