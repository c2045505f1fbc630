"""Git operations used by the release pipeline.

All commands run through the ``git`` executable in the repository
directory. A non-zero exit status raises :class:`ExternalCommandError`,
which aborts the whole release: nothing is retried or rolled back.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from release_mobile.core.commits import CommitRecord
from release_mobile.exceptions import BranchNotFoundError, ExternalCommandError

logger = logging.getLogger(__name__)

SSH_HOST_PREFIX = "git@github.com:"
_HTTPS_PREFIXES = ("https://github.com/",)


def to_ssh_url(url: str) -> str:
    """Rewrite a GitHub HTTPS remote URL (optionally with a user) to SSH form."""
    for prefix in _HTTPS_PREFIXES:
        if url.startswith(prefix):
            return SSH_HOST_PREFIX + url[len(prefix) :]
    if url.startswith("https://") and "@github.com/" in url:
        return SSH_HOST_PREFIX + url.split("@github.com/", 1)[1]
    return url


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else Path.cwd()

    def _run(self, *args: str) -> str:
        command = ["git", *args]
        logger.debug("Running: %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
                cwd=self.path,
            )
        except subprocess.CalledProcessError as e:
            raise ExternalCommandError(command, e.returncode, e.stderr) from e
        except FileNotFoundError as e:
            raise ExternalCommandError(command, 127, "git executable not found") from e
        return result.stdout

    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------

    def current_branch(self) -> str:
        return self._run("branch", "--show-current").strip()

    def list_branches(self) -> list[str]:
        """List local and remote branch names (``remotes/origin/...`` for remotes)."""
        output = self._run("branch", "-a")
        branches = [line.replace("*", "").strip() for line in output.splitlines()]
        return [branch for branch in branches if branch]

    def checkout(self, branch: str) -> None:
        """Switch to ``branch``.

        A branch that only exists on origin is created locally, tracking the
        remote one.

        Raises:
            BranchNotFoundError: If the branch exists neither locally nor on origin
        """
        branches = self.list_branches()
        remote_branch = f"remotes/origin/{branch}"

        if branch not in branches:
            if remote_branch not in branches:
                raise BranchNotFoundError(branch)
            logger.info("Branch %s is remote, creating a tracking branch", branch)
            self._run("checkout", "-b", branch, "--track", remote_branch)
            return

        if self.current_branch() == branch:
            logger.info("Already on %s branch", branch)
            return
        self._run("checkout", branch)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def last_commit_touching(self, path: Path | str) -> str:
        """Get the hash of the last commit that modified ``path`` (empty if none)."""
        return self._run("rev-list", "HEAD", "-1", "--", str(path)).strip()

    def rev_list(self, revision_range: str) -> list[str]:
        output = self._run("rev-list", revision_range)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def commit_message(self, sha: str) -> str:
        return self._run("log", "--format=%B", "-n", "1", sha).strip()

    def get_commits_since(self, revision: str | None) -> list[CommitRecord]:
        """Get the commits made after ``revision``, newest first.

        Args:
            revision: Commit to start after. None or empty means the whole
                history of HEAD.

        Returns:
            Commits with their full messages
        """
        revision_range = f"{revision}...HEAD" if revision else "HEAD"
        return [
            CommitRecord(sha=sha, raw_message=self.commit_message(sha))
            for sha in self.rev_list(revision_range)
        ]

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def commit_all(self, message: str) -> None:
        self._run("commit", "-a", "-m", message)

    def create_tag(self, name: str, *, signed: bool = False) -> None:
        args = ["tag", "-s", name] if signed else ["tag", name]
        self._run(*args)
        logger.info("Tag %s created", name)

    def get_remote_url(self, remote: str = "origin") -> str:
        return self._run("config", "--local", f"remote.{remote}.url").strip()

    def add_remote(self, name: str, url: str) -> None:
        self._run("remote", "add", name, url)

    def push(self, remote: str, ref: str) -> None:
        self._run("push", "--set-upstream", remote, ref)

    def push_release(
        self,
        tag: str,
        *,
        ci: bool = False,
        remote: str = "origin",
        ci_remote: str = "originSSH",
    ) -> str:
        """Push HEAD and ``tag``.

        In CI the origin URL is rewritten to SSH and pushed through a
        separate ``ci_remote``.

        Returns:
            The name of the remote that was pushed to
        """
        target = remote
        if ci:
            ssh_url = to_ssh_url(self.get_remote_url(remote))
            self.add_remote(ci_remote, ssh_url)
            target = ci_remote
        self.push(target, "HEAD")
        self.push(target, tag)
        return target
