"""Version control integration."""

from __future__ import annotations

from release_mobile.vcs.git import GitRepository

__all__ = ["GitRepository"]
