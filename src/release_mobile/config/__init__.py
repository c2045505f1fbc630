"""Configuration management for release-mobile."""

from __future__ import annotations

from release_mobile.config.loader import load_config
from release_mobile.config.models import (
    CloudConfig,
    JiraConfig,
    ProjectConfig,
    ReleaseMobileConfig,
    SlackConfig,
)

__all__ = [
    "CloudConfig",
    "JiraConfig",
    "ProjectConfig",
    "ReleaseMobileConfig",
    "SlackConfig",
    "load_config",
]
