"""release-mobile: release automation for mobile and web app projects."""

from __future__ import annotations

__version__ = "0.1.0"
