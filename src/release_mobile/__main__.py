"""Allow running as ``python -m release_mobile``."""

from __future__ import annotations

from release_mobile.cli.app import main

if __name__ == "__main__":
    main()
