"""Line-based text file access.

Only ``\\n`` and ``\\r\\n`` end a line. Other characters that
``str.splitlines`` treats as boundaries (form feed, ``\\u2028`` ...) stay
inside their line, so rewriting a file never splits an existing line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n``, dropping one ``\\r`` before each break."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def read_lines(path: Path) -> list[str]:
    with path.open(encoding="utf-8", newline="") as f:
        return split_lines(f.read())


def write_lines(path: Path, lines: Sequence[str]) -> None:
    """Write ``lines`` joined by ``\\n``, with a trailing newline."""
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines) + "\n")
