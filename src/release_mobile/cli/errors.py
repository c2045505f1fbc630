"""Command-boundary error reporting."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.markup import escape

from release_mobile.exceptions import (
    ExitCode,
    ReleaseMobileError,
    describe_error,
    exit_code_for,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console


@contextmanager
def exit_on_error(err_console: Console) -> Iterator[None]:
    """Report any error raised in the block and exit with its code.

    Known errors get their mapped message and exit code. Anything else is
    reported with its raw text and exits with ``ExitCode.SOFTWARE``.
    """
    try:
        yield
    except ReleaseMobileError as e:
        err_console.print(f"[red]Error:[/] {escape(describe_error(e))}")
        raise SystemExit(int(exit_code_for(e))) from e
    except Exception as e:
        err_console.print(f"[red]An unhandled error occurred:[/] {escape(str(e))}")
        raise SystemExit(int(ExitCode.SOFTWARE)) from e
