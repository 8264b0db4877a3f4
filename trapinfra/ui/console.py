"""
Console output for trap introspection.

Debug listings must reach the stream exactly as rendered, so the rich
console is configured without markup, highlighting, emoji or wrapping.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from rich.console import Console as RichConsole


class Console:
    """
    Line-oriented wrapper around ``rich.console.Console``.

    Example:
        console = Console()
        console.print_lines(["SIGINT      : myapp.on_interrupt"])
    """

    def __init__(self, file: TextIO | None = None) -> None:
        self._file = file

    def _console(self) -> RichConsole:
        # Resolve stdout at print time so redirected streams are honoured
        return RichConsole(
            file=self._file or sys.stdout,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
            color_system=None,
        )

    def print(self, text: str) -> None:
        self._console().print(text)

    def print_lines(self, lines: Iterable[str]) -> None:
        console = self._console()
        for line in lines:
            console.print(line)
