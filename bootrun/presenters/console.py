"""
Console presenter for the run command.

The application owns stdout while it runs, so everything bootrun reports
goes to stderr.
"""

import sys
from typing import TextIO

from ..core.interfaces.presenter import IPresenter

_RED = "\033[91m"
_YELLOW = "\033[93m"
_RESET = "\033[0m"


class ConsolePresenter(IPresenter):
    """Writes failures and warnings to stderr, colored on a terminal."""

    def __init__(self, use_color: bool = True, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr
        self._use_color = use_color and self._stream.isatty()

    def print_error(self, message: str) -> None:
        self._write(_RED, f"Error: {message}")

    def print_warning(self, message: str) -> None:
        self._write(_YELLOW, f"Warning: {message}")

    def _write(self, color: str, text: str) -> None:
        if self._use_color:
            text = f"{color}{text}{_RESET}"
        print(text, file=self._stream)
