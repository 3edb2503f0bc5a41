"""
Loggers for launch diagnostics.

BootrunLogger writes build-tool style ``[INFO] message`` lines to stderr
and, optionally, timestamped lines to ``~/.bootrun/bootrun.log``.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ..core.interfaces.logger import ILogger

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(level: str) -> int:
    return LEVELS.get(level.lower(), logging.INFO)


class BootrunLogger(ILogger):
    """stdlib logging behind ILogger, with a console and a rotating file handler."""

    LOG_FILE = Path.home() / ".bootrun" / "bootrun.log"
    MAX_BYTES = 5 * 1024 * 1024
    BACKUPS = 2

    def __init__(
        self,
        level: str = "info",
        console_enabled: bool = True,
        file_enabled: bool = False,
        name: str = "bootrun",
        log_file: Path | None = None,
    ) -> None:
        self._level = parse_level(level)
        self._logger = logging.getLogger(name)
        self._logger.setLevel(self._level)
        self._logger.propagate = False
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_enabled:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self._logger.addHandler(console)

        if file_enabled:
            path = log_file or self.LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path, maxBytes=self.MAX_BYTES, backupCount=self.BACKUPS
            )
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s %(threadName)s [%(levelname)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self._logger.addHandler(file_handler)

    def debug(self, message: str, *args: Any) -> None:
        self._logger.debug(message, *args)

    def info(self, message: str, *args: Any) -> None:
        self._logger.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self._logger.warning(message, *args)

    def error(self, message: str, *args: Any) -> None:
        self._logger.error(message, *args)

    def is_enabled_for(self, level: str) -> bool:
        return bool(self._logger.handlers) and parse_level(level) >= self._level


class NullLogger(ILogger):
    """Discards everything; used when nothing is bootstrapped."""

    def debug(self, message: str, *args: Any) -> None:
        pass

    def info(self, message: str, *args: Any) -> None:
        pass

    def warning(self, message: str, *args: Any) -> None:
        pass

    def error(self, message: str, *args: Any) -> None:
        pass

    def is_enabled_for(self, level: str) -> bool:
        return False
