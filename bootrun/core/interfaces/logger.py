"""
Logger interface for launch diagnostics.

Classpath, argument vector and environment dumps go through ILogger so
they can be switched to debug level or written to a log file. Messages
meant for the person running the application go through IPresenter.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Diagnostics sink taking printf-style arguments."""

    @abstractmethod
    def debug(self, message: str, *args: Any) -> None: ...

    @abstractmethod
    def info(self, message: str, *args: Any) -> None: ...

    @abstractmethod
    def warning(self, message: str, *args: Any) -> None: ...

    @abstractmethod
    def error(self, message: str, *args: Any) -> None: ...

    @abstractmethod
    def is_enabled_for(self, level: str) -> bool:
        """
        Whether a message at ``level`` would be emitted anywhere.

        Callers check this before formatting long argument dumps.
        """
