"""
Exception hierarchy for bootrun.

Every failure of a run invocation surfaces as a BootrunException so the
CLI (or an embedding build tool) reports it as one typed failure. Keyword
arguments other than ``cause`` become context, shown after the message.
"""

from __future__ import annotations

from typing import Any


class BootrunException(Exception):
    """
    Base class of bootrun failures.

    ``exit_code`` is what the CLI exits with when this error ends a run.
    """

    exit_code: int = 1

    def __init__(self, message: str, *, cause: BaseException | None = None, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = {key: value for key, value in context.items() if value is not None}
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({details})"


class ConfigurationError(BootrunException, ValueError):
    """Malformed filter, folder or run option (``key``/``value`` name the culprit)."""


class ConfigFileError(ConfigurationError):
    """A config file or project descriptor can't be read or doesn't validate."""


class ParseError(BootrunException, ValueError):
    """Malformed quoted argument string, e.g. an unterminated quote."""


class ClasspathError(BootrunException):
    """A classpath entry can't be turned into a location."""


class EntryPointNotFound(BootrunException):
    """No main class or inline entry point to run."""

    exit_code = 2


class LaunchError(BootrunException):
    """
    The application could not be run to completion.

    Covers a forked process exiting non-zero (``process_exit_code`` holds
    its code), a spawn failure, and a failure captured from an inline run.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        cause: BaseException | None = None,
        **context: Any,
    ):
        super().__init__(message, cause=cause, exit_code=exit_code, **context)
        self.process_exit_code = exit_code
