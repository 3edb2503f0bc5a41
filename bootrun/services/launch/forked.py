"""
Forked JVM runner.

Handles java executable discovery and runs the launch argument vector in
a child process with its own working directory and environment.
"""

import os
import shlex
import shutil
import subprocess
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ...core.exceptions import LaunchError
from ...core.interfaces.launch import ISignalHandler
from ...core.interfaces.logger import ILogger
from .signal_handler import ProcessSignalHandler


@dataclass
class ForkedResult:
    """Result of a forked process run."""

    exit_code: int
    command: list[str] = field(default_factory=list)
    duration: float = 0.0
    interrupted: bool = False


class ForkedProcessRunner:
    """
    Runs the application in a child JVM.

    The child inherits the current environment, updated with the
    configured variables, and is waited for without a timeout.
    """

    def __init__(
        self,
        java_executable: str | None = None,
        signal_handler: ISignalHandler | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            java_executable: Explicit java binary (skips discovery)
            signal_handler: Interrupt handling while the child runs
            logger: Logger for internal diagnostics
        """
        self._java_executable = java_executable
        self._signal_handler = signal_handler
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def find_java(self) -> str | None:
        """
        Find the java executable.

        Searches in:
        1. The explicitly configured executable
        2. $JAVA_HOME/bin/java
        3. System PATH

        Returns:
            Path to the java binary, or None if not found
        """
        if self._java_executable:
            return self._java_executable

        java_home = os.environ.get("JAVA_HOME")
        if java_home:
            name = "java.exe" if os.name == "nt" else "java"
            candidate = Path(java_home) / "bin" / name
            self.logger.debug("Checking JAVA_HOME for java: %s", candidate)
            if candidate.exists():
                return str(candidate)

        path = shutil.which("java")
        if path:
            self.logger.debug("Found java in PATH: %s", path)
        return path

    def run(
        self,
        working_directory: Path,
        args: list[str],
        environment: Mapping[str, str],
    ) -> ForkedResult:
        """
        Run ``java <args>`` in ``working_directory`` and wait for it.

        Returns:
            ForkedResult with the exit code

        Raises:
            LaunchError: If no java executable is found or the process can't be spawned
        """
        java = self.find_java()
        if not java:
            raise LaunchError(
                "Unable to find a java executable, set JAVA_HOME or configure 'java_executable'"
            )

        command = [java, *args]
        env = dict(os.environ)
        env.update(environment)
        self.logger.debug("Forked command: %s", shlex.join(command))
        self.logger.debug("Working directory: %s", working_directory)

        signal_handler = self._signal_handler or ProcessSignalHandler(
            on_first_interrupt=lambda: self.logger.info(
                "Interrupted, waiting for the application to stop (Ctrl-C again to abort)"
            ),
            logger=self._logger,
        )

        start_time = time.time()
        try:
            proc = subprocess.Popen(command, cwd=working_directory, env=env)
        except OSError as e:
            raise LaunchError(
                f"Could not start process: {e}", command=shlex.join(command), cause=e
            ) from e

        self.logger.debug("Process started: pid=%d", proc.pid)
        if isinstance(signal_handler, ProcessSignalHandler):
            signal_handler.set_on_abort(proc.terminate)
        signal_handler.install()
        try:
            exit_code = proc.wait()
        except KeyboardInterrupt:
            self.logger.debug("KeyboardInterrupt caught during wait")
            exit_code = proc.wait()
        finally:
            signal_handler.restore()

        duration = time.time() - start_time
        self.logger.debug("Process exited: code=%d, duration=%.2fs", exit_code, duration)
        return ForkedResult(
            exit_code=exit_code,
            command=command,
            duration=duration,
            interrupted=signal_handler.is_interrupted(),
        )
