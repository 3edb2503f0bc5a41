"""
Interrupt handling while a forked application runs.

The child shares the terminal's process group, so it receives Ctrl-C
itself; bootrun only has to keep waiting for it to shut down. A second
Ctrl-C aborts the wait.
"""

import signal
import sys
import threading
from collections.abc import Callable
from typing import Any

from ...core.interfaces.logger import ILogger

ABORT_EXIT_CODE = 130


class ProcessSignalHandler:
    """
    SIGINT handler installed for the lifetime of one child process.

    The first interrupt only marks the run as interrupted (and calls
    ``on_first_interrupt``); the second calls ``on_abort``, typically
    terminating the child, and exits with 130.
    """

    def __init__(
        self,
        on_first_interrupt: Callable[[], None] | None = None,
        on_abort: Callable[[], None] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self.interrupts = 0
        self._on_first_interrupt = on_first_interrupt
        self._on_abort = on_abort
        self._previous: Any = None
        self._installed = False
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    def set_on_abort(self, on_abort: Callable[[], None] | None) -> None:
        self._on_abort = on_abort

    def install(self) -> None:
        # signal.signal() only works on the main thread
        if threading.current_thread() is not threading.main_thread():
            self.logger.debug("Not on the main thread, SIGINT handler not installed")
            return
        self._previous = signal.signal(signal.SIGINT, self._handle_signal)
        self._installed = True

    def restore(self) -> None:
        if not self._installed:
            return
        signal.signal(signal.SIGINT, self._previous)
        self._previous = None
        self._installed = False

    def is_interrupted(self) -> bool:
        return self.interrupts > 0

    def should_abort(self) -> bool:
        return self.interrupts > 1

    def _handle_signal(self, signum: int, frame: Any) -> None:
        self.interrupts += 1
        self.logger.debug("SIGINT received (%d)", self.interrupts)
        if not self.should_abort():
            if self._on_first_interrupt is not None:
                self._on_first_interrupt()
            return

        if self._on_abort is not None:
            self._on_abort()
        sys.exit(ABORT_EXIT_CODE)
