"""
Isolated execution of an inline entry point.

The entry point runs on its own thread. Uncaught failures from that thread,
and from any thread it starts, are captured in a first-failure-wins slot
instead of escaping into the caller; the caller checks the slot once the
run is over.
"""

import threading
from collections.abc import Callable, Sequence
from typing import Any

from ...core.exceptions import LaunchError
from ...core.interfaces.logger import ILogger

# threading.excepthook is process-wide; one isolated run installs it at a time
_hook_lock = threading.Lock()


class IsolatedExecutionGroup:
    """
    Runs a callable on a dedicated thread and captures uncaught failures.

    Only the first failure is retained; later ones are logged and dropped.
    A ``SystemExit`` with a zero (or no) code is a normal return.
    """

    def __init__(self, name: str, logger: ILogger | None = None) -> None:
        self.name = name
        self._logger = logger
        self._monitor = threading.Lock()
        self._exception: BaseException | None = None
        self._known_threads: set[threading.Thread] = set()

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    @property
    def exception(self) -> BaseException | None:
        with self._monitor:
            return self._exception

    def uncaught_exception(self, thread_name: str, exc: BaseException) -> None:
        """Record ``exc`` unless an earlier failure is already held."""
        if isinstance(exc, SystemExit) and exc.code in (None, 0):
            return
        with self._monitor:
            first = self._exception is None
            if first:
                self._exception = exc
        if first:
            self.logger.warning("Uncaught exception in thread %s: %r", thread_name, exc)
        else:
            self.logger.warning(
                "Additional uncaught exception in thread %s ignored: %r", thread_name, exc
            )

    def rethrow_uncaught_exception(self) -> None:
        """
        Raise the captured failure, if any.

        Raises:
            LaunchError: Wrapping the first captured failure
        """
        with self._monitor:
            exc = self._exception
        if exc is not None:
            raise LaunchError(f"An exception occurred while running. {exc}", cause=exc)

    def run(self, target: Callable[[list[str]], Any], args: Sequence[str] = ()) -> None:
        """
        Run ``target(args)`` and block until it and the non-daemon threads it
        started have finished.
        """
        arguments = list(args)

        def launch() -> None:
            try:
                target(arguments)
            except BaseException as e:
                self.uncaught_exception(threading.current_thread().name, e)

        with _hook_lock:
            self._known_threads = set(threading.enumerate())
            previous_hook = threading.excepthook
            threading.excepthook = self._make_hook(previous_hook)
            try:
                launch_thread = threading.Thread(target=launch, name=f"{self.name}.main()")
                launch_thread.start()
                launch_thread.join()
                self._join_started_threads()
            finally:
                threading.excepthook = previous_hook

    def _make_hook(self, previous_hook: Callable[[Any], Any]) -> Callable[[Any], Any]:
        def hook(hook_args: Any) -> None:
            thread = hook_args.thread
            if thread is not None and thread not in self._known_threads:
                self.uncaught_exception(thread.name, hook_args.exc_value)
            else:
                previous_hook(hook_args)

        return hook

    def _join_started_threads(self) -> None:
        """Wait for non-daemon threads started during the run."""
        while True:
            pending = [
                t
                for t in threading.enumerate()
                if t not in self._known_threads
                and not t.daemon
                and t is not threading.current_thread()
                and t.is_alive()
            ]
            if not pending:
                return
            for thread in pending:
                self.logger.debug("Waiting for thread %s to finish", thread.name)
                thread.join()
