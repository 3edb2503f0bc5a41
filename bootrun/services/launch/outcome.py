"""Terminal state of one launch attempt."""

from dataclasses import dataclass, field

from ...core.exceptions import BootrunException


@dataclass(frozen=True)
class LaunchOutcome:
    """
    Success or failure of a run invocation.

    ``fork_enabled`` records whether forking was configured, for the build
    tool to expose to the rest of its invocation. ``error`` carries the
    failure: a child exit code, a spawn error, a captured inline exception
    or a configuration problem found before launching.
    """

    succeeded: bool
    fork_enabled: bool = False
    forked: bool = False
    skipped: bool = False
    exit_code: int | None = None
    interrupted: bool = False
    error: BootrunException | None = None
    command: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return not self.succeeded

    def raise_for_failure(self) -> None:
        """Raise the carried error if the launch failed."""
        if self.error is not None:
            raise self.error

    @classmethod
    def skipped_run(cls, fork_enabled: bool) -> "LaunchOutcome":
        return cls(succeeded=True, fork_enabled=fork_enabled, skipped=True)

    @classmethod
    def failure(
        cls,
        error: BootrunException,
        fork_enabled: bool,
        forked: bool = False,
        exit_code: int | None = None,
        interrupted: bool = False,
        command: list[str] | None = None,
    ) -> "LaunchOutcome":
        return cls(
            succeeded=False,
            fork_enabled=fork_enabled,
            forked=forked,
            exit_code=exit_code,
            interrupted=interrupted,
            error=error,
            command=command or [],
        )
