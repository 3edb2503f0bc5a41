"""
Protocols for the launch pipeline.

The orchestrator depends on these contracts rather than on the concrete
filter and runner classes, so tests and embedding build tools can swap
them out.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..models.artifact import Artifact

if TYPE_CHECKING:
    from ...services.launch.forked import ForkedResult


@runtime_checkable
class IArtifactFilter(Protocol):
    """A single predicate deciding whether an artifact leaves the classpath."""

    def excludes(self, artifact: Artifact) -> bool:
        """Return True if the artifact should be removed."""
        ...


@runtime_checkable
class ISignalHandler(Protocol):
    """Protocol for interrupt handling while a forked process runs."""

    def install(self) -> None:
        """Install signal handlers."""
        ...

    def restore(self) -> None:
        """Restore original signal handlers."""
        ...

    def is_interrupted(self) -> bool:
        """Check if execution was interrupted."""
        ...


@runtime_checkable
class IForkedRunner(Protocol):
    """Protocol for running an argument vector in a child process."""

    def run(
        self,
        working_directory: Path,
        args: list[str],
        environment: Mapping[str, str],
    ) -> "ForkedResult":
        """Run the child process to completion."""
        ...
