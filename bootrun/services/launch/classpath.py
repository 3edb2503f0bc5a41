"""
Classpath assembly for running from build output.

The classpath is, in order: user-declared folders, the project resource
directories (when resources are added directly), the compiled classes
directory and the filtered dependency artifacts.
"""

import os
from collections.abc import Sequence
from pathlib import Path

from ...core.exceptions import ClasspathError
from ...core.interfaces.launch import IArtifactFilter
from ...core.interfaces.logger import ILogger
from ...core.models.artifact import Artifact
from ...filters.dependency import DependencyFilterEngine


def _get_logger():
    from ...core.di import get_logger

    return get_logger()


def remove_duplicates_from_output_directory(
    output_directory: Path,
    origin_directory: Path,
    logger: ILogger | None = None,
) -> list[Path]:
    """
    Delete files from ``output_directory`` that also exist in ``origin_directory``.

    Directories present in both are walked recursively; only writable
    regular files are deleted.

    Returns:
        The deleted files
    """
    logger = logger or _get_logger()
    removed: list[Path] = []
    if not origin_directory.is_dir():
        return removed

    for origin in sorted(origin_directory.iterdir()):
        target = output_directory / origin.name
        if not target.exists() or not os.access(target, os.W_OK):
            continue
        if target.is_dir():
            removed.extend(remove_duplicates_from_output_directory(target, origin, logger))
        else:
            logger.info("Removing %s (duplicate of resource %s)", target, origin)
            target.unlink()
            removed.append(target)
    return removed


def _to_location(entry: str | Path, description: str) -> str:
    """Validate a classpath entry and return it as a string."""
    text = os.fspath(entry) if isinstance(entry, Path) else entry
    if not isinstance(text, str) or not text.strip() or "\x00" in text:
        raise ClasspathError(f"Invalid {description} on the classpath", entry=repr(entry))
    try:
        Path(text).absolute().as_uri()
    except (ValueError, OSError) as e:
        raise ClasspathError(
            f"Invalid {description} on the classpath: {e}", entry=text, cause=e
        ) from e
    return text


class ClasspathBuilder:
    """
    Builds the ordered classpath for one run.

    Building is not free of side effects: with ``add_resources`` enabled,
    files duplicated between a resource directory and the classes
    directory are deleted from the classes directory.
    """

    def __init__(
        self,
        classes_directory: Path,
        artifacts: Sequence[Artifact] = (),
        filters: Sequence[IArtifactFilter] = (),
        folders: Sequence[str] = (),
        resource_directories: Sequence[Path] = (),
        add_resources: bool = False,
        filter_engine: DependencyFilterEngine | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self.classes_directory = classes_directory
        self.artifacts = list(artifacts)
        self.filters = list(filters)
        self.folders = list(folders)
        self.resource_directories = list(resource_directories)
        self.add_resources = add_resources
        self._filter_engine = filter_engine
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = _get_logger()
        return self._logger

    @property
    def filter_engine(self) -> DependencyFilterEngine:
        if self._filter_engine is None:
            self._filter_engine = DependencyFilterEngine(logger=self._logger)
        return self._filter_engine

    def build_paths(self) -> list[str]:
        """
        Assemble the classpath entries as given (folders verbatim, paths as strings).

        Raises:
            ClasspathError: If an entry can't be turned into a location
            ConfigurationError: If dependency filtering fails
        """
        entries: list[str] = []
        for folder in self.folders:
            entries.append(_to_location(folder, "folder"))

        if self.add_resources:
            for directory in self.resource_directories:
                entries.append(_to_location(directory, "resource directory"))
                remove_duplicates_from_output_directory(
                    self.classes_directory, directory, self.logger
                )

        entries.append(_to_location(self.classes_directory, "classes directory"))

        for artifact in self.filter_engine.filter(self.artifacts, self.filters):
            if artifact.file is None:
                self.logger.debug("Skipping %s, no resolved file", artifact)
                continue
            entries.append(_to_location(artifact.file, f"artifact {artifact.coordinates}"))
        return entries

    def build(self) -> list[str]:
        """
        The classpath as ``file:`` location URIs (directories end with a slash).

        Raises:
            ClasspathError: If an entry can't be turned into a location
            ConfigurationError: If dependency filtering fails
        """
        uris = []
        for entry in self.build_paths():
            path = Path(entry).absolute()
            uri = path.as_uri()
            if path.is_dir() and not uri.endswith("/"):
                uri += "/"
            uris.append(uri)
        return uris

    def build_classpath(self) -> str:
        """The classpath as absolute paths joined by the platform path separator."""
        return self.join(self.build_paths())

    @staticmethod
    def join(entries: Sequence[str]) -> str:
        return os.pathsep.join(str(Path(entry).absolute()) for entry in entries)
