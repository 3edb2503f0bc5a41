"""
Project descriptor model.

The build tool writes a JSON descriptor after resolving dependencies and
compiling; bootrun reads it to learn where the classes, resources and
dependency artifacts are.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator

from ..exceptions import ConfigFileError
from .artifact import Artifact
from .base import ConfigBaseModel


class ProjectModel(ConfigBaseModel):
    """Build outputs of one project, as resolved by the build tool."""

    base_dir: Path = Field(alias="baseDir")
    classes_dir: Path = Field(alias="classesDir")
    resources: list[Path] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)

    @field_validator("resources", mode="before")
    @classmethod
    def resource_entries(cls, v: Any) -> Any:
        """Accept ``{"directory": ...}`` entries as well as plain paths."""
        if v is None:
            return []
        return [r["directory"] if isinstance(r, dict) else r for r in v]

    def resolve(self, path: str | Path) -> Path:
        """Resolve ``path`` against the project base directory."""
        p = Path(path)
        return p if p.is_absolute() else self.base_dir / p

    @classmethod
    def from_file(cls, path: Path) -> ProjectModel:
        """
        Load a project descriptor.

        Relative directories and artifact files are taken relative to the
        descriptor's own ``base_dir``, which in turn is relative to the
        file's parent directory.

        Raises:
            ConfigFileError: If the file can't be read or doesn't validate
        """
        try:
            raw = path.read_text()
        except OSError as e:
            raise ConfigFileError(
                "Failed to read project descriptor", file_path=str(path), cause=e
            ) from e

        try:
            project = cls.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigFileError(
                f"Invalid project descriptor: {e}", file_path=str(path), cause=e
            ) from e

        if not project.base_dir.is_absolute():
            project = project.model_copy(
                update={"base_dir": (path.parent / project.base_dir).resolve()}
            )
        return project.model_copy(
            update={
                "classes_dir": project.resolve(project.classes_dir),
                "resources": [project.resolve(r) for r in project.resources],
                "artifacts": [
                    a.model_copy(update={"file": project.resolve(a.file)}) if a.file else a
                    for a in project.artifacts
                ],
            }
        )
