"""
Dependency artifact models.

Artifacts are produced by the build tool's dependency resolution and are
read-only here. Include/Exclude specs are the user-facing coordinates used
to match them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator, model_validator

from .base import ImmutableModel

SCOPE_COMPILE = "compile"
SCOPE_PROVIDED = "provided"
SCOPE_RUNTIME = "runtime"
SCOPE_TEST = "test"
SCOPE_SYSTEM = "system"

NonEmptyStr = Annotated[str, Field(min_length=1)]


class Artifact(ImmutableModel):
    """A resolved dependency: coordinates, scope and (maybe) a file on disk."""

    group_id: NonEmptyStr = Field(alias="groupId")
    artifact_id: NonEmptyStr = Field(alias="artifactId")
    classifier: str | None = None
    scope: str = SCOPE_COMPILE
    # Lax so a JSON string and a Path both validate
    file: Path | None = Field(default=None, strict=False)

    @field_validator("classifier", mode="before")
    @classmethod
    def empty_classifier_is_none(cls, v: Any) -> Any:
        """Treat an empty classifier as no classifier."""
        return None if v == "" else v

    @field_validator("file", mode="before")
    @classmethod
    def empty_file_is_none(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def coordinates(self) -> str:
        """groupId:artifactId[:classifier] for log output."""
        parts = [self.group_id, self.artifact_id]
        if self.classifier:
            parts.append(self.classifier)
        return ":".join(parts)

    def __str__(self) -> str:
        return f"{self.coordinates}:{self.scope}"


class DependencySpec(ImmutableModel):
    """
    Coordinates used to match artifacts.

    ``classifier`` is optional: a spec without one matches an artifact with
    any classifier, a spec with one matches only that exact classifier.
    Accepts either a mapping or a ``groupId:artifactId[:classifier]`` string.
    """

    group_id: NonEmptyStr = Field(alias="groupId")
    artifact_id: NonEmptyStr = Field(alias="artifactId")
    classifier: str | None = None

    @model_validator(mode="before")
    @classmethod
    def parse_coordinates(cls, data: Any) -> Any:
        """Parse the short ``group:artifact[:classifier]`` notation."""
        if not isinstance(data, str):
            return data
        parts = [p.strip() for p in data.split(":")]
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(
                f"Invalid dependency coordinates {data!r}, "
                "expected groupId:artifactId[:classifier]"
            )
        spec: dict[str, Any] = {"group_id": parts[0], "artifact_id": parts[1]}
        if len(parts) == 3:
            spec["classifier"] = parts[2]
        return spec

    @field_validator("classifier", mode="before")
    @classmethod
    def empty_classifier_is_none(cls, v: Any) -> Any:
        """Treat an empty classifier as no classifier."""
        return None if v == "" else v

    def matches(self, artifact: Artifact) -> bool:
        """Check whether ``artifact`` has these coordinates."""
        if self.group_id != artifact.group_id:
            return False
        if self.artifact_id != artifact.artifact_id:
            return False
        return self.classifier is None or (
            artifact.classifier is not None and self.classifier == artifact.classifier
        )


class Include(DependencySpec):
    """An artifact that must be matched to stay on the classpath."""


class Exclude(DependencySpec):
    """An artifact that is removed from the classpath when matched."""
