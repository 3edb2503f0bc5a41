"""
Configuration models.

Provides Pydantic models for bootrun configuration with validation. The
field names mirror the run settings a build tool exposes to its users.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from .artifact import DependencySpec, Exclude, Include
from .base import ConfigBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_MAIN_CLASS_ANNOTATION = "org.springframework.boot.autoconfigure.SpringBootApplication"


def _split_csv(v: Any) -> Any:
    """Split a comma-separated string into a list, keeping lists as-is."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


class FiltersConfig(ConfigBaseModel):
    """Dependency filter configuration section."""

    includes: list[Include] = Field(default_factory=list)
    excludes: list[Exclude] = Field(default_factory=list)
    exclude_group_ids: str = ""
    # Artifacts kept even though their scope is filtered out
    scope_overrides: list[DependencySpec] = Field(default_factory=list)

    @field_validator("exclude_group_ids", mode="before")
    @classmethod
    def join_group_id_list(cls, v: Any) -> str:
        """Accept a TOML list as well as the comma-separated form."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(x) for x in v)
        return v


class RunConfig(ConfigBaseModel):
    """How to launch the application."""

    # Fork / skip
    fork: bool = True
    skip: bool = False

    # Classpath
    add_resources: bool = False
    use_test_classpath: bool = False
    folders: list[str] = Field(default_factory=list)

    # Forked JVM
    java_executable: str | None = None
    agents: list[str] | None = None
    agent: list[str] | None = None  # deprecated, use agents
    noverify: bool = False
    working_directory: str | None = None
    jvm_arguments: str | None = None
    system_properties: dict[str, str | None] = Field(default_factory=dict)
    environment_variables: dict[str, str | None] = Field(default_factory=dict)

    # Application
    main_class: str | None = None
    main_class_annotation: str | None = DEFAULT_MAIN_CLASS_ANNOTATION
    arguments: list[str | None] = Field(default_factory=list)
    profiles: list[str] = Field(default_factory=list)

    @field_validator("folders", "agents", "agent", "arguments", "profiles", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> Any:
        """Parse comma-separated string to list."""
        return _split_csv(v)

    @field_validator("system_properties", "environment_variables", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        """An absent mapping is an empty mapping."""
        return {} if v is None else v

    def determine_agents(self) -> list[str]:
        """Configured agents, falling back to the deprecated single-agent field."""
        agents = self.agents if self.agents is not None else self.agent
        return list(agents or [])


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "info"
    console: bool = True
    file: bool = False


class BootrunConfig(ConfigBaseModel):
    """All sections together, for programmatic use and dotted-key lookups."""

    run: RunConfig = Field(default_factory=RunConfig)
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``run.system_properties.foo``."""
        value: Any = self.model_dump()
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BootrunConfig:
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
