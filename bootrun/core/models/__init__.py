"""
Pydantic models for bootrun.

Artifacts and dependency specs are immutable and strictly validated;
configuration sections and the project descriptor are relaxed so they can
be loaded from TOML and JSON.
"""

from .artifact import (
    SCOPE_COMPILE,
    SCOPE_PROVIDED,
    SCOPE_RUNTIME,
    SCOPE_SYSTEM,
    SCOPE_TEST,
    Artifact,
    DependencySpec,
    Exclude,
    Include,
)
from .base import ConfigBaseModel, ImmutableModel
from .config import BootrunConfig, FiltersConfig, LoggingConfig, RunConfig
from .project import ProjectModel

__all__ = [
    "SCOPE_COMPILE",
    "SCOPE_PROVIDED",
    "SCOPE_RUNTIME",
    "SCOPE_SYSTEM",
    "SCOPE_TEST",
    "Artifact",
    "BootrunConfig",
    "ConfigBaseModel",
    "DependencySpec",
    "Exclude",
    "FiltersConfig",
    "ImmutableModel",
    "Include",
    "LoggingConfig",
    "ProjectModel",
    "RunConfig",
]
