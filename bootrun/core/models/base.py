"""
Base Pydantic models for bootrun.

Values handed over by the build tool (artifacts, dependency coordinates)
are frozen and strictly typed. Settings sections and the project
descriptor come from TOML, JSON and environment variables, so they coerce
and ignore keys they don't know.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ImmutableModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
    )


class ConfigBaseModel(BaseModel):
    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )
