"""Filters deciding which resolved artifacts go on the runtime classpath."""

from .dependency import (
    DependencyFilterEngine,
    ExcludeFilter,
    GroupIdFilter,
    IncludeFilter,
    ScopeFilter,
    build_filters,
    clean_filter_config,
    matches_any,
)

__all__ = [
    "DependencyFilterEngine",
    "ExcludeFilter",
    "GroupIdFilter",
    "IncludeFilter",
    "ScopeFilter",
    "build_filters",
    "clean_filter_config",
    "matches_any",
]
