"""
Dependency filters for the runtime classpath.

Each filter answers one question: should this artifact be left off the
classpath? DependencyFilterEngine runs an ordered list of them over the
resolved dependency set and keeps an artifact only if none excludes it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import TypeAdapter, ValidationError

from ..core.exceptions import ConfigurationError
from ..core.interfaces.launch import IArtifactFilter
from ..core.interfaces.logger import ILogger
from ..core.models.artifact import SCOPE_TEST, Artifact, DependencySpec, Exclude, Include
from ..core.models.config import FiltersConfig


def _get_logger():
    from ..core.di import get_logger

    return get_logger()


def clean_filter_config(content: str | None) -> str:
    """Trim whitespace around each item of a comma-separated list."""
    if content is None or not content.strip():
        return ""
    return ",".join(token.strip() for token in content.split(",") if token.strip())


class GroupIdFilter:
    """Excludes artifacts whose groupId is one of a comma-separated list (exact match)."""

    def __init__(self, exclude_group_ids: str | None = None) -> None:
        cleaned = clean_filter_config(exclude_group_ids)
        self.group_ids = frozenset(cleaned.split(",")) if cleaned else frozenset()

    def excludes(self, artifact: Artifact) -> bool:
        return artifact.group_id in self.group_ids

    def __repr__(self) -> str:
        return f"GroupIdFilter({sorted(self.group_ids)!r})"


def matches_any(dependencies: Sequence[DependencySpec], artifact: Artifact) -> bool:
    """Check whether ``artifact`` matches one of ``dependencies``."""
    return any(dependency.matches(artifact) for dependency in dependencies)


def _describe(name: str, dependencies: Sequence[DependencySpec]) -> str:
    specs = ", ".join(
        ":".join(p for p in (d.group_id, d.artifact_id, d.classifier) if p)
        for d in dependencies
    )
    return f"{name}([{specs}])"


class IncludeFilter:
    """Excludes every artifact that does not match one of the includes."""

    def __init__(self, dependencies: Sequence[DependencySpec]) -> None:
        self.dependencies = list(dependencies)

    def excludes(self, artifact: Artifact) -> bool:
        return not matches_any(self.dependencies, artifact)

    def __repr__(self) -> str:
        return _describe("IncludeFilter", self.dependencies)


class ExcludeFilter:
    """Excludes every artifact matching one of the excludes."""

    def __init__(self, dependencies: Sequence[DependencySpec]) -> None:
        self.dependencies = list(dependencies)

    def excludes(self, artifact: Artifact) -> bool:
        return matches_any(self.dependencies, artifact)

    def __repr__(self) -> str:
        return _describe("ExcludeFilter", self.dependencies)


class ScopeFilter:
    """
    Excludes artifacts whose scope is one of ``scopes``.

    ``overrides`` are checked first: an artifact matching one of them is
    kept whatever its scope.
    """

    def __init__(
        self,
        scopes: Iterable[str] = (SCOPE_TEST,),
        overrides: Sequence[DependencySpec] = (),
    ) -> None:
        self.scopes = frozenset(scopes)
        self.overrides = list(overrides)

    def excludes(self, artifact: Artifact) -> bool:
        if any(override.matches(artifact) for override in self.overrides):
            return False
        return artifact.scope in self.scopes

    def __repr__(self) -> str:
        return f"ScopeFilter({sorted(self.scopes)!r})"


_INCLUDES = TypeAdapter(list[Include])
_EXCLUDES = TypeAdapter(list[Exclude])


def build_filters(
    config: FiltersConfig | None = None,
    *additional_filters: IArtifactFilter,
    includes: Iterable[object] | None = None,
    excludes: Iterable[object] | None = None,
    exclude_group_ids: str | None = None,
) -> list[IArtifactFilter]:
    """
    Compose the ordered filter list for a run.

    The additional filters come first, then the groupId filter, then the
    include filter (only if includes are configured), then the exclude
    filter (only if excludes are configured). Keyword arguments override
    the corresponding ``config`` values and may hold raw entries
    (``"group:artifact[:classifier]"`` strings or mappings).

    Raises:
        ConfigurationError: If an include or exclude entry is malformed
    """
    config = config or FiltersConfig()
    group_ids = exclude_group_ids if exclude_group_ids is not None else config.exclude_group_ids

    try:
        include_specs = (
            _INCLUDES.validate_python(list(includes)) if includes is not None else config.includes
        )
        exclude_specs = (
            _EXCLUDES.validate_python(list(excludes)) if excludes is not None else config.excludes
        )
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid dependency filter configuration: {e}", key="filters", cause=e
        ) from e

    filters: list[IArtifactFilter] = list(additional_filters)
    filters.append(GroupIdFilter(group_ids))
    if include_specs:
        filters.append(IncludeFilter(include_specs))
    if exclude_specs:
        filters.append(ExcludeFilter(exclude_specs))
    return filters


class DependencyFilterEngine:
    """
    Reduces a dependency set by an ordered list of filters.

    Every filter is evaluated over the whole set first, and the union of
    what they exclude is then removed from the original sequence, so the
    survivors keep their original relative order.
    """

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = _get_logger()
        return self._logger

    def filter(
        self,
        dependencies: Iterable[Artifact],
        filters: Sequence[IArtifactFilter],
    ) -> list[Artifact]:
        """
        Keep the artifacts no filter excludes.

        Raises:
            ConfigurationError: If a filter fails while evaluating an artifact
        """
        artifacts = list(dependencies)
        excluded: set[Artifact] = set()
        for artifact_filter in filters:
            try:
                excluded.update(a for a in artifacts if artifact_filter.excludes(a))
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to apply dependency filter {artifact_filter!r}: {e}",
                    cause=e,
                ) from e

        filtered = [a for a in artifacts if a not in excluded]
        self.logger.debug(
            "Dependency filtering kept %d of %d artifact(s)", len(filtered), len(artifacts)
        )
        return filtered
