"""
Dependency injection helpers for bootrun.

Services take an optional collaborator in their constructor and otherwise
fall back to whatever the container has registered, or to a default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from .interfaces.logger import ILogger

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """The service registered for ``interface``, else ``default_factory()``.

    Example:
        >>> presenter = resolve_or_default(IPresenter, ConsolePresenter)
    """
    from .container import get_container

    instance = get_container().try_resolve(interface)
    return instance if instance is not None else default_factory()


def get_logger() -> ILogger:
    """The registered logger, or a NullLogger when none is bootstrapped."""
    from ..services.logging import NullLogger
    from .interfaces.logger import ILogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
