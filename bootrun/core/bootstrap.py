"""
Application bootstrap for bootrun.

Registers the logger and presenter in the DI container. Called once by the
CLI at startup; embedding build tools may register their own services
before calling it.
"""

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .interfaces.presenter import IPresenter

_initialized = False


def bootstrap(
    config_path: Path | None = None,
    start_dir: str | None = None,
    log_level: str | None = None,
) -> ServiceContainer:
    """
    Bootstrap the bootrun application.

    Args:
        config_path: Explicit config file to read logging settings from
        start_dir: Directory to start the config file search from
        log_level: Overrides the configured logging level

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, config_path, start_dir, log_level)

    _initialized = True
    return container


def _register_core_services(
    container: ServiceContainer,
    config_path: Path | None,
    start_dir: str | None,
    log_level: str | None,
) -> None:
    """Register core application services."""
    from ..presenters.console import ConsolePresenter
    from ..services.logging import BootrunLogger
    from .settings import load_settings

    if not container.is_registered(IPresenter):
        container.register_singleton(IPresenter, implementation=ConsolePresenter())  # type: ignore[type-abstract]

    if container.is_registered(ILogger):
        return

    def create_logger() -> ILogger:
        logging_config = load_settings(config_path=config_path, start_dir=start_dir).logging
        return BootrunLogger(
            level=log_level or logging_config.level,
            console_enabled=logging_config.console,
            file_enabled=logging_config.file,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
