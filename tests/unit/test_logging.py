"""
Unit tests for the ambient services: loggers, presenter, exceptions and
the service registry.

Tests verify:
- BootrunLogger honours its level on the console and in the log file
- ConsolePresenter writes prefixed messages to its stream
- Exception context is rendered after the message
- bootstrap() registers defaults without replacing pre-registered services
"""

import io
from unittest.mock import MagicMock

import pytest

from bootrun.core.bootstrap import bootstrap, is_initialized
from bootrun.core.container import get_container, try_resolve
from bootrun.core.exceptions import (
    ConfigurationError,
    EntryPointNotFound,
    LaunchError,
)
from bootrun.core.interfaces.logger import ILogger
from bootrun.core.interfaces.presenter import IPresenter
from bootrun.presenters.console import ConsolePresenter
from bootrun.services.logging import BootrunLogger, NullLogger


class TestBootrunLogger:
    """Tests for BootrunLogger."""

    def test_console_lines_carry_the_level(self, capsys):
        logger = BootrunLogger(level="info", name="bootrun.test.console")

        logger.info("Attaching agents: %s", ["a.jar"])
        logger.debug("hidden")

        err = capsys.readouterr().err
        assert "[INFO] Attaching agents: ['a.jar']" in err
        assert "hidden" not in err

    def test_is_enabled_for(self):
        logger = BootrunLogger(level="warning", name="bootrun.test.level")

        assert logger.is_enabled_for("warning")
        assert logger.is_enabled_for("error")
        assert not logger.is_enabled_for("info")

    def test_nothing_enabled_without_handlers(self):
        logger = BootrunLogger(console_enabled=False, name="bootrun.test.silent")

        assert not logger.is_enabled_for("error")

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "logs" / "bootrun.log"
        logger = BootrunLogger(
            level="debug",
            console_enabled=False,
            file_enabled=True,
            name="bootrun.test.file",
            log_file=log_file,
        )

        logger.debug("Classpath for forked process: %s", "/app/classes")

        assert "[DEBUG] Classpath for forked process: /app/classes" in log_file.read_text()

    def test_null_logger_is_silent(self):
        logger = NullLogger()

        logger.warning("ignored")

        assert not logger.is_enabled_for("error")


class TestConsolePresenter:
    """Tests for ConsolePresenter."""

    def test_error_and_warning_prefixes(self):
        stream = io.StringIO()
        presenter = ConsolePresenter(stream=stream)

        presenter.print_error("Application finished with exit code: 1")
        presenter.print_warning("Failed to parse config file")

        assert stream.getvalue().splitlines() == [
            "Error: Application finished with exit code: 1",
            "Warning: Failed to parse config file",
        ]


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_context_follows_message(self):
        error = ConfigurationError("Invalid system property", value="=x", key=None)

        assert str(error) == "Invalid system property (value='=x')"
        assert isinstance(error, ValueError)

    def test_launch_error_keeps_process_exit_code(self):
        error = LaunchError("Application finished with exit code: 3", exit_code=3)

        assert error.process_exit_code == 3
        assert error.exit_code == 1
        assert str(error) == "Application finished with exit code: 3 (exit_code=3)"

    def test_entry_point_not_found_exit_code(self):
        cause = ImportError("no module")

        error = EntryPointNotFound("Unable to load entry point", cause=cause)

        assert error.exit_code == 2
        assert error.__cause__ is cause


class TestServiceRegistry:
    """Tests for the container and bootstrap()."""

    def test_singleton_factory_is_called_once(self):
        factory = MagicMock(return_value=NullLogger())
        get_container().register_singleton(ILogger, factory=factory)

        assert try_resolve(ILogger) is try_resolve(ILogger)
        factory.assert_called_once()

    def test_registration_needs_something(self):
        with pytest.raises(ValueError):
            get_container().register_singleton(ILogger)

    def test_bootstrap_registers_defaults(self, tmp_path, clean_env):
        bootstrap(start_dir=str(tmp_path), log_level="debug")

        assert is_initialized()
        assert isinstance(try_resolve(IPresenter), ConsolePresenter)
        logger = try_resolve(ILogger)
        assert isinstance(logger, BootrunLogger)
        assert logger.is_enabled_for("debug")

    def test_bootstrap_keeps_registered_services(self, tmp_path, clean_env):
        presenter = MagicMock()
        logger = NullLogger()
        get_container().register_singleton(IPresenter, implementation=presenter)
        get_container().register_singleton(ILogger, implementation=logger)

        bootstrap(start_dir=str(tmp_path))

        assert try_resolve(IPresenter) is presenter
        assert try_resolve(ILogger) is logger
