"""
Unit tests for LaunchOrchestrator.

Tests the orchestration with a mocked forked runner:
- Skip handling
- Forked argument vector, working directory and environment
- Failure outcomes (exit code, spawn error, missing main class)
- Inline runs through a callable entry point
- Warnings for settings ignored when forking is disabled
"""

import json
import os
from unittest.mock import MagicMock, call

import pytest

from bootrun.core.exceptions import EntryPointNotFound, LaunchError
from bootrun.core.models import FiltersConfig, ProjectModel, RunConfig
from bootrun.services.launch.forked import ForkedResult
from bootrun.services.launch.main_class import (
    CLASS_FILE_MAGIC,
    MAIN_METHOD_DESCRIPTOR,
    MAIN_METHOD_NAME,
)
from bootrun.services.launch.orchestrator import LaunchOrchestrator


@pytest.fixture
def runner():
    runner = MagicMock()
    runner.run.return_value = ForkedResult(exit_code=0, command=["java"])
    return runner


@pytest.fixture
def logger():
    return MagicMock()


def make_orchestrator(project, runner, logger, filters=None, entry_point=None, **config):
    config.setdefault("main_class", "com.example.App")
    return LaunchOrchestrator(
        project,
        RunConfig(**config),
        filters,
        entry_point=entry_point,
        forked_runner=runner,
        logger=logger,
    )


def expected_classpath(project, *jars):
    entries = [str(project.classes_dir)]
    entries.extend(str(project.base_dir / "libs" / jar) for jar in jars)
    return os.pathsep.join(entries)


class TestSkip:
    """Tests for skip handling."""

    def test_skip_does_nothing(self, project_layout, runner, logger):
        orchestrator = make_orchestrator(project_layout, runner, logger, skip=True)

        outcome = orchestrator.execute()

        assert outcome.succeeded
        assert outcome.skipped
        assert outcome.fork_enabled
        runner.run.assert_not_called()
        logger.debug.assert_any_call("skipping run as per configuration.")


class TestForkedRun:
    """Tests for the forked launch."""

    def test_argument_vector_order(self, project_layout, runner, logger):
        orchestrator = make_orchestrator(
            project_layout,
            runner,
            logger,
            agents=["agent.jar"],
            noverify=True,
            jvm_arguments="-Xmx512m",
            system_properties={"foo": "bar"},
            arguments=["--debug"],
            profiles=["dev", "local"],
        )

        outcome = orchestrator.execute()

        assert outcome.succeeded
        assert outcome.forked
        assert outcome.fork_enabled
        working_directory, args, _ = runner.run.call_args.args
        assert working_directory == project_layout.base_dir
        assert args == [
            "-javaagent:agent.jar",
            "-noverify",
            "-Dfoo=bar",
            "-Xmx512m",
            "-cp",
            expected_classpath(project_layout, "core.jar"),
            "com.example.App",
            "--active-profiles=dev,local",
            "--debug",
        ]

    def test_minimal_argument_vector(self, project_layout, runner, logger):
        make_orchestrator(project_layout, runner, logger).execute()

        _, args, environment = runner.run.call_args.args
        assert args == ["-cp", expected_classpath(project_layout, "core.jar"), "com.example.App"]
        assert environment == {}

    def test_test_classpath_keeps_test_dependencies(self, project_layout, runner, logger):
        make_orchestrator(project_layout, runner, logger, use_test_classpath=True).execute()

        _, args, _ = runner.run.call_args.args
        assert args[1] == expected_classpath(project_layout, "core.jar", "junit.jar")

    def test_filters_apply_to_classpath(self, project_layout, runner, logger):
        filters = FiltersConfig(exclude_group_ids="com.example")

        make_orchestrator(project_layout, runner, logger, filters=filters).execute()

        _, args, _ = runner.run.call_args.args
        assert args[1] == expected_classpath(project_layout)

    def test_resources_are_added_first(self, project_layout, runner, logger):
        make_orchestrator(project_layout, runner, logger, add_resources=True).execute()

        _, args, _ = runner.run.call_args.args
        assert args[1].split(os.pathsep)[:2] == [
            str(project_layout.resources[0]),
            str(project_layout.classes_dir),
        ]

    def test_relative_working_directory_is_resolved(self, project_layout, runner, logger):
        make_orchestrator(project_layout, runner, logger, working_directory="run").execute()

        working_directory, _, _ = runner.run.call_args.args
        assert working_directory == project_layout.base_dir / "run"

    def test_environment_variables(self, project_layout, runner, logger):
        make_orchestrator(
            project_layout,
            runner,
            logger,
            environment_variables={"EMPTY": None, "PROFILE": "dev"},
        ).execute()

        _, _, environment = runner.run.call_args.args
        assert environment == {"EMPTY": "", "PROFILE": "dev"}

    def test_nonzero_exit_is_a_failure(self, project_layout, runner, logger):
        runner.run.return_value = ForkedResult(exit_code=3, command=["java", "App"])

        outcome = make_orchestrator(project_layout, runner, logger).execute()

        assert outcome.failed
        assert outcome.exit_code == 3
        assert outcome.command == ["java", "App"]
        assert isinstance(outcome.error, LaunchError)
        assert "Application finished with exit code: 3" in str(outcome.error)
        with pytest.raises(LaunchError):
            outcome.raise_for_failure()

    def test_interrupted_run_is_not_a_failure(self, project_layout, runner, logger):
        runner.run.return_value = ForkedResult(exit_code=130, interrupted=True)

        outcome = make_orchestrator(project_layout, runner, logger).execute()

        assert outcome.succeeded
        assert outcome.interrupted

    def test_spawn_error_is_a_failure(self, project_layout, runner, logger):
        runner.run.side_effect = LaunchError("Could not start process")

        outcome = make_orchestrator(project_layout, runner, logger).execute()

        assert outcome.failed
        assert outcome.forked
        assert str(outcome.error) == "Could not start process"

    def test_parse_error_in_jvm_arguments_is_a_failure(self, project_layout, runner, logger):
        outcome = make_orchestrator(
            project_layout, runner, logger, jvm_arguments='-Dname="unterminated'
        ).execute()

        assert outcome.failed
        assert "unbalanced quotes" in str(outcome.error)
        runner.run.assert_not_called()


class TestStartClass:
    """Tests for main class resolution."""

    def test_main_class_is_discovered(self, project_layout, runner, logger):
        class_file = project_layout.classes_dir / "com" / "example" / "App.class"
        class_file.parent.mkdir(parents=True)
        class_file.write_bytes(
            CLASS_FILE_MAGIC
            + MAIN_METHOD_NAME
            + MAIN_METHOD_DESCRIPTOR
            + b"Lorg/springframework/boot/autoconfigure/SpringBootApplication;"
        )

        make_orchestrator(project_layout, runner, logger, main_class=None).execute()

        _, args, _ = runner.run.call_args.args
        assert args[-1] == "com.example.App"

    def test_missing_main_class_is_a_failure(self, project_layout, runner, logger):
        outcome = make_orchestrator(project_layout, runner, logger, main_class=None).execute()

        assert outcome.failed
        assert isinstance(outcome.error, EntryPointNotFound)
        assert "main_class" in str(outcome.error)
        runner.run.assert_not_called()


class TestInlineRun:
    """Tests for running without forking."""

    def test_entry_point_receives_application_arguments(self, project_layout, runner, logger):
        entry_point = MagicMock()

        outcome = make_orchestrator(
            project_layout,
            runner,
            logger,
            entry_point=entry_point,
            fork=False,
            arguments=["--debug"],
            profiles=["dev"],
        ).execute()

        assert outcome.succeeded
        assert not outcome.forked
        assert not outcome.fork_enabled
        entry_point.assert_called_once_with(["--active-profiles=dev", "--debug"])
        runner.run.assert_not_called()

    def test_uncaught_exception_is_a_failure(self, project_layout, runner, logger):
        error = RuntimeError("context failed to start")

        def entry_point(args):
            raise error

        outcome = make_orchestrator(
            project_layout, runner, logger, entry_point=entry_point, fork=False
        ).execute()

        assert outcome.failed
        assert isinstance(outcome.error, LaunchError)
        assert outcome.error.__cause__ is error

    def test_missing_entry_point_is_a_failure(self, project_layout, runner, logger):
        outcome = make_orchestrator(project_layout, runner, logger, fork=False).execute()

        assert outcome.failed
        assert isinstance(outcome.error, EntryPointNotFound)

    def test_fork_only_settings_are_reported(self, project_layout, runner, logger):
        make_orchestrator(
            project_layout,
            runner,
            logger,
            entry_point=MagicMock(),
            fork=False,
            agents=["agent.jar"],
            jvm_arguments="-Xmx1g",
            working_directory="run",
        ).execute()

        assert logger.warning.call_args_list == [
            call("Fork mode disabled, ignoring agent"),
            call("Fork mode disabled, ignoring JVM argument(s) [%s]", "-Xmx1g"),
            call("Fork mode disabled, ignoring working directory configuration"),
        ]

    def test_no_warnings_without_fork_only_settings(self, project_layout, runner, logger):
        make_orchestrator(
            project_layout, runner, logger, entry_point=MagicMock(), fork=False
        ).execute()

        logger.warning.assert_not_called()


class TestDescriptorClasspath:
    """Classpath built from a project descriptor loaded off disk."""

    def test_descriptor_artifacts_reach_the_classpath(self, tmp_path, monkeypatch, runner, logger):
        project_dir = tmp_path / "proj"
        (project_dir / "out").mkdir(parents=True)
        descriptor = project_dir / "project.json"
        descriptor.write_text(
            json.dumps(
                {
                    "baseDir": ".",
                    "classesDir": "out",
                    "artifacts": [
                        {"groupId": "g", "artifactId": "a", "file": "lib/a.jar"},
                        {"groupId": "g", "artifactId": "b", "file": str(tmp_path / "b.jar")},
                        {"groupId": "g", "artifactId": "t", "scope": "test", "file": "lib/t.jar"},
                    ],
                }
            )
        )
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        project = ProjectModel.from_file(descriptor)

        entries = make_orchestrator(project, runner, logger).get_classpath_entries()

        root = project_dir.resolve()
        assert entries == [
            str(root / "out"),
            str(root / "lib" / "a.jar"),
            str(tmp_path / "b.jar"),
        ]
