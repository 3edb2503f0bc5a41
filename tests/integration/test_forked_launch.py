"""
Integration tests for forked launches.

A Python script stands in for java (see the fake_java fixture) and records
the command line, working directory and environment it was started with.
"""

import json
import os
import subprocess
import sys

from bootrun.core.models import RunConfig
from bootrun.services.launch import ForkedProcessRunner, LaunchOrchestrator


def launch(project, fake_java, **config):
    config.setdefault("main_class", "com.example.App")
    config.setdefault("java_executable", str(fake_java.path))
    orchestrator = LaunchOrchestrator(project, RunConfig(**config))
    return orchestrator.execute()


class TestForkedLaunch:
    """End-to-end runs of the orchestrator with a real child process."""

    def test_child_receives_arguments_cwd_and_environment(self, project_layout, fake_java):
        (project_layout.base_dir / "run").mkdir()

        outcome = launch(
            project_layout,
            fake_java,
            jvm_arguments='-Xmx256m -Dgreeting="hello world"',
            arguments=["--server.port=0"],
            profiles=["it"],
            working_directory="run",
            environment_variables={"BOOTRUN_IT": "1"},
        )

        assert outcome.succeeded, outcome.error
        invocation = fake_java.invocation()
        classes = str(project_layout.classes_dir)
        core_jar = str(project_layout.base_dir / "libs" / "core.jar")
        assert invocation["argv"] == [
            "-Xmx256m",
            "-Dgreeting=hello world",
            "-cp",
            os.pathsep.join([classes, core_jar]),
            "com.example.App",
            "--active-profiles=it",
            "--server.port=0",
        ]
        assert os.path.realpath(invocation["cwd"]) == os.path.realpath(
            project_layout.base_dir / "run"
        )
        assert invocation["env"]["BOOTRUN_IT"] == "1"
        assert outcome.command[0] == str(fake_java.path)

    def test_nonzero_exit_fails_the_run(self, project_layout, fake_java):
        outcome = launch(
            project_layout, fake_java, environment_variables={"FAKE_JAVA_EXIT": "4"}
        )

        assert outcome.failed
        assert outcome.exit_code == 4
        assert "exit code: 4" in str(outcome.error)

    def test_missing_java_fails_the_run(self, project_layout, tmp_path):
        runner = ForkedProcessRunner(java_executable=str(tmp_path / "no-java"))
        orchestrator = LaunchOrchestrator(
            project_layout, RunConfig(main_class="com.example.App"), forked_runner=runner
        )

        outcome = orchestrator.execute()

        assert outcome.failed
        assert "Could not start process" in str(outcome.error)


def test_cli_forked_run(tmp_path, project_layout, fake_java):
    """`python -m bootrun run` forks the configured java and exits with its code."""
    descriptor = tmp_path / "project.json"
    descriptor.write_text(
        json.dumps(
            {
                "baseDir": str(project_layout.base_dir),
                "classesDir": str(project_layout.classes_dir),
                "artifacts": [],
            }
        )
    )
    env = {k: v for k, v in os.environ.items() if not k.startswith("BOOTRUN_")}
    env["FAKE_JAVA_EXIT"] = "5"

    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "bootrun",
            "run",
            "--project",
            str(descriptor),
            "--java",
            str(fake_java.path),
            "--main-class",
            "com.example.App",
            "--",
            "--flag",
        ],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 5, result.stderr
    assert fake_java.invocation()["argv"][-2:] == ["com.example.App", "--flag"]
