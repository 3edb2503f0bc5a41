"""
Shared pytest fixtures for bootrun tests.

This module provides:
- reset_container: Fresh DI container and bootstrap state for every test
- fake_java: An executable standing in for java that records how it was run
- project_layout: A build output tree (classes, resources, jars) on disk
"""

import json
import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

from bootrun.core.bootstrap import reset as reset_bootstrap
from bootrun.core.models import Artifact, ProjectModel

FAKE_JAVA_SCRIPT = """#!{python}
import json
import os
import sys

with open({record!r}, "w") as f:
    json.dump({{"argv": sys.argv[1:], "cwd": os.getcwd(), "env": dict(os.environ)}}, f)

sys.exit(int(os.environ.get("FAKE_JAVA_EXIT", "0")))
"""


@dataclass
class FakeJava:
    """A stand-in java executable and the file it records its invocation in."""

    path: Path
    record_path: Path

    def invocation(self) -> dict:
        return json.loads(self.record_path.read_text())


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the service container and bootstrap state around each test."""
    reset_bootstrap()
    yield
    reset_bootstrap()


@pytest.fixture
def fake_java(tmp_path: Path) -> FakeJava:
    """
    Create ``<tmp>/jdk/bin/java``: a Python script that records its argv,
    working directory and environment, then exits with $FAKE_JAVA_EXIT.
    """
    if sys.platform == "win32":
        pytest.skip("fake java executable needs a POSIX shebang")

    java = tmp_path / "jdk" / "bin" / "java"
    java.parent.mkdir(parents=True)
    record = tmp_path / "java-invocation.json"
    java.write_text(FAKE_JAVA_SCRIPT.format(python=sys.executable, record=str(record)))
    java.chmod(java.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return FakeJava(path=java, record_path=record)


@pytest.fixture
def project_layout(tmp_path: Path) -> ProjectModel:
    """
    Create a minimal build output tree:

        app/target/classes/
        app/src/main/resources/application.properties
        app/libs/core.jar, app/libs/junit.jar (test scope)
    """
    base = tmp_path / "app"
    classes = base / "target" / "classes"
    resources = base / "src" / "main" / "resources"
    libs = base / "libs"
    for directory in (classes, resources, libs):
        directory.mkdir(parents=True)
    (resources / "application.properties").write_text("server.port=8080\n")
    (libs / "core.jar").write_bytes(b"")
    (libs / "junit.jar").write_bytes(b"")

    return ProjectModel(
        base_dir=base,
        classes_dir=classes,
        resources=[resources],
        artifacts=[
            Artifact(group_id="com.example", artifact_id="core", file=libs / "core.jar"),
            Artifact(
                group_id="junit", artifact_id="junit", scope="test", file=libs / "junit.jar"
            ),
        ],
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BOOTRUN_* variables so settings come from files and defaults only."""
    for key in list(os.environ):
        if key.startswith("BOOTRUN_"):
            monkeypatch.delenv(key)
    return monkeypatch
