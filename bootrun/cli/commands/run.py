"""
Native Click implementation of the run command.

Usage: bootrun run [options] [-- application arguments...]
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from ...core.bootstrap import bootstrap
from ...core.container import try_resolve
from ...core.di import get_logger, resolve_or_default
from ...core.exceptions import BootrunException, ConfigurationError, EntryPointNotFound
from ...core.interfaces.launch import IForkedRunner
from ...core.interfaces.presenter import IPresenter
from ...core.models.config import FiltersConfig, RunConfig
from ...core.models.project import ProjectModel
from ...core.settings import BootrunSettings
from ...presenters.console import ConsolePresenter
from ...services.launch import LaunchOrchestrator, LaunchOutcome
from ..context import BootrunContext

DEFAULT_PROJECT_FILE = Path(".bootrun") / "project.json"


@click.command("run", context_settings={"allow_interspersed_args": False})
@click.argument("app_args", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--project",
    "project_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Project descriptor written by the build tool (default: {DEFAULT_PROJECT_FILE})",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: .bootrun/config.toml or pyproject.toml [tool.bootrun])",
)
@click.option("--fork/--no-fork", default=None, help="Run in a forked JVM (default) or inline")
@click.option("--skip", is_flag=True, default=None, help="Skip the run")
@click.option("--main-class", help="Fully qualified main class of the application")
@click.option("--profiles", help="Comma-separated profiles to activate")
@click.option("--arguments", help="Comma-separated application arguments")
@click.option("--jvm-arguments", help="JVM arguments, as a single quoted string")
@click.option("-D", "--system-property", "system_properties", multiple=True, help="KEY=VALUE")
@click.option("-E", "--env", "environment_variables", multiple=True, help="KEY=VALUE")
@click.option("--working-directory", help="Working directory of the forked process")
@click.option("--java", "java_executable", help="Java executable for the forked process")
@click.option("--agent", "agents", multiple=True, help="Agent jar (can be repeated)")
@click.option("--noverify", is_flag=True, default=None, help="Pass -noverify to the JVM")
@click.option(
    "--add-resources", is_flag=True, default=None, help="Put resource directories first"
)
@click.option(
    "--use-test-classpath", is_flag=True, default=None, help="Keep test scoped dependencies"
)
@click.option("--folder", "folders", multiple=True, help="Extra classpath folder (can be repeated)")
@click.option("--exclude-group-ids", help="Comma-separated groupIds to leave off the classpath")
@click.option(
    "--entry-point",
    help="module:function called with the application arguments when not forking",
)
@click.pass_obj
def run(
    ctx: BootrunContext,
    app_args: tuple[str, ...],
    project_path: Path | None,
    config_path: Path | None,
    fork: bool | None,
    skip: bool | None,
    main_class: str | None,
    profiles: str | None,
    arguments: str | None,
    jvm_arguments: str | None,
    system_properties: tuple[str, ...],
    environment_variables: tuple[str, ...],
    working_directory: str | None,
    java_executable: str | None,
    agents: tuple[str, ...],
    noverify: bool | None,
    add_resources: bool | None,
    use_test_classpath: bool | None,
    folders: tuple[str, ...],
    exclude_group_ids: str | None,
    entry_point: str | None,
) -> None:
    """Run the application from its build output.

    Options given here override the configuration file. Arguments after
    '--' are appended to the application arguments.

    \b
    Examples:
        bootrun run
        bootrun run --profiles dev,local -- --server.port=9090
        bootrun run --jvm-arguments "-Xmx512m -Dfoo=\\"a b\\""
        bootrun run --no-fork --entry-point myapp.main:main
    """
    bootstrap(config_path=config_path, start_dir=str(ctx.cwd), log_level=ctx.log_level)
    presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]

    settings = ctx.load_settings(config_path)
    if settings.config_error:
        presenter.print_warning(settings.config_error)

    overrides: dict[str, Any] = {
        "fork": fork,
        "skip": skip,
        "main_class": main_class,
        "profiles": profiles,
        "jvm_arguments": jvm_arguments,
        "working_directory": working_directory,
        "java_executable": java_executable,
        "noverify": noverify,
        "add_resources": add_resources,
        "use_test_classpath": use_test_classpath,
        "agents": list(agents) or None,
        "folders": list(folders) or None,
    }

    try:
        if system_properties:
            overrides["system_properties"] = {
                **settings.run.system_properties,
                **_parse_pairs(system_properties, "system property"),
            }
        if environment_variables:
            overrides["environment_variables"] = {
                **settings.run.environment_variables,
                **_parse_pairs(environment_variables, "environment variable"),
            }
        if arguments is not None or app_args:
            overrides["arguments"] = _merge_arguments(settings, arguments, app_args)

        run_config = _merge_run_config(settings.run, overrides)
        if run_config.skip:
            get_logger().debug("skipping run as per configuration.")
            return

        filters = settings.filters
        if exclude_group_ids is not None:
            filters = FiltersConfig.model_validate(
                {**filters.model_dump(), "exclude_group_ids": exclude_group_ids}
            )

        project = ProjectModel.from_file(ctx.cwd / (project_path or DEFAULT_PROJECT_FILE))
        target = load_entry_point(entry_point) if entry_point else None

        orchestrator = LaunchOrchestrator(
            project,
            run_config,
            filters,
            entry_point=target,
            forked_runner=try_resolve(IForkedRunner),  # type: ignore[type-abstract]
        )
        outcome = orchestrator.execute()
    except BootrunException as e:
        presenter.print_error(str(e))
        raise SystemExit(e.exit_code) from e

    if outcome.skipped:
        return
    if outcome.failed:
        presenter.print_error(str(outcome.error))
        raise SystemExit(_exit_code(outcome))


def load_entry_point(spec: str) -> Callable[[list[str]], Any]:
    """
    Import ``module:attribute`` and return the callable it names.

    Raises:
        EntryPointNotFound: If the module or attribute can't be loaded
    """
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise EntryPointNotFound(
            f"Invalid entry point '{spec}', expected 'module:function'"
        )

    try:
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise EntryPointNotFound(f"Unable to load entry point '{spec}': {e}", cause=e) from e

    if not callable(target):
        raise EntryPointNotFound(f"Entry point '{spec}' is not callable")
    return target


def _merge_run_config(base: RunConfig, overrides: dict[str, Any]) -> RunConfig:
    """Apply the options that were given on top of the configured run settings."""
    given = {key: value for key, value in overrides.items() if value is not None}
    try:
        return RunConfig.model_validate({**base.model_dump(), **given})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid run option: {e}", key="run", cause=e) from e


def _merge_arguments(
    settings: BootrunSettings,
    arguments: str | None,
    app_args: tuple[str, ...],
) -> list[str | None]:
    """--arguments replaces the configured arguments; trailing arguments are appended."""
    if arguments is None:
        base = list(settings.run.arguments)
    else:
        base = [a.strip() for a in arguments.split(",") if a.strip()]
    return [*base, *app_args]


def _parse_pairs(values: tuple[str, ...], description: str) -> dict[str, str | None]:
    """Parse ``KEY=VALUE`` options (``KEY`` alone maps to None)."""
    pairs: dict[str, str | None] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not key:
            raise ConfigurationError(f"Invalid {description} '{item}'", value=item)
        pairs[key] = value if sep else None
    return pairs


def _exit_code(outcome: LaunchOutcome) -> int:
    if outcome.exit_code is not None and outcome.exit_code > 0:
        return outcome.exit_code
    return outcome.error.exit_code if outcome.error is not None else 1
