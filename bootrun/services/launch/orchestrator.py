"""
Launch orchestrator - runs the application from build output.

Decides between a forked JVM and an inline run, builds the argument
vector for the former and the isolated thread for the latter, and turns
whatever happened into a single LaunchOutcome.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from ...core.exceptions import BootrunException, EntryPointNotFound, LaunchError
from ...core.interfaces.launch import IArtifactFilter, IForkedRunner
from ...core.interfaces.logger import ILogger
from ...core.models.artifact import SCOPE_TEST
from ...core.models.config import FiltersConfig, RunConfig
from ...core.models.project import ProjectModel
from ...filters.dependency import DependencyFilterEngine, ScopeFilter, build_filters
from .args import EnvVariables, RunArguments, format_system_property
from .classpath import ClasspathBuilder
from .forked import ForkedProcessRunner
from .isolated import IsolatedExecutionGroup
from .main_class import find_single_main_class
from .outcome import LaunchOutcome

ACTIVE_PROFILES_ARGUMENT = "--active-profiles="
# Exit codes of a child stopped by Ctrl-C (shell convention and Popen's -SIGINT)
INTERRUPTED_EXIT_CODES = (130, -2)


class LaunchOrchestrator:
    """
    Orchestrates one run invocation.

    Usage:
        orchestrator = LaunchOrchestrator(project, config.run, config.filters)
        outcome = orchestrator.execute()
        outcome.raise_for_failure()
    """

    def __init__(
        self,
        project: ProjectModel,
        config: RunConfig | None = None,
        filters: FiltersConfig | None = None,
        entry_point: Callable[[list[str]], Any] | None = None,
        forked_runner: IForkedRunner | None = None,
        filter_engine: DependencyFilterEngine | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            project: Build outputs (classes, resources, resolved artifacts)
            config: Run settings
            filters: Dependency filter settings
            entry_point: Callable run with the application arguments when
                forking is disabled
            forked_runner: Runner for the child JVM (created lazily if not provided)
            filter_engine: Dependency filter engine
            logger: Logger for internal diagnostics
        """
        self.project = project
        self.config = config or RunConfig()
        self.filters = filters or FiltersConfig()
        self.entry_point = entry_point
        self._forked_runner = forked_runner
        self._filter_engine = filter_engine
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import get_logger

            self._logger = get_logger()
        return self._logger

    @property
    def forked_runner(self) -> IForkedRunner:
        if self._forked_runner is None:
            self._forked_runner = ForkedProcessRunner(
                java_executable=self.config.java_executable, logger=self._logger
            )
        return self._forked_runner

    def execute(self) -> LaunchOutcome:
        """
        Run the application once.

        Returns:
            LaunchOutcome; on failure ``error`` holds the BootrunException
            and ``exit_code`` the child's exit code when there was one
        """
        fork = self.config.fork
        if self.config.skip:
            self.logger.debug("skipping run as per configuration.")
            return LaunchOutcome.skipped_run(fork_enabled=fork)

        try:
            if fork:
                return self._run_forked(self.get_start_class())
            self.log_disabled_fork()
            return self._run_inline()
        except BootrunException as e:
            self.logger.debug("Run failed: %s", e)
            return LaunchOutcome.failure(
                e,
                fork_enabled=fork,
                forked=fork,
                exit_code=e.process_exit_code if isinstance(e, LaunchError) else None,
            )

    # -------------------------------------------------------------------------
    # Forked
    # -------------------------------------------------------------------------

    def _run_forked(self, start_class: str) -> LaunchOutcome:
        args = self.build_fork_arguments(start_class)
        working_directory = self.resolve_working_directory()
        environment = self.determine_environment_variables()

        result = self.forked_runner.run(working_directory, args, environment)

        if result.exit_code == 0 or (
            result.interrupted and result.exit_code in INTERRUPTED_EXIT_CODES
        ):
            return LaunchOutcome(
                succeeded=True,
                fork_enabled=True,
                forked=True,
                exit_code=result.exit_code,
                interrupted=result.interrupted,
                command=result.command,
            )

        error = LaunchError(
            f"Application finished with exit code: {result.exit_code}",
            exit_code=result.exit_code,
        )
        return LaunchOutcome.failure(
            error,
            fork_enabled=True,
            forked=True,
            exit_code=result.exit_code,
            interrupted=result.interrupted,
            command=result.command,
        )

    def build_fork_arguments(self, start_class: str) -> list[str]:
        """
        The argument vector after the java executable.

        Order: agents, -noverify, JVM arguments (system properties first),
        -cp <classpath>, the start class, application arguments.
        """
        args: list[str] = []
        self._add_agents(args)
        self._add_jvm_args(args)
        self._add_classpath(args)
        args.append(start_class)
        self._add_args(args)
        return args

    def _add_agents(self, args: list[str]) -> None:
        agents = self.config.determine_agents()
        if agents:
            self.logger.info("Attaching agents: %s", agents)
            args.extend(f"-javaagent:{agent}" for agent in agents)
        if self.config.noverify:
            args.append("-noverify")

    def _add_jvm_args(self, args: list[str]) -> None:
        jvm_arguments = self.resolve_jvm_arguments().as_list()
        args.extend(jvm_arguments)
        self._log_arguments("JVM argument(s): ", jvm_arguments)

    def _add_classpath(self, args: list[str]) -> None:
        entries = self.get_classpath_entries()
        classpath = ClasspathBuilder.join(entries)
        self.logger.debug("Classpath for forked process: %s", classpath)
        args.extend(["-cp", classpath])

    def _add_args(self, args: list[str]) -> None:
        application_arguments = self.resolve_application_arguments().as_list()
        args.extend(application_arguments)
        self._log_arguments("Application argument(s): ", application_arguments)

    def resolve_jvm_arguments(self) -> RunArguments:
        """System properties followed by the free-form JVM argument string, tokenized."""
        parts = [
            format_system_property(key, value)
            for key, value in self.config.system_properties.items()
        ]
        if self.config.jvm_arguments:
            parts.append(self.config.jvm_arguments)
        return RunArguments(" ".join(p for p in parts if p))

    def resolve_working_directory(self) -> Path:
        if self.config.working_directory:
            return self.project.resolve(self.config.working_directory)
        return self.project.base_dir

    def determine_environment_variables(self) -> dict[str, str]:
        env_variables = self.resolve_env_variables()
        self._log_arguments("Environment variable(s): ", env_variables.as_list())
        return env_variables.as_dict()

    def resolve_env_variables(self) -> EnvVariables:
        return EnvVariables(self.config.environment_variables)

    # -------------------------------------------------------------------------
    # Inline
    # -------------------------------------------------------------------------

    def _run_inline(self) -> LaunchOutcome:
        if self.entry_point is None:
            raise EntryPointNotFound(
                "No entry point supplied for a run without forking, "
                "please supply an entry point or enable 'fork'"
            )

        arguments = self.resolve_application_arguments().as_list()
        self._log_arguments("Application argument(s): ", arguments)
        name = self.config.main_class or getattr(self.entry_point, "__qualname__", "main")
        group = IsolatedExecutionGroup(name, logger=self._logger)
        group.run(self.entry_point, arguments)
        group.rethrow_uncaught_exception()
        return LaunchOutcome(succeeded=True, fork_enabled=False)

    def log_disabled_fork(self) -> None:
        """Warn about settings that only apply to a forked process."""
        if not self.logger.is_enabled_for("warning"):
            return
        if self.config.determine_agents():
            self.logger.warning("Fork mode disabled, ignoring agent")
        if self.config.jvm_arguments or self.config.system_properties:
            jvm_arguments = self.resolve_jvm_arguments().as_list()
            self.logger.warning(
                "Fork mode disabled, ignoring JVM argument(s) [%s]", " ".join(jvm_arguments)
            )
        if self.config.working_directory:
            self.logger.warning("Fork mode disabled, ignoring working directory configuration")

    # -------------------------------------------------------------------------
    # Shared
    # -------------------------------------------------------------------------

    def resolve_application_arguments(self) -> RunArguments:
        """Application arguments with the active profiles argument first."""
        run_arguments = RunArguments(self.config.arguments)
        self._add_active_profile_argument(run_arguments)
        return run_arguments

    def _add_active_profile_argument(self, arguments: RunArguments) -> None:
        profiles = self.config.profiles
        if profiles:
            arguments.prepend(ACTIVE_PROFILES_ARGUMENT + ",".join(profiles))
            self._log_arguments("Active profile(s): ", profiles)

    def get_start_class(self) -> str:
        """
        The configured main class, or the single one found in the classes directory.

        Raises:
            EntryPointNotFound: If none (or more than one) is found
        """
        main_class = self.config.main_class
        if main_class is None:
            main_class = find_single_main_class(
                self.project.classes_dir, self.config.main_class_annotation
            )
        if main_class is None:
            raise EntryPointNotFound(
                "Unable to find a suitable main class, please add a 'main_class' property"
            )
        return main_class

    def get_filters(self) -> list[IArtifactFilter]:
        """Configured filters, plus the test scope filter unless the test classpath is used."""
        if self.config.use_test_classpath:
            return build_filters(self.filters)
        return build_filters(
            self.filters, ScopeFilter({SCOPE_TEST}, overrides=self.filters.scope_overrides)
        )

    def get_classpath_entries(self) -> list[str]:
        builder = ClasspathBuilder(
            classes_directory=self.project.classes_dir,
            artifacts=self.project.artifacts,
            filters=self.get_filters(),
            folders=self.config.folders,
            resource_directories=self.project.resources,
            add_resources=self.config.add_resources,
            filter_engine=self._filter_engine,
            logger=self._logger,
        )
        return builder.build_paths()

    def _log_arguments(self, message: str, args: list[str]) -> None:
        if self.logger.is_enabled_for("debug"):
            self.logger.debug("%s%s", message, " ".join(args))
