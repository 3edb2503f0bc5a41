"""Launch services for the bootrun run command."""

from .args import EnvVariables, RunArguments, format_system_property, tokenize
from .classpath import ClasspathBuilder, remove_duplicates_from_output_directory
from .forked import ForkedProcessRunner, ForkedResult
from .isolated import IsolatedExecutionGroup
from .main_class import find_main_classes, find_single_main_class
from .orchestrator import LaunchOrchestrator
from .outcome import LaunchOutcome
from .signal_handler import ProcessSignalHandler

__all__ = [
    "ClasspathBuilder",
    "EnvVariables",
    "ForkedProcessRunner",
    "ForkedResult",
    "IsolatedExecutionGroup",
    "LaunchOrchestrator",
    "LaunchOutcome",
    "ProcessSignalHandler",
    "RunArguments",
    "find_main_classes",
    "find_single_main_class",
    "format_system_property",
    "remove_duplicates_from_output_directory",
    "tokenize",
]
