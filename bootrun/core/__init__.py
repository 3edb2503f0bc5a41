"""
Core infrastructure for bootrun: the service registry and bootstrap, the
exception hierarchy, interfaces and pydantic models.
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, try_resolve
from .exceptions import (
    BootrunException,
    ClasspathError,
    ConfigFileError,
    ConfigurationError,
    EntryPointNotFound,
    LaunchError,
    ParseError,
)

__all__ = [
    "BootrunException",
    "ClasspathError",
    "ConfigFileError",
    "ConfigurationError",
    "EntryPointNotFound",
    "LaunchError",
    "ParseError",
    "ServiceContainer",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
    "try_resolve",
]
