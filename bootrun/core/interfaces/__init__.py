"""
Protocol definitions for bootrun's service interfaces.

These contracts decouple the launch orchestrator from the concrete
logger, presenter, filter and process runner implementations.
"""

from .launch import IArtifactFilter, IForkedRunner, ISignalHandler
from .logger import ILogger
from .presenter import IPresenter

__all__ = [
    "IArtifactFilter",
    "IForkedRunner",
    "ILogger",
    "IPresenter",
    "ISignalHandler",
]
