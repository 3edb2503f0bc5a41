"""
Click command implementations for bootrun CLI.

Each module corresponds to a bootrun command (e.g., run.py implements
'bootrun run'). Commands are registered with the main CLI group via the
register_commands() function in bootrun.cli.
"""

from .config import config
from .run import run

COMMANDS = [
    config,
    run,
]

__all__ = [
    "COMMANDS",
    "config",
    "run",
]
