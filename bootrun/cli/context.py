"""
State shared by the bootrun commands through ``ctx.obj``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.settings import BootrunSettings, load_settings


@dataclass
class BootrunContext:
    """Working directory and global flags of one CLI invocation."""

    cwd: Path
    debug: bool = False

    @classmethod
    def create(cls, cwd: Path | None = None, debug: bool = False) -> BootrunContext:
        return cls(cwd=cwd or Path.cwd(), debug=debug)

    def load_settings(self, config_path: Path | None = None) -> BootrunSettings:
        """Load settings from ``config_path``, or the config file found from cwd."""
        return load_settings(config_path=config_path, start_dir=str(self.cwd))

    @property
    def log_level(self) -> str | None:
        """Logging level forced from the command line, if any."""
        return "debug" if self.debug else None
