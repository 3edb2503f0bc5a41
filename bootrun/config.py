"""Read access to the effective bootrun configuration."""

from pathlib import Path
from typing import Any

from .core.models.config import BootrunConfig
from .core.settings import find_config_file, load_settings

__all__ = ["config_get", "find_config_file", "load_config"]


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    All config sections as plain dicts, defaults applied.

    ``_config_file`` and ``_config_error`` are present when a config file
    was found (or failed to load).
    """
    return load_settings(config_path=config_path, start_dir=start_dir).to_dict()


def config_get(
    key: str, config_path: Path | None = None, start_dir: str | None = None
) -> Any:
    """A single value by dotted key, e.g. ``run.fork``; None if there is no such key."""
    values = load_config(config_path=config_path, start_dir=start_dir)
    sections = {k: v for k, v in values.items() if not k.startswith("_")}
    return BootrunConfig.from_dict(sections).get(key)
