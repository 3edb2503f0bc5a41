"""
Settings loading for bootrun.

Settings come from, highest priority first: ``BOOTRUN_<SECTION>__<FIELD>``
environment variables, the nearest ``.bootrun/config.toml`` (or a
``pyproject.toml`` with a ``[tool.bootrun]`` table) and model defaults.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .models.config import FiltersConfig, LoggingConfig, RunConfig

CONFIG_DIR = ".bootrun"
CONFIG_FILE = "config.toml"


def _get_logger():
    from .di import get_logger

    return get_logger()


def _has_bootrun_table(pyproject: Path) -> bool:
    try:
        with open(pyproject, "rb") as f:
            return "bootrun" in tomllib.load(f).get("tool", {})
    except (OSError, tomllib.TOMLDecodeError) as e:
        _get_logger().debug("Ignoring unreadable %s: %s", pyproject, e)
        return False


def find_config_file(start_dir: str | None = None) -> Path | None:
    """The nearest config file at or above ``start_dir`` (default: cwd)."""
    start = Path(start_dir) if start_dir else Path.cwd()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_DIR / CONFIG_FILE
        if candidate.exists():
            return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.exists() and _has_bootrun_table(pyproject):
            return pyproject
    return None


@dataclass
class ConfigFile:
    """What was read from a config file, or why it couldn't be."""

    path: Path | None = None
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


def read_config_file(config_path: Path | None = None, start_dir: str | None = None) -> ConfigFile:
    path = config_path or find_config_file(start_dir)
    if path is None:
        return ConfigFile()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        _get_logger().warning("Failed to parse config file %s: %s", path, e)
        return ConfigFile(path, error=f"Failed to parse config file {path}: {e}")
    except OSError as e:
        _get_logger().warning("Failed to read config file %s: %s", path, e)
        return ConfigFile(path, error=f"Failed to read config file {path}: {e}")

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("bootrun", {})
    return ConfigFile(path, data)


class TomlConfigSource(PydanticBaseSettingsSource):
    """Feeds the sections of an already read config file to pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], config: ConfigFile):
        super().__init__(settings_cls)
        self.config = config

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self.config.data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: self.config.data[name]
            for name in self.settings_cls.model_fields
            if name in self.config.data
        }


# settings_customise_sources is a classmethod, so the file being loaded is
# handed over here
_loading: ContextVar[ConfigFile] = ContextVar("bootrun_config_file", default=ConfigFile())


class BootrunSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOTRUN_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    run: RunConfig = RunConfig()
    filters: FiltersConfig = FiltersConfig()
    logging: LoggingConfig = LoggingConfig()

    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, TomlConfigSource(settings_cls, _loading.get())

    @property
    def config_file(self) -> str | None:
        """Path of the config file the values were read from."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Why the config file was ignored, if it was."""
        return self._config_error

    def to_dict(self) -> dict[str, Any]:
        """Sections as plain dicts, plus ``_config_file``/``_config_error`` when set."""
        result: dict[str, Any] = {
            name: getattr(self, name).model_dump() for name in ("run", "filters", "logging")
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


def load_settings(config_path: Path | None = None, start_dir: str | None = None) -> BootrunSettings:
    """
    Load settings from ``config_path``, or from the config file nearest to
    ``start_dir``, overlaid with environment variables.

    A config file that can't be read or parsed is skipped; the reason is
    kept in ``config_error``.
    """
    config = read_config_file(config_path, start_dir)
    token = _loading.set(config)
    try:
        settings = BootrunSettings()
    finally:
        _loading.reset(token)

    settings._config_file = str(config.path) if config.path and config.error is None else None
    settings._config_error = config.error
    return settings
