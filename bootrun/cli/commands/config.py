"""
Native Click implementation of the config command.

Usage: bootrun config [show|get] [key]
"""

from pathlib import Path

import click

from ...config import config_get, load_config
from ..context import BootrunContext

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: .bootrun/config.toml or pyproject.toml [tool.bootrun])",
)


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View the effective configuration.

    Settings come from .bootrun/config.toml (or [tool.bootrun] in
    pyproject.toml), overridden by BOOTRUN_<SECTION>__<FIELD> variables.

    \b
    Examples:

        bootrun config show                  # All sections

        bootrun config get run.fork          # A single value
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("show")
@_config_option
@click.pass_obj
def config_show_cmd(ctx: BootrunContext, config_path: Path | None) -> None:
    """Show all config sections."""
    values = load_config(config_path=config_path, start_dir=str(ctx.cwd))

    source = values.pop("_config_file", None)
    error = values.pop("_config_error", None)
    click.echo(f"Config file: {source or '(none, using defaults)'}")
    if error:
        click.echo(f"  {error}", err=True)
    click.echo("")

    for section, fields in values.items():
        click.echo(f"[{section}]")
        for key, value in fields.items():
            click.echo(f"  {key} = {value!r}")
        click.echo("")


@config.command("get")
@click.argument("key")
@_config_option
@click.pass_obj
def config_get_cmd(ctx: BootrunContext, key: str, config_path: Path | None) -> None:
    """Get a config value.

    Arguments:

        KEY    The config key to get (e.g. run.fork)
    """
    value = config_get(key, config_path=config_path, start_dir=str(ctx.cwd))
    if value is None:
        click.echo(f"{key}: (not set)")
    else:
        click.echo(f"{key}: {value}")
