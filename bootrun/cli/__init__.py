"""
Click-based CLI for bootrun.

Usage:
    from bootrun.cli import cli
    cli()
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import click

from .context import BootrunContext

try:
    __version__ = version("bootrun")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bootrun")
@click.option("--debug", is_flag=True, help="Log launch diagnostics (classpath, arguments)")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """bootrun - run an application from its build output

    Assembles the runtime classpath from compiled classes, resources and
    resolved dependencies, then runs the application in a forked JVM or
    inline.

    \b
    Quick Start:
        bootrun run                     Run using .bootrun/project.json
        bootrun run --profiles dev      Run with active profiles
        bootrun run --no-fork --entry-point app.main:main

    \b
    Configuration:
        bootrun config show             Show the effective configuration
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    ctx.obj = BootrunContext.create(debug=debug)


def register_commands() -> None:
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()

__all__ = [
    "BootrunContext",
    "__version__",
    "cli",
    "register_commands",
]
