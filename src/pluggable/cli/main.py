# topmark:header:start
#
#   project      : Pluggable
#   file         : main.py
#   file_relpath : src/pluggable/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the ``pluggable`` developer tool.

Group-level options are initialized once and placed into ``ctx.obj``;
subcommands read the console and verbosity from there.
"""

from __future__ import annotations

import click

from pluggable.cli.commands.config import config_command
from pluggable.cli.commands.describe import describe_command
from pluggable.cli.commands.version import version_command
from pluggable.cli.console import ClickConsole
from pluggable.cli.options import common_color_options, common_verbose_options, resolve_verbosity
from pluggable.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int, no_color: bool) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging via env:
    setup_logging(level=resolve_env_log_level())

    enable_color = not no_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Pluggable CLI: inspect pipelines and builder defaults.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int, no_color: bool) -> None:
    """Entry point for the Pluggable CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        if ctx.obj["verbosity_level"] >= 0:
            console.print("Hint: use 'pluggable describe MODULE:ATTR' to list a pipeline's steps.")
            console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(describe_command)

cli.add_command(config_command)

if __name__ == "__main__":
    cli()
