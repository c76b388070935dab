# topmark:header:start
#
#   project      : Pluggable
#   file         : version.py
#   file_relpath : src/pluggable/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable `version` command.

Prints the current Pluggable version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from pluggable.cli.options import EnumChoiceParam, OutputFormat
from pluggable.constants import PLUGGABLE_VERSION

if TYPE_CHECKING:
    from pluggable.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of Pluggable.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Pluggable.

    Args:
        output_format (OutputFormat | None): Optional output format (plain text or JSON).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps({"version": PLUGGABLE_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("Pluggable version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(PLUGGABLE_VERSION, bold=True)}")
    elif vlevel < 0:
        console.print(PLUGGABLE_VERSION)
    else:
        console.print(console.styled(PLUGGABLE_VERSION, bold=True))
