# topmark:header:start
#
#   project      : Pluggable
#   file         : config.py
#   file_relpath : src/pluggable/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable `config` command.

Prints the builder defaults resolved from ``PATH`` (or from the nearest
``pluggable.toml`` / ``pyproject.toml``) as TOML or JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click
import tomlkit

from pluggable.cli.errors import from_core_error
from pluggable.cli.options import ConfigFormat, EnumChoiceParam
from pluggable.config.loaders import find_config_file, load_builder_config
from pluggable.errors import InvalidConfigError

if TYPE_CHECKING:
    from pluggable.cli.console import ClickConsole


@click.command(
    name="config",
    help="Show the resolved builder defaults.",
)
@click.argument(
    "path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(ConfigFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in ConfigFormat)}).",
)
def config_command(*, path: Path | None = None, output_format: ConfigFormat | None = None) -> None:
    """Show the builder defaults resolved from ``path`` or the nearest config file.

    Args:
        path (Path | None): Explicit ``pluggable.toml`` or ``pyproject.toml``.
        output_format (ConfigFormat | None): ``toml`` (default) or ``json``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    source: Path | None = path if path is not None else find_config_file()
    try:
        config = load_builder_config(source)
    except InvalidConfigError as exc:
        raise from_core_error(exc) from exc

    # TOML has no null: unset options are omitted.
    data = {key: value for key, value in config.to_dict().items() if value is not None}

    fmt: ConfigFormat = output_format or ConfigFormat.TOML
    if fmt == ConfigFormat.JSON:
        console.print(
            json.dumps({"source": str(source) if source else None, "config": config.to_dict()})
        )
        return

    if vlevel > 0:
        console.print(f"# source: {source if source else '(defaults)'}")
    document = tomlkit.document()
    table = tomlkit.table()
    for key, value in data.items():
        table.add(key.replace("_", "-"), value)
    tool = tomlkit.table(is_super_table=True)
    tool.add("pluggable", table)
    document.add("tool", tool)
    console.print(tomlkit.dumps(document), nl=False)
