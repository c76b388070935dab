# topmark:header:start
#
#   project      : Pluggable
#   file         : describe.py
#   file_relpath : src/pluggable/cli/commands/describe.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI command to describe compiled pipelines.

Imports a ``module:attr`` reference (a `Pipeline`, a `StepBuilder` subclass or
a `PipelineRegistry`) and lists the steps of each pipeline in execution
order, with their kind, identity, options and whether they are guarded.
Importing the module assembles its pipelines, so this command also works as
a quick check that a module's pipelines compile.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from pluggable.cli.loader import collect_pipelines, import_target
from pluggable.cli.options import EnumChoiceParam, OutputFormat
from pluggable.pipeline.steps import StepKind

if TYPE_CHECKING:
    from pluggable.cli.console import ClickConsole
    from pluggable.pipeline.compiler import Pipeline
    from pluggable.pipeline.steps import StepDescriptor


def describe_step(index: int, descriptor: StepDescriptor) -> dict[str, Any]:
    """Return the serializable description of one step."""
    has_options = descriptor.kind is StepKind.STATEFUL or descriptor.takes_options
    return {
        "index": index,
        "kind": descriptor.kind.value,
        "identity": descriptor.identity,
        "options": descriptor.options if has_options else None,
        "guarded": descriptor.guarded,
    }


def describe_pipeline(pipeline: Pipeline) -> dict[str, Any]:
    """Return the serializable description of a compiled pipeline."""
    return {
        "name": pipeline.name,
        "config": pipeline.config.to_dict(),
        "steps": [describe_step(i, d) for i, d in enumerate(pipeline.steps, start=1)],
    }


@click.command(
    name="describe",
    help="Describe the pipelines defined by MODULE:ATTR.",
    epilog="""
ATTR may name a Pipeline, a StepBuilder subclass or a PipelineRegistry.
Steps are listed in execution order.""",
)
@click.argument("reference", metavar="MODULE:ATTR")
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def describe_command(*, reference: str, output_format: OutputFormat | None = None) -> None:
    """Describe the pipelines defined by ``reference``.

    Args:
        reference (str): A ``module:attr`` reference.
        output_format (OutputFormat | None): ``default`` (text) or ``json``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    pipelines = collect_pipelines(import_target(reference))
    payload: list[dict[str, Any]] = [describe_pipeline(p) for p in pipelines.values()]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        # Options are application-defined; fall back to their repr.
        console.print(json.dumps({"pipelines": payload}, indent=2, default=repr))
        return

    if vlevel < 0:
        # One line per pipeline: its name and step identities in order.
        for entry in payload:
            identities = " -> ".join(item["identity"] for item in entry["steps"])
            console.print(f"{entry['name']}: {identities or '(no steps)'}")
        return

    for entry in payload:
        console.print(console.styled(entry["name"], bold=True, underline=True))
        if vlevel > 0:
            for key, value in entry["config"].items():
                console.print(f"  {key}: {value}")
        if not entry["steps"]:
            console.print("  (no steps)")
        for item in entry["steps"]:
            line = f"  {item['index']:>2}. [{item['kind']}] {item['identity']}"
            if item["options"] is not None:
                line += f" options={item['options']!r}"
            if item["guarded"]:
                line += console.styled(" (guarded)", fg="yellow")
            console.print(line)
        console.print()
