# topmark:header:start
#
#   project      : Pluggable
#   file         : errors.py
#   file_relpath : src/pluggable/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Pluggable CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Core errors (`pluggable.errors`) are translated
    with `from_core_error`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from pluggable.cli.exit_codes import ExitCode
from pluggable.errors import (
    InvalidConfigError,
    MalformedStepError,
    NameCollisionError,
    PluggableError,
)


class PluggableCliError(click.ClickException):
    """Base class for all Pluggable CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (color is applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console = None
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
        if console is not None:
            console.error(console.styled(self.format_message(), fg="bright_red"))
            return
        super().show(file)


class PluggableUsageError(PluggableCliError):
    """Error for command-line invocation errors (malformed target reference)."""

    exit_code = ExitCode.USAGE_ERROR


class PluggableTargetNotFoundError(PluggableCliError):
    """Error when the module or attribute to inspect cannot be found."""

    exit_code = ExitCode.TARGET_NOT_FOUND


class PluggablePipelineError(PluggableCliError):
    """Error when the inspected target fails to assemble (step contract violation)."""

    exit_code = ExitCode.PIPELINE_ERROR


class PluggableConfigError(PluggableCliError):
    """Error for configuration errors (missing/invalid/malformed builder config)."""

    exit_code = ExitCode.CONFIG_ERROR


def from_core_error(exc: PluggableError) -> PluggableCliError:
    """Map a core error to the CLI error carrying the matching exit code."""
    if isinstance(exc, InvalidConfigError):
        return PluggableConfigError(str(exc))
    if isinstance(exc, (MalformedStepError, NameCollisionError)):
        return PluggablePipelineError(str(exc))
    return PluggableCliError(str(exc))
