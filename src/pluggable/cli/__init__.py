# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable CLI package.

This package groups the Click command definitions of the ``pluggable``
developer tool, used to inspect pipelines and builder defaults.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        pluggable = "pluggable.cli.main:cli"

All subcommands live in [`pluggable.cli.commands`][].
"""

from __future__ import annotations

__all__: list[str] = []
