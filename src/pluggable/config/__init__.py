# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Builder configuration and logging setup for Pluggable.

- [`pluggable.config.model`][pluggable.config.model]: `BuilderConfig` and `InitMode`.
- [`pluggable.config.loaders`][pluggable.config.loaders]: TOML defaults (`[tool.pluggable]`).
- [`pluggable.config.logging`][pluggable.config.logging]: package logger and TRACE level.
"""

from __future__ import annotations

from pluggable.config.model import BuilderConfig, InitMode, coerce_config

__all__ = ["BuilderConfig", "InitMode", "coerce_config"]
