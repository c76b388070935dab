# topmark:header:start
#
#   project      : Pluggable
#   file         : constants.py
#   file_relpath : src/pluggable/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    PLUGGABLE_VERSION: str = get_version("pluggable")
except PackageNotFoundError:  # pragma: no cover - source checkout without install
    PLUGGABLE_VERSION = "0.0.0"

# Environment variable consulted by `pluggable.config.logging.resolve_env_log_level`.
LOG_LEVEL_ENV_VAR: str = "PLUGGABLE_LOG_LEVEL"

# TOML sources for builder defaults.
PYPROJECT_TOML_NAME: str = "pyproject.toml"
PLUGGABLE_TOML_NAME: str = "pluggable.toml"
PYPROJECT_TOOL_TABLE: tuple[str, str] = ("tool", "pluggable")
