# topmark:header:start
#
#   project      : Pluggable
#   file         : loaders.py
#   file_relpath : src/pluggable/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load builder defaults from TOML sources.

Projects may keep their default builder options next to their code:

- in ``pluggable.toml`` (top-level keys), or
- in ``pyproject.toml`` under ``[tool.pluggable]``.

```toml
[tool.pluggable]
init-mode = "per-invocation"
log-on-halt = "info"
copy-options-to-assign = "pipeline_options"
```

Parsing is done with `tomlkit` and converted to plain Python values before
validation by `BuilderConfig.from_mapping`. Loading is explicit: the compiler
never reads files on its own.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from pluggable.config.logging import get_logger
from pluggable.config.model import BuilderConfig
from pluggable.constants import PLUGGABLE_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_TABLE
from pluggable.errors import InvalidConfigError

if TYPE_CHECKING:
    from pluggable.config.logging import PluggableLogger

logger: PluggableLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Parse a TOML file and return it as a plain ``dict``.

    Args:
        path (Path): Path to the TOML file.

    Returns:
        dict[str, Any]: The parsed document.

    Raises:
        InvalidConfigError: If the file cannot be read or parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfigError(f"cannot read config file {path}: {exc}") from exc
    try:
        doc = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise InvalidConfigError(f"invalid TOML in {path}: {exc}") from exc
    return cast("dict[str, Any]", doc.unwrap())


def extract_builder_table(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the builder options table of a parsed TOML document.

    ``pyproject.toml`` keeps them under ``[tool.pluggable]``; any other file
    name is read as a dedicated config where options live at the top level.

    Returns:
        dict[str, Any] | None: The options table, or None if absent.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    table: Any = data
    for part in PYPROJECT_TOOL_TABLE:
        if not isinstance(table, dict) or part not in table:
            return None
        table = table[part]
    if not isinstance(table, dict):
        raise InvalidConfigError(f"[{'.'.join(PYPROJECT_TOOL_TABLE)}] in {path} must be a table")
    return cast("dict[str, Any]", table)


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` looking for a builder config file.

    In each directory ``pluggable.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts if it has a ``[tool.pluggable]`` table.

    Args:
        start (Path | None): Directory (or file) to start from; defaults to CWD.

    Returns:
        Path | None: The first matching file, or None.
    """
    current: Path = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / PLUGGABLE_TOML_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_TOML_NAME
        if pyproject.is_file():
            try:
                table = extract_builder_table(pyproject, load_toml_dict(pyproject))
            except InvalidConfigError as exc:
                logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
                continue
            if table is not None:
                return pyproject
    return None


def load_builder_config(path: Path | None = None) -> BuilderConfig:
    """Load builder defaults from ``path`` or from the nearest config file.

    Args:
        path (Path | None): Explicit file; when None, `find_config_file` is used.

    Returns:
        BuilderConfig: Validated defaults (plain defaults if nothing is found).

    Raises:
        InvalidConfigError: If an explicit file is missing, unreadable or invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No builder config file found; using defaults")
            return BuilderConfig()
    elif not path.is_file():
        raise InvalidConfigError(f"config file not found: {path}")

    logger.debug("Loading builder config from %s", path)
    table = extract_builder_table(path, load_toml_dict(path))
    return BuilderConfig.from_mapping(table)
