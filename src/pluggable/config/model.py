# topmark:header:start
#
#   project      : Pluggable
#   file         : model.py
#   file_relpath : src/pluggable/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Builder configuration model.

`BuilderConfig` is the immutable, validated set of options that controls how
a step list is compiled into a `Pipeline`:

- ``init_mode``: when stateful steps are initialized (`InitMode`),
- ``log_on_halt``: numeric log level used when a step halts (or None),
- ``copy_options_to_assign``: assign key that receives the invocation-time
  options before any step runs (or None).

Instances are built either directly or from loosely typed mappings (class
keywords, TOML tables) through `BuilderConfig.from_mapping`, which is the
single validation point and raises `InvalidConfigError` for bad values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

from pluggable.config.logging import resolve_level
from pluggable.errors import InvalidConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping


class InitMode(str, Enum):
    """When stateful steps have their options initialized."""

    # ``init`` runs once while the pipeline is assembled; the result is embedded.
    AHEAD_OF_TIME = "ahead-of-time"
    # ``init`` runs on every pipeline invocation with the original options.
    PER_INVOCATION = "per-invocation"

    @classmethod
    def parse(cls, value: InitMode | str | None) -> InitMode:
        """Return the `InitMode` for ``value`` (member, value or member name).

        ``None`` selects the default (`AHEAD_OF_TIME`).

        Raises:
            InvalidConfigError: If ``value`` is not a supported init mode.
        """
        if value is None:
            return cls.AHEAD_OF_TIME
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            for member in cls:
                if key == member.value:
                    return member
        raise InvalidConfigError(
            "invalid init_mode. Supported values include "
            f"{', '.join(repr(m.value) for m in cls)}. Got: {value!r}"
        )


CONFIG_KEYS: Final[tuple[str, ...]] = ("init_mode", "log_on_halt", "copy_options_to_assign")


def parse_log_level(value: Any) -> int | None:
    """Return the numeric level for a ``log_on_halt`` value (None/False disable it).

    Raises:
        InvalidConfigError: If ``value`` is not a known level name or number.
    """
    if value is None or value is False:
        return None
    level = resolve_level(value)
    if level is None:
        raise InvalidConfigError(f"invalid log_on_halt level: {value!r}")
    return level


def _parse_assign_key(value: Any) -> str | None:
    if value is None or value is False:
        return None
    if not isinstance(value, str) or not value.isidentifier():
        raise InvalidConfigError(
            f"copy_options_to_assign must be an identifier string, got: {value!r}"
        )
    return value


@dataclass(frozen=True)
class BuilderConfig:
    """Immutable options applied when compiling a pipeline.

    Attributes:
        init_mode (InitMode): Options-initialization timing.
        log_on_halt (int | None): Level of the record emitted when a step halts.
        copy_options_to_assign (str | None): Assign receiving the invocation options.
    """

    init_mode: InitMode = InitMode.AHEAD_OF_TIME
    log_on_halt: int | None = None
    copy_options_to_assign: str | None = None

    def __post_init__(self) -> None:
        # Normalize values passed directly to the constructor.
        object.__setattr__(self, "init_mode", InitMode.parse(self.init_mode))
        object.__setattr__(self, "log_on_halt", parse_log_level(self.log_on_halt))
        object.__setattr__(
            self, "copy_options_to_assign", _parse_assign_key(self.copy_options_to_assign)
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> BuilderConfig:
        """Build a config from a mapping, rejecting unknown keys.

        Dashes in keys are accepted as underscores (TOML style).

        Args:
            data (Mapping[str, Any] | None): Raw options.

        Returns:
            BuilderConfig: The validated configuration.

        Raises:
            InvalidConfigError: On unknown keys or invalid values.
        """
        if not data:
            return cls()
        normalized: dict[str, Any] = {str(k).replace("-", "_"): v for k, v in data.items()}
        unknown = sorted(set(normalized) - set(CONFIG_KEYS))
        if unknown:
            raise InvalidConfigError(
                f"unknown builder option(s): {', '.join(unknown)}; "
                f"supported: {', '.join(CONFIG_KEYS)}"
            )
        return cls(**normalized)

    def merged_with(self, overrides: Mapping[str, Any] | None) -> BuilderConfig:
        """Return a copy with ``overrides`` applied on top of this config."""
        if not overrides:
            return self
        layered = BuilderConfig.from_mapping(overrides)
        explicit = {str(k).replace("-", "_") for k in overrides}
        return replace(self, **{k: getattr(layered, k) for k in explicit})

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, serializable representation."""
        return {
            "init_mode": self.init_mode.value,
            "log_on_halt": self.log_on_halt,
            "copy_options_to_assign": self.copy_options_to_assign,
        }


def coerce_config(config: BuilderConfig | Mapping[str, Any] | None) -> BuilderConfig:
    """Return ``config`` as a `BuilderConfig` (mappings are validated)."""
    if isinstance(config, BuilderConfig):
        return config
    return BuilderConfig.from_mapping(config)
