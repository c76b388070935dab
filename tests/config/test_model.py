# topmark:header:start
#
#   project      : Pluggable
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `BuilderConfig` and `InitMode`."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from pluggable.config.logging import TRACE_LEVEL
from pluggable.config.model import BuilderConfig, InitMode, coerce_config, parse_log_level
from pluggable.errors import InvalidConfigError
from tests.conftest import parametrize

pytestmark = [pytest.mark.config]


def test_defaults() -> None:
    cfg = BuilderConfig()

    assert cfg.init_mode is InitMode.AHEAD_OF_TIME
    assert cfg.log_on_halt is None
    assert cfg.copy_options_to_assign is None


@parametrize(
    "value, expected",
    [
        (None, InitMode.AHEAD_OF_TIME),
        ("ahead-of-time", InitMode.AHEAD_OF_TIME),
        ("ahead_of_time", InitMode.AHEAD_OF_TIME),
        ("Per-Invocation", InitMode.PER_INVOCATION),
        (InitMode.PER_INVOCATION, InitMode.PER_INVOCATION),
    ],
)
def test_init_mode_parse(value: Any, expected: InitMode) -> None:
    assert InitMode.parse(value) is expected


@parametrize("value", ["compile", "", 1, True])
def test_init_mode_parse_rejects_unknown_values(value: Any) -> None:
    with pytest.raises(InvalidConfigError, match="Supported values include"):
        InitMode.parse(value)


@parametrize(
    "value, expected",
    [
        (None, None),
        (False, None),
        ("debug", logging.DEBUG),
        ("TRACE", TRACE_LEVEL),
        ("warn", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("15", 15),
    ],
)
def test_parse_log_level(value: Any, expected: int | None) -> None:
    assert parse_log_level(value) == expected


@parametrize("value", ["verbose", -1, True, 2.5])
def test_parse_log_level_rejects_unknown_values(value: Any) -> None:
    with pytest.raises(InvalidConfigError, match="log_on_halt"):
        parse_log_level(value)


def test_constructor_normalizes_values() -> None:
    cfg = BuilderConfig(init_mode="per-invocation", log_on_halt="info")  # type: ignore[arg-type]

    assert cfg.init_mode is InitMode.PER_INVOCATION
    assert cfg.log_on_halt == logging.INFO


def test_from_mapping_accepts_dashed_keys() -> None:
    cfg = BuilderConfig.from_mapping(
        {"init-mode": "per-invocation", "log-on-halt": "error", "copy-options-to-assign": "opts"}
    )

    assert cfg == BuilderConfig(
        init_mode=InitMode.PER_INVOCATION, log_on_halt=logging.ERROR, copy_options_to_assign="opts"
    )


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(InvalidConfigError, match="unknown builder option"):
        BuilderConfig.from_mapping({"init_mode": "ahead-of-time", "retries": 3})


@parametrize("key", ["with space", "1st", 42, ""])
def test_copy_options_to_assign_must_be_identifier(key: Any) -> None:
    with pytest.raises(InvalidConfigError, match="identifier"):
        BuilderConfig.from_mapping({"copy_options_to_assign": key})


def test_merged_with_only_overrides_explicit_keys() -> None:
    base = BuilderConfig(log_on_halt=logging.INFO, copy_options_to_assign="opts")

    merged = base.merged_with({"init_mode": "per-invocation"})

    assert merged.init_mode is InitMode.PER_INVOCATION
    assert merged.log_on_halt == logging.INFO
    assert merged.copy_options_to_assign == "opts"
    assert base.merged_with({}) is base
    assert base.merged_with({"log_on_halt": None}).log_on_halt is None


def test_to_dict_is_serializable() -> None:
    cfg = BuilderConfig(init_mode=InitMode.PER_INVOCATION, log_on_halt=logging.WARNING)

    assert cfg.to_dict() == {
        "init_mode": "per-invocation",
        "log_on_halt": logging.WARNING,
        "copy_options_to_assign": None,
    }


def test_coerce_config() -> None:
    cfg = BuilderConfig()

    assert coerce_config(cfg) is cfg
    assert coerce_config(None) == cfg
    assert coerce_config({"log_on_halt": "info"}).log_on_halt == logging.INFO


def test_config_is_frozen() -> None:
    with pytest.raises(AttributeError):
        BuilderConfig().log_on_halt = 10  # type: ignore[misc]
