# topmark:header:start
#
#   project      : Pluggable
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for Pluggable logging helpers (TRACE level, env resolution, formatter)."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from pluggable.config.logging import (
    TRACE_LEVEL,
    ChalkFormatter,
    PluggableLogger,
    get_logger,
    resolve_env_log_level,
    resolve_level,
    setup_logging,
)
from tests.conftest import parametrize

pytestmark = [pytest.mark.config]


@parametrize(
    "value, expected",
    [
        ("trace", TRACE_LEVEL),
        (" Info ", logging.INFO),
        ("FATAL", logging.CRITICAL),
        ("30", 30),
        (0, 0),
        (None, None),
        ("chatty", None),
        (-5, None),
        (False, None),
    ],
)
def test_resolve_level(value: Any, expected: int | None) -> None:
    assert resolve_level(value) == expected


def test_resolve_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_env_log_level() is None

    monkeypatch.setenv("PLUGGABLE_LOG_LEVEL", "debug")
    assert resolve_env_log_level() == logging.DEBUG

    monkeypatch.setenv("PLUGGABLE_LOG_LEVEL", "")
    assert resolve_env_log_level() is None


def test_get_logger_returns_pluggable_logger() -> None:
    logger = get_logger("pluggable.tests.logging")

    assert isinstance(logger, PluggableLogger)
    assert logging.getLevelName(TRACE_LEVEL) == "TRACE"


def test_trace_records(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("pluggable.tests.trace")

    with caplog.at_level(TRACE_LEVEL, logger="pluggable.tests.trace"):
        logger.trace("step %s", "one")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(TRACE_LEVEL, "step one")]


def test_trace_is_skipped_above_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("pluggable.tests.quiet")

    with caplog.at_level(logging.INFO, logger="pluggable.tests.quiet"):
        logger.trace("hidden")

    assert caplog.records == []


def test_chalk_formatter_keeps_message_text() -> None:
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful %s", ("now",), None)

    assert "careful now" in ChalkFormatter("%(message)s").format(record)


def test_setup_logging_replaces_root_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    try:
        setup_logging(level=logging.INFO)
        setup_logging(level=logging.INFO)
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ChalkFormatter)

        monkeypatch.setenv("PLUGGABLE_LOG_LEVEL", "error")
        setup_logging()
        assert root.level == logging.ERROR
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
