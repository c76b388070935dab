# topmark:header:start
#
#   project      : Pluggable
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Pluggable test suite.

This file sets up global fixtures, the shared test token and a handful of
reusable steps, and customizes the logging configuration for test runs.

Notes:
    `Conn` is a frozen dataclass deriving the token contract. Besides
    ``halted`` and ``assigns`` it carries a ``trail`` of step labels, so tests
    can check which steps ran and in which order without mutating shared state.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar, cast

import pytest

from pluggable.config import logging
from pluggable.pipeline.steps import BaseStep
from pluggable.token import derive_token

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator




def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_pluggable_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Pluggable's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop ``PLUGGABLE_LOG_LEVEL``.
    """
    monkeypatch.delenv("PLUGGABLE_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- Shared token ---------------------------------------------------------


@derive_token
@dataclass(frozen=True)
class Conn:
    """Test token: halted flag, assigns and the trail of steps that ran."""

    halted: bool = False
    assigns: Mapping[str, Any] = field(default_factory=dict)
    trail: tuple[str, ...] = ()


def visit(conn: Conn, label: str) -> Conn:
    """Return ``conn`` with ``label`` appended to its trail."""
    return replace(conn, trail=(*conn.trail, label))


def push_stack(conn: Any, label: str) -> Any:
    """Append ``label`` to ``assigns["stack"]`` (a tuple)."""
    return conn.assign("stack", (*conn.assigns.get("stack", ()), label))


# --- Shared steps ---------------------------------------------------------


class AddFoo:
    """Stateful step setting ``assigns["foo"] = "bar"``."""

    @staticmethod
    def init(options: Any) -> Any:
        return options

    @staticmethod
    def call(conn: Conn, _options: Any) -> Conn:
        return visit(conn, "AddFoo").assign("foo", "bar")


def add_bar(conn: Conn) -> Conn:
    """Function step setting ``assigns["bar"] = "bar"``."""
    return visit(conn, "add_bar").assign("bar", "bar")


class Halter(BaseStep):
    """Stateful step halting unconditionally."""

    def call(self, conn: Conn, _options: Any) -> Conn:
        return visit(conn, "Halter").halt()


class Raiser(BaseStep):
    """Stateful step that must never be reached."""

    def call(self, conn: Conn, _options: Any) -> Conn:
        raise AssertionError("Raiser must not be invoked")


def set_step(key: str) -> Callable[[Conn], Conn]:
    """Return a function step setting ``assigns[key] = True``."""

    def _set(conn: Conn) -> Conn:
        return visit(conn, key).assign(key, True)

    _set.__qualname__ = f"set_step.{key}"
    return _set


def authorize(conn: Conn) -> Conn:
    """Function step recording that it ran, then halting."""
    return visit(conn, "authorize").assign("authorize_reached", True).halt()


class Remember(BaseStep):
    """Stateful step copying its initialized options to ``assigns["seen"]``."""

    def call(self, conn: Conn, options: Any) -> Conn:
        return visit(conn, "Remember").assign("seen", options)


@pytest.fixture
def conn() -> Conn:
    """A fresh, non-halted token with empty assigns."""
    return Conn()
