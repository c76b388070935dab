# topmark:header:start
#
#   project      : Pluggable
#   file         : test_steps.py
#   file_relpath : tests/pipeline/test_steps.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for step descriptors: kind inference, validation and invocation."""

from __future__ import annotations

import functools
from typing import Any

import pytest

from pluggable.errors import MalformedStepError
from pluggable.pipeline.contracts import StatefulStep
from pluggable.pipeline.steps import (
    NO_OPTIONS,
    StepDescriptor,
    StepKind,
    always,
    as_descriptor,
    infer_kind,
    step,
)
from tests.conftest import AddFoo, Conn, Halter, Remember, add_bar

pytestmark = [pytest.mark.pipeline]


class NoCall:
    @staticmethod
    def init(options: Any) -> Any:
        return options


def test_stateful_kind_is_inferred_from_init() -> None:
    descriptor = step(AddFoo, {"x": 1})

    assert descriptor.kind is StepKind.STATEFUL
    assert descriptor.options == {"x": 1}
    assert descriptor.takes_options is False
    assert isinstance(AddFoo, StatefulStep)


def test_function_kind_and_arity() -> None:
    unary = step(add_bar)
    binary = step(add_bar, "opts")

    assert unary.kind is StepKind.FUNCTION
    assert unary.takes_options is False
    assert unary.options is None
    assert binary.takes_options is True
    assert binary.options == "opts"


def test_function_step_called_with_options_when_given(conn: Conn) -> None:
    def put(c: Conn, options: Any) -> Conn:
        return c.assign("got", options)

    descriptor = step(put, 42)
    assert descriptor.invoke(conn, descriptor.initialize()).assigns == {"got": 42}


def test_explicit_none_options_still_count_as_given(conn: Conn) -> None:
    def put(c: Conn, options: Any) -> Conn:
        return c.assign("got", options)

    descriptor = step(put, None)
    assert descriptor.takes_options is True
    assert descriptor.invoke(conn, None).assigns == {"got": None}


def test_base_step_subclass_is_instantiated() -> None:
    descriptor = step(Halter)

    assert isinstance(descriptor.target, Halter)
    assert descriptor.kind is StepKind.STATEFUL


def test_base_step_default_init_returns_options() -> None:
    assert step(Remember, [1, 2]).initialize() == [1, 2]


def test_stateful_without_call_is_malformed() -> None:
    with pytest.raises(MalformedStepError, match=r"must implement call\(token, options\)"):
        step(NoCall, {})


def test_explicit_stateful_kind_without_init_is_malformed() -> None:
    class OnlyCall:
        @staticmethod
        def call(conn: Conn, options: Any) -> Conn:
            return conn

    assert infer_kind(OnlyCall) is StepKind.FUNCTION
    with pytest.raises(MalformedStepError, match=r"must implement init\(options\)"):
        step(OnlyCall, kind="stateful")


def test_non_callable_target_is_malformed() -> None:
    with pytest.raises(MalformedStepError, match="is not a step"):
        infer_kind(42)


def test_invalid_guard_is_malformed() -> None:
    with pytest.raises(MalformedStepError, match="guard"):
        step(add_bar, guard="yes")  # type: ignore[arg-type]


def test_unknown_kind_is_malformed() -> None:
    with pytest.raises(MalformedStepError, match="unknown step kind 'lazy'"):
        step(add_bar, kind="lazy")


def test_guards(conn: Conn) -> None:
    assert step(add_bar).passes_guard(conn)
    assert not step(add_bar, guard=False).passes_guard(conn)
    assert step(add_bar, guard=lambda c: not c.halted).passes_guard(conn)
    assert not step(add_bar, guard=lambda c: c.halted).passes_guard(conn)


def test_guarded_flag() -> None:
    assert not step(add_bar).guarded
    assert not step(add_bar, guard=always).guarded
    assert step(add_bar, guard=False).guarded
    assert step(add_bar, guard=lambda c: True).guarded


def test_identity_and_label() -> None:
    assert step(add_bar).label.endswith("add_bar()")
    assert step(AddFoo).label.endswith("AddFoo.call()")
    assert step(functools.partial(add_bar)).identity.startswith("partial(")


def test_as_descriptor_accepts_tuples_and_targets(conn: Conn) -> None:
    pair = as_descriptor((AddFoo, {"a": 1}))
    triple = as_descriptor((add_bar, NO_OPTIONS, False))
    bare = as_descriptor(add_bar)

    assert pair.kind is StepKind.STATEFUL
    assert triple.guard is False
    assert triple.takes_options is False
    assert bare.invoke(conn, None).assigns == {"bar": "bar"}
    assert as_descriptor(bare) is bare


def test_as_descriptor_rejects_bad_tuples() -> None:
    with pytest.raises(MalformedStepError, match="step tuples"):
        as_descriptor((add_bar,))


def test_descriptors_are_immutable() -> None:
    descriptor = step(add_bar)
    with pytest.raises(AttributeError):
        descriptor.options = 1  # type: ignore[misc]


def test_direct_descriptor_construction_is_validated() -> None:
    with pytest.raises(MalformedStepError):
        StepDescriptor(target=NoCall, kind=StepKind.STATEFUL)


def test_no_options_sentinel_is_a_singleton() -> None:
    assert type(NO_OPTIONS)() is NO_OPTIONS
    assert repr(NO_OPTIONS) == "NO_OPTIONS"
