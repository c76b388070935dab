# topmark:header:start
#
#   project      : Pluggable
#   file         : steps.py
#   file_relpath : src/pluggable/pipeline/steps.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Step descriptors: the tagged ``(target, options, guard)`` triplets.

A `StepDescriptor` records *what* to run and *how* to run it. The step kind
(`StepKind.FUNCTION` or `StepKind.STATEFUL`) is decided once, when the
descriptor is built by `step`, and carried explicitly from then on; the
runner and the compiler never re-inspect the target.

```python
steps = [
    step(RequireAuth, {"realm": "admin"}),                 # stateful step
    step(put_header, ("x-trace", "1")),                   # fn(token, options)
    step(count_visit, guard=lambda t: not t.is_halted()),  # fn(token), guarded
]
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Final

from pluggable.errors import MalformedStepError
from pluggable.utils.introspection import qualified_name

if TYPE_CHECKING:
    from pluggable.pipeline.contracts import Guard
    from pluggable.token import Token


class _Missing:
    """Sentinel type for "no options given"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_OPTIONS"


NO_OPTIONS: Final[Any] = _Missing()


class StepKind(str, Enum):
    """Kind of a step target, decided at descriptor construction."""

    FUNCTION = "function"
    STATEFUL = "stateful"


class BaseStep:
    """Reusable foundation for stateful steps.

    Subclasses implement ``call(token, options)`` and optionally override
    ``init(options)``, which by default returns the options unchanged. Passing
    a `BaseStep` subclass (rather than an instance) to `step` instantiates it
    with no arguments.
    """

    def init(self, options: Any) -> Any:
        """Return ``options`` unchanged."""
        return options


def infer_kind(target: Any) -> StepKind:
    """Classify ``target`` as a stateful or function step.

    Targets exposing ``init`` are stateful; other callables are function steps.

    Raises:
        MalformedStepError: If ``target`` is neither.
    """
    if hasattr(target, "init"):
        return StepKind.STATEFUL
    if callable(target):
        return StepKind.FUNCTION
    raise MalformedStepError(
        f"{target!r} is not a step: expected a callable or an object exposing "
        "init(options) and call(token, options)"
    )


def always(_token: Token) -> bool:
    """Default guard: the step always runs when reached."""
    return True


@dataclass(frozen=True)
class StepDescriptor:
    """One step of a pipeline: target, options and guard, with its kind.

    Attributes:
        target (Any): Stateful step object or function.
        options (Any): Application-defined options, opaque to the core.
        guard (Guard): Boolean or predicate evaluated per invocation.
        kind (StepKind): Step kind, decided once.
        takes_options (bool): For function steps, whether they are called with
            ``(token, options)`` rather than ``(token)``.
    """

    target: Any
    options: Any = None
    guard: Guard = field(default=True, compare=False)
    kind: StepKind = StepKind.FUNCTION
    takes_options: bool = False

    def __post_init__(self) -> None:
        self.validate()

    @property
    def identity(self) -> str:
        """Human-readable identity of the target."""
        return qualified_name(self.target)

    @property
    def label(self) -> str:
        """Identity plus the entry point invoked (used in log records)."""
        if self.kind is StepKind.STATEFUL:
            return f"{self.identity}.call()"
        return f"{self.identity}()"

    @property
    def guarded(self) -> bool:
        """Whether this step carries a non-trivial guard."""
        return self.guard is not True and self.guard is not always

    def validate(self) -> None:
        """Check the target against the contract of its kind.

        Raises:
            MalformedStepError: If a stateful target lacks ``init``/``call`` or a
                function target is not callable, or the guard is not usable.
        """
        if self.kind is StepKind.STATEFUL:
            if not callable(getattr(self.target, "call", None)):
                raise MalformedStepError(f"{self.identity} step must implement call(token, options)")
            if not callable(getattr(self.target, "init", None)):
                raise MalformedStepError(f"{self.identity} step must implement init(options)")
        elif not callable(self.target):
            raise MalformedStepError(f"{self.identity} function step is not callable")
        if not isinstance(self.guard, bool) and not callable(self.guard):
            raise MalformedStepError(
                f"guard of {self.identity} must be a bool or a predicate, got: {self.guard!r}"
            )

    def passes_guard(self, token: Token) -> bool:
        """Evaluate the guard against ``token``."""
        guard = self.guard
        if guard is True:
            return True
        if guard is False:
            return False
        return bool(guard(token))

    def initialize(self) -> Any:
        """Return the initialized options (``init(options)`` for stateful steps)."""
        if self.kind is StepKind.STATEFUL:
            return self.target.init(self.options)
        return self.options

    def invoke(self, token: Token, initialized: Any) -> Any:
        """Invoke the target with ``token`` and already initialized options."""
        if self.kind is StepKind.STATEFUL:
            return self.target.call(token, initialized)
        if self.takes_options:
            return self.target(token, initialized)
        return self.target(token)


def step(
    target: Any,
    options: Any = NO_OPTIONS,
    *,
    guard: Guard = True,
    kind: StepKind | str | None = None,
) -> StepDescriptor:
    """Build a `StepDescriptor`, deciding the step kind once.

    Args:
        target (Any): Stateful step (object, class or module exposing ``init``
            and ``call``) or function step.
        options (Any): Options for the step. Function steps declared with
            options are called as ``fn(token, options)``; without, as ``fn(token)``.
        guard (Guard): ``True`` (default), ``False`` or a ``token -> bool`` predicate.
        kind (StepKind | str | None): Explicit kind; inferred when None.

    Returns:
        StepDescriptor: The validated descriptor.

    Raises:
        MalformedStepError: If the target does not satisfy its step contract
            or ``kind`` is not a known `StepKind`.
    """
    if isinstance(target, type) and issubclass(target, BaseStep):
        target = target()
    if kind is None:
        resolved: StepKind = infer_kind(target)
    else:
        try:
            resolved = StepKind(kind)
        except ValueError as exc:
            raise MalformedStepError(
                f"{qualified_name(target)} declared with unknown step kind {kind!r}; "
                f"expected one of: {', '.join(k.value for k in StepKind)}"
            ) from exc
    given = options is not NO_OPTIONS
    return StepDescriptor(
        target=target,
        options=options if given else None,
        guard=guard,
        kind=resolved,
        takes_options=given and resolved is StepKind.FUNCTION,
    )


def as_descriptor(item: Any) -> StepDescriptor:
    """Coerce a descriptor, a ``(target, options[, guard])`` tuple or a target.

    Raises:
        MalformedStepError: If ``item`` cannot describe a step.
    """
    if isinstance(item, StepDescriptor):
        return item
    if isinstance(item, tuple):
        if len(item) == 2:
            return step(item[0], item[1])
        if len(item) == 3:
            return step(item[0], item[1], guard=item[2])
        raise MalformedStepError(
            f"step tuples must be (target, options) or (target, options, guard), got: {item!r}"
        )
    return step(item)
