# topmark:header:start
#
#   project      : Pluggable
#   file         : runner.py
#   file_relpath : src/pluggable/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a series of steps against one token at runtime.

While [`pluggable.pipeline.compiler`][pluggable.pipeline.compiler] assembles a
reusable chain ahead of time, `run` is the straightforward alternative that
resolves every step and initializes its options on each invocation:

```python
token = run(token, [(RequireAuth, {"realm": "admin"}), log_request])
```

If any step halts, the remaining steps are not invoked. If the given token
is already halted, no step is invoked at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pluggable.config.logging import get_logger
from pluggable.config.model import parse_log_level
from pluggable.errors import ContractViolationError
from pluggable.pipeline.steps import as_descriptor
from pluggable.token import implements_token, is_halted

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from pluggable.config.logging import PluggableLogger
    from pluggable.pipeline.steps import StepDescriptor
    from pluggable.token import Token

logger: PluggableLogger = get_logger(__name__)

DEFAULT_CONTEXT: str = "Pluggable pipeline"


def check_token(descriptor: StepDescriptor, value: Any) -> Token:
    """Return ``value`` if it implements the token contract.

    Raises:
        ContractViolationError: If the step returned anything else.
    """
    if not implements_token(value):
        raise ContractViolationError(
            descriptor.label,
            value,
            detail="all steps must receive a token and return a token",
        )
    return value


def run(
    token: Token,
    steps: Iterable[Any],
    *,
    log_on_halt: str | int | None = None,
    halt_logger: logging.Logger | None = None,
    context: str = DEFAULT_CONTEXT,
) -> Token:
    """Execute ``steps`` sequentially against ``token``.

    Args:
        token (Token): The token to process.
        steps (Iterable[Any]): Ordered steps; each is a ``(target, options)`` pair,
            a bare unary function ``token -> token`` or a `StepDescriptor`.
        log_on_halt (str | int | None): Level of the record emitted when a step
            halts (level name or number); no record when None.
        halt_logger (logging.Logger | None): Logger receiving the halt record;
            defaults to this module's logger.
        context (str): Name of the containing context used in the halt record.

    Returns:
        Token: The final token (halted if a step halted).

    Raises:
        InvalidConfigError: If ``log_on_halt`` is not a known level.
        MalformedStepError: If a step does not satisfy the step contract.
        ContractViolationError: If a step returns something that is not a token.
    """
    level: int | None = parse_log_level(log_on_halt)
    if is_halted(token):
        return token

    sink = halt_logger or logger
    descriptors: list[StepDescriptor] = [as_descriptor(item) for item in steps]

    for descriptor in descriptors:
        if not descriptor.passes_guard(token):
            continue
        next_token = check_token(descriptor, descriptor.invoke(token, descriptor.initialize()))
        if is_halted(next_token):
            if level is not None:
                sink.log(level, "%s halted in %s", context, descriptor.label)
            return next_token
        token = next_token

    return token
