# topmark:header:start
#
#   project      : Pluggable
#   file         : errors.py
#   file_relpath : src/pluggable/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Pluggable core.

Every error is a programmer or configuration error: none of them are caught,
retried or converted inside the core, they propagate to the integrator.
Halting a pipeline is *not* an error and never surfaces here; it is signaled
through the token's own ``halted`` state.

Each class also derives from the closest built-in exception so callers that
already catch ``TypeError``/``ValueError``/``KeyError`` keep working.
"""

from __future__ import annotations

from typing import Any


class PluggableError(Exception):
    """Base class for all Pluggable errors."""


class ContractViolationError(PluggableError, TypeError):
    """A step returned a value that does not implement the token contract.

    Attributes:
        step (str): Human-readable identity of the offending step.
        value (Any): The value the step returned.
    """

    def __init__(self, step: str, value: Any, *, detail: str = "") -> None:
        self.step = step
        self.value = value
        message = f"expected {step} to return a Pluggable token, got: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MalformedStepError(PluggableError, TypeError):
    """A step target does not satisfy the step contract.

    Raised at pipeline-assembly time, before the pipeline is ever invoked.
    """


class InvalidConfigError(PluggableError, ValueError):
    """An unrecognized builder configuration value (init mode, level, assign key)."""


class NameCollisionError(PluggableError, ValueError):
    """A pipeline name collides with a name brought into scope from elsewhere.

    Attributes:
        name (str): The pipeline name being declared.
        origin (str): The module the conflicting name comes from.
    """

    def __init__(self, name: str, origin: str, *, reason: str | None = None) -> None:
        self.name = name
        self.origin = origin
        if reason is None:
            message = (
                f"cannot define pipeline named {name!r} because there is an import "
                f"from {origin} with the same name"
            )
        else:
            message = f"cannot define pipeline named {name!r}: the name is {reason} {origin}"
        super().__init__(message)


class MissingFieldError(PluggableError, AttributeError):
    """A derived token type lacks the field holding the halted state or the assigns."""


class InvalidKeyError(PluggableError, KeyError):
    """An assign key is not a valid symbolic identifier."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class PipelineDeclarationError(PluggableError, RuntimeError):
    """A step was declared outside of a pipeline block."""
