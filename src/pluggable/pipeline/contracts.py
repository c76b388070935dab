# topmark:header:start
#
#   project      : Pluggable
#   file         : contracts.py
#   file_relpath : src/pluggable/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline steps (engine-facing).

There are two kinds of steps, polymorphic over one capability: "callable
with a token and options, returning a token".

Function steps
--------------
Any callable receiving a token and returning a token. When a function step
is declared with options it is called as ``fn(token, options)``; without
options it is called as ``fn(token)``.

Stateful steps
--------------
An object (commonly a class with class methods, or an instance) exposing:

- ``init(options)``: initializes the options. Its result is passed as the
  second argument to ``call``. ``init`` may run while the pipeline is
  assembled, long before any invocation, so it must not return open
  connections, ephemeral identifiers or other runtime-only resources.
- ``call(token, initialized_options)``: returns a token.

Both protocols are runtime checkable so the builder can classify targets by
duck typing once, at descriptor construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from pluggable.token import Token


@runtime_checkable
class StatefulStep(Protocol):
    """Protocol for a configurable, reusable pipeline step."""

    def init(self, options: Any) -> Any:
        """Initialize ``options``; the result is handed to every ``call``.

        Args:
            options (Any): Caller-supplied, application-defined options.

        Returns:
            Any: The initialized options.
        """
        ...

    def call(self, token: Token, options: Any) -> Token:
        """Process ``token`` and return the (possibly updated) token.

        Implementations must not raise for expected control flow: to stop the
        pipeline they return a halted token.

        Args:
            token (Token): The current token.
            options (Any): The initialized options.

        Returns:
            Token: The resulting token.
        """
        ...


FunctionStep = Union[Callable[["Token"], "Token"], Callable[["Token", Any], "Token"]]
"""A plain callable step (unary, or binary when declared with options)."""

Guard = Union[bool, Callable[["Token"], bool]]
"""Per-step condition evaluated on every invocation; false skips the step."""
