# topmark:header:start
#
#   project      : Pluggable
#   file         : token.py
#   file_relpath : src/pluggable/token.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token contract for Pluggable pipelines.

A *token* holds the state that is passed on from step to step within a
pipeline. Pluggable never constructs tokens itself; it only relies on three
capabilities:

- ``is_halted()``: whether the pipeline must stop after the current step,
- ``halt()``: return a token with the halted flag set,
- ``assign(key, value)``: return a token with ``assigns[key] = value``.

Deriving the contract
---------------------
The simplest way to obtain a token type is to decorate a dataclass that holds
a boolean ``halted`` field and a mapping ``assigns`` field:

```python
@derive_token
@dataclass(frozen=True)
class Conn:
    halted: bool = False
    assigns: Mapping[str, Any] = field(default_factory=dict)
    path: str = "/"
```

Field names are configurable:

```python
@derive_token(halted_field="stopped", assigns_field="shared")
@dataclass
class Job:
    stopped: bool = False
    shared: dict[str, Any] = field(default_factory=dict)
```

Derived methods never mutate the receiver: they return a copy built with
`dataclasses.replace`, with a fresh ``assigns`` dict on ``assign()``.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Callable, Protocol, TypeVar, overload, runtime_checkable

from pluggable.errors import InvalidKeyError, MissingFieldError

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T", bound=type)


@runtime_checkable
class Token(Protocol):
    """Protocol for values threaded through a pipeline run."""

    def is_halted(self) -> bool:
        """Return whether the pipeline was halted."""
        ...

    def halt(self) -> Self:
        """Return a token whose halted flag is set; all other state unchanged."""
        ...

    def assign(self, key: str, value: Any) -> Self:
        """Return a token with ``value`` stored under ``assigns[key]``.

        Raises:
            InvalidKeyError: If ``key`` is not a valid identifier.
        """
        ...


def implements_token(value: object) -> bool:
    """Return True if ``value`` is a token instance (not a token class)."""
    return isinstance(value, Token) and not isinstance(value, type)


def is_halted(token: Token) -> bool:
    """Return the halted status of ``token``."""
    return bool(token.is_halted())


def halt(token: Token) -> Token:
    """Halt the pipeline by returning a halted copy of ``token``.

    Steps downstream of the one that returns the halted token are never invoked.
    """
    return token.halt()


def assign(token: Token, key: str, value: Any) -> Token:
    """Assign ``value`` to ``key`` in the shared user data of ``token``."""
    return token.assign(key, value)


def validate_assign_key(key: object) -> str:
    """Return ``key`` if it is a symbolic identifier, else raise.

    Args:
        key (object): Candidate assign key.

    Returns:
        str: The validated key.

    Raises:
        InvalidKeyError: If ``key`` is not a string or not a valid identifier.
    """
    if not isinstance(key, str) or not key.isidentifier():
        raise InvalidKeyError(f"assign key must be an identifier string, got: {key!r}")
    return key


def _declared_fields(cls: type) -> set[str]:
    if not dataclasses.is_dataclass(cls):
        raise MissingFieldError(
            f"{cls.__qualname__} is not a dataclass; cannot derive the Token contract "
            "without a declared shape."
        )
    return {f.name for f in dataclasses.fields(cls)}


def _derive(cls: T, halted_field: str, assigns_field: str) -> T:
    declared = _declared_fields(cls)
    if halted_field not in declared:
        raise MissingFieldError(
            f"Field {halted_field!r} does not exist in {cls.__qualname__}. "
            "Please define a field describing the halted state."
        )
    if assigns_field not in declared:
        raise MissingFieldError(
            f"Field {assigns_field!r} does not exist in {cls.__qualname__}. "
            "Please define a field holding assigns."
        )

    def is_halted(self: Any) -> bool:
        return bool(getattr(self, halted_field))

    def halt(self: Any) -> Any:
        return dataclasses.replace(self, **{halted_field: True})

    def assign(self: Any, key: str, value: Any) -> Any:
        validate_assign_key(key)
        assigns = dict(getattr(self, assigns_field) or {})
        assigns[key] = value
        return dataclasses.replace(self, **{assigns_field: assigns})

    for func in (is_halted, halt, assign):
        func.__qualname__ = f"{cls.__qualname__}.{func.__name__}"
        setattr(cls, func.__name__, func)
    return cls


@overload
def derive_token(cls: T, /) -> T: ...


@overload
def derive_token(
    *, halted_field: str = "halted", assigns_field: str = "assigns"
) -> Callable[[T], T]: ...


def derive_token(
    cls: T | None = None,
    /,
    *,
    halted_field: str = "halted",
    assigns_field: str = "assigns",
) -> T | Callable[[T], T]:
    """Derive the Token contract for a dataclass.

    Usable bare (``@derive_token``) or with field names
    (``@derive_token(halted_field="stopped")``). Apply it *above* ``@dataclass``.

    Args:
        cls (T | None): The dataclass to decorate (bare usage).
        halted_field (str): Name of the boolean field holding the halted state.
        assigns_field (str): Name of the mapping field holding assigns.

    Returns:
        T | Callable[[T], T]: The decorated class, or a decorator.

    Raises:
        MissingFieldError: If ``cls`` is not a dataclass or lacks a named field.
    """
    if cls is not None:
        return _derive(cls, halted_field, assigns_field)

    def decorator(inner: T) -> T:
        return _derive(inner, halted_field, assigns_field)

    return decorator
