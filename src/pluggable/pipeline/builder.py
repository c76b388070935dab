# topmark:header:start
#
#   project      : Pluggable
#   file         : builder.py
#   file_relpath : src/pluggable/pipeline/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative pipelines defined as classes.

```python
class Admin(StepBuilder, log_on_halt="info"):
    steps = (
        step(RequireAuth, {"realm": "admin"}),
        ("greet", {"upper": True}),
        "stopper",
    )

    @staticmethod
    def greet(conn, options):
        return conn.assign("greeting", "WORLD" if options["upper"] else "world")

    @staticmethod
    def stopper(conn):
        return conn.halt()
```

Steps run in the order they are listed. A string (or a ``(name, options)``
tuple) names a function step defined on the class itself. The chain is
compiled when the class is created, so malformed steps and invalid builder
options fail at import time.

Builder options are passed as class keywords and inherited by subclasses:

- ``init_mode``: ``"ahead-of-time"`` (default) or ``"per-invocation"``,
- ``log_on_halt``: level used to log halts,
- ``copy_options_to_assign``: assign receiving the options given to ``call``.

The class itself is a stateful step: ``init(options)`` returns the options
and ``call(token, options)`` runs the chain. Both can be overridden;
``super().call(token, options)`` still reaches the chain:

```python
class Tracked(StepBuilder):
    steps = (step(Audit),)

    @classmethod
    def call(cls, token, options):
        return super().call(token, options).assign("called_all_steps", True)
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pluggable.config.logging import get_logger
from pluggable.config.model import BuilderConfig
from pluggable.errors import MalformedStepError
from pluggable.pipeline.compiler import Pipeline, build_pipeline
from pluggable.pipeline.steps import as_descriptor, step
from pluggable.utils.introspection import qualified_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pluggable.config.logging import PluggableLogger
    from pluggable.pipeline.steps import StepDescriptor
    from pluggable.token import Token

logger: PluggableLogger = get_logger(__name__)


class StepBuilder:
    """Base class for pipelines declared as a ``steps`` class attribute."""

    steps: ClassVar[Sequence[Any]] = ()
    builder_config: ClassVar[BuilderConfig] = BuilderConfig()
    pipeline: ClassVar[Pipeline]

    def __init_subclass__(
        cls,
        *,
        init_mode: str | None = None,
        log_on_halt: str | int | None = None,
        copy_options_to_assign: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        overrides: dict[str, Any] = {
            key: value
            for key, value in (
                ("init_mode", init_mode),
                ("log_on_halt", log_on_halt),
                ("copy_options_to_assign", copy_options_to_assign),
            )
            if value is not None
        }
        cls.builder_config = cls.builder_config.merged_with(overrides)
        descriptors = [cls._resolve_step(item) for item in cls.steps]
        cls.pipeline = build_pipeline(descriptors, cls.builder_config, name=qualified_name(cls))
        logger.trace("StepBuilder %s declares %d step(s)", cls.__qualname__, len(descriptors))

    @classmethod
    def _resolve_step(cls, item: Any) -> StepDescriptor:
        """Turn one ``steps`` entry into a descriptor, resolving named functions."""
        if isinstance(item, str):
            return step(cls._lookup(item))
        if isinstance(item, tuple) and item and isinstance(item[0], str):
            return as_descriptor((cls._lookup(item[0]), *item[1:]))
        return as_descriptor(item)

    @classmethod
    def _lookup(cls, name: str) -> Any:
        target = getattr(cls, name, None)
        if target is None or not callable(target):
            raise MalformedStepError(
                f"{cls.__qualname__} declares step {name!r} but defines no callable with that name"
            )
        return target

    @classmethod
    def init(cls, options: Any) -> Any:
        """Return ``options`` unchanged; override to customize."""
        return options

    @classmethod
    def call(cls, token: Token, options: Any) -> Token:
        """Run the compiled chain; override and use ``super()`` to wrap it."""
        return cls.pipeline(token, options)
