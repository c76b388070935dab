# topmark:header:start
#
#   project      : Pluggable
#   file         : pipelines.py
#   file_relpath : src/pluggable/registry/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declare several named, independently invocable pipelines in one module.

Use this only if you need to define and run multiple distinct pipelines in
the same unit; a single pipeline reads better as a
[`StepBuilder`][pluggable.pipeline.builder.StepBuilder].

Typical usage:
    ```python
    pipelines = PipelineRegistry(globals())

    with pipelines.pipeline("browser") as p:
        p.step(FetchSession)
        p.step(put_secure_headers)

    with pipelines.pipeline("api") as p:
        p.step(FetchSession)
        p.step(RequireToken, {"scope": "read"})

    # Published in the module namespace, on the registry and by key:
    conn = browser(conn, {})
    conn = pipelines.api(conn, {})
    conn = run(conn, [lambda c: pipelines["api"](c, {})])
    ```

Each declaration accumulates its own steps and is compiled on exit from its
``with`` block; an exception inside the block discards the declaration.
Declaring a pipeline whose name is already bound in the namespace to
something defined elsewhere raises `NameCollisionError` naming that origin.

Declarations are serialized with an ``RLock``. Compiled pipelines are
immutable and can be shared across threads.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pluggable.config.logging import get_logger
from pluggable.config.model import coerce_config
from pluggable.errors import InvalidConfigError, NameCollisionError, PipelineDeclarationError
from pluggable.pipeline.compiler import Pipeline, compile_pipeline
from pluggable.pipeline.steps import NO_OPTIONS, step
from pluggable.utils.introspection import defining_module

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterator, Mapping, MutableMapping

    from pluggable.config.logging import PluggableLogger
    from pluggable.config.model import BuilderConfig
    from pluggable.pipeline.contracts import Guard
    from pluggable.pipeline.steps import StepDescriptor, StepKind

logger: PluggableLogger = get_logger(__name__)


class PipelineDeclaration:
    """Step accumulator for one named pipeline (yielded by `PipelineRegistry.pipeline`)."""

    def __init__(self, name: str) -> None:
        self.name = name
        # Most recent step first, as expected by `compile_pipeline`.
        self._reversed: list[StepDescriptor] = []

    def step(
        self,
        target: Any,
        options: Any = NO_OPTIONS,
        *,
        guard: Guard = True,
        kind: StepKind | str | None = None,
    ) -> PipelineDeclaration:
        """Add a step to this pipeline (see `pluggable.pipeline.steps.step`).

        Returns:
            PipelineDeclaration: ``self``, for chaining.
        """
        self._reversed.insert(0, step(target, options, guard=guard, kind=kind))
        return self

    @property
    def reversed_steps(self) -> tuple[StepDescriptor, ...]:
        """Declared steps, last one first."""
        return tuple(self._reversed)


class PipelineRegistry:
    """Named pipelines declared in one namespace.

    Args:
        scope (MutableMapping[str, Any] | None): Namespace the pipelines are
            published to and checked against for collisions, typically the
            declaring module's ``globals()``. A private dict when None.
        module (str | None): Name of the declaring module; defaults to
            ``scope["__name__"]``.
        config (BuilderConfig | Mapping[str, Any] | None): Builder options
            applied to every pipeline of this registry.
        halt_logger (logging.Logger | None): Logger receiving halt records.
    """

    def __init__(
        self,
        scope: MutableMapping[str, Any] | None = None,
        *,
        module: str | None = None,
        config: BuilderConfig | Mapping[str, Any] | None = None,
        halt_logger: logging.Logger | None = None,
    ) -> None:
        self._scope: MutableMapping[str, Any] = scope if scope is not None else {}
        self._module: str = module or str(self._scope.get("__name__", "<registry>"))
        self._config: BuilderConfig = coerce_config(config)
        self._halt_logger = halt_logger
        self._pipelines: dict[str, Pipeline] = {}
        self._current: PipelineDeclaration | None = None
        self._lock = RLock()

    @property
    def module(self) -> str:
        """Name of the declaring module."""
        return self._module

    def _check_name(self, name: str) -> None:
        if not isinstance(name, str) or not name.isidentifier():
            raise InvalidConfigError(f"pipeline name must be an identifier, got: {name!r}")
        if name in self._pipelines:
            raise NameCollisionError(name, self._module, reason="already declared in")
        if hasattr(type(self), name):
            raise NameCollisionError(name, type(self).__module__, reason="reserved by")
        if name not in self._scope:
            return
        # Plain values (numbers, strings) carry no module: they are local bindings.
        origin = defining_module(self._scope[name])
        if origin is None or origin == self._module:
            raise NameCollisionError(name, self._module, reason="already defined in")
        raise NameCollisionError(name, origin)

    @contextmanager
    def pipeline(self, name: str) -> Iterator[PipelineDeclaration]:
        """Declare the pipeline ``name``; steps are added on the yielded handle.

        Raises:
            NameCollisionError: If ``name`` is already bound in the namespace
                or already declared in this registry.
            PipelineDeclarationError: If another declaration is still open.
        """
        with self._lock:
            if self._current is not None:
                raise PipelineDeclarationError(
                    f"cannot declare pipeline {name!r} inside pipeline {self._current.name!r}"
                )
            self._check_name(name)
            declaration = PipelineDeclaration(name)
            self._current = declaration
            try:
                yield declaration
            finally:
                self._current = None

            compiled = compile_pipeline(
                declaration.reversed_steps,
                self._config,
                name=f"{self._module}.{name}",
                halt_logger=self._halt_logger,
            )
            self._pipelines[name] = compiled
            self._scope[name] = compiled
            logger.debug("Declared pipeline %s with %d step(s)", compiled.name, len(compiled.steps))

    def step(
        self,
        target: Any,
        options: Any = NO_OPTIONS,
        *,
        guard: Guard = True,
        kind: StepKind | str | None = None,
    ) -> PipelineDeclaration:
        """Add a step to the pipeline currently being declared.

        Raises:
            PipelineDeclarationError: If no pipeline block is open.
        """
        with self._lock:
            if self._current is None:
                raise PipelineDeclarationError(
                    "cannot define step at the registry level, "
                    "step must be defined inside a pipeline"
                )
            return self._current.step(target, options, guard=guard, kind=kind)

    def names(self) -> tuple[str, ...]:
        """Return declared pipeline names in declaration order."""
        with self._lock:
            return tuple(self._pipelines)

    def as_mapping(self) -> Mapping[str, Pipeline]:
        """Return a read-only mapping of declared pipelines."""
        with self._lock:
            return MappingProxyType(dict(self._pipelines))

    def __getitem__(self, name: str) -> Pipeline:
        return self._pipelines[name]

    def __contains__(self, name: object) -> bool:
        return name in self._pipelines

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __getattr__(self, name: str) -> Pipeline:
        # Only reached for names that are not regular attributes.
        pipelines = self.__dict__.get("_pipelines", {})
        if name in pipelines:
            return pipelines[name]
        raise AttributeError(f"{type(self).__name__} has no pipeline named {name!r}")
