# topmark:header:start
#
#   project      : Pluggable
#   file         : compiler.py
#   file_relpath : src/pluggable/pipeline/compiler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compile step descriptors into one reusable, immutable `Pipeline`.

`compile_pipeline` expects a *reversed* pipeline, with the last step to be
called coming first, and folds it onto the identity function: each step
becomes a node wrapping the rest of the chain, so the first descriptor of
the input ends up innermost.

```python
pipeline = compile_pipeline(
    [step(RenderResponse), step(RequireAuth, {"realm": "admin"})],
    {"log_on_halt": "info"},
    name="admin",
)
conn = pipeline(conn, {"request_id": "r-1"})
```

Every node performs, in order:

1. evaluate the guard (a false guard hands the token to the rest of the chain),
2. resolve the options (constant or ``init(options)``, see `InitMode`),
3. invoke the step and check that it returned a token,
4. on halt, log when configured and return; otherwise continue.

Assembly fails fast: malformed steps and invalid configuration raise before
the pipeline can be invoked, and in ahead-of-time mode every stateful step's
``init`` has already run.
"""

from __future__ import annotations

import copy
import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from pluggable.config.logging import get_logger
from pluggable.config.model import InitMode, coerce_config
from pluggable.errors import MalformedStepError
from pluggable.pipeline.runner import check_token
from pluggable.pipeline.steps import StepKind, as_descriptor
from pluggable.token import assign, is_halted

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Mapping

    from pluggable.config.logging import PluggableLogger
    from pluggable.config.model import BuilderConfig
    from pluggable.pipeline.steps import StepDescriptor
    from pluggable.token import Token

logger: PluggableLogger = get_logger(__name__)

ANONYMOUS: str = "<anonymous pipeline>"

Chain = Callable[["Token"], "Token"]


def _identity(token: Token) -> Token:
    return token


def _snapshot(descriptor: StepDescriptor, value: Any) -> Any:
    """Freeze ``value`` into a constant embedded in the chain."""
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error) as exc:
        raise MalformedStepError(
            f"{descriptor.identity} initialized options cannot be embedded ahead of time "
            f"({exc}); init must not return runtime-only resources. "
            "Use init_mode='per-invocation' for such steps."
        ) from exc


def _options_resolver(descriptor: StepDescriptor, init_mode: InitMode) -> Callable[[], Any]:
    if init_mode is InitMode.PER_INVOCATION:
        if descriptor.kind is StepKind.STATEFUL:
            return descriptor.initialize
        return lambda: descriptor.options

    initialized: Any = _snapshot(descriptor, descriptor.initialize())
    return lambda: initialized


def _compose_step(
    descriptor: StepDescriptor,
    rest: Chain,
    *,
    init_mode: InitMode,
    level: int | None,
    context: str,
    sink: logging.Logger,
) -> Chain:
    """Wrap ``rest`` with a node running ``descriptor``."""
    resolve = _options_resolver(descriptor, init_mode)

    def node(token: Token) -> Token:
        if not descriptor.passes_guard(token):
            return rest(token)
        next_token = check_token(descriptor, descriptor.invoke(token, resolve()))
        if is_halted(next_token):
            if level is not None:
                sink.log(
                    level,
                    "%s halted in %s step %s",
                    context,
                    descriptor.kind.value,
                    descriptor.label,
                )
            return next_token
        return rest(next_token)

    return node


@dataclass(frozen=True)
class Pipeline:
    """A compiled, reusable and immutable chain of steps.

    Invoke it as ``pipeline(token, options)``. A pipeline is itself a
    stateful step (``init`` returns the options, ``call`` runs the chain), so
    it can be nested inside other pipelines.

    Attributes:
        name (str): Name used in log records.
        steps (tuple[StepDescriptor, ...]): Descriptors in execution order.
        config (BuilderConfig): Configuration the pipeline was compiled with.
    """

    name: str
    steps: tuple[StepDescriptor, ...]
    config: BuilderConfig
    _chain: Chain = field(repr=False, compare=False)

    def __call__(self, token: Token, options: Any = None) -> Token:
        """Run the chain against ``token``.

        A token that is already halted is returned unchanged.

        Args:
            token (Token): The token to process.
            options (Any): Invocation-time options (copied to an assign when
                ``copy_options_to_assign`` is configured).

        Returns:
            Token: The resulting token.
        """
        if is_halted(token):
            return token
        key = self.config.copy_options_to_assign
        if key is not None:
            token = assign(token, key, options)
        logger.trace("Invoking pipeline %s", self.name)
        return self._chain(token)

    def init(self, options: Any) -> Any:
        """Return ``options`` unchanged (stateful step contract)."""
        return options

    def call(self, token: Token, options: Any) -> Token:
        """Run the pipeline as a step of another pipeline."""
        return self(token, options)


def compile_pipeline(
    descriptors: Iterable[Any],
    config: BuilderConfig | Mapping[str, Any] | None = None,
    *,
    name: str | None = None,
    halt_logger: logging.Logger | None = None,
) -> Pipeline:
    """Compile a *reversed* list of step descriptors into a `Pipeline`.

    Args:
        descriptors (Iterable[Any]): Steps with the last one to run first. Items
            are `StepDescriptor`s or ``(target, options[, guard])`` tuples.
        config (BuilderConfig | Mapping[str, Any] | None): Builder options
            (``init_mode``, ``log_on_halt``, ``copy_options_to_assign``).
        name (str | None): Pipeline name used in log records.
        halt_logger (logging.Logger | None): Logger receiving halt records;
            defaults to this module's logger.

    Returns:
        Pipeline: The compiled pipeline.

    Raises:
        InvalidConfigError: If ``config`` holds an unsupported value.
        MalformedStepError: If a step does not satisfy its contract.
    """
    cfg: BuilderConfig = coerce_config(config)
    reversed_steps: list[StepDescriptor] = [as_descriptor(d) for d in descriptors]
    context: str = name or ANONYMOUS

    compose = functools.partial(
        _compose_step,
        init_mode=cfg.init_mode,
        level=cfg.log_on_halt,
        context=context,
        sink=halt_logger or logger,
    )
    chain: Chain = functools.reduce(
        lambda acc, descriptor: compose(descriptor, acc), reversed_steps, _identity
    )

    logger.debug(
        "Compiled pipeline %s with %d step(s) (init_mode=%s)",
        context,
        len(reversed_steps),
        cfg.init_mode.value,
    )
    return Pipeline(
        name=context,
        steps=tuple(reversed(reversed_steps)),
        config=cfg,
        _chain=chain,
    )


def build_pipeline(
    steps: Iterable[Any],
    config: BuilderConfig | Mapping[str, Any] | None = None,
    *,
    name: str | None = None,
    halt_logger: logging.Logger | None = None,
) -> Pipeline:
    """Compile ``steps`` given in execution order (see `compile_pipeline`)."""
    return compile_pipeline(
        list(reversed(list(steps))), config, name=name, halt_logger=halt_logger
    )
