# topmark:header:start
#
#   project      : Pluggable
#   file         : loader.py
#   file_relpath : src/pluggable/cli/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve ``module:attr`` references to compiled pipelines.

The `describe` command accepts a `Pipeline`, a `StepBuilder` subclass or a
`PipelineRegistry`; `collect_pipelines` flattens any of them into an ordered
``{name: Pipeline}`` mapping. Importing the module is what assembles the
pipelines, so assembly errors surface here.
"""

from __future__ import annotations

import importlib
from typing import Any

from pluggable.cli.errors import (
    PluggableTargetNotFoundError,
    PluggableUsageError,
    from_core_error,
)
from pluggable.config.logging import get_logger
from pluggable.errors import PluggableError
from pluggable.pipeline.builder import StepBuilder
from pluggable.pipeline.compiler import Pipeline
from pluggable.registry.pipelines import PipelineRegistry

logger = get_logger(__name__)


def split_reference(reference: str) -> tuple[str, str]:
    """Split ``"package.module:attr"`` into its module and attribute parts.

    Raises:
        PluggableUsageError: If the reference is malformed.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise PluggableUsageError(f"expected a MODULE:ATTR reference, got: {reference!r}")
    return module_name, attr


def import_target(reference: str) -> Any:
    """Import the object named by ``reference``.

    Dotted attribute paths (``module:Outer.inner``) are followed.

    Raises:
        PluggableUsageError: If the reference is malformed.
        PluggableTargetNotFoundError: If the module or attribute does not exist.
        PluggableCliError: If importing the module fails to assemble a pipeline.
    """
    module_name, attr = split_reference(reference)
    try:
        target: Any = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        raise PluggableTargetNotFoundError(f"cannot import module {module_name!r}: {exc}") from exc
    except PluggableError as exc:
        raise from_core_error(exc) from exc

    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise PluggableTargetNotFoundError(
                f"module {module_name!r} has no attribute {attr!r}"
            ) from exc
    logger.debug("Resolved %s to %r", reference, target)
    return target


def collect_pipelines(target: Any) -> dict[str, Pipeline]:
    """Return the pipelines exposed by ``target``, keyed by name.

    Raises:
        PluggableUsageError: If ``target`` holds no pipeline.
    """
    if isinstance(target, Pipeline):
        return {target.name: target}
    if isinstance(target, type) and issubclass(target, StepBuilder) and target is not StepBuilder:
        return {target.pipeline.name: target.pipeline}
    if isinstance(target, PipelineRegistry):
        return {pipeline.name: pipeline for pipeline in target.as_mapping().values()}
    raise PluggableUsageError(
        f"{target!r} is not a Pipeline, a StepBuilder subclass or a PipelineRegistry"
    )
