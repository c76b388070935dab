# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable package.

Pluggable is a Plug-like pipeline creator: an ordered sequence of steps, each
receiving a token and options and returning a possibly modified token, with
the ability to halt the remaining steps. It is payload-agnostic and performs
no I/O; tokens and steps are supplied by the application.
"""

from __future__ import annotations

from pluggable.config.model import BuilderConfig, InitMode
from pluggable.errors import (
    ContractViolationError,
    InvalidConfigError,
    InvalidKeyError,
    MalformedStepError,
    MissingFieldError,
    NameCollisionError,
    PipelineDeclarationError,
    PluggableError,
)
from pluggable.pipeline.builder import StepBuilder
from pluggable.pipeline.compiler import Pipeline, build_pipeline, compile_pipeline
from pluggable.pipeline.runner import run
from pluggable.pipeline.steps import NO_OPTIONS, BaseStep, StepDescriptor, StepKind, step
from pluggable.registry.pipelines import PipelineRegistry
from pluggable.token import Token, assign, derive_token, halt, implements_token, is_halted

__all__ = [
    "NO_OPTIONS",
    "BaseStep",
    "BuilderConfig",
    "ContractViolationError",
    "InitMode",
    "InvalidConfigError",
    "InvalidKeyError",
    "MalformedStepError",
    "MissingFieldError",
    "NameCollisionError",
    "Pipeline",
    "PipelineDeclarationError",
    "PipelineRegistry",
    "PluggableError",
    "StepBuilder",
    "StepDescriptor",
    "StepKind",
    "Token",
    "assign",
    "build_pipeline",
    "compile_pipeline",
    "derive_token",
    "halt",
    "implements_token",
    "is_halted",
    "run",
    "step",
]
