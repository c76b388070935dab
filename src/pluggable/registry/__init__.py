# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registries of named pipelines."""

from __future__ import annotations

from pluggable.registry.pipelines import PipelineDeclaration, PipelineRegistry

__all__ = ["PipelineDeclaration", "PipelineRegistry"]
