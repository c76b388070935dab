# topmark:header:start
#
#   project      : Pluggable
#   file         : __init__.py
#   file_relpath : src/pluggable/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pluggable step pipeline package.

This package contains the components that run tokens through steps:

- Step contracts and descriptors (function and stateful steps, guards)
- The runtime runner, which resolves steps on every invocation
- The compiler, which folds descriptors into one reusable `Pipeline`
- The declarative `StepBuilder`

The public API is composed of [`pluggable.pipeline.runner`][pluggable.pipeline.runner],
[`pluggable.pipeline.compiler`][pluggable.pipeline.compiler] and
[`pluggable.pipeline.builder`][pluggable.pipeline.builder].
"""
