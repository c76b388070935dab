# topmark:header:start
#
#   project      : Pluggable
#   file         : introspection.py
#   file_relpath : src/pluggable/utils/introspection.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity helpers used in log records and error messages."""

from __future__ import annotations

import functools
from inspect import getmodule
from typing import Any


def qualified_name(obj: Any) -> str:
    """Return a human-friendly ``module.qualname`` for any step target.

    Handles functions, bound methods, classes, callable instances and partials.
    Instances without a ``__qualname__`` are described by their class. Falls
    back to ``inspect.getmodule`` as a last resort to resolve the module name.

    Args:
        obj (Any): The callable, class or instance to describe.

    Returns:
        str: A string like ``"package.module.QualifiedName"``, or
        ``"QualifiedName"`` if the module cannot be resolved.
    """
    if isinstance(obj, functools.partial):
        return f"partial({qualified_name(obj.func)})"

    call_name: str | None = getattr(obj, "__qualname__", None)
    if call_name is None:
        call_name = getattr(obj, "__name__", None)
    target: Any = obj
    if call_name is None:
        target = type(obj)
        call_name = target.__qualname__

    mod_name: str | None = getattr(target, "__module__", None)
    if not mod_name:
        mod = getmodule(target)
        if mod is not None and getattr(mod, "__name__", None):
            mod_name = mod.__name__

    return f"{mod_name}.{call_name}" if mod_name else call_name


def defining_module(obj: Any) -> str | None:
    """Return the name of the module that defines ``obj``, if known.

    Modules report their own name; other objects their ``__module__``.
    """
    if hasattr(obj, "__spec__") and hasattr(obj, "__name__") and not callable(obj):
        return obj.__name__
    mod_name: str | None = getattr(obj, "__module__", None)
    if mod_name:
        return mod_name
    mod = getmodule(obj)
    return mod.__name__ if mod is not None else None
