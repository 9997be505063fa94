from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class that can be instantiated.

    Parameterized generics such as ``list[int]`` pass ``isinstance(..., type)``
    on some interpreters and are rejected explicitly.

    Args:
        candidate: Value being checked before the container builds it.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def describe_target(target: object) -> str:
    """Return a readable name for a class, function or object used in messages."""
    qualname = getattr(target, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return repr(target)


__all__ = ["describe_target", "is_runtime_class"]
