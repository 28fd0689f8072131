"""Utilities for resolving generic type arguments at runtime."""
from __future__ import annotations

from typing import Any, TypeVar, get_args, get_origin


def solve_typevar(cls: type, t: TypeVar) -> None | type:
    """Resolve the concrete type bound to a type variable in a class hierarchy.

    Walks the original (parameterized) bases of :code:`cls` and its parents
    and returns the argument that was substituted for :code:`t`. Type
    variables that are forwarded to a parent generic are followed until a
    concrete type is found.

    Args:
        cls (type): The (concrete) class to inspect.
        t (TypeVar): The type variable to solve.

    Returns:
        None | type: The concrete type, or the bound of the type variable if
            no concrete type was given anywhere in the hierarchy.
    """
    for klass in cls.__mro__:
        for base in getattr(klass, "__orig_bases__", ()):
            origin = get_origin(base)
            if origin is None:
                continue

            params = getattr(origin, "__parameters__", ())
            if t not in params:
                continue

            arg: Any = get_args(base)[params.index(t)]
            if isinstance(arg, TypeVar):
                # forwarded to a subclass type variable
                solved = solve_typevar(cls, arg) if arg is not t else None
                if solved is not None:
                    return solved
                continue

            return get_origin(arg) or arg

    return t.__bound__
