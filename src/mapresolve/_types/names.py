"""Readable names for type identities used in diagnostic messages."""

from __future__ import annotations

import types
import typing
from typing import Any, get_args, get_origin


def fqn(tp: type[Any]) -> str:
    """Get the fully qualified name for a type."""
    module = tp.__module__
    name = tp.__qualname__
    if module in ("builtins",):
        return name
    return f"{module}.{name}"


def type_name(tp: Any) -> str:
    """Render a type identity for humans.

    Type identities are opaque to the resolver, so anything hashable may show up
    here. Python type objects and typing constructs are rendered the way they
    would be written in an annotation; strings (identities handed over by an
    external analyser) are rendered verbatim; anything else falls back to ``repr``.

    Args:
        tp: The type identity to render.

    Returns:
        A short, stable, human-readable name.
    """
    if isinstance(tp, str):
        return tp

    if tp is None or tp is type(None):
        return "None"

    if tp is Any:
        return "Any"

    origin = get_origin(tp)
    args = get_args(tp)

    match origin, args:
        case typing.Annotated, (inner, *_):
            return type_name(inner)
        case (types.UnionType, _) | (typing.Union, _):
            return " | ".join(type_name(arg) for arg in args)
        case None, _:
            if isinstance(tp, type):
                return fqn(tp)
            return repr(tp)

    args_str = ", ".join(type_name(arg) for arg in args)
    return f"{type_name(origin)}[{args_str}]"
