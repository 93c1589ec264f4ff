"""Type tags and declared-type helpers.

Type names are best-effort display strings. Declared annotations win over
runtime inspection; when nothing can be determined the tag is ``object``.

Inference order for container element/key/value types:
1. Generic arguments of the declared annotation (``list[str]`` -> ``str``).
2. numpy ``dtype`` for arrays.
3. A single common runtime type across all members.
4. ``object``.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Collection, Iterable, Mapping
from typing import Annotated, Any, Union, get_args, get_origin

import numpy as np

__all__ = [
    "FALLBACK_NAME",
    "admits_none",
    "declared_element_type",
    "declared_mapping_types",
    "element_type_name",
    "mapping_type_names",
    "type_name",
    "unwrap_optional",
]

FALLBACK_NAME = "object"

_NONE_TYPE = type(None)


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def type_name(tp: Any) -> str:
    """Return a short display name for a type or annotation.

    Examples: ``int`` -> "int", ``list[str]`` -> "list[str]",
    ``int | None`` -> "int | None", ``Any`` -> "object".
    """
    tp = _strip_annotated(tp)
    if tp is Any or tp is object:
        return FALLBACK_NAME
    if tp is None or tp is _NONE_TYPE:
        return "None"
    if tp is Ellipsis:
        return "..."
    if isinstance(tp, str):
        return tp
    if isinstance(tp, typing.ForwardRef):
        return tp.__forward_arg__
    if isinstance(tp, typing.TypeVar):
        return tp.__name__

    if _is_union(tp):
        return " | ".join(type_name(arg) for arg in get_args(tp))

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        base = getattr(origin, "__name__", None) or repr(origin)
        if origin is typing.Literal:
            return f"Literal[{', '.join(repr(a) for a in args)}]"
        if not args:
            return base
        return f"{base}[{', '.join(type_name(a) for a in args)}]"

    name = getattr(tp, "__name__", None)
    return name if name else repr(tp)


def unwrap_optional(tp: Any) -> Any:
    """Strip one ``None`` alternative from a union annotation.

    ``int | None`` -> ``int``; ``int | str | None`` -> ``int | str``.
    Non-union annotations are returned unchanged. Only one level is unwrapped:
    an optional nested inside a generic argument is left alone.
    """
    tp = _strip_annotated(tp)
    if not _is_union(tp):
        return tp
    args = get_args(tp)
    remaining = tuple(arg for arg in args if arg is not _NONE_TYPE)
    if len(remaining) == len(args):
        return tp
    if len(remaining) == 1:
        return remaining[0]
    return Union[remaining]  # noqa: UP007 -- typing forms may not support ``|``


def admits_none(tp: Any) -> bool:
    """True if a field declared as ``tp`` may hold ``None``.

    Undeclared fields (``Any``) admit ``None``.
    """
    tp = _strip_annotated(tp)
    if tp is Any or tp is object or tp is None or tp is _NONE_TYPE:
        return True
    if _is_union(tp):
        return any(admits_none(arg) for arg in get_args(tp))
    return False


def declared_element_type(declared: Any) -> Any:
    """Element annotation of a declared collection type, or ``Any``."""
    declared = unwrap_optional(declared)
    origin = get_origin(declared)
    args = get_args(declared)
    if origin is None or not args:
        return Any
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if all(arg == args[0] for arg in args):
            return args[0]
        return Any
    if isinstance(origin, type) and issubclass(origin, Mapping):
        return Any
    if isinstance(origin, type) and issubclass(origin, Iterable):
        return args[0]
    return Any


def declared_mapping_types(declared: Any) -> tuple[Any, Any]:
    """(key, value) annotations of a declared mapping type, or ``(Any, Any)``."""
    declared = unwrap_optional(declared)
    origin = get_origin(declared)
    args = get_args(declared)
    if (
        isinstance(origin, type)
        and issubclass(origin, Mapping)
        and len(args) == 2
    ):
        return args[0], args[1]
    return Any, Any


def _common_type_name(values: Iterable[Any]) -> str:
    seen = {type(v) for v in values}
    if len(seen) == 1:
        return type_name(seen.pop())
    return FALLBACK_NAME


def element_type_name(value: Collection[Any], declared: Any = Any) -> str:
    """Best-effort element type tag for a collection value."""
    element = declared_element_type(declared)
    if element is not Any:
        return type_name(element)
    if isinstance(value, np.ndarray):
        return value.dtype.name
    return _common_type_name(value)


def mapping_type_names(value: Mapping[Any, Any], declared: Any = Any) -> tuple[str, str]:
    """Best-effort (key, value) type tags for a mapping value."""
    key_type, value_type = declared_mapping_types(declared)
    key_name = (
        type_name(key_type) if key_type is not Any else _common_type_name(value.keys())
    )
    value_name = (
        type_name(value_type)
        if value_type is not Any
        else _common_type_name(value.values())
    )
    return key_name, value_name
