"""ReflectionIntrospector: reads aggregates through Python's own type machinery.

Handles, in order of precedence:
- Dataclasses: ``dataclasses.fields()``, read-only when ``frozen=True``.
- Plain classes: class-level annotations across the MRO, ``__slots__``, and
  the instance ``__dict__`` (schema is ``open``) for attributes assigned in
  ``__init__`` without an annotation.
- Properties on either kind: readable, writable only with a setter; the
  declared type comes from the getter's return annotation.

Names starting with an underscore are private and never read. ``ClassVar``
annotations are class state, not fields.

Callables, classes, modules, builtin containers and C-level objects without
an instance dictionary are not aggregates: ``schema`` returns None for them.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import typing
from typing import Any, ClassVar, get_origin

from object_tree.projection.classifier import NON_AGGREGATE_TYPES
from object_tree.protocols import FieldDescriptor, TypeSchema

__all__ = ["ReflectionIntrospector"]

logger = logging.getLogger(__name__)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _resolved_hints(tp: type) -> dict[str, Any]:
    """``get_type_hints`` with a fallback to raw annotations.

    Unresolvable forward references degrade to ``Any`` for the affected
    fields instead of failing the whole type.
    """
    try:
        return typing.get_type_hints(tp)
    except (NameError, TypeError) as exc:
        logger.debug(f"Falling back to raw annotations for {tp.__qualname__}: {exc}")
    hints: dict[str, Any] = {}
    for klass in reversed(tp.__mro__):
        for name, annotation in vars(klass).get("__annotations__", {}).items():
            hints[name] = Any if isinstance(annotation, str) else annotation
    return hints


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def _property_fields(tp: type, seen: set[str]) -> list[FieldDescriptor]:
    found: list[FieldDescriptor] = []
    for name, attr in inspect.getmembers_static(tp):
        if name in seen or not _is_public(name) or not isinstance(attr, property):
            continue
        declared: Any = Any
        if attr.fget is not None:
            try:
                declared = typing.get_type_hints(attr.fget).get("return", Any)
            except (NameError, TypeError):
                declared = Any
        found.append(FieldDescriptor(name, declared, writable=attr.fset is not None))
        seen.add(name)
    return found


def _slot_names(tp: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(tp.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


class ReflectionIntrospector:
    """Introspector for dataclasses and ordinary Python classes.

    Satisfies the ``Introspector`` Protocol structurally.

    Example::

        @dataclass
        class Network:
            host: str = "localhost"
            port: int = 502

        schema = ReflectionIntrospector().schema(Network)
        schema.field_names()   # ("host", "port")
    """

    def schema(self, tp: type) -> TypeSchema | None:
        if issubclass(tp, NON_AGGREGATE_TYPES):
            return None
        if dataclasses.is_dataclass(tp):
            return self._dataclass_schema(tp)
        return self._class_schema(tp)

    def _dataclass_schema(self, tp: type) -> TypeSchema:
        hints = _resolved_hints(tp)
        frozen = tp.__dataclass_params__.frozen  # type: ignore[attr-defined]
        seen: set[str] = set()
        fields: list[FieldDescriptor] = []
        for f in dataclasses.fields(tp):
            if not _is_public(f.name):
                continue
            declared = hints.get(f.name, f.type)
            if isinstance(declared, str):
                declared = Any
            fields.append(FieldDescriptor(f.name, declared, writable=not frozen))
            seen.add(f.name)
        fields.extend(_property_fields(tp, seen))
        return TypeSchema(tp, tuple(fields), open=False)

    def _class_schema(self, tp: type) -> TypeSchema | None:
        has_dict = getattr(tp, "__dictoffset__", 0) != 0
        if tp.__module__ == "builtins" and not has_dict:
            return None

        seen: set[str] = set()
        fields: list[FieldDescriptor] = []

        for name, annotation in _resolved_hints(tp).items():
            if not _is_public(name) or _is_class_var(annotation):
                continue
            fields.append(FieldDescriptor(name, annotation))
            seen.add(name)

        for name in _slot_names(tp):
            if _is_public(name) and name not in seen:
                fields.append(FieldDescriptor(name))
                seen.add(name)

        fields.extend(_property_fields(tp, seen))

        if not fields and not has_dict:
            return None
        return TypeSchema(tp, tuple(fields), open=has_dict)
