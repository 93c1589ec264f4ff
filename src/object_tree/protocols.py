"""Introspector Protocol: the seam through which a concrete domain plugs in.

The projector never inspects aggregates itself. It asks an ``Introspector``
for a ``TypeSchema`` describing the readable fields of a type; a ``None``
answer means "not an aggregate I understand". Any object with a conformant
``schema`` method satisfies the Protocol; no inheritance required.

Example::

    from object_tree.protocols import FieldDescriptor, Introspector, TypeSchema

    class PointIntrospector:
        def schema(self, tp: type) -> TypeSchema | None:
            if tp is not Point:
                return None
            return TypeSchema(
                tp,
                (FieldDescriptor("x", int), FieldDescriptor("y", int)),
            )

    assert isinstance(PointIntrospector(), Introspector)  # structural conformance
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

__all__ = ["FieldDescriptor", "Introspector", "TypeSchema"]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One named, readable field of an aggregate type.

    Attributes:
        name:          Attribute name, also used as the node's display label.
        declared_type: Annotation of the field; ``Any`` when undeclared.
        writable:      Whether ``set`` may be called. Read-only fields are still
                       projected but never receive a write target.
        getter:        Optional custom reader ``(owner) -> value``. Defaults to
                       ``getattr(owner, name)``.
        setter:        Optional custom writer ``(owner, value) -> None``.
                       Defaults to ``setattr(owner, name, value)``.
    """

    name: str
    declared_type: Any = Any
    writable: bool = True
    getter: Callable[[Any], Any] | None = field(default=None, compare=False)
    setter: Callable[[Any, Any], None] | None = field(default=None, compare=False)

    def get(self, owner: Any) -> Any:
        if self.getter is not None:
            return self.getter(owner)
        return getattr(owner, self.name)

    def set(self, owner: Any, value: Any) -> None:
        if not self.writable:
            msg = f"field {self.name!r} is read-only"
            raise AttributeError(msg)
        if self.setter is not None:
            self.setter(owner, value)
        else:
            setattr(owner, self.name, value)


@dataclass(frozen=True, slots=True)
class TypeSchema:
    """Type-level description of an aggregate.

    Attributes:
        type:   The described type.
        fields: Readable fields in display order.
        open:   When True, instances may carry extra public attributes in their
                ``__dict__`` beyond ``fields``; those are read per instance with
                ``declared_type=Any``.
    """

    type: type
    fields: tuple[FieldDescriptor, ...] = ()
    open: bool = False

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@runtime_checkable
class Introspector(Protocol):
    """Structural protocol for aggregate introspection.

    ``schema`` must be a pure function of ``tp``: results may be cached per
    type (see ``IntrospectionCache``).
    """

    def schema(self, tp: type) -> TypeSchema | None: ...
