"""SchemaIntrospector: explicit, caller-registered type descriptions.

For types that reflection cannot read (C extensions, proxies) or should not
read in full (only a curated subset of fields belongs in the tree), callers
register the fields themselves::

    registry = SchemaIntrospector()
    registry.register(Endpoint, {"host": str, "port": int})
    registry.register(
        Secret,
        [FieldDescriptor("name", str), FieldDescriptor("length", int, writable=False,
                                                       getter=lambda s: len(s.value))],
    )

Registration is exact: subclasses of a registered type are not covered unless
registered themselves.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from object_tree.protocols import FieldDescriptor, TypeSchema

__all__ = ["SchemaIntrospector"]


class SchemaIntrospector:
    """Registry-backed Introspector."""

    def __init__(self) -> None:
        self._schemas: dict[type, TypeSchema] = {}

    def __contains__(self, tp: object) -> bool:
        return tp in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def register(
        self,
        tp: type,
        fields: Mapping[str, Any] | Iterable[FieldDescriptor],
        *,
        open: bool = False,  # noqa: A002 -- mirrors TypeSchema.open
    ) -> TypeSchema:
        """Register (or replace) the schema for ``tp``.

        Args:
            tp:     The aggregate type being described.
            fields: Either a ``{name: declared_type}`` mapping (all fields
                    writable, read and written by attribute name) or an
                    iterable of ``FieldDescriptor`` for full control.
            open:   Whether extra public instance attributes are also read.

        Returns:
            The registered TypeSchema.

        Raises:
            ValueError: If a field name is blank or repeated.
        """
        if isinstance(fields, Mapping):
            descriptors = tuple(
                FieldDescriptor(name, declared) for name, declared in fields.items()
            )
        else:
            descriptors = tuple(fields)

        names = [d.name for d in descriptors]
        if any(not name for name in names):
            msg = f"field names for {tp.__qualname__} must be non-empty"
            raise ValueError(msg)
        if len(set(names)) != len(names):
            msg = f"duplicate field names for {tp.__qualname__}: {names}"
            raise ValueError(msg)

        schema = TypeSchema(tp, descriptors, open=open)
        self._schemas[tp] = schema
        return schema

    def unregister(self, tp: type) -> None:
        self._schemas.pop(tp, None)

    def schema(self, tp: type) -> TypeSchema | None:
        return self._schemas.get(tp)
