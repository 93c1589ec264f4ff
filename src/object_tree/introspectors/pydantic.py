"""PydanticIntrospector: reads pydantic v2 ``BaseModel`` subclasses.

Fields come from ``model_fields`` in declaration order; computed fields follow
and are always read-only. A model configured with ``frozen=True``, or a field
declared with ``Field(frozen=True)``, is read-only too.

Assignments go through the model's own ``__setattr__``, so models with
``validate_assignment=True`` keep validating edits.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from object_tree.protocols import FieldDescriptor, TypeSchema

__all__ = ["PydanticIntrospector"]


class PydanticIntrospector:
    """Introspector for pydantic models; returns None for anything else."""

    def schema(self, tp: type) -> TypeSchema | None:
        if not issubclass(tp, BaseModel):
            return None

        model_frozen = bool(tp.model_config.get("frozen", False))
        fields: list[FieldDescriptor] = []
        for name, info in tp.model_fields.items():
            if name.startswith("_"):
                continue
            declared: Any = info.annotation if info.annotation is not None else Any
            writable = not (model_frozen or info.frozen)
            fields.append(FieldDescriptor(name, declared, writable=writable))

        for name, info in tp.model_computed_fields.items():
            declared = info.return_type
            if declared is None or declared is PydanticUndefined:
                declared = Any
            fields.append(FieldDescriptor(name, declared, writable=False))

        return TypeSchema(tp, tuple(fields), open=False)
