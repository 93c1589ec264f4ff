"""ChainIntrospector: asks several introspectors in turn.

The first non-None schema wins, so more specific introspectors go first::

    chain = ChainIntrospector(my_registry, PydanticIntrospector(), ReflectionIntrospector())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from object_tree.protocols import Introspector, TypeSchema

__all__ = ["ChainIntrospector"]


class ChainIntrospector:
    def __init__(self, *introspectors: Introspector) -> None:
        if not introspectors:
            msg = "ChainIntrospector needs at least one introspector"
            raise ValueError(msg)
        self._introspectors: tuple[Introspector, ...] = introspectors

    @property
    def introspectors(self) -> tuple[Introspector, ...]:
        return self._introspectors

    def schema(self, tp: type) -> TypeSchema | None:
        for introspector in self._introspectors:
            schema = introspector.schema(tp)
            if schema is not None:
                return schema
        return None
