"""Introspectors subpackage for object_tree.

All introspectors satisfy the ``Introspector`` Protocol structurally:

- ReflectionIntrospector: dataclasses and plain classes.
- PydanticIntrospector:   pydantic v2 models.
- SchemaIntrospector:     explicit registration by the caller.
- ChainIntrospector:      first match across several introspectors.

``default_introspector()`` returns the chain used when none is supplied.
"""

from object_tree.introspectors.chain import ChainIntrospector
from object_tree.introspectors.pydantic import PydanticIntrospector
from object_tree.introspectors.reflection import ReflectionIntrospector
from object_tree.introspectors.schema import SchemaIntrospector

__all__ = [
    "ChainIntrospector",
    "PydanticIntrospector",
    "ReflectionIntrospector",
    "SchemaIntrospector",
    "default_introspector",
]


def default_introspector() -> ChainIntrospector:
    """Pydantic models first, then reflection over everything else."""
    return ChainIntrospector(PydanticIntrospector(), ReflectionIntrospector())
