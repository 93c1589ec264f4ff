"""Closed classification of every value met during projection.

``classify`` maps a value to exactly one ``ValueClass``. Precedence:

1. NULL      -- ``None``.
2. LEAF      -- an instance of ``LEAF_TYPES`` (or a 0-d numpy array).
3. MAPPING   -- a ``collections.abc.Mapping``.
4. SEQUENCE  -- any other sized ``Collection`` except text and bytes.
5. AGGREGATE -- the introspector returns a ``TypeSchema`` for its type.
6. LEAF      -- declined by the introspector, but a known non-aggregate:
                 callables, classes, modules, generators and coroutines, or
                 instances without a ``__dict__`` (compiled regexes, C objects).
7. OPAQUE    -- none of the above; the caller decides whether that is fatal.

Optional unwrapping is a property of declared annotations, not of runtime
values, and happens in ``typenames.unwrap_optional``.
"""

from __future__ import annotations

import datetime as dt
import ipaddress
import types
import uuid
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, StrEnum, auto
from fractions import Fraction
from pathlib import PurePath
from typing import Any

import numpy as np
import pydantic_core
from pydantic import AnyUrl

from object_tree.protocols import Introspector, TypeSchema

__all__ = [
    "LEAF_TYPES",
    "NON_AGGREGATE_TYPES",
    "TEXT_TYPES",
    "Classification",
    "ValueClass",
    "classify",
]

# Values of these types are displayed as a single string and never expanded.
LEAF_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    dt.date,  # includes datetime
    dt.time,
    dt.timedelta,
    uuid.UUID,
    PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    AnyUrl,
    pydantic_core.Url,
    pydantic_core.MultiHostUrl,
    Enum,
    np.generic,
)

# Never read field by field; shown as a single string when nothing describes them.
NON_AGGREGATE_TYPES: tuple[type, ...] = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
)

# Iterable, but never treated as sequences.
TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray, memoryview)


class ValueClass(StrEnum):
    NULL = auto()
    LEAF = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    AGGREGATE = auto()
    OPAQUE = auto()


@dataclass(frozen=True, slots=True)
class Classification:
    """Tagged result of ``classify``.

    ``schema`` is set only for AGGREGATE.
    """

    value_class: ValueClass
    schema: TypeSchema | None = None


_NULL = Classification(ValueClass.NULL)
_LEAF = Classification(ValueClass.LEAF)
_MAPPING = Classification(ValueClass.MAPPING)
_SEQUENCE = Classification(ValueClass.SEQUENCE)
_OPAQUE = Classification(ValueClass.OPAQUE)


def classify(value: Any, introspector: Introspector) -> Classification:
    if value is None:
        return _NULL
    if isinstance(value, LEAF_TYPES):
        return _LEAF
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return _LEAF
    if isinstance(value, Mapping):
        return _MAPPING
    if isinstance(value, Collection) and not isinstance(value, TEXT_TYPES):
        return _SEQUENCE
    schema = introspector.schema(type(value))
    if schema is not None:
        return Classification(ValueClass.AGGREGATE, schema)
    if _is_non_aggregate(value):
        return _LEAF
    return _OPAQUE


def _is_non_aggregate(value: Any) -> bool:
    if isinstance(value, NON_AGGREGATE_TYPES):
        return True
    return getattr(type(value), "__dictoffset__", 0) == 0
