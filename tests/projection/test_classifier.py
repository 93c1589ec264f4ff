"""Tests for classify() and its precedence rules."""

from __future__ import annotations

import datetime as dt
import ipaddress
import math
import re
import uuid
from collections import OrderedDict, deque
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import pytest
from pydantic import AnyUrl, BaseModel

from object_tree.introspectors import SchemaIntrospector, default_introspector
from object_tree.projection.classifier import ValueClass, classify


class Color(Enum):
    RED = 1


@dataclass
class Point:
    x: int = 0
    y: int = 0


class Model(BaseModel):
    name: str = "m"


class Handle:
    def __init__(self) -> None:
        self.fd = 3


@pytest.fixture
def introspector() -> Any:
    return default_introspector()


class TestClassify:
    def test_none_is_null(self, introspector: Any) -> None:
        assert classify(None, introspector).value_class is ValueClass.NULL

    @pytest.mark.parametrize(
        "value",
        [
            True,
            7,
            1.5,
            2j,
            "text",
            b"\x00",
            Decimal("1.0"),
            dt.datetime(2024, 1, 1),
            dt.timedelta(seconds=1),
            uuid.uuid4(),
            Path("/tmp"),
            ipaddress.ip_address("::1"),
            AnyUrl("https://example.com"),
            Color.RED,
            np.float32(1.0),
            np.array(3),
        ],
    )
    def test_leaves(self, introspector: Any, value: Any) -> None:
        assert classify(value, introspector).value_class is ValueClass.LEAF

    @pytest.mark.parametrize("value", [{}, {"a": 1}, OrderedDict(a=1)])
    def test_mappings(self, introspector: Any, value: Any) -> None:
        assert classify(value, introspector).value_class is ValueClass.MAPPING

    @pytest.mark.parametrize(
        "value", [[], [1], (1, 2), {1}, frozenset(), deque([1]), np.array([1, 2])]
    )
    def test_sequences(self, introspector: Any, value: Any) -> None:
        assert classify(value, introspector).value_class is ValueClass.SEQUENCE

    def test_text_is_never_a_sequence(self, introspector: Any) -> None:
        for value in ("abc", b"abc", bytearray(b"abc")):
            assert classify(value, introspector).value_class is ValueClass.LEAF

    def test_aggregates_carry_schema(self, introspector: Any) -> None:
        for value in (Point(), Model()):
            classification = classify(value, introspector)
            assert classification.value_class is ValueClass.AGGREGATE
            assert classification.schema is not None
            assert classification.schema.type is type(value)

    @pytest.mark.parametrize(
        "value",
        [object(), len, Point, (i for i in range(2)), re.compile("x"), math, print],
    )
    def test_non_aggregates_are_leaves(self, introspector: Any, value: Any) -> None:
        classification = classify(value, introspector)
        assert classification.value_class is ValueClass.LEAF
        assert classification.schema is None

    def test_undescribed_object_with_state_is_opaque(self) -> None:
        classification = classify(Handle(), SchemaIntrospector())
        assert classification.value_class is ValueClass.OPAQUE
        assert classification.schema is None
