"""Tests for ChainIntrospector and default_introspector()."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from object_tree import Introspector
from object_tree.introspectors import (
    ChainIntrospector,
    PydanticIntrospector,
    ReflectionIntrospector,
    SchemaIntrospector,
    default_introspector,
)


@dataclass
class Point:
    x: int = 0
    y: int = 0


class TestChainIntrospector:
    def test_requires_members(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            ChainIntrospector()

    def test_first_answer_wins(self) -> None:
        registry = SchemaIntrospector()
        registry.register(Point, {"x": int})
        chain = ChainIntrospector(registry, ReflectionIntrospector())
        schema = chain.schema(Point)
        assert schema is not None
        assert schema.field_names() == ("x",)

    def test_falls_through(self) -> None:
        chain = ChainIntrospector(SchemaIntrospector(), ReflectionIntrospector())
        schema = chain.schema(Point)
        assert schema is not None
        assert schema.field_names() == ("x", "y")

    def test_all_decline(self) -> None:
        assert ChainIntrospector(SchemaIntrospector()).schema(Point) is None

    def test_introspectors_property(self) -> None:
        registry = SchemaIntrospector()
        assert ChainIntrospector(registry).introspectors == (registry,)


class TestDefaultIntrospector:
    def test_order(self) -> None:
        members = default_introspector().introspectors
        assert isinstance(members[0], PydanticIntrospector)
        assert isinstance(members[1], ReflectionIntrospector)

    def test_is_an_introspector(self) -> None:
        assert isinstance(default_introspector(), Introspector)
