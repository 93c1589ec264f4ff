"""Tests for FieldTarget, IndexTarget and KeyTarget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from object_tree import FieldDescriptor
from object_tree.tree import FieldTarget, IndexTarget, KeyTarget, WriteTarget


@dataclass
class Endpoint:
    host: str = "localhost"


class TestFieldTarget:
    def test_read_write(self) -> None:
        owner = Endpoint()
        target = FieldTarget(owner, FieldDescriptor("host", str))
        assert target.read() == "localhost"
        target.write("example.org")
        assert owner.host == "example.org"
        assert target.declared_type is str
        assert target.describe() == "Endpoint.host"

    def test_read_only_field_refuses_write(self) -> None:
        target = FieldTarget(Endpoint(), FieldDescriptor("host", str, writable=False))
        with pytest.raises(AttributeError, match="read-only"):
            target.write("x")

    def test_custom_accessors(self) -> None:
        store: dict[str, Any] = {"v": 1}
        descriptor = FieldDescriptor(
            "v",
            int,
            getter=lambda owner: owner["v"],
            setter=lambda owner, value: owner.__setitem__("v", value),
        )
        target = FieldTarget(store, descriptor)
        target.write(5)
        assert target.read() == 5

    def test_is_a_write_target(self) -> None:
        assert isinstance(FieldTarget(Endpoint(), FieldDescriptor("host")), WriteTarget)


class TestIndexTarget:
    def test_read_write(self) -> None:
        items = ["a", "b"]
        target = IndexTarget(items, 1, str)
        assert target.read() == "b"
        target.write("c")
        assert items == ["a", "c"]
        assert target.declared_type is str
        assert target.describe() == "list[1]"

    def test_default_element_type(self) -> None:
        assert IndexTarget([1], 0).declared_type is Any


class TestKeyTarget:
    def test_read_write(self) -> None:
        table = {"k1": "v1"}
        target = KeyTarget(table, "k1", str)
        assert target.read() == "v1"
        target.write("v2")
        assert table == {"k1": "v2"}
        assert target.describe() == "dict['k1']"

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            KeyTarget({}, "gone").read()


class TestIdentity:
    def test_targets_compare_by_identity(self) -> None:
        items = ["a"]
        assert IndexTarget(items, 0) != IndexTarget(items, 0)
