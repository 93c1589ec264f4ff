"""Write targets: where a committed edit lands in the original graph.

A closed family of three settable references, each able to read the current
value (for re-display) and write a new one (for commit):

- FieldTarget: a named field of an aggregate owner.
- IndexTarget: a position in a mutable sequence.
- KeyTarget:   the value slot of a key in a mutable mapping.

Coercion is not done here; targets only carry the declared type that the
projector coerces against at commit time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping, MutableSequence
from dataclasses import dataclass
from typing import Any

from object_tree.protocols import FieldDescriptor

__all__ = ["FieldTarget", "IndexTarget", "KeyTarget", "WriteTarget"]


class WriteTarget(ABC):
    """A settable reference into the projected graph."""

    __slots__ = ()

    @property
    @abstractmethod
    def declared_type(self) -> Any:
        """Type that edited text is coerced to; ``Any`` when unknown."""

    @abstractmethod
    def read(self) -> Any: ...

    @abstractmethod
    def write(self, value: Any) -> None: ...

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable address, e.g. ``NetworkSettings.port``."""


@dataclass(frozen=True, slots=True, eq=False)
class FieldTarget(WriteTarget):
    owner: Any
    field: FieldDescriptor

    @property
    def declared_type(self) -> Any:
        return self.field.declared_type

    def read(self) -> Any:
        return self.field.get(self.owner)

    def write(self, value: Any) -> None:
        self.field.set(self.owner, value)

    def describe(self) -> str:
        return f"{type(self.owner).__name__}.{self.field.name}"


@dataclass(frozen=True, slots=True, eq=False)
class IndexTarget(WriteTarget):
    container: MutableSequence[Any]
    index: int
    element_type: Any = Any

    @property
    def declared_type(self) -> Any:
        return self.element_type

    def read(self) -> Any:
        return self.container[self.index]

    def write(self, value: Any) -> None:
        self.container[self.index] = value

    def describe(self) -> str:
        return f"{type(self.container).__name__}[{self.index}]"


@dataclass(frozen=True, slots=True, eq=False)
class KeyTarget(WriteTarget):
    container: MutableMapping[Any, Any]
    key: Any
    value_type: Any = Any

    @property
    def declared_type(self) -> Any:
        return self.value_type

    def read(self) -> Any:
        return self.container[self.key]

    def write(self, value: Any) -> None:
        self.container[self.key] = value

    def describe(self) -> str:
        return f"{type(self.container).__name__}[{self.key!r}]"
