"""ProjectorConfig and FailurePolicy for graph projection.

ProjectorConfig is a frozen (immutable) dataclass holding the projection
options. FailurePolicy selects what happens when a value cannot be
introspected: abort the whole projection, or emit a degraded leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from object_tree.projection.formatting import DEFAULT_NULL_DISPLAY


class FailurePolicy(StrEnum):
    """How ``project`` reacts to a value it cannot introspect.

    - RAISE:   Raise ``IntrospectionFailure``; no partial output is returned.
    - DEGRADE: Emit an OPAQUE leaf holding ``repr(value)`` and carry on.
    """

    RAISE = auto()
    DEGRADE = auto()


@dataclass(frozen=True, slots=True)
class ProjectorConfig:
    """Immutable options for ``GraphProjector``.

    Attributes:
        root_name: Label of the synthetic root node. Defaults to the root
            object's class name when None.
        null_display: Display string for ``None`` values.  Default "<null>".
        empty_label: Name of the informational child emitted under an empty
            collection or mapping.  Default "(empty)".
        addressable_elements: When True, scalar elements of mutable sequences
            and scalar values of mutable mappings receive index/key write
            targets and become editable.  Default False: only aggregate fields
            are editable.
        failure_policy: Reaction to values that cannot be introspected.
    """

    root_name: str | None = None
    null_display: str = DEFAULT_NULL_DISPLAY
    empty_label: str = "(empty)"
    addressable_elements: bool = False
    failure_policy: FailurePolicy = FailurePolicy.RAISE

    def __post_init__(self) -> None:
        if self.root_name is not None and not self.root_name.strip():
            msg = f"root_name must be non-blank when given, got {self.root_name!r}"
            raise ValueError(msg)
        if not self.null_display:
            msg = "null_display must be a non-empty string"
            raise ValueError(msg)
        if not self.empty_label.strip():
            msg = f"empty_label must be non-blank, got {self.empty_label!r}"
            raise ValueError(msg)
        if not isinstance(self.failure_policy, FailurePolicy):
            msg = f"failure_policy must be a FailurePolicy, got {self.failure_policy!r}"
            raise ValueError(msg)
