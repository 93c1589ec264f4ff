"""TreeNode dataclass and NodeKind StrEnum for the flattened tree.

A projection is a flat ``list[TreeNode]``: every node carries its own ``id``
and its parent's ``parent_id``, so a tree widget can rebuild the hierarchy
without nested structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from object_tree.tree.targets import WriteTarget

__all__ = ["GROUP_KINDS", "TERMINAL_KINDS", "NodeKind", "TreeNode"]


class NodeKind(StrEnum):
    """Structural role of a node.

    Group kinds (may have children):
    - ROOT       -> "root"       : the single synthetic root
    - OBJECT     -> "object"     : an aggregate with named fields
    - COLLECTION -> "collection" : a sequence or set
    - MAPPING    -> "mapping"    : a keyed association
    - ENTRY      -> "entry"      : one key/value pair of a mapping

    Terminal kinds (never have children):
    - SCALAR     -> "scalar"     : a leaf value rendered as text
    - NULL       -> "null"       : a ``None`` value
    - INFO       -> "info"       : the "(empty)" marker of an empty container
    - OPAQUE     -> "opaque"     : a value that could not be introspected
    - CYCLE      -> "cycle"      : a back-reference to a node on the current path
    """

    ROOT = auto()
    OBJECT = auto()
    COLLECTION = auto()
    MAPPING = auto()
    ENTRY = auto()
    SCALAR = auto()
    NULL = auto()
    INFO = auto()
    OPAQUE = auto()
    CYCLE = auto()


GROUP_KINDS = frozenset(
    {NodeKind.ROOT, NodeKind.OBJECT, NodeKind.COLLECTION, NodeKind.MAPPING, NodeKind.ENTRY}
)
TERMINAL_KINDS = frozenset(NodeKind) - GROUP_KINDS


@dataclass(slots=True)
class TreeNode:
    """One row of the flattened output.

    Attributes:
        id:           Unique, assigned in emission order starting at 1.
        parent_id:    ``id`` of the parent node; None only for the root.
        name:         Field name, ``[index]``, ``Key=<k>``, ``Key``/``Value``,
                      or the "(empty)" label.
        kind:         Structural role (see NodeKind).
        type_name:    Type tag, e.g. ``int``, ``list[str]``, ``dict[str, int]``.
        value:        Display string for terminal nodes; None for groups.
        write_target: Where an edit to ``value`` is written back, if anywhere.
        source:       The object a group node represents (aggregate, collection
                      or mapping). Bookkeeping only, never displayed.
    """

    id: int
    parent_id: int | None
    name: str
    kind: NodeKind
    type_name: str
    value: str | None = None
    write_target: WriteTarget | None = field(default=None, repr=False, compare=False)
    source: Any = field(default=None, repr=False, compare=False)

    @property
    def is_leaf(self) -> bool:
        """True iff the node is editable, i.e. carries a write target."""
        return self.write_target is not None

    @property
    def is_terminal(self) -> bool:
        """True for kinds that never have children, editable or not."""
        return self.kind in TERMINAL_KINDS
