"""Binding contract between a projection and a tree-style rendering widget.

A self-referencing tree widget needs three things from the node list: which
field is the row key, which field points at the parent row, and which fields
are bookkeeping that must not be shown. This module names them and offers
small helpers for widgets and tests:

- to_rows():        plain dict rows holding only display fields
- children_index(): parent id -> child nodes, in emission order
- validate_forest(): checks the structural invariants of a projection
- render_text():     an indented plain-text dump, for logs and debugging
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from object_tree.tree.nodes import NodeKind, TreeNode

__all__ = [
    "DISPLAY_FIELDS",
    "EDITABLE_FIELD",
    "HIDDEN_FIELDS",
    "KEY_FIELD",
    "PARENT_FIELD",
    "children_index",
    "render_text",
    "to_rows",
    "validate_forest",
]

KEY_FIELD = "id"
PARENT_FIELD = "parent_id"
EDITABLE_FIELD = "value"
DISPLAY_FIELDS: tuple[str, ...] = ("name", "type_name", "value")
HIDDEN_FIELDS: tuple[str, ...] = ("kind", "write_target", "source", "is_leaf", "is_terminal")


def to_rows(nodes: Sequence[TreeNode]) -> list[dict[str, Any]]:
    """Return one dict per node with the key, parent key and display fields.

    ``editable`` tells the widget whether the value cell accepts edits.
    """
    return [
        {
            KEY_FIELD: node.id,
            PARENT_FIELD: node.parent_id,
            **{name: getattr(node, name) for name in DISPLAY_FIELDS},
            "editable": node.is_leaf,
        }
        for node in nodes
    ]


def children_index(nodes: Sequence[TreeNode]) -> dict[int | None, list[TreeNode]]:
    index: defaultdict[int | None, list[TreeNode]] = defaultdict(list)
    for node in nodes:
        index[node.parent_id].append(node)
    return dict(index)


def validate_forest(nodes: Sequence[TreeNode]) -> None:
    """Check the structural invariants of a projection.

    - ids are exactly 1..N in list order
    - exactly one node (the first) has no parent
    - every other node's parent was emitted before it
    - terminal nodes have no children

    Raises:
        ValueError: Describing the first violation found.
    """
    if not nodes:
        msg = "a projection must contain at least the root node"
        raise ValueError(msg)

    seen: dict[int, TreeNode] = {}
    for position, node in enumerate(nodes, start=1):
        if node.id != position:
            msg = f"node {node.name!r} has id {node.id}, expected {position}"
            raise ValueError(msg)
        if node.parent_id is None:
            if position != 1:
                msg = f"node {node.id} ({node.name!r}) is a second root"
                raise ValueError(msg)
        elif node.parent_id not in seen:
            msg = (
                f"node {node.id} ({node.name!r}) references parent {node.parent_id}, "
                "which was not emitted before it"
            )
            raise ValueError(msg)
        elif seen[node.parent_id].is_terminal:
            msg = f"node {node.id} ({node.name!r}) has terminal parent {node.parent_id}"
            raise ValueError(msg)
        seen[node.id] = node


def render_text(nodes: Sequence[TreeNode], indent: str = "  ") -> str:
    """Render nodes as an indented outline, one line per node.

    Example output::

        AppSettings
          network
            host = localhost  (str)
            port = 502  (int)
    """
    depth: dict[int, int] = {}
    lines: list[str] = []
    for node in nodes:
        level = 0 if node.parent_id is None else depth.get(node.parent_id, -1) + 1
        depth[node.id] = level
        line = f"{indent * level}{node.name}"
        if node.is_terminal and node.kind is not NodeKind.INFO:
            line += f" = {node.value}  ({node.type_name})"
        lines.append(line)
    return "\n".join(lines)
