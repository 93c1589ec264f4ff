"""Lookup helpers for asserting on projections."""

from __future__ import annotations

from object_tree import TreeNode


def find(nodes: list[TreeNode], *names: str) -> TreeNode:
    """Follow child names from the root: ``find(nodes, "network", "port")``."""
    by_parent: dict[int | None, list[TreeNode]] = {}
    for node in nodes:
        by_parent.setdefault(node.parent_id, []).append(node)
    current = nodes[0]
    for name in names:
        current = next(n for n in by_parent.get(current.id, []) if n.name == name)
    return current


def children(nodes: list[TreeNode], parent: TreeNode) -> list[TreeNode]:
    return [n for n in nodes if n.parent_id == parent.id]
