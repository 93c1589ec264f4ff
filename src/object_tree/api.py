"""Public API functions for object-tree-projector.

This module provides the two user-facing functions: project and commit. Each
call creates a fresh GraphProjector to guarantee zero global state mutation
between calls. Long-lived callers (a settings window re-projecting after every
structural change) should hold a GraphProjector instead, to reuse its
introspection cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from object_tree.projection.config import ProjectorConfig
from object_tree.projector import GraphProjector
from object_tree.result import CommitResult
from object_tree.tree.nodes import TreeNode

if TYPE_CHECKING:
    from object_tree.protocols import Introspector

__all__ = ["commit", "project"]


def project(
    root: Any,
    config: ProjectorConfig | None = None,
    introspector: Introspector | None = None,
) -> list[TreeNode]:
    """Flatten an object graph into a self-referencing list of TreeNode.

    Args:
        root:         The aggregate to project (dataclass, pydantic model,
                      plain object, or a type ``introspector`` describes).
        config:       Projection options. Defaults to ``ProjectorConfig()``.
        introspector: How aggregates are read. Defaults to pydantic models
                      first, then reflection.

    Returns:
        Nodes with ids 1..N, the synthetic root first, parents before children.

    Raises:
        IntrospectionFailure: If the root or (under the default RAISE policy)
            any nested value cannot be introspected.
    """
    return GraphProjector(introspector=introspector, config=config).project(root)


def commit(
    node: TreeNode,
    raw: Any,
    config: ProjectorConfig | None = None,
) -> CommitResult:
    """Write an edited value for ``node`` back into the graph it came from.

    Args:
        node:   A node produced by ``project``.
        raw:    The edited input, normally text.
        config: Must match the config used to project ``node`` when it
                changed ``null_display``. Defaults to ``ProjectorConfig()``.

    Returns:
        A DECLINED result when the node is not editable, otherwise APPLIED.

    Raises:
        CoercionError: If ``raw`` cannot be converted to the field's type.
    """
    return GraphProjector(config=config).commit(node, raw)
