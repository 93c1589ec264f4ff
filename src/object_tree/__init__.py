"""Object tree projector - flatten object graphs for tree widgets and write edits back."""

from __future__ import annotations

from object_tree.api import commit, project
from object_tree.cache import IntrospectionCache
from object_tree.errors import CoercionError, IntrospectionFailure, ObjectTreeError
from object_tree.projection.config import FailurePolicy, ProjectorConfig
from object_tree.projector import GraphProjector
from object_tree.protocols import FieldDescriptor, Introspector, TypeSchema
from object_tree.result import CommitResult, CommitStatus
from object_tree.tree.nodes import NodeKind, TreeNode

__version__: str = "0.1.0"
__all__: list[str] = [
    "CoercionError",
    "CommitResult",
    "CommitStatus",
    "FailurePolicy",
    "FieldDescriptor",
    "GraphProjector",
    "IntrospectionCache",
    "IntrospectionFailure",
    "Introspector",
    "NodeKind",
    "ObjectTreeError",
    "ProjectorConfig",
    "TreeNode",
    "TypeSchema",
    "commit",
    "project",
]
