"""Tree subpackage: the flattened node model and its rendering contract.

Re-exports the public API for the tree module:
- TreeNode: one row of a projection
- NodeKind: StrEnum of node roles (ROOT, OBJECT, COLLECTION, ... CYCLE)
- FieldTarget / IndexTarget / KeyTarget: write-back references
- binding helpers: to_rows, children_index, validate_forest, render_text
"""

from object_tree.tree.binding import (
    DISPLAY_FIELDS,
    EDITABLE_FIELD,
    HIDDEN_FIELDS,
    KEY_FIELD,
    PARENT_FIELD,
    children_index,
    render_text,
    to_rows,
    validate_forest,
)
from object_tree.tree.nodes import NodeKind, TreeNode
from object_tree.tree.targets import FieldTarget, IndexTarget, KeyTarget, WriteTarget

__all__ = [
    "DISPLAY_FIELDS",
    "EDITABLE_FIELD",
    "HIDDEN_FIELDS",
    "KEY_FIELD",
    "PARENT_FIELD",
    "FieldTarget",
    "IndexTarget",
    "KeyTarget",
    "NodeKind",
    "TreeNode",
    "WriteTarget",
    "children_index",
    "render_text",
    "to_rows",
    "validate_forest",
]
