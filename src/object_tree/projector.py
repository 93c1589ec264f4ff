"""GraphProjector: flattens an object graph into a self-referencing node list.

This is the orchestration layer between the introspectors, the classifier and
the node model.

Architecture:
- project() performs one depth-first walk. Every value is classified exactly
  once (see ``projection.classifier``) and dispatched to the matching handler.
  Nodes are appended in emission order; a single counter owned by the
  per-call ``_Walk`` context assigns ids, so ids run 1..N with parents always
  before children and no sorting pass is needed.
- Only scalar and null values that are fields of an aggregate receive a write
  target, unless ``ProjectorConfig.addressable_elements`` extends editing to
  elements of mutable sequences and values of mutable mappings.
- Aggregates and containers on the current path are tracked by identity;
  meeting one again emits a CYCLE leaf instead of recursing forever.
- commit() coerces edited text against the target's declared type, writes it,
  re-reads the stored value and refreshes the node in place. It never adds or
  removes nodes.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
from collections.abc import Collection, Iterator, Mapping, MutableMapping, MutableSequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any

import numpy as np

from object_tree.cache import IntrospectionCache
from object_tree.errors import CoercionError, IntrospectionFailure
from object_tree.introspectors import default_introspector
from object_tree.projection.classifier import ValueClass, classify
from object_tree.projection.coercion import coerce
from object_tree.projection.config import FailurePolicy, ProjectorConfig
from object_tree.projection.formatting import format_value
from object_tree.projection.typenames import (
    admits_none,
    declared_element_type,
    declared_mapping_types,
    element_type_name,
    mapping_type_names,
    type_name,
    unwrap_optional,
)
from object_tree.protocols import FieldDescriptor, TypeSchema
from object_tree.result import CommitResult, CommitStatus
from object_tree.tree.nodes import NodeKind, TreeNode
from object_tree.tree.targets import FieldTarget, IndexTarget, KeyTarget, WriteTarget

if TYPE_CHECKING:
    from object_tree.protocols import Introspector

__all__ = ["GraphProjector"]

logger = logging.getLogger(__name__)

_INFO_TYPE = "info"
_ENTRY_TYPE = "entry"
_KEY_NAME = "Key"
_VALUE_NAME = "Value"

_repr = reprlib.Repr()
_repr.maxstring = 80
_repr.maxother = 80


@dataclass
class _Walk:
    """Traversal state owned by a single project() call."""

    nodes: list[TreeNode] = field(default_factory=list)
    next_id: int = 1
    path: list[str] = field(default_factory=list)
    active: set[int] = field(default_factory=set)

    def emit(
        self,
        parent_id: int | None,
        name: str,
        kind: NodeKind,
        type_name: str,
        value: str | None = None,
        target: WriteTarget | None = None,
        source: Any = None,
    ) -> TreeNode:
        node = TreeNode(
            id=self.next_id,
            parent_id=parent_id,
            name=name,
            kind=kind,
            type_name=type_name,
            value=value,
            write_target=target,
            source=source,
        )
        self.next_id += 1
        self.nodes.append(node)
        return node

    def where(self, name: str) -> str:
        return "/".join([*self.path, name])

    @contextmanager
    def entering(self, name: str, value: Any) -> Iterator[None]:
        self.path.append(name)
        self.active.add(id(value))
        try:
            yield
        finally:
            self.active.discard(id(value))
            self.path.pop()


def _is_computed(tp: type, name: str) -> bool:
    """True if ``name`` is computed by a getter rather than stored on the instance."""
    return isinstance(inspect.getattr_static(tp, name, None), (property, cached_property))

class GraphProjector:
    """Projects object graphs into flat, self-referencing ``TreeNode`` lists.

    Each instance keeps its own introspection cache; projections themselves
    share no state, so one projector may be reused for any number of graphs.

    Example::

        projector = GraphProjector()
        nodes = projector.project(settings)
        port = next(n for n in nodes if n.name == "port")
        projector.commit(port, "8080")     # settings.network.port == 8080
    """

    def __init__(
        self,
        introspector: Introspector | None = None,
        config: ProjectorConfig | None = None,
        max_cache_size: int = 256,
    ) -> None:
        """Initialise the projector.

        Args:
            introspector: Any Introspector-conformant object.  Defaults to
                ``default_introspector()`` (pydantic models, then reflection).
            config: Projection options.  Defaults to ``ProjectorConfig()``.
            max_cache_size: Number of per-type schemas kept in the LRU cache.
                Infrastructure only; not part of ``ProjectorConfig``.
        """
        self._config = config if config is not None else ProjectorConfig()
        raw_introspector: Any = (
            introspector if introspector is not None else default_introspector()
        )
        self._introspector = IntrospectionCache(raw_introspector, max_size=max_cache_size)

    @property
    def config(self) -> ProjectorConfig:
        return self._config

    @property
    def introspector(self) -> IntrospectionCache:
        return self._introspector

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def project(self, root: Any) -> list[TreeNode]:
        """Flatten ``root`` into a list of TreeNode in depth-first order.

        Args:
            root: An aggregate (dataclass, pydantic model, plain object, or any
                  type the introspector describes).

        Returns:
            Nodes with ids 1..N. The first node is the synthetic ROOT; every
            other node's parent appears before it.

        Raises:
            IntrospectionFailure: If ``root`` is not an aggregate, or, under
                ``FailurePolicy.RAISE``, if any value in the graph cannot be
                read. No partial output is returned.
        """
        name = self._config.root_name or type(root).__name__
        classification = classify(root, self._introspector)
        if classification.value_class is not ValueClass.AGGREGATE:
            raise IntrospectionFailure(
                type(root), name, "the root must be an aggregate with readable fields"
            )

        walk = _Walk()
        root_node = walk.emit(
            None, name, NodeKind.ROOT, type_name(type(root)), source=root
        )
        with walk.entering(name, root):
            self._walk_fields(walk, root_node.id, root, classification.schema)

        logger.debug(f"Projected {type(root).__name__} into {len(walk.nodes)} nodes")
        return walk.nodes

    def _visit(
        self,
        walk: _Walk,
        parent_id: int,
        name: str,
        value: Any,
        declared: Any = Any,
        target: WriteTarget | None = None,
    ) -> None:
        classification = classify(value, self._introspector)
        value_class = classification.value_class

        if value_class is ValueClass.NULL:
            walk.emit(
                parent_id,
                name,
                NodeKind.NULL,
                self._null_type_name(declared),
                value=self._config.null_display,
                target=target,
            )
            return

        if value_class is ValueClass.LEAF:
            walk.emit(
                parent_id,
                name,
                NodeKind.SCALAR,
                self._leaf_type_name(value),
                value=format_value(value, self._config.null_display),
                target=target,
            )
            return

        if value_class is ValueClass.OPAQUE:
            self._opaque(
                walk,
                parent_id,
                name,
                type(value),
                _repr.repr(value),
                "no introspector describes this type",
            )
            return

        # Groups never carry a write target.
        if id(value) in walk.active:
            logger.debug(f"Cycle back to {type(value).__name__} at '{walk.where(name)}'")
            walk.emit(
                parent_id,
                name,
                NodeKind.CYCLE,
                type_name(type(value)),
                value=f"<cycle: {type(value).__name__}>",
            )
            return

        with walk.entering(name, value):
            if value_class is ValueClass.MAPPING:
                self._visit_mapping(walk, parent_id, name, value, declared)
            elif value_class is ValueClass.SEQUENCE:
                self._visit_sequence(walk, parent_id, name, value, declared)
            else:
                node = walk.emit(
                    parent_id, name, NodeKind.OBJECT, type_name(type(value)), source=value
                )
                self._walk_fields(walk, node.id, value, classification.schema)

    def _walk_fields(
        self, walk: _Walk, parent_id: int, owner: Any, schema: TypeSchema | None
    ) -> None:
        if schema is None:
            return
        for descriptor in self._readable_fields(owner, schema):
            try:
                value = descriptor.get(owner)
            except AttributeError as exc:
                computed = descriptor.getter is not None or _is_computed(
                    type(owner), descriptor.name
                )
                if computed:
                    self._unreadable(walk, parent_id, owner, descriptor, exc)
                    continue
                # declared but never assigned: shown as an absent (null) value
                value = None
            except Exception as exc:  # noqa: BLE001 -- getters are user code
                self._unreadable(walk, parent_id, owner, descriptor, exc)
                continue
            target = FieldTarget(owner, descriptor) if descriptor.writable else None
            self._visit(
                walk, parent_id, descriptor.name, value, descriptor.declared_type, target
            )

    def _unreadable(
        self,
        walk: _Walk,
        parent_id: int,
        owner: Any,
        descriptor: FieldDescriptor,
        exc: Exception,
    ) -> None:
        self._opaque(
            walk,
            parent_id,
            descriptor.name,
            type(owner),
            f"<unreadable: {type(exc).__name__}>",
            f"reading {type(owner).__name__}.{descriptor.name} failed: {exc}",
            cause=exc,
        )

    @staticmethod
    def _readable_fields(owner: Any, schema: TypeSchema) -> list[FieldDescriptor]:
        fields = list(schema.fields)
        if schema.open:
            known = set(schema.field_names())
            for name in getattr(owner, "__dict__", {}):
                if not name.startswith("_") and name not in known:
                    fields.append(FieldDescriptor(name))
        return fields

    def _visit_sequence(
        self, walk: _Walk, parent_id: int, name: str, value: Collection[Any], declared: Any
    ) -> None:
        node = walk.emit(
            parent_id,
            name,
            NodeKind.COLLECTION,
            f"{type(value).__name__}[{element_type_name(value, declared)}]",
            source=value,
        )
        element_declared = declared_element_type(declared)
        addressable = self._config.addressable_elements and isinstance(value, MutableSequence)

        count = 0
        for index, item in enumerate(value):
            target = IndexTarget(value, index, element_declared) if addressable else None
            self._visit(walk, node.id, f"[{index}]", item, element_declared, target)
            count += 1

        if count == 0:
            self._emit_empty(walk, node.id)

    def _visit_mapping(
        self, walk: _Walk, parent_id: int, name: str, value: Mapping[Any, Any], declared: Any
    ) -> None:
        key_name, value_name = mapping_type_names(value, declared)
        node = walk.emit(
            parent_id,
            name,
            NodeKind.MAPPING,
            f"{type(value).__name__}[{key_name}, {value_name}]",
            source=value,
        )
        if len(value) == 0:
            self._emit_empty(walk, node.id)
            return

        key_declared, value_declared = declared_mapping_types(declared)
        addressable = self._config.addressable_elements and isinstance(value, MutableMapping)
        null_display = self._config.null_display

        for key, item in value.items():
            key_text = format_value(key, null_display)
            entry = walk.emit(node.id, f"Key={key_text}", NodeKind.ENTRY, _ENTRY_TYPE)
            walk.emit(
                entry.id,
                _KEY_NAME,
                NodeKind.NULL if key is None else NodeKind.SCALAR,
                type_name(key_declared) if key_declared is not Any else self._leaf_type_name(key),
                value=key_text,
            )
            target = KeyTarget(value, key, value_declared) if addressable else None
            self._visit(walk, entry.id, _VALUE_NAME, item, value_declared, target)

    def _emit_empty(self, walk: _Walk, parent_id: int) -> None:
        walk.emit(parent_id, self._config.empty_label, NodeKind.INFO, _INFO_TYPE, value="")

    def _opaque(
        self,
        walk: _Walk,
        parent_id: int,
        name: str,
        value_type: type,
        display: str,
        reason: str,
        cause: BaseException | None = None,
    ) -> None:
        where = walk.where(name)
        if self._config.failure_policy is FailurePolicy.RAISE:
            raise IntrospectionFailure(value_type, where, reason) from cause
        logger.warning(f"Projecting {value_type.__name__} at '{where}' as opaque: {reason}")
        walk.emit(parent_id, name, NodeKind.OPAQUE, type_name(value_type), value=display)

    @staticmethod
    def _leaf_type_name(value: Any) -> str:
        if isinstance(value, np.ndarray):
            return value.dtype.name
        return type_name(type(value))

    @staticmethod
    def _null_type_name(declared: Any) -> str:
        unwrapped = unwrap_optional(declared)
        return "None" if unwrapped is Any else type_name(unwrapped)

    # ------------------------------------------------------------------
    # Write-back
    # ------------------------------------------------------------------

    def commit(self, node: TreeNode, raw: Any) -> CommitResult:
        """Write an edited display value back into the projected graph.

        Args:
            node: A node returned by ``project``.
            raw:  The edited value, normally the text typed into the cell.

        Returns:
            ``CommitResult`` with status DECLINED when the node has no write
            target (nothing is touched), or APPLIED after a successful write.

        Raises:
            CoercionError: If ``raw`` cannot be converted to the target's
                declared type, or the owner rejects the converted value. The
                graph and the node are left unchanged.
        """
        previous = node.value
        target = node.write_target
        if target is None:
            logger.debug(f"Declined edit of node {node.id} ({node.name!r}): not editable")
            return CommitResult(CommitStatus.DECLINED, node.id, previous, previous)

        declared = target.declared_type
        if raw == self._config.null_display and admits_none(declared):
            raw = None
        try:
            current = target.read()
        except (AttributeError, LookupError):
            current = None

        try:
            converted = coerce(raw, declared, current=current)
        except CoercionError as exc:
            logger.info(f"Rejected edit of {target.describe()}: {exc}")
            raise

        try:
            target.write(converted)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.info(f"{target.describe()} refused {converted!r}: {exc}")
            raise CoercionError(raw, unwrap_optional(declared), str(exc)) from exc

        self._refresh(node, target.read(), declared)
        logger.debug(f"Committed {target.describe()} = {node.value!r} (was {previous!r})")
        return CommitResult(
            CommitStatus.APPLIED, node.id, node.value, previous, target.describe()
        )

    def _refresh(self, node: TreeNode, stored: Any, declared: Any) -> None:
        if stored is None:
            node.kind = NodeKind.NULL
            node.type_name = self._null_type_name(declared)
        else:
            node.kind = NodeKind.SCALAR
            node.type_name = self._leaf_type_name(stored)
        node.value = format_value(stored, self._config.null_display)
