"""Exception hierarchy for object-tree-projector.

Both concrete errors also derive from the builtin they specialise, so callers
that already catch ``TypeError`` / ``ValueError`` keep working:

- IntrospectionFailure (TypeError): ``project`` met a value whose shape cannot
  be read by the active introspector.
- CoercionError (ValueError): ``commit`` could not convert edited text to the
  declared type of its write target.
"""

from __future__ import annotations

from typing import Any

__all__ = ["CoercionError", "IntrospectionFailure", "ObjectTreeError"]


def _name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


class ObjectTreeError(Exception):
    """Base class for every error raised by object_tree."""


class IntrospectionFailure(ObjectTreeError, TypeError):
    """A value could not be classified or its fields could not be read.

    Attributes:
        value_type: Runtime type of the offending value.
        path:       Display path (names joined by ``/``) to the value.
        reason:     Human-readable explanation.
    """

    def __init__(self, value_type: type, path: str, reason: str) -> None:
        self.value_type = value_type
        self.path = path
        self.reason = reason
        super().__init__(
            f"cannot introspect {_name(value_type)} at '{path}': {reason}"
        )


class CoercionError(ObjectTreeError, ValueError):
    """Edited text could not be converted to the write target's declared type.

    Attributes:
        raw:         The rejected input, exactly as supplied.
        target_type: The declared type conversion was attempted against.
        reason:      Why the conversion failed.
    """

    def __init__(self, raw: Any, target_type: Any, reason: str) -> None:
        self.raw = raw
        self.target_type = target_type
        self.reason = reason
        super().__init__(
            f"cannot convert {raw!r} to {_name(target_type)}: {reason}"
        )
