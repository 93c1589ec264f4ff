"""CommitResult dataclass returned by commit().

Failures are not results: a rejected edit raises ``CoercionError``. A result
is either APPLIED (the graph and node were updated) or DECLINED (the node has
no write target, nothing was touched).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["CommitResult", "CommitStatus"]


class CommitStatus(StrEnum):
    APPLIED = auto()
    DECLINED = auto()


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Outcome of a commit() call.

    Attributes:
        status:   APPLIED or DECLINED.
        node_id:  ``id`` of the node the edit was aimed at.
        value:    The node's display value after the call.
        previous: The node's display value before the call.
        target:   Human-readable address of the write target, e.g.
                  ``NetworkSettings.port``; None when declined.
    """

    status: CommitStatus
    node_id: int
    value: str | None
    previous: str | None
    target: str | None = None

    @property
    def applied(self) -> bool:
        return self.status is CommitStatus.APPLIED
