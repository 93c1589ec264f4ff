"""Canonical display strings for leaf values.

Every string produced here is accepted back by ``coerce`` for the value's own
type, which is what makes commit(node, node.value) a no-op round trip.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum, Flag
from typing import Any

import numpy as np

__all__ = ["DEFAULT_NULL_DISPLAY", "EMPTY_FLAG_DISPLAY", "format_value"]

DEFAULT_NULL_DISPLAY = "<null>"
EMPTY_FLAG_DISPLAY = "0"


def format_value(value: Any, null_display: str = DEFAULT_NULL_DISPLAY) -> str:
    """Render a leaf value as its canonical display string.

    - ``None``            -> ``null_display``
    - ``Enum`` members    -> member name (``Level.DEBUG`` -> "DEBUG")
    - ``Flag`` values     -> member names joined by "|", "0" when empty
    - ``bool``            -> "True" / "False"
    - ``float``           -> ``repr`` (shortest round-tripping form)
    - date/time values    -> ISO 8601
    - ``bytes``           -> lowercase hex
    - numpy scalars / 0-d arrays -> the equivalent Python scalar's form
    - anything else       -> ``str(value)``
    """
    if value is None:
        return null_display
    if isinstance(value, Flag):
        return _flag_display(value)
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return format_value(value.item(), null_display)
    if isinstance(value, np.generic):
        return str(value)
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def _flag_display(value: Flag) -> str:
    if value.name:
        return value.name
    names = [member.name for member in type(value) if member in value]
    return "|".join(n for n in names if n) or EMPTY_FLAG_DISPLAY
