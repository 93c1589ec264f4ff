"""Type-directed conversion of edited text back to a field's declared type.

Rules are attempted in order against the declared type, after one level of
``Optional`` has been unwrapped:

1. Null passthrough: ``None`` (or blank text for non-text types) becomes
   ``None`` only if the declared type admits it.
2. Undeclared (``Any``): the type of the current value, or text when the
   current value is ``None``.
3. Enum members by name, case-insensitive. ``Flag`` values also accept
   ``A|B`` combinations and ``0`` for the empty flag.
4. Text passthrough (no trimming).
5. ``bool``: "true"/"false", case-insensitive.
6. Integers: ``int`` and every numpy integer width (range checked).
7. Floats: ``float`` and every numpy floating width.
8. ``Decimal``, ``Fraction``, ``complex``.
9. ``datetime`` / ``date`` / ``time`` from ISO 8601, ``timedelta`` from its
   ``str()`` form or plain seconds.
10. ``UUID``; ``bytes`` from hex; 0-d numpy arrays as a scalar of their dtype.
11. Anything else (URLs, paths, IP addresses, literals, unions, ...) through a
    pydantic ``TypeAdapter``.

Parsing is culture-invariant: Python's numeric and ISO parsers do not consult
the locale. Every failure surfaces as ``CoercionError``, including types
pydantic cannot build a validator for.
"""

from __future__ import annotations

import datetime as dt
import re
import uuid
from decimal import Decimal
from enum import Enum, Flag
from fractions import Fraction
from typing import Any

import numpy as np
from cachetools import LRUCache, cached
from pydantic import TypeAdapter
from pydantic.errors import PydanticUserError

from object_tree.errors import CoercionError
from object_tree.projection.formatting import EMPTY_FLAG_DISPLAY
from object_tree.projection.typenames import admits_none, type_name, unwrap_optional

__all__ = ["coerce", "parse_bool", "parse_timedelta"]

_TRUE = "true"
_FALSE = "false"

# Matches str(timedelta): "[-]D day[s], H:MM:SS[.ffffff]" with optional day part.
_TIMEDELTA = re.compile(
    r"^(?:(?P<days>-?\d+) days?, )?"
    r"(?P<hours>\d+):(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2}(?:\.\d+)?)$"
)


@cached(cache=LRUCache(maxsize=128))
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def parse_bool(text: str) -> bool:
    folded = text.strip().casefold()
    if folded == _TRUE:
        return True
    if folded == _FALSE:
        return False
    msg = "expected 'true' or 'false'"
    raise ValueError(msg)


def parse_timedelta(text: str) -> dt.timedelta:
    """Parse ``str(timedelta)`` output, or a plain number of seconds."""
    text = text.strip()
    match = _TIMEDELTA.match(text)
    if match:
        return dt.timedelta(
            days=int(match["days"] or 0),
            hours=int(match["hours"]),
            minutes=int(match["minutes"]),
            seconds=float(match["seconds"]),
        )
    try:
        return dt.timedelta(seconds=float(text))
    except ValueError:
        msg = "expected '[D day[s], ]H:MM:SS[.ffffff]' or a number of seconds"
        raise ValueError(msg) from None


def _parse_enum(target: type[Enum], text: str) -> Enum:
    stripped = text.strip()
    if stripped in target.__members__:
        return target.__members__[stripped]
    folded = stripped.casefold()
    for name, member in target.__members__.items():
        if name.casefold() == folded:
            return member
    names = ", ".join(target.__members__)
    msg = f"expected one of {names}"
    raise ValueError(msg)


def _parse_flag(target: type[Flag], text: str) -> Flag:
    stripped = text.strip()
    if stripped == EMPTY_FLAG_DISPLAY:
        return target(0)
    combined = target(0)
    for part in stripped.split("|"):
        combined |= _parse_enum(target, part)
    return combined


def _parse_numpy_int(target: type[np.integer[Any]], text: str) -> np.integer[Any]:
    number = int(text.strip())
    info = np.iinfo(target)
    if not info.min <= number <= info.max:
        msg = f"out of range [{info.min}, {info.max}]"
        raise ValueError(msg)
    return target(number)


def _convert(target: Any, text: str) -> Any:
    if isinstance(target, type):
        if issubclass(target, Flag):
            return _parse_flag(target, text)
        if issubclass(target, Enum):
            return _parse_enum(target, text)
        if issubclass(target, str):
            return target(text)
        if target is bool or target is np.bool_:
            return target(parse_bool(text))
        if issubclass(target, np.integer):
            return _parse_numpy_int(target, text)
        if issubclass(target, int):
            return target(int(text.strip()))
        if issubclass(target, np.floating):
            return target(float(text.strip()))
        if issubclass(target, float):
            return target(float(text.strip()))
        if issubclass(target, Decimal):
            return target(text.strip())
        if issubclass(target, Fraction):
            return target(text.strip())
        if issubclass(target, complex):
            return target(text.strip().replace(" ", ""))
        # datetime is a date subclass; test it first
        if issubclass(target, dt.datetime):
            return target.fromisoformat(text.strip())
        if issubclass(target, dt.date):
            return target.fromisoformat(text.strip())
        if issubclass(target, dt.time):
            return target.fromisoformat(text.strip())
        if issubclass(target, dt.timedelta):
            return parse_timedelta(text)
        if issubclass(target, uuid.UUID):
            return target(text.strip())
        if issubclass(target, (bytes, bytearray)):
            return target(bytes.fromhex(text.strip()))
    try:
        hash(target)
    except TypeError:
        adapter = TypeAdapter(target)
    else:
        adapter = _adapter(target)
    return adapter.validate_python(text.strip())


def _convert_array(current: np.ndarray[Any, Any], text: str) -> np.ndarray[Any, Any]:
    # 0-d arrays keep their dtype; the text is parsed as the dtype's scalar
    return np.asarray(_convert(current.dtype.type, text), dtype=current.dtype)


def coerce(raw: Any, declared_type: Any, current: Any = None) -> Any:
    """Convert ``raw`` edited input to ``declared_type``.

    Args:
        raw:           Edited input, normally text. Already-typed values that
                       are instances of the target type pass through unchanged.
        declared_type: Annotation of the write target; ``Any`` when undeclared.
        current:       The value currently stored, used to pick a target type
                       when ``declared_type`` is ``Any``.

    Returns:
        The converted value, ready to be written.

    Raises:
        CoercionError: If ``raw`` cannot be converted.
    """
    nullable = admits_none(declared_type)
    target = unwrap_optional(declared_type)

    if raw is None:
        if nullable:
            return None
        raise CoercionError(raw, target, "a value is required")

    if target is Any or target is object:
        target = str if current is None else type(current)

    if (
        isinstance(target, type)
        and not isinstance(raw, str)
        and isinstance(raw, target)
        and (target is bool or not isinstance(raw, bool))
    ):
        return raw

    text = raw if isinstance(raw, str) else str(raw)
    is_text = (
        isinstance(target, type)
        and issubclass(target, str)
        and not issubclass(target, Enum)
    )
    if not text.strip() and not is_text:
        if nullable:
            return None
        raise CoercionError(raw, target, "a value is required")

    try:
        if (
            isinstance(current, np.ndarray)
            and current.ndim == 0
            and isinstance(target, type)
            and issubclass(target, np.ndarray)
        ):
            return _convert_array(current, text)
        return _convert(target, text)
    except PydanticUserError as exc:
        reason = f"no conversion available for {type_name(target)}"
        raise CoercionError(raw, target, reason) from exc
    except (ValueError, TypeError, ArithmeticError) as exc:
        reason = str(exc) or type(exc).__name__
        raise CoercionError(raw, target, reason) from exc
