"""Resolve dot-separated field paths inside nested point records.

Point records are schema-free: any ``Mapping`` works, and list/tuple levels
can be addressed with integer segments (``"coords.0"``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
import math
import numbers
from typing import Any, List

import pandas as pd

from .errors import InvalidPathError, InvalidValueError, MissingPathError


def split_path(path: str) -> List[str]:
    return path.split(".")


def _is_container(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _lookup(container: Any, segment: str) -> tuple[bool, Any]:
    """Return ``(found, value)`` for ``segment`` in a mapping or sequence."""

    if isinstance(container, Mapping):
        if segment in container:
            return True, container[segment]
        return False, None
    if not segment.lstrip("-").isdigit():
        return False, None
    position = int(segment)
    if -len(container) <= position < len(container):
        return True, container[position]
    return False, None


def resolve(record: Any, path: str) -> Any:
    """Return the value stored at ``path`` inside ``record``.

    Raises:
        MissingPathError: An intermediate segment is absent or does not hold
            a nested container.
        InvalidPathError: The final segment is absent from the innermost
            container.
    """

    segments = split_path(path)
    current = record
    for segment in segments[:-1]:
        found, value = (
            _lookup(current, segment) if _is_container(current) else (False, None)
        )
        if not found or not _is_container(value):
            raise MissingPathError(
                f"No {path!r} path in geopoint (missing container at {segment!r})",
                path=path,
                segment=segment,
            )
        current = value

    leaf = segments[-1]
    found, value = _lookup(current, leaf) if _is_container(current) else (False, None)
    if not found:
        raise InvalidPathError(
            f"Incorrect {path!r} path in geopoint (missing key {leaf!r})",
            path=path,
            segment=leaf,
        )
    return value


def resolve_float(record: Any, path: str) -> float:
    """Resolve ``path`` and coerce the leaf to ``float``."""

    value = resolve(record, path)
    if isinstance(value, bool):
        raise InvalidValueError(
            f"Value at {path!r} is not numeric: {value!r}", path=path, value=value
        )
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(
            f"Value at {path!r} is not numeric: {value!r}", path=path, value=value
        ) from exc


def parse_iso8601(value: str) -> datetime:
    """Parse ISO timestamps and normalise a trailing Z."""

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def to_epoch_seconds(value: Any) -> float:
    """Convert a timestamp leaf into seconds since the epoch.

    Numbers are taken as epoch seconds already. Naive datetimes and ISO
    strings without an offset are read as UTC.
    """

    if isinstance(value, bool):
        raise TypeError("booleans are not timestamps")
    if value is pd.NaT:
        raise ValueError("timestamp is NaT")
    if isinstance(value, numbers.Real):
        seconds = float(value)
        if math.isnan(seconds):
            raise ValueError("timestamp is NaN")
        return seconds
    if isinstance(value, pd.Timestamp):
        if value.tzinfo is None:
            value = value.tz_localize("UTC")
        return value.timestamp()
    if isinstance(value, str):
        value = parse_iso8601(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        return midnight.timestamp()
    raise TypeError(f"unsupported timestamp type {type(value).__name__}")


def resolve_timestamp(record: Any, path: str) -> float:
    """Resolve ``path`` and return the leaf as epoch seconds."""

    value = resolve(record, path)
    try:
        return to_epoch_seconds(value)
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(
            f"Value at {path!r} is not a timestamp: {value!r}", path=path, value=value
        ) from exc


__all__ = [
    "resolve",
    "resolve_float",
    "resolve_timestamp",
    "parse_iso8601",
    "to_epoch_seconds",
    "split_path",
]
