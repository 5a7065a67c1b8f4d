"""Bound the time gap between consecutive points of a simplified track."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence

LOGGER = logging.getLogger(__name__)

TimestampGetter = Callable[[Any], float]


class _TimestampLookup:
    """Resolve each original timestamp at most once during a single pass."""

    __slots__ = ("_points", "_getter", "_cache")

    def __init__(self, points: Sequence[Any], getter: TimestampGetter) -> None:
        self._points = points
        self._getter = getter
        self._cache: Dict[int, float] = {}

    def __call__(self, index: int) -> float:
        try:
            return self._cache[index]
        except KeyError:
            value = self._getter(self._points[index])
            self._cache[index] = value
            return value


def resample_indices(
    original: Sequence[Any],
    simplified_indices: Sequence[int],
    threshold: float,
    timestamp_of: TimestampGetter,
) -> List[int]:
    """Return original indices to emit so time gaps stay within ``threshold``.

    ``original[0]`` is always emitted first. For every following kept index,
    original samples are inserted wherever the next kept point lies more than
    ``threshold`` seconds after the last emitted one. The inserted sample is
    the last original point still inside the threshold window. Where the
    original track itself has a gap wider than ``threshold``, the first
    sample after that gap is inserted instead and filling carries on from
    there, so only the unavoidable original gaps exceed ``threshold``. A kept
    point whose timestamp equals the last emitted timestamp is skipped.

    A ``threshold`` of zero returns ``simplified_indices`` unchanged.
    """

    if threshold <= 0:
        return list(simplified_indices)
    if not original or not simplified_indices:
        return []

    ts = _TimestampLookup(original, timestamp_of)
    emitted = [0]
    last_index = 0
    last_ts = ts(0)
    inserted = 0

    for k in simplified_indices:
        if k <= last_index:
            continue
        target_ts = ts(k)
        while target_ts > last_ts + threshold:
            limit = last_ts + threshold
            candidate = None
            for i in range(last_index + 1, k):
                if ts(i) <= limit < ts(i + 1):
                    candidate = i
                    break
            if candidate is None:
                # Original gap wider than the window: step over it.
                if last_index + 1 >= k:
                    break
                candidate = last_index + 1
            emitted.append(candidate)
            last_index = candidate
            last_ts = ts(candidate)
            inserted += 1
        if target_ts == last_ts:
            continue
        emitted.append(k)
        last_index = k
        last_ts = target_ts

    LOGGER.debug(
        "Temporal resampling kept %d points (%d inserted, threshold=%ss)",
        len(emitted),
        inserted,
        threshold,
    )
    return emitted


def resample(
    original: Sequence[Any],
    simplified_indices: Sequence[int],
    threshold: float,
    timestamp_of: TimestampGetter,
) -> List[Any]:
    """Return the original records selected by :func:`resample_indices`."""

    return [
        original[i]
        for i in resample_indices(original, simplified_indices, threshold, timestamp_of)
    ]


__all__ = ["resample", "resample_indices", "TimestampGetter"]
