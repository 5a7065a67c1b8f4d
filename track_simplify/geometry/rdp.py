"""Ramer–Douglas–Peucker polyline simplification over projected points."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..models import ProjectedPoint
from .distance import perpendicular_distance_xy


def find_split(
    points: Sequence[ProjectedPoint], start: int, end: int
) -> Tuple[int, float]:
    """Return the interior index farthest from the ``start``–``end`` chord.

    Ties keep the earliest index. Returns ``(start, 0.0)`` when the range has
    no interior point with a nonzero offset.
    """

    first = points[start]
    last = points[end]
    index = start
    dmax = 0.0
    for i in range(start + 1, end):
        current = points[i]
        d = perpendicular_distance_xy(
            current.x, current.y, first.x, first.y, last.x, last.y
        )
        if d > dmax:
            index = i
            dmax = d
    return index, dmax


def simplify_positions(points: Sequence[ProjectedPoint], epsilon: float) -> List[int]:
    """Return positions (into ``points``) that survive simplification.

    Ranges are processed from an explicit stack, so long nearly collinear
    tracks do not run into the interpreter recursion limit. The kept set is
    the same as splitting recursively and joining the halves on the pivot.
    """

    count = len(points)
    if count < 3:
        return list(range(count))

    keep = [False] * count
    keep[0] = keep[-1] = True
    stack = [(0, count - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        index, dmax = find_split(points, start, end)
        if index == start or dmax < epsilon:
            # Collapse the range to its endpoints.
            continue
        keep[index] = True
        stack.append((index, end))
        stack.append((start, index))
    return [i for i, kept in enumerate(keep) if kept]


def simplify(points: Sequence[ProjectedPoint], epsilon: float) -> List[ProjectedPoint]:
    """Simplify ``points`` keeping every vertex at least ``epsilon`` off its chord.

    The first and last points are always kept and relative order is
    preserved. Inputs of fewer than three points are returned unchanged.
    """

    return [points[i] for i in simplify_positions(points, epsilon)]


def simplify_indices(points: Sequence[ProjectedPoint], epsilon: float) -> List[int]:
    """Return the ``source_index`` of every surviving point, in order."""

    return [point.source_index for point in simplify(points, epsilon)]
