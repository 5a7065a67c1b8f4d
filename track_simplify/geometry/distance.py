"""Point-to-line distance in projected coordinates."""

from __future__ import annotations

import math

from ..models import ProjectedPoint


def perpendicular_distance(
    point: ProjectedPoint,
    line_start: ProjectedPoint,
    line_end: ProjectedPoint,
) -> float:
    """Return the distance from ``point`` to the infinite line through the others.

    All three points must share a linear unit. A segment whose endpoints have
    exactly equal ``x`` is treated as vertical to avoid dividing by zero.
    """

    return perpendicular_distance_xy(
        point.x, point.y, line_start.x, line_start.y, line_end.x, line_end.y
    )


def perpendicular_distance_xy(
    px: float,
    py: float,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
) -> float:
    if x2 == x1:
        return abs(px - x2)
    slope = (y2 - y1) / (x2 - x1)
    intercept = y1 - x1 * slope
    return abs(slope * px - py + intercept) / math.sqrt(slope * slope + 1)
