"""Project geographic coordinates into a locally flat linear system.

Each axis is measured independently as a great-circle distance from the
geographic origin: ``x`` is the haversine distance from (0, 0) to (lat, 0)
and ``y`` the distance from (0, 0) to (0, lon). The result is only
approximately orthogonal, which is adequate for comparing perpendicular
offsets along short tracks while keeping the per-point cost to a handful of
trig calls.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import EARTH_RADIUS_BY_UNIT
from ..errors import InvalidUnitError

MetricArray = NDArray[np.float64]


def earth_radius_for_unit(unit: str) -> float:
    """Return the earth radius expressed in ``unit`` (km, mi or m)."""

    try:
        return EARTH_RADIUS_BY_UNIT[unit]
    except (KeyError, TypeError) as exc:
        raise InvalidUnitError(unit) from exc


def haversine_distance(
    lat_from: float,
    lon_from: float,
    lat_to: float,
    lon_to: float,
    radius: float,
) -> float:
    """Great-circle distance between two points given in decimal degrees."""

    lat_from_r = math.radians(lat_from)
    lon_from_r = math.radians(lon_from)
    lat_to_r = math.radians(lat_to)
    lon_to_r = math.radians(lon_to)

    lat_delta = lat_to_r - lat_from_r
    lon_delta = lon_to_r - lon_from_r

    angle = 2 * math.asin(
        math.sqrt(
            math.sin(lat_delta / 2) ** 2
            + math.cos(lat_from_r) * math.cos(lat_to_r) * math.sin(lon_delta / 2) ** 2
        )
    )
    return angle * radius


class GeoProjector:
    """Convert (lat, lon) degrees to linear distances from the origin."""

    __slots__ = ("radius",)

    def __init__(self, unit: str = "km") -> None:
        self.radius = earth_radius_for_unit(unit)

    def project(self, lat: float, lon: float) -> Tuple[float, float]:
        x = haversine_distance(0.0, 0.0, lat, 0.0, self.radius)
        y = haversine_distance(0.0, 0.0, 0.0, lon, self.radius)
        return x, y

    def project_many(self, coords: Iterable[Sequence[float]]) -> MetricArray:
        return project_points(coords, self.radius)


def project_points(coords: Iterable[Sequence[float]], radius: float) -> MetricArray:
    """Vectorised :meth:`GeoProjector.project` over ``(lat, lon)`` pairs.

    Returns an ``(n, 2)`` float64 array of ``(x, y)`` rows.
    """

    array = np.asarray(list(coords), dtype=float)
    if array.size == 0:
        return np.empty((0, 2), dtype=float)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError("Expected a sequence of (lat, lon) pairs")
    lat = np.radians(array[:, 0])
    lon = np.radians(array[:, 1])
    # Haversine from the origin with one coordinate held at zero; cos(0) == 1.
    x = 2 * np.arcsin(np.sqrt(np.sin(lat / 2) ** 2)) * radius
    y = 2 * np.arcsin(np.sqrt(np.sin(lon / 2) ** 2)) * radius
    return np.column_stack((x, y))
