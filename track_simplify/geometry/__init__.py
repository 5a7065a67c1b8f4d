"""Projection, distance and polyline simplification primitives."""

from .distance import perpendicular_distance
from .projection import (
    GeoProjector,
    earth_radius_for_unit,
    haversine_distance,
    project_points,
)
from .rdp import simplify, simplify_indices

__all__ = [
    "GeoProjector",
    "earth_radius_for_unit",
    "haversine_distance",
    "perpendicular_distance",
    "project_points",
    "simplify",
    "simplify_indices",
]
