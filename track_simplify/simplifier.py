"""High level entry point tying field resolution, projection and RDP together."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from .field_path import resolve_float, resolve_timestamp
from .geometry.projection import project_points
from .geometry.rdp import simplify_indices as rdp_simplify_indices
from .models import ProjectedPoint, SimplifierConfig
from .resampling import resample_indices

LOGGER = logging.getLogger(__name__)

PositionTimestamp = Callable[[int], float]


def project_coordinates(
    coords: Sequence[Sequence[float]], earth_radius: float
) -> List[ProjectedPoint]:
    """Project ``(lat, lon)`` pairs and tag each with its position."""

    metric = project_points(coords, earth_radius)
    return [
        ProjectedPoint(float(x), float(y), index)
        for index, (x, y) in enumerate(metric)
    ]


def select_indices(
    coords: Sequence[Sequence[float]],
    cfg: SimplifierConfig,
    timestamp_at: Optional[PositionTimestamp] = None,
) -> List[int]:
    """Return the positions of ``coords`` that survive simplification.

    ``coords`` holds one ``(lat, lon)`` pair per track sample. When the
    temporal filter is enabled, ``timestamp_at(position)`` supplies the
    timestamp of the sample at that position.
    """

    count = len(coords)
    if count == 0:
        return []

    projected = project_coordinates(coords, cfg.earth_radius)
    indices = rdp_simplify_indices(projected, cfg.epsilon)
    LOGGER.debug(
        "RDP reduced track from %d to %d points (epsilon=%s %s)",
        count,
        len(indices),
        cfg.epsilon,
        cfg.epsilon_unit,
    )

    if cfg.temporal_filter_enabled and timestamp_at is not None:
        indices = resample_indices(
            range(count), indices, cfg.gap_threshold_seconds, timestamp_at
        )
    return indices


class TrackSimplifier:
    """Reduce a GPS track to the points needed to keep its shape.

    The simplifier holds an immutable :class:`SimplifierConfig` and no other
    state, so one instance can be shared freely between callers. Options
    passed as keywords override the matching fields of ``config``.
    """

    __slots__ = ("config",)

    def __init__(
        self,
        config: Optional[SimplifierConfig] = None,
        *,
        latitude_path: Optional[str] = None,
        longitude_path: Optional[str] = None,
        epsilon: Optional[float] = None,
        epsilon_unit: Optional[str] = None,
        timestamp_path: Optional[str] = None,
        gap_threshold_seconds: Optional[float] = None,
    ) -> None:
        overrides = {
            "latitude_path": latitude_path,
            "longitude_path": longitude_path,
            "epsilon": epsilon,
            "epsilon_unit": epsilon_unit,
            "timestamp_path": timestamp_path,
            "gap_threshold_seconds": gap_threshold_seconds,
        }
        options = {key: value for key, value in overrides.items() if value is not None}
        if config is None:
            config = SimplifierConfig(**options)
        elif options:
            base = {
                "latitude_path": config.latitude_path,
                "longitude_path": config.longitude_path,
                "epsilon": config.epsilon,
                "epsilon_unit": config.epsilon_unit,
                "timestamp_path": config.timestamp_path,
                "gap_threshold_seconds": config.gap_threshold_seconds,
            }
            base.update(options)
            config = SimplifierConfig(**base)
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    def _coordinates(self, points: Sequence[Any]) -> List[tuple[float, float]]:
        cfg = self.config
        return [
            (
                resolve_float(point, cfg.latitude_path),
                resolve_float(point, cfg.longitude_path),
            )
            for point in points
        ]

    def project(self, points: Sequence[Any]) -> List[ProjectedPoint]:
        """Project every record into linear coordinates tagged with its index."""

        return project_coordinates(self._coordinates(points), self.config.earth_radius)

    def simplify_indices(self, points: Sequence[Any]) -> List[int]:
        """Return the original indices of the points to keep, in order."""

        points = points if isinstance(points, Sequence) else list(points)
        timestamp_path = self.config.timestamp_path or ""
        return select_indices(
            self._coordinates(points),
            self.config,
            lambda position: resolve_timestamp(points[position], timestamp_path),
        )

    def simplify(self, points: Sequence[Any]) -> List[Any]:
        """Return the subsequence of ``points`` that survives simplification.

        The returned list holds the caller's own record objects. The first and
        last records of a non-empty track are always present, subject to the
        temporal filter dropping a final record that repeats the previous
        timestamp exactly.

        Raises:
            MissingPathError: A configured path has a missing nesting level.
            InvalidPathError: A configured path's final key is absent.
            InvalidValueError: A coordinate or timestamp is not readable.
        """

        points = points if isinstance(points, Sequence) else list(points)
        return [points[i] for i in self.simplify_indices(points)]


def simplify_track(points: Sequence[Any], **options: Any) -> List[Any]:
    """One-shot helper: ``TrackSimplifier(**options).simplify(points)``."""

    return TrackSimplifier(**options).simplify(points)


__all__ = [
    "TrackSimplifier",
    "project_coordinates",
    "select_indices",
    "simplify_track",
]
