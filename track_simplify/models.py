"""Dataclasses describing simplifier configuration and projected points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import config
from .errors import InvalidUnitError


@dataclass(frozen=True, slots=True)
class ProjectedPoint:
    """A track sample in locally flat linear coordinates.

    ``x`` runs along the latitude axis and ``y`` along the longitude axis,
    both measured from the geographic origin. ``source_index`` is the
    position of the sample in the caller's original track.
    """

    x: float
    y: float
    source_index: int


@dataclass(frozen=True, slots=True)
class SimplifierConfig:
    """Immutable settings for :class:`~track_simplify.simplifier.TrackSimplifier`."""

    latitude_path: str = config.DEFAULT_LATITUDE_PATH
    longitude_path: str = config.DEFAULT_LONGITUDE_PATH
    epsilon: float = config.DEFAULT_EPSILON
    epsilon_unit: str = config.DEFAULT_EPSILON_UNIT
    timestamp_path: Optional[str] = None
    gap_threshold_seconds: float = config.DEFAULT_GAP_THRESHOLD_SECONDS

    def __post_init__(self) -> None:
        if self.epsilon_unit not in config.EARTH_RADIUS_BY_UNIT:
            raise InvalidUnitError(self.epsilon_unit)
        if not self.latitude_path or not self.longitude_path:
            raise ValueError("latitude_path and longitude_path must be non-empty")
        if self.epsilon < 0:
            raise ValueError("epsilon must be non-negative")
        threshold = self.gap_threshold_seconds or 0.0
        if threshold < 0:
            raise ValueError("gap_threshold_seconds must be non-negative")
        if threshold > 0 and not self.timestamp_path:
            raise ValueError(
                "timestamp_path is required when gap_threshold_seconds is set"
            )
        object.__setattr__(self, "gap_threshold_seconds", float(threshold))

    @property
    def earth_radius(self) -> float:
        """Earth radius expressed in the epsilon unit."""

        return config.EARTH_RADIUS_BY_UNIT[self.epsilon_unit]

    @property
    def temporal_filter_enabled(self) -> bool:
        return bool(self.timestamp_path) and self.gap_threshold_seconds > 0

    @classmethod
    def from_env(cls) -> "SimplifierConfig":
        """Build a config from ``TRACK_SIMPLIFY_*`` environment variables."""

        return cls(**config.simplifier_settings_from_env())
