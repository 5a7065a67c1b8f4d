"""Simplify tracks held in a :class:`pandas.DataFrame`."""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from . import config
from .errors import InvalidPathError, InvalidValueError
from .field_path import to_epoch_seconds
from .models import SimplifierConfig
from .simplifier import select_indices

LOGGER = logging.getLogger(__name__)


def _require_column(df: pd.DataFrame, column: str) -> None:
    if column not in df.columns:
        raise InvalidPathError(
            f"Incorrect {column!r} column in track frame", path=column, segment=column
        )


def simplify_frame(
    df: pd.DataFrame,
    *,
    latitude_column: str = config.DEFAULT_LATITUDE_PATH,
    longitude_column: str = config.DEFAULT_LONGITUDE_PATH,
    timestamp_column: Optional[str] = None,
    epsilon: float = config.DEFAULT_EPSILON,
    epsilon_unit: str = config.DEFAULT_EPSILON_UNIT,
    gap_threshold_seconds: float = config.DEFAULT_GAP_THRESHOLD_SECONDS,
) -> pd.DataFrame:
    """Return the rows of ``df`` that survive simplification.

    Each row is one track sample. Rows keep their original index labels and
    column values; the result is ``df.iloc`` of the kept positions.

    Args:
        df: Track samples in order.
        latitude_column: Column holding latitude in degrees.
        longitude_column: Column holding longitude in degrees.
        timestamp_column: Column holding timestamps (epoch seconds, datetimes
            or ISO strings). Required when ``gap_threshold_seconds`` > 0.
        epsilon: Tolerance in ``epsilon_unit``.
        epsilon_unit: ``"km"``, ``"mi"`` or ``"m"``.
        gap_threshold_seconds: Maximum time gap between output rows, 0 to
            disable temporal resampling.

    Raises:
        InvalidUnitError: ``epsilon_unit`` is not supported.
        InvalidPathError: A configured column is missing.
        InvalidValueError: A coordinate or timestamp cannot be read.
    """

    cfg = SimplifierConfig(
        latitude_path=latitude_column,
        longitude_path=longitude_column,
        epsilon=epsilon,
        epsilon_unit=epsilon_unit,
        timestamp_path=timestamp_column,
        gap_threshold_seconds=gap_threshold_seconds,
    )
    if df.empty:
        return df.iloc[0:0]

    _require_column(df, latitude_column)
    _require_column(df, longitude_column)
    try:
        coords = df[[latitude_column, longitude_column]].to_numpy(dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidValueError(
            "Track frame coordinates are not numeric",
            path=f"{latitude_column},{longitude_column}",
        ) from exc

    timestamp_at = None
    if cfg.temporal_filter_enabled and timestamp_column is not None:
        _require_column(df, timestamp_column)
        times = df[timestamp_column]

        def _timestamp_of(position: int) -> float:
            value = times.iloc[position]
            try:
                return to_epoch_seconds(value)
            except (TypeError, ValueError) as exc:
                raise InvalidValueError(
                    f"Value in {timestamp_column!r} is not a timestamp: {value!r}",
                    path=timestamp_column,
                    value=value,
                ) from exc

        timestamp_at = _timestamp_of

    indices = select_indices(coords, cfg, timestamp_at)

    LOGGER.debug("Simplified track frame from %d to %d rows", len(df), len(indices))
    return df.iloc[indices]


__all__ = ["simplify_frame"]
