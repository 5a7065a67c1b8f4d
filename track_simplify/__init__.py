"""GPS track simplification (Ramer–Douglas–Peucker with temporal resampling)."""

from .errors import (
    FieldPathError,
    InvalidPathError,
    InvalidUnitError,
    InvalidValueError,
    MissingPathError,
    TrackSimplifyError,
)
from .field_path import resolve
from .models import ProjectedPoint, SimplifierConfig
from .resampling import resample
from .simplifier import TrackSimplifier, simplify_track

__all__ = [
    "TrackSimplifier",
    "SimplifierConfig",
    "ProjectedPoint",
    "simplify_track",
    "resolve",
    "resample",
    "TrackSimplifyError",
    "InvalidUnitError",
    "FieldPathError",
    "MissingPathError",
    "InvalidPathError",
    "InvalidValueError",
]
