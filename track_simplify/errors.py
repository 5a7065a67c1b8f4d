"""Central error types raised by the track simplifier."""

from __future__ import annotations

from typing import Optional


class TrackSimplifyError(Exception):
    """Base class for every error the package raises on purpose."""

    kind = "TrackSimplifyError"


class InvalidUnitError(TrackSimplifyError, ValueError):
    """Raised at construction when the epsilon unit is not km, mi or m."""

    kind = "InvalidUnit"

    def __init__(self, unit: object) -> None:
        super().__init__(
            f"Incorrect epsilon unit {unit!r}; expected 'km', 'mi' or 'm'"
        )
        self.unit = unit


class FieldPathError(TrackSimplifyError, LookupError):
    """Raised when a configured field path does not navigate a point record."""

    def __init__(
        self, message: str, *, path: str, segment: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.segment = segment


class MissingPathError(FieldPathError):
    """Raised when an intermediate path segment is absent or not a container."""

    kind = "MissingPath"


class InvalidPathError(FieldPathError):
    """Raised when the terminal path segment is absent from the record."""

    kind = "InvalidPath"


class InvalidValueError(TrackSimplifyError, ValueError):
    """Raised when a resolved leaf cannot be read as a number or timestamp."""

    kind = "InvalidValue"

    def __init__(self, message: str, *, path: str, value: object = None) -> None:
        super().__init__(message)
        self.path = path
        self.value = value


__all__ = [
    "TrackSimplifyError",
    "InvalidUnitError",
    "FieldPathError",
    "MissingPathError",
    "InvalidPathError",
    "InvalidValueError",
]
