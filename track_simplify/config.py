"""Central configuration for the track simplifier.

Values here are defaults consumed by the command line tool and by
``SimplifierConfig.from_env``. Each one can be overridden through an
environment variable (optionally via a local `.env`). The library API itself
never reads the environment implicitly.
"""

from __future__ import annotations

import importlib
import os
from typing import Any, Dict, Optional


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_optional_str(key: str) -> Optional[str]:
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    return value.strip()


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Earth model
# ---------------------------------------------------------------------------
# Mean earth radius per supported epsilon unit.
EARTH_RADIUS_BY_UNIT = {
    "km": 6371.0,
    "mi": 3959.0,
    "m": 6371000.0,
}


# ---------------------------------------------------------------------------
# Library defaults
# ---------------------------------------------------------------------------
DEFAULT_LATITUDE_PATH = "lat"
DEFAULT_LONGITUDE_PATH = "lon"

# Maximum perpendicular deviation kept by the simplifier, in EPSILON_UNIT.
DEFAULT_EPSILON = 0.001
DEFAULT_EPSILON_UNIT = "km"

# Seconds allowed between consecutive output points. 0 disables gap filling.
DEFAULT_GAP_THRESHOLD_SECONDS = 0.0


# ---------------------------------------------------------------------------
# Environment overrides (CLI and SimplifierConfig.from_env)
# ---------------------------------------------------------------------------
def simplifier_settings_from_env() -> Dict[str, Any]:
    """Read the ``TRACK_SIMPLIFY_*`` variables into ``SimplifierConfig`` fields.

    Unset, blank or malformed values fall back to the library defaults.
    Temporal filtering needs both a timestamp path and a positive threshold.
    """

    return {
        "latitude_path": _env_str("TRACK_SIMPLIFY_LAT_PATH", DEFAULT_LATITUDE_PATH),
        "longitude_path": _env_str(
            "TRACK_SIMPLIFY_LON_PATH", DEFAULT_LONGITUDE_PATH
        ),
        "epsilon": _env_float("TRACK_SIMPLIFY_EPSILON", DEFAULT_EPSILON),
        "epsilon_unit": _env_str("TRACK_SIMPLIFY_EPSILON_UNIT", DEFAULT_EPSILON_UNIT),
        "timestamp_path": _env_optional_str("TRACK_SIMPLIFY_TIME_PATH"),
        "gap_threshold_seconds": _env_float(
            "TRACK_SIMPLIFY_MAX_GAP_SECONDS", DEFAULT_GAP_THRESHOLD_SECONDS
        ),
    }


# Snapshot taken at import time for the command line defaults.
_ENV_SETTINGS = simplifier_settings_from_env()
TRACK_SIMPLIFY_LAT_PATH: str = _ENV_SETTINGS["latitude_path"]
TRACK_SIMPLIFY_LON_PATH: str = _ENV_SETTINGS["longitude_path"]
TRACK_SIMPLIFY_EPSILON: float = _ENV_SETTINGS["epsilon"]
TRACK_SIMPLIFY_EPSILON_UNIT: str = _ENV_SETTINGS["epsilon_unit"]
TRACK_SIMPLIFY_TIME_PATH: Optional[str] = _ENV_SETTINGS["timestamp_path"]
TRACK_SIMPLIFY_MAX_GAP_SECONDS: float = _ENV_SETTINGS["gap_threshold_seconds"]
