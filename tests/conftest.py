"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable track fixtures so the
simplifier, resampler and tool tests share the same sample data.
"""
from __future__ import annotations

import os
import random
import sys
from datetime import datetime, timedelta, timezone

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


# --- Factory helpers -------------------------------------------------
def make_reference_track():
    return [
        {"point": {"lat": 59.936395, "lon": 30.317944}, "id": 1},
        {"point": {"lat": 59.937471, "lon": 30.322987}, "id": 2},
        {"point": {"lat": 59.934480, "lon": 30.333330}, "id": 3},
        {"point": {"lat": 59.933037, "lon": 30.347964}, "id": 4},
        {"point": {"lat": 59.930941, "lon": 30.361854}, "id": 5},
    ]


def make_straight_timed_track(count=10, step_s=10, iso=False):
    """Points due north along one meridian, ``step_s`` seconds apart."""

    start = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)
    track = []
    for i in range(count):
        moment = start + timedelta(seconds=i * step_s)
        stamp = moment.isoformat().replace("+00:00", "Z") if iso else moment.timestamp()
        track.append({"lat": 51.0 + i * 0.001, "lon": -3.0, "time": stamp, "seq": i})
    return track


def make_random_walk(count=400, seed=7):
    rng = random.Random(seed)
    lat, lon, t = 59.93, 30.31, 0.0
    track = []
    for i in range(count):
        lat += rng.uniform(-0.0004, 0.0006)
        lon += rng.uniform(-0.0003, 0.0008)
        t += rng.uniform(1.0, 5.0)
        track.append({"lat": lat, "lon": lon, "t": t, "seq": i})
    return track


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def reference_track():
    return make_reference_track()


@pytest.fixture
def straight_timed_track():
    return make_straight_timed_track()


@pytest.fixture
def random_walk():
    return make_random_walk()
