"""End-to-end tests for the TrackSimplifier facade."""

from __future__ import annotations

import copy
import logging

import pytest

from track_simplify import (
    InvalidPathError,
    InvalidUnitError,
    InvalidValueError,
    MissingPathError,
    SimplifierConfig,
    TrackSimplifier,
    simplify_track,
)

from conftest import make_random_walk, make_straight_timed_track


@pytest.mark.parametrize(
    "epsilon, expected",
    [(None, 5), (0.001, 5), (0.01, 5), (0.1, 4), (1, 2)],
)
def test_reference_track_lengths(reference_track, epsilon, expected) -> None:
    options = {"latitude_path": "point.lat", "longitude_path": "point.lon"}
    if epsilon is not None:
        options["epsilon"] = epsilon
    simplifier = TrackSimplifier(**options)
    assert len(simplifier.simplify(reference_track)) == expected


def test_reference_track_keeps_expected_ids(reference_track) -> None:
    simplifier = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=0.1
    )
    assert [p["id"] for p in simplifier.simplify(reference_track)] == [1, 2, 3, 5]


def test_output_holds_caller_objects_untouched(reference_track) -> None:
    snapshot = copy.deepcopy(reference_track)
    simplifier = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=1
    )
    result = simplifier.simplify(reference_track)
    assert result[0] is reference_track[0]
    assert result[-1] is reference_track[-1]
    assert reference_track == snapshot


def test_metres_unit_matches_kilometres(reference_track) -> None:
    km = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=0.1
    )
    m = TrackSimplifier(
        latitude_path="point.lat",
        longitude_path="point.lon",
        epsilon=100,
        epsilon_unit="m",
    )
    assert km.simplify_indices(reference_track) == m.simplify_indices(reference_track)


def test_miles_unit_is_accepted(reference_track) -> None:
    simplifier = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=1, epsilon_unit="mi"
    )
    assert simplifier.simplify_indices(reference_track) == [0, 4]


@pytest.mark.parametrize("count", [0, 1, 2])
def test_degenerate_tracks(count: int) -> None:
    track = [{"lat": 1.0 + i, "lon": 2.0} for i in range(count)]
    assert TrackSimplifier().simplify(track) == track


def test_accepts_any_iterable(reference_track) -> None:
    simplifier = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=1
    )
    result = simplifier.simplify(iter(reference_track))
    assert [p["id"] for p in result] == [1, 5]


def test_endpoints_and_order_on_random_track() -> None:
    track = make_random_walk()
    indices = TrackSimplifier(epsilon=0.02).simplify_indices(track)
    assert indices[0] == 0
    assert indices[-1] == len(track) - 1
    assert all(a < b for a, b in zip(indices, indices[1:]))


@pytest.mark.parametrize("epsilon", [0.0, 0.005, 0.02, 0.1])
def test_simplifying_twice_changes_nothing(epsilon: float) -> None:
    simplifier = TrackSimplifier(epsilon=epsilon)
    once = simplifier.simplify(make_random_walk())
    twice = simplifier.simplify(once)
    assert [p["seq"] for p in twice] == [p["seq"] for p in once]


def test_larger_epsilon_never_keeps_more_points() -> None:
    track = make_random_walk()
    sizes = [
        len(TrackSimplifier(epsilon=eps).simplify(track))
        for eps in (0.0, 0.001, 0.005, 0.01, 0.05, 0.2, 1.0, 50.0)
    ]
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[-1] == 2


def test_missing_container_aborts_call(reference_track) -> None:
    reference_track[2] = {"id": 3}
    simplifier = TrackSimplifier(latitude_path="point.lat", longitude_path="point.lon")
    with pytest.raises(MissingPathError):
        simplifier.simplify(reference_track)


def test_missing_latitude_key_aborts_call(reference_track) -> None:
    del reference_track[3]["point"]["lat"]
    simplifier = TrackSimplifier(latitude_path="point.lat", longitude_path="point.lon")
    with pytest.raises(InvalidPathError):
        simplifier.simplify(reference_track)


def test_non_numeric_coordinate_raises(reference_track) -> None:
    reference_track[1]["point"]["lon"] = "east"
    simplifier = TrackSimplifier(latitude_path="point.lat", longitude_path="point.lon")
    with pytest.raises(InvalidValueError):
        simplifier.simplify(reference_track)


def test_unknown_unit_fails_construction() -> None:
    with pytest.raises(InvalidUnitError):
        TrackSimplifier(epsilon_unit="furlongs")


def test_temporal_filter_inserts_points(straight_timed_track) -> None:
    plain = TrackSimplifier()
    assert [p["seq"] for p in plain.simplify(straight_timed_track)] == [0, 9]

    timed = TrackSimplifier(timestamp_path="time", gap_threshold_seconds=25)
    result = timed.simplify(straight_timed_track)
    assert [p["seq"] for p in result] == [0, 2, 4, 6, 8, 9]


def test_temporal_filter_reads_iso_timestamps() -> None:
    track = make_straight_timed_track(iso=True)
    timed = TrackSimplifier(timestamp_path="time", gap_threshold_seconds=25)
    assert [p["seq"] for p in timed.simplify(track)] == [0, 2, 4, 6, 8, 9]


def test_zero_gap_threshold_disables_temporal_filter(straight_timed_track) -> None:
    simplifier = TrackSimplifier(timestamp_path="time", gap_threshold_seconds=0)
    assert simplifier.config.temporal_filter_enabled is False
    assert [p["seq"] for p in simplifier.simplify(straight_timed_track)] == [0, 9]


def test_temporal_filter_gap_bound_on_random_track() -> None:
    track = make_random_walk()
    threshold = 20.0
    result = TrackSimplifier(
        epsilon=0.05, timestamp_path="t", gap_threshold_seconds=threshold
    ).simplify(track)
    assert result[0] is track[0]
    assert result[-1] is track[-1]
    for a, b in zip(result, result[1:]):
        assert b["t"] - a["t"] <= threshold + 1e-9


def test_missing_timestamp_aborts_call(straight_timed_track) -> None:
    del straight_timed_track[5]["time"]
    simplifier = TrackSimplifier(timestamp_path="time", gap_threshold_seconds=15)
    with pytest.raises(InvalidPathError):
        simplifier.simplify(straight_timed_track)


def test_keyword_overrides_on_top_of_config() -> None:
    base = SimplifierConfig(latitude_path="point.lat", longitude_path="point.lon")
    simplifier = TrackSimplifier(base, epsilon=1)
    assert simplifier.config.latitude_path == "point.lat"
    assert simplifier.config.epsilon == 1
    assert base.epsilon == 0.001


def test_simplify_track_helper(reference_track) -> None:
    result = simplify_track(
        reference_track, latitude_path="point.lat", longitude_path="point.lon", epsilon=1
    )
    assert [p["id"] for p in result] == [1, 5]


def test_debug_logging_reports_reduction(reference_track, caplog) -> None:
    simplifier = TrackSimplifier(
        latitude_path="point.lat", longitude_path="point.lon", epsilon=1
    )
    with caplog.at_level(logging.DEBUG, logger="track_simplify"):
        simplifier.simplify(reference_track)
    assert "from 5 to 2 points" in caplog.text
