"""Unit tests for the Ramer–Douglas–Peucker core over projected points."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import pytest

from track_simplify.geometry.rdp import (
    find_split,
    simplify,
    simplify_indices,
    simplify_positions,
)
from track_simplify.models import ProjectedPoint


def _points(coords: Sequence[Tuple[float, float]]) -> List[ProjectedPoint]:
    return [ProjectedPoint(x, y, i) for i, (x, y) in enumerate(coords)]


def _recursive_reference(points: List[ProjectedPoint], epsilon: float) -> List[ProjectedPoint]:
    """Straightforward recursive formulation used to cross-check the stack version."""

    if len(points) < 3:
        return list(points)
    index, dmax = find_split(points, 0, len(points) - 1)
    if index == 0 or dmax < epsilon:
        return [points[0], points[-1]]
    left = _recursive_reference(points[: index + 1], epsilon)
    right = _recursive_reference(points[index:], epsilon)
    return left[:-1] + right


@pytest.mark.parametrize("count", [0, 1, 2])
def test_short_inputs_returned_unchanged(count: int) -> None:
    pts = _points([(float(i), float(i * i)) for i in range(count)])
    result = simplify(pts, 0.0)
    assert result == pts
    assert result is not pts


def test_split_triggers_at_exact_epsilon() -> None:
    pts = _points([(0.0, 0.0), (1.0, 0.5), (2.0, 0.0)])
    assert simplify(pts, 0.5) == pts
    assert simplify(pts, 0.6) == [pts[0], pts[2]]


def test_collinear_points_dropped_even_with_zero_epsilon() -> None:
    pts = _points([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)])
    assert simplify(pts, 0.0) == [pts[0], pts[-1]]


def test_zero_epsilon_keeps_every_offset_point() -> None:
    pts = _points([(0.0, 0.0), (1.0, 0.001), (2.0, 0.003), (3.0, -0.002), (4.0, 0.0)])
    assert simplify_indices(pts, 0.0) == [0, 1, 2, 3, 4]


def test_zero_epsilon_drops_point_on_sub_chord() -> None:
    # Point 2 lies exactly on the chord between points 1 and 3.
    pts = _points([(0.0, 0.0), (1.0, 0.001), (2.0, 0.0), (3.0, -0.001), (4.0, 0.0)])
    result = simplify_indices(pts, 0.0)
    assert result == [0, 1, 3, 4]
    assert 2 not in result


def test_find_split_prefers_earliest_maximum() -> None:
    pts = _points([(0.0, 0.0), (1.0, 1.0), (2.0, -1.0), (3.0, 0.5), (4.0, 0.0)])
    assert find_split(pts, 0, 4) == (1, 1.0)


def test_find_split_without_interior_offset() -> None:
    pts = _points([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)])
    assert find_split(pts, 0, 2) == (0, 0.0)


def test_pivot_appears_once_and_order_is_kept() -> None:
    pts = _points([(0.0, 0.0), (1.0, 0.1), (2.0, 3.0), (3.0, 0.1), (4.0, 0.0)])
    result = simplify(pts, 1.0)
    assert [p.source_index for p in result] == [0, 2, 4]


def test_vertical_chord_in_projected_space() -> None:
    pts = _points([(1.0, 0.0), (1.5, 5.0), (1.0, 10.0)])
    assert simplify_indices(pts, 0.4) == [0, 1, 2]
    assert simplify_indices(pts, 0.6) == [0, 2]


def test_source_index_is_carried_through() -> None:
    pts = [
        ProjectedPoint(0.0, 0.0, 10),
        ProjectedPoint(1.0, 2.0, 11),
        ProjectedPoint(2.0, 0.0, 12),
    ]
    assert simplify_indices(pts, 0.5) == [10, 11, 12]


def test_matches_recursive_formulation_on_wave() -> None:
    pts = _points([(i * 0.1, math.sin(i * 0.37) * (1 + i % 3)) for i in range(300)])
    for epsilon in (0.0, 0.05, 0.3, 1.0, 5.0):
        assert simplify(pts, epsilon) == _recursive_reference(pts, epsilon)


def test_long_track_does_not_depend_on_recursion_limit() -> None:
    count = 3000
    pts = _points([(float(i), (-1.0) ** i * i * 1e-3) for i in range(count)])
    positions = simplify_positions(pts, 0.0)
    assert positions[0] == 0
    assert positions[-1] == count - 1
    assert positions == sorted(set(positions))
