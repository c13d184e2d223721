import numpy as np
import pytest

from convoy.geometry import (
    Point,
    Segment,
    distance,
    normalize_angle,
    point_in_convex_polygon,
    rotate_project,
    segments_intersect,
)


def seg(x1, y1, x2, y2):
    return Segment(Point(x1, y1), Point(x2, y2))


def test_rotate_project():
    assert rotate_project(1.0, 0.0, 0.0) == 1.0
    assert rotate_project(0.0, 1.0, 0.0) == 0.0
    assert rotate_project(0.0, 1.0, np.pi / 2) == pytest.approx(1.0)
    assert rotate_project(2.0, 3.0, np.pi) == pytest.approx(-2.0)


def test_distance():
    assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)
    assert distance(Point(1, 1), Point(1, 1)) == 0.0


def test_normalize_angle_range():
    for angle in np.linspace(-3 * np.pi + 1e-6, 3 * np.pi - 1e-6, 601):
        result = normalize_angle(angle)
        assert -np.pi < result <= np.pi


def test_normalize_angle_is_periodic():
    for angle in np.linspace(-np.pi + 1e-3, np.pi, 101):
        assert normalize_angle(angle + 2 * np.pi) == pytest.approx(normalize_angle(angle), abs=1e-9)


def test_normalize_angle_boundaries():
    assert normalize_angle(np.pi) == np.pi
    assert normalize_angle(-np.pi) == pytest.approx(np.pi)
    assert normalize_angle(0.0) == 0.0
    assert normalize_angle(1.5 * np.pi) == pytest.approx(-0.5 * np.pi)
    assert normalize_angle(-1.5 * np.pi) == pytest.approx(0.5 * np.pi)


def test_crossing_segments_intersect():
    assert segments_intersect(seg(0, 0, 2, 2), seg(0, 2, 2, 0))


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect(seg(0, 0, 1, 0), seg(0, 1, 1, 1))


def test_collinear_overlap_is_not_reported():
    assert not segments_intersect(seg(0, 0, 2, 0), seg(1, 0, 3, 0))


def test_shared_endpoint_is_excluded():
    assert not segments_intersect(seg(0, 0, 1, 1), seg(1, 1, 2, 0))


def test_endpoint_touching_interior_is_excluded():
    assert not segments_intersect(seg(0, 0, 2, 0), seg(1, 0, 1, 2))


def test_lines_crossing_outside_segments():
    assert not segments_intersect(seg(0, 0, 1, 1), seg(3, 0, 2, 1))


def test_point_in_convex_polygon():
    square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
    assert point_in_convex_polygon(Point(0.5, 0.5), square)
    assert point_in_convex_polygon(Point(1, 0.5), square)
    assert point_in_convex_polygon(Point(0, 0), square)
    assert not point_in_convex_polygon(Point(1.5, 0.5), square)
    assert not point_in_convex_polygon(Point(2, 0), square)
    # Winding does not matter
    assert point_in_convex_polygon(Point(0.5, 0.5), list(reversed(square)))
