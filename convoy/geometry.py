"""
Geometry: Points, Segments, Angles and Segment Intersection
"""
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    """A 2D point in world coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class Segment:
    """A line segment between two points."""
    p1: Point
    p2: Point


def rotate_project(x, y, heading):
    """
    Project a local-frame offset onto one world axis.

    Calling it twice with swapped/negated offsets rotates a rectangle
    corner without building a rotation matrix.

    Args:
        x, y: Local-frame offset
        heading: Rotation angle (radians)

    Returns:
        x*cos(heading) + y*sin(heading)
    """
    return x * np.cos(heading) + y * np.sin(heading)


def distance(p1, p2):
    """Euclidean distance between two objects with x and y attributes."""
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return np.sqrt(dx**2 + dy**2)


def normalize_angle(angle):
    """
    Wrap an angle into (-pi, pi].

    Applies at most one full-turn correction, so the input must be
    within one extra turn of the range.

    Args:
        angle: Angle (radians)

    Returns:
        Normalized angle (radians)
    """
    if angle > np.pi:
        angle -= 2 * np.pi
    elif angle <= -np.pi:
        angle += 2 * np.pi
    return angle


def segments_intersect(seg_a, seg_b):
    """
    Test whether two open segments cross.

    Endpoints are excluded. Parallel and collinear segments (zero
    determinant) are reported as not intersecting, even when they
    overlap.

    Args:
        seg_a, seg_b: Segment objects

    Returns:
        True if the segments cross strictly inside both
    """
    a, b = seg_a.p1.x, seg_a.p1.y
    c, d = seg_a.p2.x, seg_a.p2.y
    p, q = seg_b.p1.x, seg_b.p1.y
    r, s = seg_b.p2.x, seg_b.p2.y

    det = (c - a) * (s - q) - (r - p) * (d - b)
    if det == 0:
        return False

    lam = ((s - q) * (r - a) + (p - r) * (s - b)) / det
    gamma = ((b - d) * (r - a) + (c - a) * (s - b)) / det
    return bool(0 < lam < 1 and 0 < gamma < 1)


def point_in_convex_polygon(point, corners):
    """
    Test whether a point lies inside or on the boundary of a convex polygon.

    Args:
        point: Point to test
        corners: Polygon corners in order (either winding)

    Returns:
        True if the point is inside or on an edge
    """
    sign = 0
    for i, start in enumerate(corners):
        end = corners[(i + 1) % len(corners)]
        cross = (end.x - start.x) * (point.y - start.y) - (end.y - start.y) * (point.x - start.x)
        if cross == 0:
            continue
        if sign == 0:
            sign = 1 if cross > 0 else -1
        elif (cross > 0) != (sign > 0):
            return False
    return True
