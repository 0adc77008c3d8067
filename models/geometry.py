"""
Geometry helpers for the shape editor.

Stateless functions over plain floats. Polygon vertex data is always a flat
sequence of coordinate pairs: [x0, y0, x1, y1, ...].
"""

import math
from dataclasses import dataclass
from typing import Sequence


# Areas below this are treated as degenerate when computing centroids
AREA_EPSILON = 1e-12


@dataclass
class Point:
    """2D point or vector."""
    x: float = 0.0
    y: float = 0.0

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared Euclidean distance between (x1, y1) and (x2, y2)."""
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


def closest_point_on_segment(px: float, py: float,
                             ax: float, ay: float,
                             bx: float, by: float) -> Point:
    """
    Closest point to P on the segment AB.

    The projection parameter is clamped to [0, 1], so the result is always
    one of A, B, or a point between them. A degenerate segment returns A.
    """
    abx = bx - ax
    aby = by - ay
    length_sq = abx * abx + aby * aby
    if length_sq == 0:
        return Point(ax, ay)

    t = ((px - ax) * abx + (py - ay) * aby) / length_sq
    t = max(0.0, min(1.0, t))
    return Point(ax + t * abx, ay + t * aby)


def rotate(x: float, y: float, angle: float) -> Point:
    """Rotate (x, y) counter-clockwise about the origin by angle radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Point(cos_a * x - sin_a * y, sin_a * x + cos_a * y)


def polygon_centroid(vertices: Sequence[float]) -> Point:
    """
    Area-weighted centroid of a closed polygon.

    Uses the triangle fan decomposition around the first vertex, as Box2D's
    ComputeCentroid does. Degenerate (zero-area) inputs fall back to the
    arithmetic mean of the vertices.

    Args:
        vertices: Flat coordinate sequence [x0, y0, x1, y1, ...]

    Returns:
        Centroid in the same frame as the vertices
    """
    count = len(vertices) // 2
    if count == 0:
        return Point(0.0, 0.0)

    ox, oy = vertices[0], vertices[1]
    area = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(1, count - 1):
        e1x = vertices[2 * i] - ox
        e1y = vertices[2 * i + 1] - oy
        e2x = vertices[2 * (i + 1)] - ox
        e2y = vertices[2 * (i + 1) + 1] - oy

        triangle_area = 0.5 * (e1x * e2y - e1y * e2x)
        area += triangle_area
        # Triangle centroid relative to the fan origin
        cx += triangle_area * (e1x + e2x) / 3.0
        cy += triangle_area * (e1y + e2y) / 3.0

    if abs(area) < AREA_EPSILON:
        xs = vertices[0:2 * count:2]
        ys = vertices[1:2 * count:2]
        return Point(sum(xs) / count, sum(ys) / count)

    return Point(ox + cx / area, oy + cy / area)


def point_in_polygon(x: float, y: float, vertices: Sequence[float]) -> bool:
    """Even-odd ray casting test against a flat vertex sequence."""
    count = len(vertices) // 2
    inside = False
    j = count - 1
    for i in range(count):
        xi, yi = vertices[2 * i], vertices[2 * i + 1]
        xj, yj = vertices[2 * j], vertices[2 * j + 1]
        if (yi > y) != (yj > y):
            x_cross = xi + (y - yi) * (xj - xi) / (yj - yi)
            if x < x_cross:
                inside = not inside
        j = i
    return inside


__all__ = [
    "Point",
    "distance_squared",
    "closest_point_on_segment",
    "rotate",
    "polygon_centroid",
    "point_in_polygon",
]
