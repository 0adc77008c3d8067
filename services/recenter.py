"""
Polygon recentering.

Moves a polygon's local origin onto its centroid without moving the
polygon in the world.
"""

import logging
from typing import Iterable

from models import Point, Polygon, Shape, polygon_centroid, rotate
from services.hit_testing import polygons

logger = logging.getLogger(__name__)


def recenter(polygon: Polygon) -> Point:
    """
    Normalize ``polygon`` so its local centroid is the origin.

    The centroid is subtracted from every vertex, then added back to the
    position after being rotated into the world frame, so every vertex keeps
    its world position. Applying it twice is a no-op up to rounding.

    Returns:
        The centroid that was removed, in the old local frame
    """
    centroid = polygon_centroid(polygon.vertices)
    dx, dy = centroid.x, centroid.y

    vertices = polygon.vertices
    for i in range(polygon.vertex_count()):
        vertices[2 * i] -= dx
        vertices[2 * i + 1] -= dy

    # World offset of the old centroid
    if polygon.angle:
        rotated = rotate(dx, dy, -polygon.angle)
        dx, dy = rotated.x, rotated.y

    polygon.x += dx
    polygon.y += dy
    return centroid


def recenter_all(shapes: Iterable[Shape]) -> int:
    """Recenter every polygon. Returns the number of polygons processed."""
    count = 0
    for polygon in polygons(shapes):
        recenter(polygon)
        count += 1
    logger.debug(f"Recentered {count} polygon(s)")
    return count
