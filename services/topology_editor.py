"""
Polygon topology editing.

Inserts vertices on the edge closest to a point and removes vertices under
a point, never letting a polygon drop below three vertices.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from models import Polygon, Shape, closest_point_on_segment, distance_squared
from services.hit_testing import polygons, vertices_contain

logger = logging.getLogger(__name__)


# A polygon never has fewer vertices than this
MIN_VERTEX_COUNT = 3


@dataclass
class EdgeHit:
    """
    Closest edge found by find_closest_edge.

    Attributes:
        polygon: Polygon owning the edge
        index: Edge start vertex; the edge runs to (index + 1) mod N
        distance_squared: Squared distance from the query point, local frame
    """
    polygon: Polygon
    index: int
    distance_squared: float


def find_closest_edge(shapes: Iterable[Shape], x: float, y: float) -> Optional[EdgeHit]:
    """
    Find the polygon edge closest to the world point (x, y).

    Each polygon is searched in its own local frame. Shapes are never
    scaled, so local distances compare directly across polygons.

    Returns:
        The global minimum, or None when there are no polygons
    """
    best: Optional[EdgeHit] = None
    min_dist_sq = math.inf

    for polygon in polygons(shapes):
        local = polygon.to_local(x, y)
        count = polygon.vertex_count()
        vertices = polygon.vertices
        for i in range(count):
            j = (i + 1) % count
            closest = closest_point_on_segment(
                local.x, local.y,
                vertices[2 * i], vertices[2 * i + 1],
                vertices[2 * j], vertices[2 * j + 1],
            )
            dist_sq = distance_squared(local.x, local.y, closest.x, closest.y)
            if dist_sq < min_dist_sq:
                min_dist_sq = dist_sq
                best = EdgeHit(polygon, i, dist_sq)

    return best


def insert_vertex(shapes: Iterable[Shape], x: float, y: float) -> Optional[Tuple[Polygon, int]]:
    """
    Insert a vertex at the midpoint of the edge closest to (x, y).

    The new vertex is inserted (not substituted) at (index + 1) mod N, so
    the vertex count grows by one and later indices shift up.

    Returns:
        (polygon, new vertex index), or None if there was no polygon
    """
    edge = find_closest_edge(shapes, x, y)
    if edge is None:
        return None

    polygon = edge.polygon
    count = polygon.vertex_count()
    i = edge.index
    j = (i + 1) % count
    vertices = polygon.vertices
    mx = 0.5 * (vertices[2 * i] + vertices[2 * j])
    my = 0.5 * (vertices[2 * i + 1] + vertices[2 * j + 1])

    new_index = (i + 1) % count
    polygon.insert_vertex(new_index, mx, my)
    logger.debug(f"Inserted vertex {new_index} into polygon {polygon.id}")
    return polygon, new_index


def remove_vertices(shapes: Iterable[Shape], x: float, y: float, radius: float) -> int:
    """
    Remove every polygon vertex within ``radius`` of (x, y).

    Indices are removed from highest to lowest so earlier removals never
    shift indices that are still pending. A removal that would leave a
    polygon with fewer than MIN_VERTEX_COUNT vertices is skipped and
    logged; removals on other polygons still go ahead.

    Returns:
        Number of vertices removed
    """
    removed = 0
    for polygon in list(polygons(shapes)):
        hit = vertices_contain(polygon, x, y, radius)
        if not hit:
            continue

        for index in sorted((v.index for v in hit.vertices), reverse=True):
            if polygon.vertex_count() > MIN_VERTEX_COUNT:
                polygon.remove_vertex(index)
                removed += 1
            else:
                logger.info("Minimum vertex count for polygon reached.")

    return removed
