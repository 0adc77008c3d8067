"""
Vertex hit-testing.

Finds the polygon vertices within a radius of a world-space point.
"""

from typing import Iterable, Iterator, Optional

from models import HitResult, Point, Polygon, Shape, distance_squared


def polygons(shapes: Iterable[Shape]) -> Iterator[Polygon]:
    """Iterate over the polygon shapes only."""
    for shape in shapes:
        if isinstance(shape, Polygon):
            yield shape


def vertices_contain(polygon: Polygon, px: float, py: float,
                     radius: float) -> Optional[HitResult]:
    """
    Find all vertices of ``polygon`` strictly within ``radius`` of (px, py).

    The query point is moved into the polygon's local frame and compared
    against each stored vertex. Offsets are taken in world space as
    ``vertex - pointer`` so a later drag keeps the exact grab offset instead
    of snapping the vertex onto the pointer.

    Args:
        polygon: Polygon to test
        px: World X of the query point
        py: World Y of the query point
        radius: Hit radius in world units

    Returns:
        HitResult with vertices in index order, or None if nothing was hit
    """
    local = polygon.to_local(px, py)
    radius_squared = radius * radius

    vertices = polygon.vertices
    matched = [
        polygon.vertex(i)
        for i in range(polygon.vertex_count())
        if distance_squared(local.x, local.y, vertices[2 * i], vertices[2 * i + 1]) < radius_squared
    ]
    if not matched:
        return None

    offsets = []
    for vertex in matched:
        world = vertex.to_world()
        offsets.append(Point(world.x - px, world.y - py))

    return HitResult(vertices=matched, offsets=offsets)
