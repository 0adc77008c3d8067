"""
Selection and drag controller.

Owns the current selection of shapes and vertices and moves them while the
pointer is dragged, optionally snapping dragged vertices onto the vertices
of other polygons.

Usage:
    controller = SelectionController(snapping=True, snapping_radius=15.0)
    controller.build(shapes, x, y, radius=10.0)   # pointer down
    controller.drag(shapes, x2, y2)               # pointer move
    controller.clear()                            # pointer up
"""

import logging
import math
from typing import List, Optional

from models import (
    Point, Polygon, SelectionSet, Shape, ShapeItem, Vertex, VertexItem,
    distance_squared,
)
from services.hit_testing import polygons, vertices_contain

logger = logging.getLogger(__name__)


class SelectionController:
    """
    Selection state plus the drag update.

    Attributes:
        snapping: Whether dragged vertices snap to other polygons' vertices
        snapping_radius: Snap distance in world units
    """

    def __init__(self, snapping: bool = True, snapping_radius: float = 15.0):
        self.snapping = snapping
        self.snapping_radius = snapping_radius
        self._selection = SelectionSet()

    @property
    def selection(self) -> SelectionSet:
        """Current selection (for highlighting)."""
        return self._selection

    @property
    def is_empty(self) -> bool:
        return self._selection.is_empty

    def build(self, shapes: List[Shape], x: float, y: float, radius: float) -> int:
        """
        Rebuild the selection for a pointer-down at (x, y).

        Polygons whose vertices are hit contribute those vertices and skip
        the whole-shape test. Any other shape containing the point is
        selected as a whole. The selection may span several shapes.

        Returns:
            Number of selected elements
        """
        self._selection.clear()

        for shape in shapes:
            if isinstance(shape, Polygon):
                hit = vertices_contain(shape, x, y, radius)
                if hit:
                    self._selection.add_hit(hit)
                    continue

            if shape.contains_point(x, y):
                self._selection.append(ShapeItem(shape), Point(shape.x - x, shape.y - y))

        logger.debug(f"Selected {len(self._selection)} element(s) at ({x:.1f}, {y:.1f})")
        return len(self._selection)

    def drag(self, shapes: List[Shape], x: float, y: float):
        """Move every selected element so it keeps its grab offset from (x, y)."""
        for item, offset in self._selection:
            target_x = x + offset.x
            target_y = y + offset.y

            if isinstance(item, VertexItem):
                vertex = item.vertex
                if self.snapping:
                    snapped = self.snap_target(shapes, vertex, target_x, target_y)
                    target_x, target_y = snapped.x, snapped.y
                local = vertex.to_local(target_x, target_y)
                vertex.x = local.x
                vertex.y = local.y
            elif isinstance(item, ShapeItem):
                item.shape.x = target_x
                item.shape.y = target_y
            else:
                raise TypeError(f"Unknown selection item: {item!r}")

    def snap_target(self, shapes: List[Shape], vertex: Vertex,
                    x: float, y: float) -> Point:
        """
        Snap a world-space target onto the nearest vertex of another polygon.

        Only polygons other than the vertex's own are considered. The target
        snaps when the nearest squared distance is below the squared
        snapping radius; otherwise it is returned unchanged.
        """
        nearest = self.find_nearest_vertex(shapes, x, y, exclude=vertex.polygon)
        if nearest is None:
            return Point(x, y)

        other, index, dist_sq = nearest
        if dist_sq < self.snapping_radius * self.snapping_radius:
            return other.to_world(other.vertices[2 * index], other.vertices[2 * index + 1])
        return Point(x, y)

    @staticmethod
    def find_nearest_vertex(shapes: List[Shape], x: float, y: float,
                            exclude: Optional[Polygon] = None):
        """
        Nearest polygon vertex to the world point (x, y).

        Returns:
            (polygon, index, squared distance), or None if no candidate exists
        """
        min_dist_sq = math.inf
        nearest = None
        for other in polygons(shapes):
            if other is exclude:
                continue
            local = other.to_local(x, y)
            for i in range(other.vertex_count()):
                dist_sq = distance_squared(local.x, local.y,
                                           other.vertices[2 * i], other.vertices[2 * i + 1])
                if dist_sq < min_dist_sq:
                    min_dist_sq = dist_sq
                    nearest = (other, i, dist_sq)
        return nearest

    def clear(self):
        """Drop the selection and its offsets together."""
        self._selection.clear()
