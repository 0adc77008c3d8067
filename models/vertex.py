"""
Vertex accessor for polygon editing.

A Vertex is a lightweight (polygon, index) handle that exposes a single
polygon vertex as an addressable point. It owns no data: reading or writing
``x`` / ``y`` goes straight to the polygon's flat vertex list.

Accessors are only valid while the polygon's vertex indices are stable.
Any vertex insertion or removal shifts indices, so accessors must be
re-derived (e.g. by hit-testing again) after a topology change.
"""

from typing import TYPE_CHECKING

from .geometry import Point

if TYPE_CHECKING:
    from .shapes import Polygon


class Vertex:
    """Non-owning reference to vertex ``index`` of ``polygon``."""

    __slots__ = ("polygon", "index")

    def __init__(self, polygon: 'Polygon', index: int):
        assert 0 <= index < polygon.vertex_count(), \
            f"Vertex index {index} out of range for {polygon.vertex_count()} vertices"
        self.polygon = polygon
        self.index = index

    @property
    def x(self) -> float:
        return self.polygon.vertices[2 * self.index]

    @x.setter
    def x(self, value: float):
        self.polygon.vertices[2 * self.index] = value

    @property
    def y(self) -> float:
        return self.polygon.vertices[2 * self.index + 1]

    @y.setter
    def y(self, value: float):
        self.polygon.vertices[2 * self.index + 1] = value

    def to_world(self) -> Point:
        """World position of this vertex under the polygon's current transform."""
        return self.polygon.to_world(self.x, self.y)

    def to_local(self, x: float, y: float) -> Point:
        """Express a world point in the owning polygon's local frame."""
        return self.polygon.to_local(x, y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.polygon is other.polygon and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.polygon), self.index))

    def __repr__(self) -> str:
        return f"Vertex(polygon={self.polygon.id!r}, index={self.index})"
