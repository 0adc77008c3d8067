"""
Shape Models for Level Geometry.

This module defines the shapes that make up an editable level: circles,
rectangles, line segments and polygons. Every shape has a position, a
rotation angle and a visual style, and converts points between its own
local frame and the shared world frame.

Key concepts:
- Shape: Base class with transform and containment test
- Polygon: Flat vertex sequence [x0, y0, x1, y1, ...] edited by the editor
- ShapeStyle: Visual appearance (fill, stroke, line width)
- create_shape(): Factory dispatching on the "type" discriminant

Frame convention: world = position + R(-angle) * local, i.e. a positive
angle turns a shape clockwise on a y-down canvas.
"""

import json
import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

from .geometry import (
    Point, closest_point_on_segment, distance_squared, point_in_polygon,
)
from .vertex import Vertex


# =============================================================================
# Errors and Enumerations
# =============================================================================

class DataFormatError(ValueError):
    """Raised when persisted shape data cannot be parsed."""


class ShapeType(Enum):
    """Discriminant stored in the "type" field of serialized shapes."""
    CIRCLE = "circle"
    RECT = "rect"
    SEGMENT = "segment"
    POLYGON = "polygon"


# =============================================================================
# Helper Functions
# =============================================================================

def _generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid.uuid4())[:8]


def _clamp(value: float, min_val: float = 0.0, max_val: float = 1.0) -> float:
    """Clamp a value to a range."""
    return max(min_val, min(max_val, value))


def _as_number(value: Any, name: str) -> float:
    """Coerce a JSON value to float, rejecting anything that is not int or float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataFormatError(f"Field '{name}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise DataFormatError(f"Field '{name}' is out of range") from None
    if not math.isfinite(number):
        raise DataFormatError(f"Field '{name}' must be finite, got {value!r}")
    return number


def _number(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    """Read a numeric field from a dictionary."""
    return _as_number(data.get(key, default), key)


# =============================================================================
# Style
# =============================================================================

@dataclass
class ShapeStyle:
    """
    Visual styling for a shape.

    Attributes:
        fill_color: Fill color as hex string (e.g., "#000000")
        fill_opacity: Fill opacity (0.0 to 1.0)
        stroke_color: Stroke/outline color as hex string
        stroke_opacity: Stroke opacity (0.0 to 1.0)
        line_width: Stroke width in world units
    """
    fill_color: str = "#000000"
    fill_opacity: float = 0.0
    stroke_color: str = "#000000"
    stroke_opacity: float = 1.0
    line_width: float = 1.0

    def __post_init__(self):
        """Validate opacity values."""
        self.fill_opacity = _clamp(self.fill_opacity)
        self.stroke_opacity = _clamp(self.stroke_opacity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "fill_color": self.fill_color,
            "fill_opacity": self.fill_opacity,
            "stroke_color": self.stroke_color,
            "stroke_opacity": self.stroke_opacity,
            "line_width": self.line_width,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShapeStyle':
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise DataFormatError(f"Style must be an object, got {data!r}")
        return cls(
            fill_color=str(data.get("fill_color", "#000000")),
            fill_opacity=_number(data, "fill_opacity", 0.0),
            stroke_color=str(data.get("stroke_color", "#000000")),
            stroke_opacity=_number(data, "stroke_opacity", 1.0),
            line_width=_number(data, "line_width", 1.0),
        )

    def copy(self) -> 'ShapeStyle':
        """Create a copy."""
        return ShapeStyle.from_dict(self.to_dict())


# Style applied to every shape added through the editor
EDITOR_STYLE = ShapeStyle(
    fill_color="#000000",
    fill_opacity=0.5,
    stroke_color="#FFFFFF",
    stroke_opacity=1.0,
    line_width=4.0,
)


# =============================================================================
# Shapes
# =============================================================================

@dataclass(eq=False)
class Shape:
    """
    Base class for all level shapes.

    Shapes compare by identity: two shapes with the same geometry are still
    distinct members of the editor's shape list.

    Attributes:
        id: Unique identifier for this shape
        x: World X of the local origin
        y: World Y of the local origin
        angle: Rotation in radians
        style: Visual styling
    """
    SHAPE_TYPE: ClassVar[ShapeType]

    id: str = field(default_factory=_generate_id)
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    style: ShapeStyle = field(default_factory=ShapeStyle)

    @property
    def type(self) -> ShapeType:
        return self.SHAPE_TYPE

    def to_world(self, x: float, y: float) -> Point:
        """Transform a local point into the world frame."""
        if not self.angle:
            return Point(self.x + x, self.y + y)
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)
        return Point(self.x + cos_a * x + sin_a * y,
                     self.y - sin_a * x + cos_a * y)

    def to_local(self, x: float, y: float) -> Point:
        """Transform a world point into this shape's local frame."""
        dx = x - self.x
        dy = y - self.y
        if not self.angle:
            return Point(dx, dy)
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)
        return Point(cos_a * dx - sin_a * dy, sin_a * dx + cos_a * dy)

    def contains_point(self, x: float, y: float) -> bool:
        """Whether the world point (x, y) lies inside the shape."""
        raise NotImplementedError

    def _base_dict(self) -> Dict[str, Any]:
        return {
            "type": self.SHAPE_TYPE.value,
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "angle": self.angle,
            "style": self.style.to_dict(),
        }

    @staticmethod
    def _base_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": str(data.get("id") or _generate_id()),
            "x": _number(data, "x"),
            "y": _number(data, "y"),
            "angle": _number(data, "angle"),
            "style": ShapeStyle.from_dict(data.get("style", {})),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self._base_dict()


@dataclass(eq=False)
class Circle(Shape):
    """Circle centered on the local origin."""
    SHAPE_TYPE: ClassVar[ShapeType] = ShapeType.CIRCLE

    radius: float = 1.0

    def contains_point(self, x: float, y: float) -> bool:
        local = self.to_local(x, y)
        return distance_squared(0.0, 0.0, local.x, local.y) <= self.radius * self.radius

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d["radius"] = self.radius
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Circle':
        return cls(radius=_number(data, "radius", 1.0), **cls._base_kwargs(data))


@dataclass(eq=False)
class Rect(Shape):
    """Axis-aligned (in local frame) rectangle centered on the local origin."""
    SHAPE_TYPE: ClassVar[ShapeType] = ShapeType.RECT

    width: float = 1.0
    height: float = 1.0

    def contains_point(self, x: float, y: float) -> bool:
        local = self.to_local(x, y)
        return abs(local.x) <= 0.5 * self.width and abs(local.y) <= 0.5 * self.height

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d["width"] = self.width
        d["height"] = self.height
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Rect':
        return cls(
            width=_number(data, "width", 1.0),
            height=_number(data, "height", 1.0),
            **cls._base_kwargs(data),
        )


@dataclass(eq=False)
class Segment(Shape):
    """Line segment between two local points."""
    SHAPE_TYPE: ClassVar[ShapeType] = ShapeType.SEGMENT

    x0: float = 0.0
    y0: float = 0.0
    x1: float = 1.0
    y1: float = 0.0

    def contains_point(self, x: float, y: float) -> bool:
        local = self.to_local(x, y)
        closest = closest_point_on_segment(local.x, local.y,
                                           self.x0, self.y0, self.x1, self.y1)
        tolerance = max(0.5 * self.style.line_width, 1.0)
        return distance_squared(local.x, local.y, closest.x, closest.y) <= tolerance * tolerance

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d.update({"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1})
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Segment':
        return cls(
            x0=_number(data, "x0"),
            y0=_number(data, "y0"),
            x1=_number(data, "x1", 1.0),
            y1=_number(data, "y1"),
            **cls._base_kwargs(data),
        )


@dataclass(eq=False)
class Polygon(Shape):
    """
    Polygon with a flat, mutable vertex sequence.

    Vertex i connects to vertex (i + 1) mod N. Polygons built by the editor
    always keep at least three vertices.

    Attributes:
        vertices: Local coordinates [x0, y0, x1, y1, ...]
    """
    SHAPE_TYPE: ClassVar[ShapeType] = ShapeType.POLYGON

    vertices: List[float] = field(default_factory=list)

    def vertex_count(self) -> int:
        return len(self.vertices) // 2

    def vertex(self, index: int) -> Vertex:
        """Accessor for vertex ``index``; invalidated by insertion/removal."""
        return Vertex(self, index)

    def world_vertices(self) -> List[Point]:
        """World positions of all vertices, in index order."""
        return [
            self.to_world(self.vertices[2 * i], self.vertices[2 * i + 1])
            for i in range(self.vertex_count())
        ]

    def insert_vertex(self, index: int, x: float, y: float):
        """Insert a vertex before position ``index``, shifting later indices up."""
        self.vertices[2 * index:2 * index] = [x, y]

    def remove_vertex(self, index: int):
        """Remove vertex ``index``, shifting later indices down."""
        del self.vertices[2 * index:2 * index + 2]

    def contains_point(self, x: float, y: float) -> bool:
        local = self.to_local(x, y)
        return point_in_polygon(local.x, local.y, self.vertices)

    def to_dict(self) -> Dict[str, Any]:
        d = self._base_dict()
        d["vertices"] = list(self.vertices)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Polygon':
        raw = data.get("vertices", [])
        if not isinstance(raw, list):
            raise DataFormatError(f"Polygon vertices must be a list, got {raw!r}")
        vertices = [_as_number(v, "vertices") for v in raw]
        if len(vertices) % 2:
            raise DataFormatError("Polygon vertices must contain coordinate pairs")
        if len(vertices) < 6:
            raise DataFormatError(
                f"Polygon needs at least 3 vertices, got {len(vertices) // 2}"
            )
        return cls(vertices=vertices, **cls._base_kwargs(data))


# =============================================================================
# Factory
# =============================================================================

_SHAPE_CLASSES = {
    ShapeType.CIRCLE: Circle,
    ShapeType.RECT: Rect,
    ShapeType.SEGMENT: Segment,
    ShapeType.POLYGON: Polygon,
}


def create_shape(data: Dict[str, Any]) -> Shape:
    """
    Create a shape from its serialized form.

    Args:
        data: Dictionary with a "type" discriminant

    Returns:
        Concrete Shape instance

    Raises:
        DataFormatError: If the discriminant is unknown or a field is malformed
    """
    if not isinstance(data, dict):
        raise DataFormatError(f"Shape data must be an object, got {data!r}")
    try:
        shape_type = ShapeType(data.get("type"))
    except ValueError:
        raise DataFormatError(f"Unknown shape type: {data.get('type')!r}") from None
    return _SHAPE_CLASSES[shape_type].from_dict(data)


def shapes_from_json(text: str) -> List[Shape]:
    """
    Parse a JSON array of shape objects.

    The whole payload is parsed before anything is returned, so callers can
    replace their shape list only on success.
    """
    try:
        data = json.loads(text)
    except (TypeError, RecursionError, json.JSONDecodeError) as e:
        raise DataFormatError(f"Invalid shape data: {e}") from e
    if not isinstance(data, list):
        raise DataFormatError("Shape data must be a JSON array")
    return [create_shape(item) for item in data]


def shapes_to_json(shapes: List[Shape], indent: Optional[int] = None) -> str:
    """Serialize shapes to a JSON array."""
    return json.dumps([shape.to_dict() for shape in shapes], indent=indent)


__all__ = [
    "DataFormatError",
    "ShapeType",
    "ShapeStyle",
    "EDITOR_STYLE",
    "Shape",
    "Circle",
    "Rect",
    "Segment",
    "Polygon",
    "create_shape",
    "shapes_from_json",
    "shapes_to_json",
]
