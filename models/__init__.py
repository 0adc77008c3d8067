"""
Models package.

This package contains the data models of the level shape editor.

- Geometry helpers (Point, distances, centroid, point-in-polygon)
- Shapes (Circle, Rect, Segment, Polygon) and the shape factory
- Vertex accessor for polygon vertex editing
- Selection (ShapeItem, VertexItem, HitResult, SelectionSet)
- View state and edit modes
"""

from .geometry import (
    Point,
    distance_squared,
    closest_point_on_segment,
    rotate,
    polygon_centroid,
    point_in_polygon,
)
from .vertex import Vertex
from .shapes import (
    DataFormatError,
    ShapeType,
    ShapeStyle,
    EDITOR_STYLE,
    Shape,
    Circle,
    Rect,
    Segment,
    Polygon,
    create_shape,
    shapes_from_json,
    shapes_to_json,
)
from .selection import (
    SelectionKind,
    ShapeItem,
    VertexItem,
    Selectable,
    HitResult,
    SelectionSet,
)
from .view_state import EditMode, ViewState


__all__ = [
    # Geometry
    "Point",
    "distance_squared",
    "closest_point_on_segment",
    "rotate",
    "polygon_centroid",
    "point_in_polygon",
    # Vertex accessor
    "Vertex",
    # Shapes
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
    # Selection
    "SelectionKind",
    "ShapeItem",
    "VertexItem",
    "Selectable",
    "HitResult",
    "SelectionSet",
    # View
    "EditMode",
    "ViewState",
]
