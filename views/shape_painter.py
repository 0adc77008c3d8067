"""
Shape Painter.

Draws level shapes and editor overlays with QPainter. The canvas calls
these once per frame, inside a painter already translated by the view's
pan offset, so every routine here works in world coordinates.
"""

import math
from typing import Iterable

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QPainterPath

from models import Circle, Polygon, Rect, Segment, Shape, ShapeStyle, Vertex


VERTEX_LINE_WIDTH = 4.0
NORMAL_LENGTH = 20.0
ORIGIN_RADIUS = 5.0

COLORS = {
    "vertex_fill": QColor(0, 0, 0, 128),
    "vertex_stroke": QColor(255, 255, 255),
    "highlight": QColor(255, 0, 0),
    "normal": QColor("#00AA00"),
    "origin": QColor(0, 0, 0, 204),
    "grid": QColor("#222222"),
    "player": QColor("#222222"),
}


def _color(hex_color: str, opacity: float) -> QColor:
    color = QColor(hex_color)
    color.setAlphaF(opacity)
    return color


class ShapePainter:
    """
    Static utility class for painting shapes and editor overlays.

    Provides methods to:
    - Paint any shape kind in its own frame
    - Paint polygon vertex markers, edge normals and origin
    - Highlight selected or hovered vertices
    - Paint the background grid and the player-size marker
    """

    @staticmethod
    def paint_shape(painter: QPainter, shape: Shape, vertex_radius: float = 10.0):
        """Paint a shape, plus vertex/normal/origin overlays for polygons."""
        painter.save()
        painter.translate(shape.x, shape.y)
        if shape.angle:
            # Must match Shape.to_world, which rotates local points by -angle
            painter.rotate(-math.degrees(shape.angle))

        ShapePainter._apply_style(painter, shape.style)

        if isinstance(shape, Polygon):
            painter.drawPath(ShapePainter.polygon_path(shape))
            ShapePainter._paint_polygon_overlays(painter, shape, vertex_radius)
        elif isinstance(shape, Circle):
            painter.drawEllipse(QPointF(0, 0), shape.radius, shape.radius)
        elif isinstance(shape, Rect):
            painter.drawRect(QRectF(-0.5 * shape.width, -0.5 * shape.height,
                                    shape.width, shape.height))
        elif isinstance(shape, Segment):
            painter.drawLine(QPointF(shape.x0, shape.y0), QPointF(shape.x1, shape.y1))

        painter.restore()

    @staticmethod
    def paint_shapes(painter: QPainter, shapes: Iterable[Shape], vertex_radius: float = 10.0):
        for shape in shapes:
            ShapePainter.paint_shape(painter, shape, vertex_radius)

    @staticmethod
    def polygon_path(polygon: Polygon) -> QPainterPath:
        """Closed path through the polygon's local vertices."""
        path = QPainterPath()
        vertices = polygon.vertices
        for i in range(polygon.vertex_count()):
            point = QPointF(vertices[2 * i], vertices[2 * i + 1])
            if i == 0:
                path.moveTo(point)
            else:
                path.lineTo(point)
        path.closeSubpath()
        return path

    @staticmethod
    def paint_highlighted_vertices(painter: QPainter, vertices: Iterable[Vertex], radius: float):
        """Mark vertices (selected or hovered) at their world positions."""
        painter.save()
        painter.setBrush(QBrush(COLORS["highlight"]))
        painter.setPen(QPen(COLORS["vertex_stroke"], VERTEX_LINE_WIDTH))
        for vertex in vertices:
            point = vertex.to_world()
            painter.drawEllipse(QPointF(point.x, point.y), radius, radius)
        painter.restore()

    @staticmethod
    def paint_grid(painter: QPainter, width: int, height: int, spacing: int):
        """Grid centered on the world origin, with heavier center lines."""
        half_width = 0.5 * width
        half_height = 0.5 * height

        painter.save()
        painter.setPen(QPen(COLORS["grid"], 0.5))
        x_count = int(width / spacing)
        y_count = int(height / spacing)
        for i in range(x_count + 1):
            x = i * spacing - half_width
            painter.drawLine(QPointF(x, -half_height), QPointF(x, half_height))
        for i in range(y_count + 1):
            y = i * spacing - half_height
            painter.drawLine(QPointF(-half_width, y), QPointF(half_width, y))

        painter.setPen(QPen(COLORS["grid"], 1.0))
        painter.drawLine(QPointF(0, -half_height), QPointF(0, half_height))
        painter.drawLine(QPointF(-half_width, 0), QPointF(half_width, 0))
        painter.restore()

    @staticmethod
    def paint_player_scale(painter: QPainter, player_radius: float, scale: float):
        """Disc the size of the player at the current export scale."""
        radius = player_radius / (scale or 1.0)
        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(COLORS["player"]))
        painter.drawEllipse(QPointF(0, 0), radius, radius)
        painter.restore()

    @staticmethod
    def _paint_polygon_overlays(painter: QPainter, polygon: Polygon, vertex_radius: float = 10.0):
        """Vertex markers, outward edge normals and the origin dot."""
        vertices = polygon.vertices
        count = polygon.vertex_count()

        painter.setBrush(QBrush(COLORS["vertex_fill"]))
        painter.setPen(QPen(COLORS["vertex_stroke"], VERTEX_LINE_WIDTH))
        for i in range(count):
            painter.drawEllipse(QPointF(vertices[2 * i], vertices[2 * i + 1]),
                                vertex_radius, vertex_radius)

        painter.setPen(QPen(COLORS["normal"], 3.0))
        for i in range(count):
            j = (i + 1) % count
            xi, yi = vertices[2 * i], vertices[2 * i + 1]
            xj, yj = vertices[2 * j], vertices[2 * j + 1]
            length = math.hypot(xj - xi, yj - yi)
            if length == 0:
                continue
            mx, my = 0.5 * (xi + xj), 0.5 * (yi + yj)
            nx, ny = (yj - yi) / length, -(xj - xi) / length
            painter.drawLine(QPointF(mx, my),
                             QPointF(mx + nx * NORMAL_LENGTH, my + ny * NORMAL_LENGTH))

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(COLORS["origin"]))
        painter.drawEllipse(QPointF(0, 0), ORIGIN_RADIUS, ORIGIN_RADIUS)

    @staticmethod
    def _apply_style(painter: QPainter, style: ShapeStyle):
        painter.setBrush(QBrush(_color(style.fill_color, style.fill_opacity)))
        pen = QPen(_color(style.stroke_color, style.stroke_opacity), style.line_width)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
