"""
Editor Canvas.

Qt widget hosting an EditorSession. Mouse events become pointer calls in
world coordinates, held keys choose the edit mode, and painting delegates
to ShapePainter.

Keys:
    A (held)      Click adds the default triangle
    D (held)      Click deletes the shapes under the pointer
    V (held)      Click inserts a vertex on the nearest edge
    Alt (held)    Click removes the vertices under the pointer
    R             Reset the view
    Space         Export physics entities
"""

import logging
from typing import Optional, Set

from PyQt6.QtCore import Qt, pyqtSignal, QPointF
from PyQt6.QtGui import QPainter, QColor, QMouseEvent, QKeyEvent, QPaintEvent
from PyQt6.QtWidgets import QWidget

from models import EditMode
from services import EditorSession
from views.shape_painter import ShapePainter

logger = logging.getLogger(__name__)


BACKGROUND_COLOR = QColor("#333333")

MODE_KEYS = [
    (Qt.Key.Key_A, EditMode.ADD_SHAPE),
    (Qt.Key.Key_D, EditMode.DELETE_SHAPE),
    (Qt.Key.Key_V, EditMode.INSERT_VERTEX),
]


class EditorCanvas(QWidget):
    """Canvas widget for editing level shapes."""

    # Signals
    exported = pyqtSignal(str)  # exported entity JSON
    shapesChanged = pyqtSignal()

    def __init__(self, session: EditorSession, parent=None):
        super().__init__(parent)
        self.session = session
        self._held_keys: Set[int] = set()
        self._last_pos: Optional[QPointF] = None

        canvas = session.settings.canvas
        self.setMinimumSize(canvas.width, canvas.height)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # =========================================================================
    # Modes
    # =========================================================================

    def current_mode(self, modifiers: Qt.KeyboardModifier) -> EditMode:
        """Mode for the next click, from the held keys and modifiers."""
        for key, mode in MODE_KEYS:
            if key in self._held_keys:
                return mode
        if modifiers & Qt.KeyboardModifier.AltModifier:
            return EditMode.REMOVE_VERTEX
        return EditMode.SELECT

    # =========================================================================
    # Mouse
    # =========================================================================

    def _world_pos(self, event: QMouseEvent):
        pos = event.position()
        return self.session.view.screen_to_world(pos.x(), pos.y())

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        point = self._world_pos(event)
        mode = self.current_mode(event.modifiers())
        self.session.on_pointer_down(point.x, point.y, mode)
        self._last_pos = event.position()

        if mode != EditMode.SELECT:
            self.shapesChanged.emit()
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        dx = dy = 0.0
        if self._last_pos is not None:
            dx = pos.x() - self._last_pos.x()
            dy = pos.y() - self._last_pos.y()
        self._last_pos = pos

        point = self._world_pos(event)
        self.session.on_pointer_move(point.x, point.y, dx, dy)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return

        had_selection = not self.session.selection.is_empty
        self.session.on_pointer_up()
        if had_selection:
            self.shapesChanged.emit()
        self.update()

    # =========================================================================
    # Keyboard
    # =========================================================================

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return

        key = event.key()
        self._held_keys.add(key)

        if key == Qt.Key.Key_Space:
            self.export()
        elif key == Qt.Key.Key_R:
            self.reset_view()
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        self._held_keys.discard(event.key())
        super().keyReleaseEvent(event)

    def focusOutEvent(self, event):
        # Key releases are not delivered while unfocused
        self._held_keys.clear()
        super().focusOutEvent(event)

    # =========================================================================
    # Commands
    # =========================================================================

    def export(self, scale: Optional[float] = None) -> str:
        data = self.session.export(scale)
        logger.debug(data)
        self.exported.emit(data)
        return data

    def reset_view(self):
        self.session.reset_view(self.width(), self.height())
        self.update()

    def recenter_all(self):
        count = self.session.recenter_all()
        logger.info(f"Recentered {count} polygon(s)")
        self.shapesChanged.emit()
        self.update()

    # =========================================================================
    # Painting
    # =========================================================================

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)

        view = self.session.view
        canvas = self.session.settings.canvas
        painter.translate(view.translate_x, view.translate_y)

        ShapePainter.paint_grid(painter, canvas.width, canvas.height, canvas.grid_spacing)
        ShapePainter.paint_player_scale(painter, canvas.player_radius, view.scale)

        radius = self.session.vertex_radius
        ShapePainter.paint_shapes(painter, self.session.shapes, radius)
        ShapePainter.paint_highlighted_vertices(painter, self.session.selection.vertices(), radius)
        ShapePainter.paint_highlighted_vertices(painter, self.session.hovered, radius)

        painter.end()
