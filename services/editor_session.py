"""
Editor Session.

One editing session: the shape list, the selection, the view state and the
pointer state, plus the operations the canvas triggers on pointer and key
events. Everything is explicit state on the session object, so several
sessions can coexist and tests can drive a session without any event loop.

Usage:
    session = EditorSession()
    session.add(Polygon(x=0, y=0, vertices=[100, 50, -100, 50, 0, -100]))

    session.on_pointer_down(100, 50)     # grab a vertex
    session.on_pointer_move(120, 60)     # drag it
    session.on_pointer_up()              # release

    session.insert_vertex_at(0, 60)
    session.recenter_all()
    key = session.save()
"""

import logging
from typing import List, Optional, Tuple

from models import (
    EDITOR_STYLE, EditMode, Polygon, SelectionSet, Shape, Vertex, ViewState,
    shapes_from_json, shapes_to_json,
)
from services.entity_export import export_physics_entities
from services.history_store import HistoryStore
from services.hit_testing import polygons, vertices_contain
from services.recenter import recenter, recenter_all
from services.selection_controller import SelectionController
from services.settings_manager import EditorSettings
from services.topology_editor import insert_vertex, remove_vertices

logger = logging.getLogger(__name__)


# Vertices of a polygon created with the add-shape mode, relative to the click
DEFAULT_POLYGON_VERTICES = [100.0, 50.0, -100.0, 50.0, 0.0, -100.0]


class EditorSession:
    """
    State and operations of one editing session.

    Args:
        settings: Editor settings; defaults are used when omitted
        store: History store for save/load; an in-memory store when omitted
    """

    def __init__(self, settings: Optional[EditorSettings] = None,
                 store: Optional[HistoryStore] = None):
        self.settings = settings or EditorSettings()
        self.store = store if store is not None else HistoryStore()

        self._shapes: List[Shape] = []
        self.controller = SelectionController(
            snapping=self.settings.edit.snapping,
            snapping_radius=self.settings.edit.snapping_radius,
        )
        self.view = ViewState(scale=self.settings.export.scale)
        self.view.reset(self.settings.canvas.width, self.settings.canvas.height)

        self.pointer_down = False
        self.hovered: List[Vertex] = []

    # =========================================================================
    # Shape list
    # =========================================================================

    @property
    def shapes(self) -> List[Shape]:
        """Snapshot of the shape list, in drawing order."""
        return list(self._shapes)

    @property
    def selection(self) -> SelectionSet:
        return self.controller.selection

    @property
    def vertex_radius(self) -> float:
        return self.settings.edit.vertex_radius

    def add(self, shape: Shape) -> Shape:
        """Add a shape, giving it the editor's default style."""
        shape.style = EDITOR_STYLE.copy()
        self._shapes.append(shape)
        return shape

    def remove(self, shape: Shape) -> bool:
        """Remove a shape. Returns False if it is not in the session."""
        for i, existing in enumerate(self._shapes):
            if existing is shape:
                self._shapes.pop(i)
                return True
        return False

    def clear(self):
        """Remove all shapes and drop the selection."""
        self._shapes = []
        self.clear_selection()

    def clear_selection(self):
        self.controller.clear()
        self.hovered = []

    def add_polygon_at(self, x: float, y: float) -> Polygon:
        """Add the default triangle with its origin at (x, y)."""
        polygon = Polygon(x=x, y=y, vertices=list(DEFAULT_POLYGON_VERTICES))
        return self.add(polygon)

    def remove_shapes_at(self, x: float, y: float) -> int:
        """Remove every shape containing (x, y). Returns the number removed."""
        removed = [shape for shape in self._shapes if shape.contains_point(x, y)]
        for shape in removed:
            self.remove(shape)
        return len(removed)

    # =========================================================================
    # Pointer protocol
    # =========================================================================

    def on_pointer_down(self, x: float, y: float, mode: EditMode = EditMode.SELECT):
        """
        Handle a pointer press at world point (x, y).

        The mode decides whether the press adds or deletes a shape, inserts
        or removes a vertex, or builds a new selection.
        """
        self.pointer_down = True

        if mode == EditMode.ADD_SHAPE:
            self.add_polygon_at(x, y)
        elif mode == EditMode.DELETE_SHAPE:
            self.remove_shapes_at(x, y)
        elif mode == EditMode.INSERT_VERTEX:
            self.insert_vertex_at(x, y)
        elif mode == EditMode.REMOVE_VERTEX:
            self.remove_vertices_at(x, y)
        else:
            self.controller.build(self._shapes, x, y, self.vertex_radius)

    def on_pointer_move(self, x: float, y: float, dx: float = 0.0, dy: float = 0.0):
        """
        Handle pointer motion to world point (x, y).

        Args:
            x: World X of the pointer
            y: World Y of the pointer
            dx: Raw screen-space motion since the last event (for panning)
            dy: Raw screen-space motion since the last event (for panning)
        """
        if not self.controller.is_empty:
            self.controller.drag(self._shapes, x, y)
        elif not self.pointer_down:
            self.hovered = self.vertices_at(x, y)
        else:
            self.view.pan(dx, dy)

    def on_pointer_up(self):
        self.pointer_down = False
        self.controller.clear()

    def vertices_at(self, x: float, y: float) -> List[Vertex]:
        """All polygon vertices within the vertex radius of (x, y)."""
        found: List[Vertex] = []
        for polygon in polygons(self._shapes):
            hit = vertices_contain(polygon, x, y, self.vertex_radius)
            if hit:
                found.extend(hit.vertices)
        return found

    # =========================================================================
    # Commands
    # =========================================================================

    def insert_vertex_at(self, x: float, y: float) -> Optional[Tuple[Polygon, int]]:
        """Insert a vertex on the edge closest to (x, y)."""
        self.hovered = []
        return insert_vertex(self._shapes, x, y)

    def remove_vertices_at(self, x: float, y: float, radius: Optional[float] = None) -> int:
        """Remove the vertices under (x, y), keeping every polygon at >= 3 vertices."""
        self.hovered = []
        if radius is None:
            radius = self.vertex_radius
        return remove_vertices(self._shapes, x, y, radius)

    def recenter(self, polygon: Polygon):
        return recenter(polygon)

    def recenter_all(self) -> int:
        return recenter_all(self._shapes)

    def reset_view(self, width: Optional[float] = None, height: Optional[float] = None):
        """Center the world origin on the canvas."""
        if width is None:
            width = self.settings.canvas.width
        if height is None:
            height = self.settings.canvas.height
        self.view.reset(width, height)

    # =========================================================================
    # Persistence
    # =========================================================================

    def serialize(self) -> str:
        return shapes_to_json(self._shapes)

    def save(self) -> str:
        """Store the current shapes in the history. Returns the entry key."""
        key = self.store.make_key()
        self.store.put(key, self.serialize())
        logger.info(f"Saved {len(self._shapes)} shape(s) as '{key}'")
        return key

    def load(self, data: str):
        """
        Replace the shape list with serialized shapes.

        The data is fully parsed before the session changes, so a malformed
        payload leaves the current shapes untouched.

        Raises:
            DataFormatError: If the data cannot be parsed
        """
        shapes = shapes_from_json(data)
        self._shapes = shapes
        self.clear_selection()
        logger.info(f"Loaded {len(shapes)} shape(s)")

    def load_key(self, key: str):
        """
        Load a history entry.

        Raises:
            KeyError: If the key is not in the history
            DataFormatError: If the stored data cannot be parsed
        """
        self.load(self.store.get(key))

    def export(self, scale: Optional[float] = None) -> str:
        """Export polygons as physics entities and save a history entry."""
        if scale is not None:
            self.view.set_scale(scale)
        data = export_physics_entities(self._shapes, self.view.scale)
        self.save()
        return data
