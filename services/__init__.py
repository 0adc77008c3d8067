"""Services package."""

from .hit_testing import polygons, vertices_contain
from .selection_controller import SelectionController
from .topology_editor import (
    MIN_VERTEX_COUNT,
    EdgeHit,
    find_closest_edge,
    insert_vertex,
    remove_vertices,
)
from .recenter import recenter, recenter_all
from .history_store import HistoryStore
from .entity_export import (
    Material,
    round_value,
    polygon_to_entity,
    export_physics_entities,
)
from .settings_manager import (
    SettingsManager,
    EditorSettings,
    EditSettings,
    CanvasSettings,
    ExportSettings,
    PathSettings,
    get_settings,
    reset_settings_manager,
)
from .editor_session import EditorSession, DEFAULT_POLYGON_VERTICES

__all__ = [
    "polygons",
    "vertices_contain",
    "SelectionController",
    "MIN_VERTEX_COUNT",
    "EdgeHit",
    "find_closest_edge",
    "insert_vertex",
    "remove_vertices",
    "recenter",
    "recenter_all",
    "HistoryStore",
    "Material",
    "round_value",
    "polygon_to_entity",
    "export_physics_entities",
    "SettingsManager",
    "EditorSettings",
    "EditSettings",
    "CanvasSettings",
    "ExportSettings",
    "PathSettings",
    "get_settings",
    "reset_settings_manager",
    "EditorSession",
    "DEFAULT_POLYGON_VERTICES",
]
