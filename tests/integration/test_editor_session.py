"""
Integration tests for editor session workflows.

Tests:
- Pointer down/move/up for vertex and shape drags
- Hover highlighting and panning
- Edit modes (add/delete shape, insert/remove vertex)
- Save/load through the history store, including malformed data
- Export with history entry
"""

import json
import math
import pytest

from models import (
    Circle, DataFormatError, EDITOR_STYLE, EditMode, Polygon, shapes_to_json,
)
from services import EditorSession, EditorSettings, HistoryStore, DEFAULT_POLYGON_VERTICES


def world_positions(polygon):
    return [p.to_tuple() for p in polygon.world_vertices()]


class TestShapeList:
    """Tests for adding and removing shapes."""

    def test_add_applies_editor_style(self, session, triangle):
        session.add(triangle)
        assert triangle.style == EDITOR_STYLE
        assert triangle.style is not EDITOR_STYLE
        assert session.shapes == [triangle]

    def test_shapes_is_snapshot(self, session, triangle):
        session.add(triangle)
        session.shapes.clear()
        assert len(session.shapes) == 1

    def test_remove_by_identity(self, session):
        a = session.add(Polygon(id="same", vertices=[0, 0, 1, 0, 0, 1]))
        b = session.add(Polygon(id="same", vertices=[0, 0, 1, 0, 0, 1]))
        assert session.remove(b)
        assert session.shapes == [a]
        assert not session.remove(b)

    def test_clear_drops_selection(self, session, triangle):
        session.add(triangle)
        session.on_pointer_down(100, 50)
        session.clear()
        assert session.shapes == []
        assert session.selection.is_empty


class TestPointerWorkflow:
    """Tests for the pointer protocol in select mode."""

    def test_drag_vertex(self, session, triangle):
        session.add(triangle)
        session.on_pointer_down(98, 49)
        session.on_pointer_move(118, 69)
        assert triangle.vertices[0:2] == pytest.approx([120, 70])
        session.on_pointer_up()
        assert session.selection.is_empty
        assert not session.pointer_down

    def test_drag_rotated_vertex_keeps_offset(self, session, rotated_polygon):
        session.add(rotated_polygon)
        world = rotated_polygon.vertex(3).to_world()
        session.on_pointer_down(world.x - 2, world.y + 1)
        session.on_pointer_move(world.x + 8, world.y - 9)
        moved = rotated_polygon.vertex(3).to_world()
        assert moved.to_tuple() == pytest.approx((world.x + 10, world.y - 10))

    def test_drag_whole_shape(self, session, square):
        session.add(square)
        session.on_pointer_down(200, 10)
        session.on_pointer_move(250, 60)
        session.on_pointer_up()
        assert (square.x, square.y) == (250, 50)

    def test_drag_circle(self, session, circle):
        session.add(circle)
        session.on_pointer_down(-190, 0)
        session.on_pointer_move(-90, 0)
        assert (circle.x, circle.y) == (-100, 0)

    def test_snap_onto_other_polygon(self, session, square):
        dragged = session.add(Polygon(x=0, y=-200, vertices=[0, 0, 50, 0, 0, 50]))
        session.add(square)
        session.on_pointer_down(0, -200)
        session.on_pointer_move(140, -45)
        assert dragged.vertex(0).to_world().to_tuple() == pytest.approx((150, -50))

    def test_snapping_setting_respected(self, square):
        settings = EditorSettings()
        settings.edit.snapping = False
        session = EditorSession(settings)
        dragged = session.add(Polygon(x=0, y=-200, vertices=[0, 0, 50, 0, 0, 50]))
        session.add(square)
        session.on_pointer_down(0, -200)
        session.on_pointer_move(140, -45)
        assert dragged.vertex(0).to_world().to_tuple() == pytest.approx((140, -45))

    def test_hover_when_pointer_up(self, session, triangle):
        session.add(triangle)
        session.on_pointer_move(-98, 50)
        assert session.hovered == [triangle.vertex(1)]
        session.on_pointer_move(0, 0)
        assert session.hovered == []

    def test_pan_on_empty_press(self, session, triangle):
        session.add(triangle)
        start = (session.view.translate_x, session.view.translate_y)
        session.on_pointer_down(500, 500)
        session.on_pointer_move(510, 490, 10, -10)
        assert (session.view.translate_x, session.view.translate_y) == (start[0] + 10, start[1] - 10)
        assert triangle.vertices == [100.0, 50.0, -100.0, 50.0, 0.0, -100.0]

    def test_motion_after_release_does_not_pan(self, session):
        session.on_pointer_down(0, 0)
        session.on_pointer_up()
        start = (session.view.translate_x, session.view.translate_y)
        session.on_pointer_move(5, 5, 5, 5)
        assert (session.view.translate_x, session.view.translate_y) == start

    def test_vertices_at(self, session, square):
        other = session.add(Polygon(x=150, y=-50, vertices=[0, 0, 30, 0, 30, 30, 0, 30]))
        session.add(square)
        found = session.vertices_at(150, -50)
        assert found == [other.vertex(0), square.vertex(0)]


class TestEditModes:
    """Tests for mode-dependent pointer presses."""

    def test_add_shape(self, session):
        session.on_pointer_down(30, 40, EditMode.ADD_SHAPE)
        (polygon,) = session.shapes
        assert (polygon.x, polygon.y) == (30, 40)
        assert polygon.vertices == DEFAULT_POLYGON_VERTICES
        assert polygon.vertices is not DEFAULT_POLYGON_VERTICES

    def test_delete_shape(self, session, square, circle):
        session.add(square)
        session.add(circle)
        session.on_pointer_down(200, 0, EditMode.DELETE_SHAPE)
        assert session.shapes == [circle]

    def test_delete_overlapping_shapes(self, session):
        a = session.add(Circle(radius=10))
        b = session.add(Circle(x=5, radius=10))
        c = session.add(Circle(x=100, radius=10))
        session.on_pointer_down(2, 0, EditMode.DELETE_SHAPE)
        assert session.shapes == [c]
        assert a not in session.shapes and b not in session.shapes

    def test_insert_vertex(self, session, square):
        session.add(square)
        session.on_pointer_down(200, -55, EditMode.INSERT_VERTEX)
        assert square.vertex_count() == 5
        assert square.vertices[2:4] == [0, -50]
        assert session.selection.is_empty

    def test_remove_vertex(self, session, square):
        session.add(square)
        session.on_pointer_down(250, 50, EditMode.REMOVE_VERTEX)
        assert square.vertex_count() == 3

    def test_remove_vertex_floor(self, session, triangle):
        session.add(triangle)
        session.on_pointer_down(100, 50, EditMode.REMOVE_VERTEX)
        assert triangle.vertex_count() == 3

    def test_remove_vertices_custom_radius(self, session, square):
        session.add(square)
        assert session.remove_vertices_at(160, -50, radius=5) == 0
        assert session.remove_vertices_at(160, -50, radius=15) == 1


class TestCommands:
    """Tests for recenter and view commands."""

    def test_recenter_all_keeps_world_positions(self, session, rotated_polygon, circle):
        session.add(rotated_polygon)
        session.add(circle)
        before = world_positions(rotated_polygon)
        assert session.recenter_all() == 1
        for b, a in zip(before, world_positions(rotated_polygon)):
            assert a == pytest.approx(b)

    def test_reset_view(self, session):
        session.view.pan(40, 40)
        session.reset_view()
        assert (session.view.translate_x, session.view.translate_y) == (320, 240)
        session.reset_view(800, 600)
        assert (session.view.translate_x, session.view.translate_y) == (400, 300)

    def test_initial_view_centered(self, session):
        assert (session.view.translate_x, session.view.translate_y) == (320, 240)


class TestPersistence:
    """Tests for save/load through the history store."""

    def test_save_and_load_key(self, session, triangle, rotated_polygon):
        session.add(triangle)
        session.add(rotated_polygon)
        key = session.save()
        assert key in session.store

        session.clear()
        session.load_key(key)
        restored = session.shapes
        assert [s.id for s in restored] == ["tri", "rotated"]
        assert restored[1].angle == pytest.approx(math.pi / 6)
        assert restored[1].vertices == pytest.approx(rotated_polygon.vertices)

    def test_save_keys_ordered(self, session, triangle):
        session.add(triangle)
        keys = [session.save() for _ in range(3)]
        assert session.store.keys() == keys

    def test_load_replaces_and_clears_selection(self, session, triangle, square):
        session.add(triangle)
        session.on_pointer_down(100, 50)
        session.load(shapes_to_json([square]))
        assert [s.id for s in session.shapes] == ["square"]
        assert session.selection.is_empty

    @pytest.mark.parametrize("data", [
        "garbage",
        "{}",
        "[{\"type\": \"polygon\", \"vertices\": [0, 0, 1, 1]}]",
        "[{\"type\": \"polygon\", \"vertices\": [0, 0, 1, 0, 0, 1]}, {\"type\": \"blob\"}]",
        pytest.param("[{\"type\": \"polygon\", \"x\": 1" + "0" * 400 + ", \"vertices\": [0, 0, 1, 0, 0, 1]}]", id="huge-x"),
        pytest.param("[{\"type\": \"circle\", \"radius\": 1" + "0" * 400 + "}]", id="huge-radius"),
        pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
    ])
    def test_malformed_load_leaves_state(self, session, triangle, data):
        session.add(triangle)
        before = session.serialize()
        with pytest.raises(DataFormatError):
            session.load(data)
        assert session.shapes == [triangle]
        assert session.serialize() == before

    def test_load_unknown_key(self, session):
        with pytest.raises(KeyError):
            session.load_key("1999-01-01 00:00:00.000000")

    def test_history_file_round_trip(self, history_path, triangle):
        session = EditorSession(EditorSettings(), HistoryStore(history_path))
        session.add(triangle)
        key = session.save()

        fresh = EditorSession(EditorSettings(), HistoryStore(history_path))
        fresh.load_key(key)
        assert fresh.shapes[0].vertices == triangle.vertices


class TestExport:
    """Tests for physics entity export from a session."""

    def test_export_uses_scale_and_saves(self, session, square, circle):
        session.add(square)
        session.add(circle)
        data = json.loads(session.export(0.5))
        assert len(data) == 1
        assert data[0]["body"]["position"] == {"x": 100, "y": 0}
        assert session.view.scale == 0.5
        assert len(session.store) == 1

    def test_export_default_scale(self, session, triangle):
        session.add(triangle)
        data = json.loads(session.export())
        assert data[0]["data"] == [100, 50, -100, 50, 0, -100]
