"""
Unit tests for the editor view state.
"""

from models import ViewState


class TestViewState:
    """Tests for ViewState."""

    def test_pan_is_unscaled(self):
        view = ViewState(scale=0.1)
        view.pan(10, -4)
        view.pan(2, 2)
        assert (view.translate_x, view.translate_y) == (12, -2)

    def test_reset_centers_origin(self):
        view = ViewState(translate_x=99, translate_y=-3)
        view.reset(640, 480)
        assert (view.translate_x, view.translate_y) == (320, 240)

    def test_screen_world_round_trip(self):
        view = ViewState(translate_x=320, translate_y=240)
        world = view.screen_to_world(330, 200)
        assert world.to_tuple() == (10, -40)
        assert view.world_to_screen(world.x, world.y).to_tuple() == (330, 200)

    def test_invalid_scale_falls_back(self):
        assert ViewState(scale=0).scale == 1.0
        assert ViewState(scale=-2).scale == 1.0
        view = ViewState(scale=2)
        view.set_scale(None)
        assert view.scale == 1.0
        view.set_scale(0.25)
        assert view.scale == 0.25
