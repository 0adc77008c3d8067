"""
Editor view state and edit modes.
"""

from dataclasses import dataclass
from enum import Enum, auto

from .geometry import Point


class EditMode(Enum):
    """What a pointer-down does. Chosen by the host from held keys."""
    SELECT = auto()
    ADD_SHAPE = auto()
    DELETE_SHAPE = auto()
    INSERT_VERTEX = auto()
    REMOVE_VERTEX = auto()


@dataclass
class ViewState:
    """
    Pan translation and export scale of an editing session.

    The translation maps world to screen as ``screen = world + translate``.
    Panning adds raw pointer deltas without dividing by the scale, since
    shapes are drawn under the same translation.

    Attributes:
        translate_x: Screen X of the world origin
        translate_y: Screen Y of the world origin
        scale: Export scale factor (world units per physics unit)
    """
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        if not self.scale or self.scale <= 0:
            self.scale = 1.0

    def pan(self, dx: float, dy: float):
        self.translate_x += dx
        self.translate_y += dy

    def reset(self, width: float, height: float):
        """Center the world origin on a canvas of the given size."""
        self.translate_x = 0.5 * width
        self.translate_y = 0.5 * height

    def set_scale(self, scale: float):
        self.scale = scale if scale and scale > 0 else 1.0

    def screen_to_world(self, sx: float, sy: float) -> Point:
        return Point(sx - self.translate_x, sy - self.translate_y)

    def world_to_screen(self, x: float, y: float) -> Point:
        return Point(x + self.translate_x, y + self.translate_y)
