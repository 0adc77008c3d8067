"""Views package."""

from .shape_painter import ShapePainter
from .editor_canvas import EditorCanvas
from .main_window import MainWindow

__all__ = [
    "ShapePainter",
    "EditorCanvas",
    "MainWindow",
]
