"""
Pytest configuration and shared fixtures for level shape editor tests.
"""

import math
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Circle, Polygon, Rect
from services import EditorSession, EditorSettings, HistoryStore


# ============== Temporary Directory Fixtures ==============

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    tmp = tempfile.mkdtemp(prefix="shape_editor_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# ============== Shape Fixtures ==============

@pytest.fixture
def triangle() -> Polygon:
    """The editor's default triangle at the origin."""
    return Polygon(id="tri", x=0.0, y=0.0, vertices=[100.0, 50.0, -100.0, 50.0, 0.0, -100.0])


@pytest.fixture
def square() -> Polygon:
    """A 100x100 square centered on (200, 0)."""
    return Polygon(
        id="square",
        x=200.0,
        y=0.0,
        vertices=[-50.0, -50.0, 50.0, -50.0, 50.0, 50.0, -50.0, 50.0],
    )


@pytest.fixture
def rotated_polygon() -> Polygon:
    """An off-center quad, translated and rotated."""
    return Polygon(
        id="rotated",
        x=30.0,
        y=-20.0,
        angle=math.pi / 6,
        vertices=[10.0, 10.0, 90.0, 20.0, 70.0, 80.0, 20.0, 60.0],
    )


@pytest.fixture
def circle() -> Circle:
    return Circle(id="circle", x=-200.0, y=0.0, radius=40.0)


@pytest.fixture
def rect() -> Rect:
    return Rect(id="rect", x=0.0, y=200.0, width=80.0, height=40.0)


# ============== Session Fixtures ==============

@pytest.fixture
def settings() -> EditorSettings:
    return EditorSettings()


@pytest.fixture
def session(settings: EditorSettings) -> EditorSession:
    """Session with an in-memory history store."""
    return EditorSession(settings, HistoryStore())


@pytest.fixture
def history_path(temp_dir: Path) -> Path:
    return temp_dir / "history.json"

