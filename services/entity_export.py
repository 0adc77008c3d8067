"""
Physics entity export.

Converts edited polygons into the entity descriptors loaded by the game:
a static body at the polygon's position with one polygon fixture.

Usage:
    text = export_physics_entities(shapes, scale=0.1)
"""

import json
import logging
from enum import IntFlag
from typing import Any, Dict, Iterable

from models import Polygon, Shape

logger = logging.getLogger(__name__)


# Decimal places kept in exported values
COORDINATE_PRECISION = 2
ANGLE_PRECISION = 3


class Material(IntFlag):
    """Collision category bits. Bodies of disjoint materials collide."""
    MATTER = 1
    ANTIMATTER = 2
    BIMATTER = MATTER | ANTIMATTER


FIXTURE_DEFAULTS = {
    "density": 1.0,
    "friction": 0.5,
    "restitution": 0.2,
}


def round_value(value: float, precision: int):
    """Round to ``precision`` places; integral results come back as int."""
    rounded = round(value, precision)
    if rounded == int(rounded):
        return int(rounded)
    return rounded


def polygon_to_entity(polygon: Polygon, scale: float = 1.0) -> Dict[str, Any]:
    """
    Build the entity descriptor for one polygon.

    Args:
        polygon: Polygon to export
        scale: Factor applied to vertices and position (not the angle)
    """
    vertices = [round_value(c * scale, COORDINATE_PRECISION) for c in polygon.vertices]
    return {
        "shape": "polygon",
        "type": "vector",
        "data": vertices,
        "fixture": {
            **FIXTURE_DEFAULTS,
            "filter": {
                "categoryBits": int(Material.BIMATTER),
            },
        },
        "body": {
            "type": "static",
            "position": {
                "x": round_value(polygon.x * scale, COORDINATE_PRECISION),
                "y": round_value(polygon.y * scale, COORDINATE_PRECISION),
            },
            "angle": round_value(polygon.angle, ANGLE_PRECISION),
        },
        "shapes": [
            {
                "type": polygon.type.value,
                "vertices": vertices,
                "fill": {
                    "type": "color",
                    "alpha": 1,
                },
            }
        ],
    }


def export_physics_entities(shapes: Iterable[Shape], scale: float = 1.0) -> str:
    """Export all polygons as a JSON array of entity descriptors."""
    entities = []
    for shape in shapes:
        if not isinstance(shape, Polygon):
            logger.debug(f"Skipping non-polygon shape {shape.id} ({shape.type.value}) in export")
            continue
        entities.append(polygon_to_entity(shape, scale))
    return json.dumps(entities)
