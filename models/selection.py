"""
Selection Models.

The editor can select two kinds of things: whole shapes and individual
polygon vertices. Both are wrapped in small tagged item classes so the drag
code dispatches on an explicit kind instead of duck typing.

Key concepts:
- ShapeItem / VertexItem: The two selectable element kinds
- HitResult: Vertices under the pointer plus their grab offsets
- SelectionSet: Ordered items with one world-space offset per item
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple, Union

from .geometry import Point
from .shapes import Shape
from .vertex import Vertex


class SelectionKind(Enum):
    """Kinds of selectable elements."""
    SHAPE = "shape"
    VERTEX = "vertex"


@dataclass(frozen=True)
class ShapeItem:
    """A whole shape; dragging moves its origin."""
    shape: Shape
    kind: SelectionKind = field(default=SelectionKind.SHAPE, init=False)


@dataclass(frozen=True)
class VertexItem:
    """A single polygon vertex; dragging moves one coordinate pair."""
    vertex: Vertex
    kind: SelectionKind = field(default=SelectionKind.VERTEX, init=False)


Selectable = Union[ShapeItem, VertexItem]


@dataclass
class HitResult:
    """
    Vertices matched by a hit-test.

    Attributes:
        vertices: Matched vertex accessors, in vertex-index order
        offsets: World-space offset (vertex - pointer) for each vertex
    """
    vertices: List[Vertex] = field(default_factory=list)
    offsets: List[Point] = field(default_factory=list)


class SelectionSet:
    """
    Ordered selection with a parallel list of drag offsets.

    ``items[i]`` is always paired with ``offsets[i]``; every mutation keeps
    both lists the same length.
    """

    def __init__(self):
        self._items: List[Selectable] = []
        self._offsets: List[Point] = []

    @property
    def items(self) -> List[Selectable]:
        return list(self._items)

    @property
    def offsets(self) -> List[Point]:
        return list(self._offsets)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def append(self, item: Selectable, offset: Point):
        self._items.append(item)
        self._offsets.append(offset)

    def extend(self, items: List[Selectable], offsets: List[Point]):
        """
        Append several items at once.

        Raises:
            ValueError: If items and offsets differ in length (nothing is added)
        """
        if len(items) != len(offsets):
            raise ValueError(
                f"Selection items and offsets differ in length: {len(items)} != {len(offsets)}"
            )
        self._items.extend(items)
        self._offsets.extend(offsets)

    def add_hit(self, hit: HitResult):
        """Append every vertex of a hit-test result."""
        self.extend([VertexItem(v) for v in hit.vertices], hit.offsets)

    def clear(self):
        self._items = []
        self._offsets = []

    def vertices(self) -> List[Vertex]:
        """Selected vertex accessors (for highlighting)."""
        return [item.vertex for item in self._items if isinstance(item, VertexItem)]

    def shapes(self) -> List[Shape]:
        """Shapes selected as a whole."""
        return [item.shape for item in self._items if isinstance(item, ShapeItem)]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Tuple[Selectable, Point]]:
        return iter(list(zip(self._items, self._offsets)))


__all__ = [
    "SelectionKind",
    "ShapeItem",
    "VertexItem",
    "Selectable",
    "HitResult",
    "SelectionSet",
]
