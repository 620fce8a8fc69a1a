"""Local labels of vertices and edges inside mesh elements.

Local numbering of a triangle::

    V2
      *
      |`\\
      |  `\\   E1
   E2 |    `\\
      |      `\\
      *--------*
    V0    E0    V1

E0 runs from V0 to V1, E1 from V1 to V2 and E2 from V2 back to V0.
"""

import operator
from enum import IntEnum
from typing import NamedTuple


class VertexLabel(IntEnum):
    """Slot of a vertex inside an element (V0, V1 for edges, V0..V2 for triangles)."""

    V0 = 0
    V1 = 1
    V2 = 2

    def to_index(self) -> int:
        return int(self)

    @classmethod
    def from_index(cls, index: int, n_slots: int = 3) -> "VertexLabel":
        """Convert a local vertex index into a label.

        Args:
            index: Local position of the vertex in its element.
            n_slots: Number of vertices of the element (2 for edges, 3 for
                triangles).

        Raises:
            TypeError: If `index` is not an integer.
            ValueError: If `index` is not a valid slot of an `n_slots`-vertex
                element.
        """
        index = operator.index(index)
        if not 0 <= index < min(n_slots, len(cls)):
            raise ValueError(
                f"Vertex label index must lie in [0, {min(n_slots, len(cls))}), "
                f"but got {index=} for an element with {n_slots=}."
            )
        return cls(index)


class EdgeLabel(IntEnum):
    """Slot of a canonical edge inside a triangle."""

    E0 = 0
    E1 = 1
    E2 = 2

    def to_index(self) -> int:
        return int(self)

    @classmethod
    def from_index(cls, index: int) -> "EdgeLabel":
        """Convert a local edge index into a label.

        Raises:
            TypeError: If `index` is not an integer.
            ValueError: If `index` is not in [0, 3).
        """
        index = operator.index(index)
        if not 0 <= index < len(cls):
            raise ValueError(
                f"Edge label index must lie in [0, {len(cls)}), but got {index=}."
            )
        return cls(index)

    @property
    def vertex_labels(self) -> tuple[VertexLabel, VertexLabel]:
        """Triangle vertex slots (start, end) of this edge in canonical direction."""
        return _EDGE_VERTEX_LABELS[self]


_EDGE_VERTEX_LABELS = {
    EdgeLabel.E0: (VertexLabel.V0, VertexLabel.V1),
    EdgeLabel.E1: (VertexLabel.V1, VertexLabel.V2),
    EdgeLabel.E2: (VertexLabel.V2, VertexLabel.V0),
}


class EdgePosition(NamedTuple):
    """Slot of an edge inside a triangle and its orientation there.

    `is_reversed` is True when the stored vertex order of the edge runs
    against the triangle's canonical direction for `label`.
    """

    label: EdgeLabel
    is_reversed: bool
