"""Connection records between mesh elements.

Each record stores the index of a neighbouring element together with the
local slot through which the two elements touch. Records are immutable and
compare by value. Local slots may be given either as labels or as plain
integers; integers are converted on construction and rejected with a
`ValueError` when they do not name a slot of the element kind involved.
"""

from dataclasses import dataclass

from torchtopo.connections._labels import EdgeLabel, EdgePosition, VertexLabel


def _set(record, name: str, value) -> None:
    object.__setattr__(record, name, value)


def _as_edge_position(position) -> EdgePosition:
    label, is_reversed = position
    if not isinstance(is_reversed, bool):
        raise TypeError(
            f"`is_reversed` must be a bool, but got {type(is_reversed).__name__} {is_reversed=}."
        )
    return EdgePosition(EdgeLabel.from_index(label), is_reversed)


@dataclass(frozen=True)
class VertexToEdge:
    """Vertex is slot `connecting_vertex` of edge `edge_index`."""

    edge_index: int
    connecting_vertex: VertexLabel

    def __post_init__(self):
        _set(
            self,
            "connecting_vertex",
            VertexLabel.from_index(self.connecting_vertex, n_slots=2),
        )


@dataclass(frozen=True)
class VertexToTri:
    """Vertex is slot `connecting_vertex` of triangle `tri_index`."""

    tri_index: int
    connecting_vertex: VertexLabel

    def __post_init__(self):
        _set(
            self,
            "connecting_vertex",
            VertexLabel.from_index(self.connecting_vertex, n_slots=3),
        )


@dataclass(frozen=True)
class EdgeToEdge:
    """Endpoint `connecting_vertex` of this edge coincides with an endpoint of
    `neighbour.edge_index`, namely its slot `neighbour.connecting_vertex`.
    """

    connecting_vertex: VertexLabel
    neighbour: VertexToEdge

    def __post_init__(self):
        _set(
            self,
            "connecting_vertex",
            VertexLabel.from_index(self.connecting_vertex, n_slots=2),
        )


@dataclass(frozen=True)
class EdgeToTri:
    """Edge is edge `connecting_edge.label` of triangle `tri_index`.

    `connecting_edge.is_reversed` tells whether the edge's stored vertex order
    opposes the triangle's canonical direction for that slot.
    """

    tri_index: int
    connecting_edge: EdgePosition

    def __post_init__(self):
        _set(self, "connecting_edge", _as_edge_position(self.connecting_edge))


@dataclass(frozen=True)
class TriToTri:
    """Edge `connecting_edge` of this triangle is shared with triangle
    `neighbour.tri_index`, where it sits at `neighbour.connecting_edge`.
    """

    connecting_edge: EdgeLabel
    neighbour: EdgeToTri

    def __post_init__(self):
        _set(self, "connecting_edge", EdgeLabel.from_index(self.connecting_edge))
