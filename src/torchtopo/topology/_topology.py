"""Slot-resolved topology of edge and triangle meshes.

The builder runs three independent passes (vertices, edges, triangles). Each
pass clears its own output list and repopulates it, one entry per mesh
element, so the outputs stay index-aligned with the mesh arrays.

Two strategies produce identical output:
- "pairwise": tests every ordered pair of elements, O(E^2), O(E*T), O(T^2)
- "indexed": first indexes the elements touching each vertex, then only tests
  pairs that share a vertex, visiting neighbours in ascending index order
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from torchtopo.connections import (
    EdgeLabel,
    EdgeToEdge,
    EdgeToTri,
    TriToTri,
    VertexLabel,
    VertexToEdge,
    VertexToTri,
    common_edge,
    match_edge_in_tri,
)
from torchtopo.neighbors import compute_vertex_incidence
from torchtopo.utilities import check_vertex_indices

if TYPE_CHECKING:
    from torchtopo.mesh import Mesh

logger = logging.getLogger(__name__)

STRATEGIES = ("indexed", "pairwise")


@dataclass
class VertexTopology:
    """Edges and triangles incident to a vertex."""

    incident_edges: list[VertexToEdge] = field(default_factory=list)
    incident_tris: list[VertexToTri] = field(default_factory=list)


@dataclass
class EdgeTopology:
    """Edges sharing an endpoint with an edge, and triangles containing it."""

    edge_connections: list[EdgeToEdge] = field(default_factory=list)
    tri_connections: list[EdgeToTri] = field(default_factory=list)


@dataclass
class TriTopology:
    """Triangles sharing an edge with a triangle."""

    tri_connections: list[TriToTri] = field(default_factory=list)

    def neighbour_across(self, label: EdgeLabel | int) -> TriToTri | None:
        """First connection through edge `label` of this triangle, or None on a boundary."""
        label = EdgeLabel.from_index(label)
        for connection in self.tri_connections:
            if connection.connecting_edge == label:
                return connection
        return None


class Topology:
    """Topology information of a mesh.

    The topology keeps a reference to `mesh` and reads its element arrays at
    the start of every build pass. Modifying the mesh's arrays invalidates
    what has been built; rebuild after any change. The mesh must not be
    modified while a pass is running.

    Attributes:
        mesh: The mesh the topology is built upon.
        n_vertices: Number of vertices, fixed at construction.
        vertices: One VertexTopology per mesh vertex, after `build_vertices()`.
        edges: One EdgeTopology per mesh edge, after `build_edges()`.
        tris: One TriTopology per mesh triangle, after `build_triangles()`.

    Example:
        >>> mesh = Mesh(
        ...     points=torch.tensor([[0., 0.], [1., 0.], [1., 1.], [0., 1.]]),
        ...     triangles=torch.tensor([[0, 1, 2], [2, 3, 0]]),
        ... )
        >>> topology = Topology(mesh).build_vertices().build_triangles()
        >>> topology.tris[0].tri_connections[0].neighbour.tri_index
        1
    """

    def __init__(
        self,
        mesh: "Mesh",
        strategy: Literal["indexed", "pairwise"] = "indexed",
    ):
        if strategy not in STRATEGIES:
            raise ValueError(
                f"`strategy` must be one of {STRATEGIES}, but got {strategy=}."
            )
        self.mesh = mesh
        self.strategy = strategy
        self.n_vertices: int = mesh.n_points
        self.vertices: list[VertexTopology] = []
        self.edges: list[EdgeTopology] = []
        self.tris: list[TriTopology] = []

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_vertices={self.n_vertices}, "
            f"n_edges={len(self.edges)}, n_tris={len(self.tris)}, "
            f"strategy={self.strategy!r})"
        )

    def build(self) -> "Topology":
        """Run the vertex, edge and triangle passes."""
        return self.build_vertices().build_edges().build_triangles()

    def build_vertices(self) -> "Topology":
        """Build the incident edges and triangles of every vertex.

        Vertex v receives `VertexToEdge(i, slot)` for each slot of edge i equal
        to v, then `VertexToTri(j, slot)` likewise for triangle j, in element
        order.

        Raises:
            IndexError: If an edge or triangle references a vertex outside
                [0, n_vertices).
        """
        self.vertices = [VertexTopology() for _ in range(self.n_vertices)]

        edges = self._read_elements("edges")
        tris = self._read_elements("triangles")

        for i, (v0, v1) in enumerate(edges):
            self.vertices[v0].incident_edges.append(VertexToEdge(i, VertexLabel.V0))
            self.vertices[v1].incident_edges.append(VertexToEdge(i, VertexLabel.V1))

        for i, (v0, v1, v2) in enumerate(tris):
            self.vertices[v0].incident_tris.append(VertexToTri(i, VertexLabel.V0))
            self.vertices[v1].incident_tris.append(VertexToTri(i, VertexLabel.V1))
            self.vertices[v2].incident_tris.append(VertexToTri(i, VertexLabel.V2))

        logger.debug(
            "Built vertex topology: %d vertices, %d edges, %d triangles.",
            self.n_vertices,
            len(edges),
            len(tris),
        )
        return self

    def build_edges(self) -> "Topology":
        """Build the edge and triangle connections of every edge.

        Edge-to-edge connections record endpoint sharing: for every other
        edge, each coincidence between one of this edge's endpoints and one of
        the other edge's endpoints yields an `EdgeToEdge`. Edge-to-triangle
        connections record every triangle having this edge as one of its
        canonical edges, in either orientation.

        Raises:
            IndexError: If an edge or triangle references a vertex outside
                [0, n_vertices).
        """
        self.edges = []
        edges = self._read_elements("edges")
        tris = self._read_elements("triangles")
        self.edges = [EdgeTopology() for _ in range(len(edges))]

        if self.strategy == "pairwise":
            self._connect_edges_pairwise(edges)
            self._connect_edges_to_tris_pairwise(edges, tris)
        else:
            self._connect_edges_indexed(edges)
            self._connect_edges_to_tris_indexed(edges, tris)

        logger.debug(
            "Built edge topology: %d edges, %d edge connections, %d triangle connections.",
            len(self.edges),
            sum(len(e.edge_connections) for e in self.edges),
            sum(len(e.tri_connections) for e in self.edges),
        )
        return self

    def build_triangles(self) -> "Topology":
        """Build the neighbouring triangles of every triangle.

        Triangle i0 receives `TriToTri(label, EdgeToTri(i1, position))` for
        every other triangle i1 sharing a full edge with it, where `label` is
        the edge's slot in i0 and `position` its slot and orientation in i1.

        Raises:
            IndexError: If a triangle references a vertex outside
                [0, n_vertices).
        """
        self.tris = []
        tris = self._read_elements("triangles")
        self.tris = [TriTopology() for _ in range(len(tris))]

        if self.strategy == "pairwise":
            candidates = (
                [i1 for i1 in range(len(tris)) if i1 != i0] for i0 in range(len(tris))
            )
        else:
            candidates = self._tri_candidates(tris)

        for i0, (t0, neighbours) in enumerate(zip(tris, candidates)):
            connections = self.tris[i0].tri_connections
            for i1 in neighbours:
                shared = common_edge(t0, tris[i1])
                if shared is not None:
                    label, position = shared
                    connections.append(TriToTri(label, EdgeToTri(i1, position)))

        logger.debug(
            "Built triangle topology: %d triangles, %d triangle connections.",
            len(self.tris),
            sum(len(t.tri_connections) for t in self.tris),
        )
        return self

    ### Element access

    def _read_elements(self, name: Literal["edges", "triangles"]) -> list[list[int]]:
        elements = getattr(self.mesh, name)
        check_vertex_indices(elements, self.n_vertices, name)
        return elements.tolist()

    def _vertex_incidence(self, name: Literal["edges", "triangles"]) -> list[list[int]]:
        """Flat slot positions (element * k + slot) of each vertex's occurrences."""
        incidence = compute_vertex_incidence(
            getattr(self.mesh, name), self.n_vertices, name=name
        )
        return incidence.to_list()

    ### Pairwise strategy

    def _connect_edges_pairwise(self, edges: list[list[int]]) -> None:
        for i0, (a0, b0) in enumerate(edges):
            connections = self.edges[i0].edge_connections
            for i1, (a1, b1) in enumerate(edges):
                if i1 == i0:
                    continue
                if a1 == a0:
                    connections.append(EdgeToEdge(0, VertexToEdge(i1, 0)))
                if b1 == a0:
                    connections.append(EdgeToEdge(0, VertexToEdge(i1, 1)))
                if a1 == b0:
                    connections.append(EdgeToEdge(1, VertexToEdge(i1, 0)))
                if b1 == b0:
                    connections.append(EdgeToEdge(1, VertexToEdge(i1, 1)))

    def _connect_edges_to_tris_pairwise(
        self, edges: list[list[int]], tris: list[list[int]]
    ) -> None:
        for i, edge in enumerate(edges):
            connections = self.edges[i].tri_connections
            for j, tri in enumerate(tris):
                position = match_edge_in_tri(edge, tri)
                if position is not None:
                    connections.append(EdgeToTri(j, position))

    ### Indexed strategy

    def _connect_edges_indexed(self, edges: list[list[int]]) -> None:
        edge_incidence = self._vertex_incidence("edges")

        for i0, edge in enumerate(edges):
            ### (neighbour, own slot, neighbour slot) sorts like the pairwise loop
            matches = []
            for slot0, vertex in enumerate(edge):
                for flat_position in edge_incidence[vertex]:
                    i1, slot1 = divmod(flat_position, 2)
                    if i1 != i0:
                        matches.append((i1, slot0, slot1))
            matches.sort()

            self.edges[i0].edge_connections.extend(
                EdgeToEdge(slot0, VertexToEdge(i1, slot1)) for i1, slot0, slot1 in matches
            )

    def _connect_edges_to_tris_indexed(
        self, edges: list[list[int]], tris: list[list[int]]
    ) -> None:
        if not tris:
            return
        tri_incidence = self._vertex_incidence("triangles")

        for i, edge in enumerate(edges):
            v0, v1 = edge
            ### A triangle containing the edge contains both of its endpoints
            candidates = {p // 3 for p in tri_incidence[v0]}
            candidates.intersection_update(p // 3 for p in tri_incidence[v1])

            connections = self.edges[i].tri_connections
            for j in sorted(candidates):
                position = match_edge_in_tri(edge, tris[j])
                if position is not None:
                    connections.append(EdgeToTri(j, position))

    def _tri_candidates(self, tris: list[list[int]]) -> list[list[int]]:
        """Triangles sharing at least one vertex with each triangle, ascending."""
        if not tris:
            return []
        tri_incidence = self._vertex_incidence("triangles")

        candidates = []
        for i0, tri in enumerate(tris):
            neighbours = {p // 3 for vertex in tri for p in tri_incidence[vertex]}
            neighbours.discard(i0)
            candidates.append(sorted(neighbours))
        return candidates
