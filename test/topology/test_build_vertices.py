"""Tests for the vertex pass of the topology builder."""

import pytest
import torch

from torchtopo import MeshBuilder, Topology, VertexLabel, VertexToEdge, VertexToTri
from torchtopo.mesh import Mesh


def make_edge_and_tri_mesh():
    """One edge (0, 1) and one triangle (2, 0, 1)."""
    return (
        MeshBuilder()
        .add_vertex([0.0, 0.0])
        .add_vertex([1.0, 0.0])
        .add_vertex([0.0, 1.0])
        .add_edge(0, 1)
        .add_tri(2, 0, 1)
        .build()
    )


class TestBuildVertices:
    """Incident edges and triangles of each vertex."""

    def test_single_edge_and_triangle(self, strategy):
        topology = Topology(make_edge_and_tri_mesh(), strategy=strategy).build_vertices()

        assert len(topology.vertices) == 3

        v0, v1, v2 = topology.vertices
        ### Edge touches vertex 0 through its first slot, triangle through its second
        assert v0.incident_edges == [VertexToEdge(0, VertexLabel.V0)]
        assert v0.incident_tris == [VertexToTri(0, VertexLabel.V1)]

        assert v1.incident_edges == [VertexToEdge(0, VertexLabel.V1)]
        assert v1.incident_tris == [VertexToTri(0, VertexLabel.V2)]

        assert v2.incident_edges == []
        assert v2.incident_tris == [VertexToTri(0, VertexLabel.V0)]

    def test_square_first_vertex(self, square_mesh):
        """Vertex 0 is V0 of triangle 0 and V2 of triangle 1."""
        topology = Topology(square_mesh).build_vertices()

        v0 = topology.vertices[0]
        assert v0.incident_tris[0].tri_index == 0
        assert v0.incident_tris[0].connecting_vertex.to_index() == 0
        assert v0.incident_tris[1].tri_index == 1
        assert v0.incident_tris[1].connecting_vertex.to_index() == 2

    def test_incidence_counts_and_literal_slots(self, grid_mesh):
        """Each vertex gets one record per occurrence, with its literal slot."""
        topology = Topology(grid_mesh).build_vertices()
        edges = grid_mesh.edges.tolist()
        triangles = grid_mesh.triangles.tolist()

        for v, vertex_topology in enumerate(topology.vertices):
            n_edges = sum(edge.count(v) for edge in edges)
            n_tris = sum(tri.count(v) for tri in triangles)
            assert len(vertex_topology.incident_edges) == n_edges
            assert len(vertex_topology.incident_tris) == n_tris

            for c in vertex_topology.incident_edges:
                assert edges[c.edge_index][c.connecting_vertex] == v
            for c in vertex_topology.incident_tris:
                assert triangles[c.tri_index][c.connecting_vertex] == v

    def test_isolated_vertices(self):
        """Vertices not referenced by any element get empty lists."""
        mesh = Mesh(points=torch.zeros((5, 2)), edges=torch.tensor([[0, 1]]))
        topology = Topology(mesh).build_vertices()

        assert len(topology.vertices) == 5
        for vertex_topology in topology.vertices[2:]:
            assert vertex_topology.incident_edges == []
            assert vertex_topology.incident_tris == []

    def test_idempotent(self, grid_mesh):
        """Rebuilding clears previous results and reproduces them exactly."""
        topology = Topology(grid_mesh).build_vertices()
        first = [
            (list(v.incident_edges), list(v.incident_tris)) for v in topology.vertices
        ]

        topology.build_vertices()
        second = [(v.incident_edges, v.incident_tris) for v in topology.vertices]

        assert len(topology.vertices) == grid_mesh.n_points
        assert first == second

    def test_out_of_range_vertex(self):
        """A triangle referencing a missing vertex is a fatal error."""
        mesh = Mesh(points=torch.zeros((3, 2)), triangles=torch.tensor([[0, 1, 3]]))

        with pytest.raises(IndexError, match="triangles"):
            Topology(mesh).build_vertices()

    def test_negative_vertex(self):
        """Negative indices are not wrapped around."""
        mesh = Mesh(points=torch.zeros((3, 2)), edges=torch.tensor([[0, -1]]))

        with pytest.raises(IndexError, match="edges"):
            Topology(mesh).build_vertices()
