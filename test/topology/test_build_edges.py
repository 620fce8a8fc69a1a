"""Tests for the edge pass of the topology builder."""

import pytest
import torch

from torchtopo import (
    EdgeLabel,
    EdgePosition,
    EdgeToEdge,
    EdgeToTri,
    MeshBuilder,
    Topology,
    VertexToEdge,
)
from torchtopo.mesh import Mesh


def make_star_mesh():
    """Edges (0, 1), (1, 2), (1, 3) and the triangle (1, 0, 3)."""
    return (
        MeshBuilder()
        .add_vertex([0.0, 0.0])
        .add_vertex([1.0, 0.0])
        .add_vertex([1.0, -1.0])
        .add_vertex([1.0, 1.0])
        .add_edge(0, 1)
        .add_edge(1, 2)
        .add_edge(1, 3)
        .add_tri(1, 0, 3)
        .build()
    )


class TestEdgeToEdge:
    """Endpoint-sharing connections between edges."""

    def test_star(self, strategy):
        topology = Topology(make_star_mesh(), strategy=strategy).build_edges()

        assert len(topology.edges) == 3

        ### First vertex of edges 1 and 2 touches the second vertex of edge 0
        assert topology.edges[0].edge_connections == [
            EdgeToEdge(1, VertexToEdge(1, 0)),
            EdgeToEdge(1, VertexToEdge(2, 0)),
        ]
        assert topology.edges[1].edge_connections == [
            EdgeToEdge(0, VertexToEdge(0, 1)),
            EdgeToEdge(0, VertexToEdge(2, 0)),
        ]

    def test_symmetry(self, grid_mesh, strategy):
        """Every connection has a mirrored connection on the neighbouring edge."""
        topology = Topology(grid_mesh, strategy=strategy).build_edges()

        for i0, edge_topology in enumerate(topology.edges):
            for c in edge_topology.edge_connections:
                mirrored = EdgeToEdge(
                    c.neighbour.connecting_vertex,
                    VertexToEdge(i0, c.connecting_vertex),
                )
                assert mirrored in topology.edges[c.neighbour.edge_index].edge_connections

    def test_connections_share_the_recorded_vertex(self, grid_mesh):
        topology = Topology(grid_mesh).build_edges()
        edges = grid_mesh.edges.tolist()

        for i0, edge_topology in enumerate(topology.edges):
            for c in edge_topology.edge_connections:
                neighbour_edge = edges[c.neighbour.edge_index]
                assert edges[i0][c.connecting_vertex] == neighbour_edge[c.neighbour.connecting_vertex]

    def test_duplicate_edge_touches_at_both_endpoints(self, strategy):
        """(0, 1) and (1, 0) coincide at both of their endpoints."""
        mesh = Mesh(points=torch.zeros((2, 2)), edges=torch.tensor([[0, 1], [1, 0]]))
        topology = Topology(mesh, strategy=strategy).build_edges()

        assert topology.edges[0].edge_connections == [
            EdgeToEdge(0, VertexToEdge(1, 1)),
            EdgeToEdge(1, VertexToEdge(1, 0)),
        ]

    def test_no_self_adjacency(self, grid_mesh, strategy):
        topology = Topology(grid_mesh, strategy=strategy).build_edges()

        for i, edge_topology in enumerate(topology.edges):
            assert all(c.neighbour.edge_index != i for c in edge_topology.edge_connections)


class TestEdgeToTri:
    """Connections between edges and the triangles containing them."""

    def test_star(self, strategy):
        topology = Topology(make_star_mesh(), strategy=strategy).build_edges()

        ### Edge (0, 1) is the reversed first edge of triangle (1, 0, 3)
        assert topology.edges[0].tri_connections == [
            EdgeToTri(0, EdgePosition(EdgeLabel.E0, True))
        ]
        assert topology.edges[1].tri_connections == []
        ### Edge (1, 3) is the reversed third edge (3, 1)
        assert topology.edges[2].tri_connections == [
            EdgeToTri(0, EdgePosition(EdgeLabel.E2, True))
        ]

    def test_interior_edges_have_two_triangles(self, grid_mesh):
        """On a grid every edge borders one or two triangles."""
        topology = Topology(grid_mesh).build_edges()
        counts = [len(e.tri_connections) for e in topology.edges]

        n_boundary_edges = 2 * (3 + 2)
        assert counts.count(1) == n_boundary_edges
        assert counts.count(2) == len(counts) - n_boundary_edges

    def test_edges_without_triangles(self, strategy):
        mesh = Mesh(points=torch.zeros((3, 2)), edges=torch.tensor([[0, 1], [1, 2]]))
        topology = Topology(mesh, strategy=strategy).build_edges()

        assert [e.tri_connections for e in topology.edges] == [[], []]


class TestBuildEdgesLifecycle:
    def test_idempotent(self, grid_mesh):
        topology = Topology(grid_mesh).build_edges()
        first = [(list(e.edge_connections), list(e.tri_connections)) for e in topology.edges]

        topology.build_edges()

        assert len(topology.edges) == grid_mesh.n_edges
        assert first == [(e.edge_connections, e.tri_connections) for e in topology.edges]

    def test_out_of_range_vertex(self, strategy):
        mesh = Mesh(points=torch.zeros((2, 2)), edges=torch.tensor([[0, 1], [1, 2]]))

        with pytest.raises(IndexError):
            Topology(mesh, strategy=strategy).build_edges()
