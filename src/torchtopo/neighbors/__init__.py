"""Neighbor and incidence computation for edge and triangle meshes.

This module provides vectorized torch functions for the index-only side of
mesh connectivity: vertex-to-edges, vertex-to-triangles, edge-to-edges and
triangle-to-triangles adjacency. Slot-resolved connection records are built
on top of these by `torchtopo.topology`.

All adjacency relationships are returned as Adjacency tensorclass objects using
offset-indices encoding for efficient representation of ragged arrays.
"""

from torchtopo.neighbors._adjacency import Adjacency
from torchtopo.neighbors._element_neighbors import (
    get_edge_to_edges_adjacency,
    get_triangle_to_triangles_adjacency,
)
from torchtopo.neighbors._vertex_neighbors import (
    compute_vertex_incidence,
    get_vertex_to_edges_adjacency,
    get_vertex_to_triangles_adjacency,
)

__all__ = [
    "Adjacency",
    "compute_vertex_incidence",
    "get_vertex_to_edges_adjacency",
    "get_vertex_to_triangles_adjacency",
    "get_edge_to_edges_adjacency",
    "get_triangle_to_triangles_adjacency",
]
