"""Boundary detection for triangle meshes.

This module provides:
1. Slot-resolved open edges from a built Topology
2. Vectorized boundary edges, vertices and triangles from a Mesh
"""

from torchtopo.boundaries._detection import (
    get_boundary_edges,
    get_boundary_triangles,
    get_boundary_vertices,
    get_open_triangle_edges,
)

__all__ = [
    "get_open_triangle_edges",
    "get_boundary_edges",
    "get_boundary_vertices",
    "get_boundary_triangles",
]
