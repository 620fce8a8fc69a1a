"""Boundary detection for triangle meshes.

A triangle edge is on the boundary if it belongs to only one triangle.
"""

from typing import TYPE_CHECKING

import torch

from torchtopo.connections import EdgeLabel
from torchtopo.neighbors._element_neighbors import TRIANGLE_EDGE_SLOTS
from torchtopo.utilities import check_vertex_indices

if TYPE_CHECKING:
    from torchtopo.mesh import Mesh
    from torchtopo.topology import Topology


def get_open_triangle_edges(topology: "Topology") -> list[tuple[int, EdgeLabel]]:
    """List the canonical triangle edges that have no neighbouring triangle.

    Args:
        topology: Topology on which `build_triangles()` has been run.

    Returns:
        `(triangle index, edge label)` pairs, by triangle then by label.

    Raises:
        ValueError: If `topology.tris` is not aligned with the mesh triangles.

    Example:
        >>> # Unit square split along its diagonal (0, 2)
        >>> get_open_triangle_edges(topology)
        [(0, <EdgeLabel.E0: 0>), (0, <EdgeLabel.E1: 1>), (1, <EdgeLabel.E0: 0>), (1, <EdgeLabel.E1: 1>)]
    """
    n_triangles = topology.mesh.n_triangles
    if len(topology.tris) != n_triangles:
        raise ValueError(
            f"Triangle topology is not built for this mesh, got {len(topology.tris)=} "
            f"for {n_triangles=}. Call `build_triangles()` first."
        )

    open_edges = []
    for i, tri_topology in enumerate(topology.tris):
        connected = {c.connecting_edge for c in tri_topology.tri_connections}
        open_edges.extend((i, label) for label in EdgeLabel if label not in connected)
    return open_edges


def _count_triangle_edge_uses(mesh: "Mesh") -> tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    """Unique sorted triangle edges, the number of triangles using each, and
    the unique-edge index of every candidate edge (triangle-major order).
    """
    check_vertex_indices(mesh.triangles, mesh.n_points, "triangles")
    edge_slots = TRIANGLE_EDGE_SLOTS.to(mesh.triangles.device)
    candidate_edges = torch.sort(mesh.triangles[:, edge_slots], dim=-1)[0].reshape(-1, 2)

    unique_edges, inverse_indices, counts = torch.unique(
        candidate_edges, dim=0, return_inverse=True, return_counts=True
    )
    return unique_edges, counts, inverse_indices


def get_boundary_edges(mesh: "Mesh") -> torch.Tensor:
    """Identify the triangle edges used by exactly one triangle.

    Returns:
        Tensor of shape (n_boundary_edges, 2), smaller vertex index first,
        sorted lexicographically.

    Note:
        For closed surfaces, returns an empty (0, 2) tensor.
    """
    device = mesh.triangles.device
    if mesh.n_triangles == 0:
        return torch.zeros((0, 2), dtype=torch.int64, device=device)

    unique_edges, counts, _ = _count_triangle_edge_uses(mesh)
    return unique_edges[counts == 1]


def get_boundary_vertices(mesh: "Mesh") -> torch.Tensor:
    """Identify vertices that lie on a boundary edge.

    Returns:
        Boolean tensor of shape (n_points,). Isolated vertices are not marked.
    """
    device = mesh.triangles.device
    is_boundary_vertex = torch.zeros(mesh.n_points, dtype=torch.bool, device=device)

    boundary_edges = get_boundary_edges(mesh)
    if len(boundary_edges) > 0:
        is_boundary_vertex[boundary_edges.reshape(-1)] = True

    return is_boundary_vertex


def get_boundary_triangles(mesh: "Mesh") -> torch.Tensor:
    """Identify triangles having at least one boundary edge.

    Returns:
        Boolean tensor of shape (n_triangles,).
    """
    device = mesh.triangles.device
    if mesh.n_triangles == 0:
        return torch.zeros(0, dtype=torch.bool, device=device)

    _, counts, inverse_indices = _count_triangle_edge_uses(mesh)

    ### Candidate edge 3 * t + k is edge k of triangle t
    is_boundary_candidate = (counts == 1)[inverse_indices].reshape(-1, 3)
    return is_boundary_candidate.any(dim=1)
