"""Compute vertex-based incidence in edge and triangle meshes.

This module provides functions to compute:
- Vertex incidence of an arbitrary element array (slot-resolved)
- Vertex-to-edges adjacency (edges touching each vertex)
- Vertex-to-triangles adjacency (star of each vertex)
"""

from typing import TYPE_CHECKING

import torch

from torchtopo.neighbors._adjacency import Adjacency
from torchtopo.utilities import check_vertex_indices

if TYPE_CHECKING:
    from torchtopo.mesh import Mesh


def compute_vertex_incidence(
    elements: torch.Tensor,
    n_vertices: int,
    name: str = "elements",
) -> Adjacency:
    """Find every occurrence of every vertex in an element array.

    Occurrences are encoded as flat slot positions `element * k + slot`, where
    `k = elements.shape[1]`, so both the element index (`// k`) and the local
    slot (`% k`) can be recovered. For each vertex, occurrences are ordered by
    element index, then by slot.

    Args:
        elements: Integer tensor of shape (n_elements, k).
        n_vertices: Number of vertices in the pool.
        name: Name of the element array, used in error messages.

    Returns:
        Adjacency with `n_vertices` sources.

    Raises:
        IndexError: If an element references a vertex outside [0, n_vertices).

    Example:
        >>> tris = torch.tensor([[0, 1, 2], [2, 3, 0]])
        >>> compute_vertex_incidence(tris, 4).to_list()
        [[0, 5], [1], [2, 3], [4]]
    """
    device = elements.device
    if elements.shape[0] == 0:
        return Adjacency.no_neighbors(n_vertices, device=device)

    check_vertex_indices(elements, n_vertices, name)

    ### Flatten; position p in the flat array is element p // k, slot p % k
    vertex_ids = elements.reshape(-1).to(torch.int64)

    ### Group by vertex; a stable sort keeps positions ascending inside a group
    sorted_vertex_ids, flat_positions = torch.sort(vertex_ids, stable=True)

    offsets = torch.zeros(n_vertices + 1, dtype=torch.int64, device=device)
    offsets[1:] = torch.cumsum(
        torch.bincount(sorted_vertex_ids, minlength=n_vertices), dim=0
    )

    return Adjacency(offsets=offsets, indices=flat_positions)


def get_vertex_to_edges_adjacency(mesh: "Mesh") -> Adjacency:
    """Compute the edges incident to each vertex.

    A degenerate edge (v, v) is listed twice for v, once per slot.

    Example:
        >>> edges = torch.tensor([[0, 1], [1, 2]])
        >>> # -> [[0], [0, 1], [1]]
    """
    incidence = compute_vertex_incidence(mesh.edges, mesh.n_points, name="edges")
    return Adjacency(offsets=incidence.offsets, indices=incidence.indices // 2)


def get_vertex_to_triangles_adjacency(mesh: "Mesh") -> Adjacency:
    """Compute the star of each vertex (all triangles containing it).

    Example:
        >>> triangles = torch.tensor([[0, 1, 2], [2, 3, 0]])
        >>> # -> [[0, 1], [0], [0, 1], [1]]
    """
    incidence = compute_vertex_incidence(
        mesh.triangles, mesh.n_points, name="triangles"
    )
    return Adjacency(offsets=incidence.offsets, indices=incidence.indices // 3)
