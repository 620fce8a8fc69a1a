"""Compute element-to-element adjacency in edge and triangle meshes.

This module provides functions to compute:
- Edge-to-edges adjacency based on shared endpoints
- Triangle-to-triangles adjacency based on shared edges
"""

from typing import TYPE_CHECKING

import torch

from torchtopo.neighbors._adjacency import Adjacency
from torchtopo.neighbors._vertex_neighbors import compute_vertex_incidence
from torchtopo.utilities import check_vertex_indices

if TYPE_CHECKING:
    from torchtopo.mesh import Mesh


### Local vertex pairs of the canonical edges E0, E1, E2 of a triangle
TRIANGLE_EDGE_SLOTS = torch.tensor([[0, 1], [1, 2], [2, 0]], dtype=torch.int64)


def _pairs_within_groups(
    offsets: torch.Tensor,
    members: torch.Tensor,
) -> tuple[torch.Tensor, torch.Tensor]:
    """Generate every ordered (source, target) pair of members sharing a group.

    Group g owns `members[offsets[g]:offsets[g + 1]]`. Self pairs are included
    and removed by the caller.
    """
    device = members.device
    group_counts = offsets[1:] - offsets[:-1]

    ### For each member: size and start of the group it belongs to
    group_size_per_member = group_counts.repeat_interleave(group_counts)
    group_start_per_member = offsets[:-1].repeat_interleave(group_counts)

    ### Each member is paired with every member of its own group
    n_pairs = int(group_size_per_member.sum())
    sources = members.repeat_interleave(group_size_per_member)

    block_starts = torch.cumsum(group_size_per_member, dim=0) - group_size_per_member
    local = torch.arange(n_pairs, device=device) - block_starts.repeat_interleave(
        group_size_per_member
    )
    targets = members[group_start_per_member.repeat_interleave(group_size_per_member) + local]

    return sources, targets


def _pairs_to_adjacency(
    sources: torch.Tensor,
    targets: torch.Tensor,
    n_sources: int,
) -> Adjacency:
    """Pack ordered pairs into an Adjacency, dropping self pairs and duplicates."""
    device = sources.device

    mask = sources != targets
    if not mask.any():
        return Adjacency.no_neighbors(n_sources, device=device)

    ### torch.unique sorts rows lexicographically, grouping them by source
    pairs = torch.unique(torch.stack([sources[mask], targets[mask]], dim=1), dim=0)

    offsets = torch.zeros(n_sources + 1, dtype=torch.int64, device=device)
    offsets[1:] = torch.cumsum(
        torch.bincount(pairs[:, 0], minlength=n_sources), dim=0
    )

    return Adjacency(offsets=offsets, indices=pairs[:, 1])


def get_edge_to_edges_adjacency(mesh: "Mesh") -> Adjacency:
    """Compute edge-to-edges adjacency based on shared endpoints.

    Two distinct edges are adjacent when any endpoint of one coincides with
    any endpoint of the other (vertex-star connectivity of the 1-complex).
    Each neighbour appears once, in ascending order.

    Example:
        >>> # Edges (0, 1), (1, 2), (1, 3)
        >>> # -> [[1, 2], [0, 2], [0, 1]]
    """
    device = mesh.edges.device
    if mesh.n_edges == 0:
        return Adjacency.no_neighbors(0, device=device)

    incidence = compute_vertex_incidence(mesh.edges, mesh.n_points, name="edges")
    sources, targets = _pairs_within_groups(incidence.offsets, incidence.indices // 2)

    return _pairs_to_adjacency(sources, targets, mesh.n_edges)


def get_triangle_to_triangles_adjacency(mesh: "Mesh") -> Adjacency:
    """Compute triangle-to-triangles adjacency based on shared edges.

    Two distinct triangles are adjacent when they share an unordered vertex
    pair as one of their canonical edges, whatever the orientation. Each
    neighbour appears once, in ascending order.

    Example:
        >>> # Triangles (0, 1, 2) and (2, 3, 0) of a split unit square
        >>> # -> [[1], [0]]
    """
    device = mesh.triangles.device
    n_triangles = mesh.n_triangles
    if n_triangles == 0:
        return Adjacency.no_neighbors(0, device=device)

    check_vertex_indices(mesh.triangles, mesh.n_points, "triangles")

    ### Candidate edges, sorted within each edge so orientation is ignored
    # Shape: (n_triangles * 3, 2)
    edge_slots = TRIANGLE_EDGE_SLOTS.to(device)
    candidate_edges = torch.sort(mesh.triangles[:, edge_slots], dim=-1)[0].reshape(-1, 2)
    parent_triangles = torch.arange(
        n_triangles, dtype=torch.int64, device=device
    ).repeat_interleave(3)

    ### Group the candidates by unique edge
    _, inverse_indices, counts = torch.unique(
        candidate_edges, dim=0, return_inverse=True, return_counts=True
    )
    order = torch.argsort(inverse_indices, stable=True)
    offsets = torch.zeros(len(counts) + 1, dtype=torch.int64, device=device)
    offsets[1:] = torch.cumsum(counts, dim=0)

    sources, targets = _pairs_within_groups(offsets, parent_triangles[order])

    return _pairs_to_adjacency(sources, targets, n_triangles)
