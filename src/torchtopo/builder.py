"""Incremental construction of meshes.

Example:
    >>> builder = MeshBuilder()
    >>> builder.add_vertex([0.0, 0.0]).add_vertex([1.0, 0.0]).add_vertex([0.0, 1.0])
    >>> builder.add_edge(0, 1, tag="bottom").add_tri(2, 0, 1)
    >>> mesh = builder.build()
    >>> builder.edge_tags.get_registered_indices("bottom")
    [0]
"""

from typing import Sequence

import torch

from torchtopo.mesh import Mesh
from torchtopo.tags import TagSet


class MeshBuilder:
    """Accumulates vertices, edges and triangles, then packs them into a Mesh.

    Every `add_*` method returns the builder so calls can be chained. Element
    indices are not checked here; out-of-range vertex references surface when
    the mesh topology is built.

    Args:
        n_spatial_dims: Number of coordinates per vertex.
    """

    def __init__(self, n_spatial_dims: int = 2):
        if n_spatial_dims < 1:
            raise ValueError(f"`n_spatial_dims` must be positive, but got {n_spatial_dims=}.")
        self.n_spatial_dims = n_spatial_dims
        self.vertices: list[list[float]] = []
        self.edges: list[list[int]] = []
        self.triangles: list[list[int]] = []
        self.vertex_tags = TagSet()
        self.edge_tags = TagSet()
        self.triangle_tags = TagSet()

    def add_vertex(self, coords: Sequence[float], tag: str | None = None) -> "MeshBuilder":
        if len(coords) != self.n_spatial_dims:
            raise ValueError(
                f"Vertex must have {self.n_spatial_dims} coordinates, but got {len(coords)=}."
            )
        if tag is not None:
            self.vertex_tags.register(tag, len(self.vertices))
        self.vertices.append([float(c) for c in coords])
        return self

    def add_edge(self, v0: int, v1: int, tag: str | None = None) -> "MeshBuilder":
        if tag is not None:
            self.edge_tags.register(tag, len(self.edges))
        self.edges.append([v0, v1])
        return self

    def add_tri(self, v0: int, v1: int, v2: int, tag: str | None = None) -> "MeshBuilder":
        """Add a triangle with local numbering V0 = v0, V1 = v1, V2 = v2."""
        if tag is not None:
            self.triangle_tags.register(tag, len(self.triangles))
        self.triangles.append([v0, v1, v2])
        return self

    def build(self, device: torch.device | str = "cpu") -> Mesh:
        """Pack the accumulated elements into a Mesh on `device`."""
        if self.vertices:
            points = torch.tensor(self.vertices, dtype=torch.float32, device=device)
        else:
            points = torch.zeros((0, self.n_spatial_dims), dtype=torch.float32, device=device)

        return Mesh(
            points=points,
            edges=torch.tensor(self.edges, dtype=torch.int64, device=device).reshape(-1, 2),
            triangles=torch.tensor(self.triangles, dtype=torch.int64, device=device).reshape(-1, 3),
        )
