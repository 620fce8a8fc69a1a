from typing import TYPE_CHECKING, Literal

import torch
from tensordict import TensorDict, tensorclass

if TYPE_CHECKING:
    from torchtopo.neighbors import Adjacency
    from torchtopo.topology import Topology


def _as_element_array(
    elements: torch.Tensor | None,
    n_vertices_per_element: int,
    name: str,
    device: torch.device,
) -> torch.Tensor:
    if elements is None:
        return torch.zeros((0, n_vertices_per_element), dtype=torch.int64, device=device)
    if elements.ndim != 2 or elements.shape[1] != n_vertices_per_element:
        raise ValueError(
            f"`{name}` must have shape (n_{name}, {n_vertices_per_element}), but got {elements.shape=}."
        )
    if torch.is_floating_point(elements) or elements.dtype == torch.bool:
        raise TypeError(f"`{name}` must have an int-like dtype, but got {elements.dtype=}.")
    return elements.to(torch.int64)


@tensorclass
class Mesh:
    """Vertex pool with edge and triangle elements stored as index arrays.

    Element arrays hold 0-based indices into `points`. Triangles use the local
    numbering V0, V1, V2 with canonical edges E0 = (V0, V1), E1 = (V1, V2) and
    E2 = (V2, V0). Coordinates are never read by the topology code; they are
    carried for conversion and rendering.
    """

    points: torch.Tensor  # shape: (n_points, n_spatial_dimensions)
    edges: torch.Tensor = None  # shape: (n_edges, 2); None -> no edges  # ty: ignore
    triangles: torch.Tensor = None  # shape: (n_triangles, 3); None -> no triangles  # ty: ignore
    point_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore
    edge_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore
    triangle_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore

    def __post_init__(self):
        ### Validate shapes and dtypes
        if self.points.ndim != 2:
            raise ValueError(
                f"`points` must have shape (n_points, n_spatial_dimensions), but got {self.points.shape=}."
            )
        device = self.points.device
        self.edges = _as_element_array(self.edges, 2, "edges", device)
        self.triangles = _as_element_array(self.triangles, 3, "triangles", device)

        ### Initialize data TensorDicts
        if self.point_data is None:
            self.point_data = {}
        if self.edge_data is None:
            self.edge_data = {}
        if self.triangle_data is None:
            self.triangle_data = {}

        if not isinstance(self.point_data, TensorDict):
            self.point_data = TensorDict(
                dict(self.point_data),
                batch_size=torch.Size([self.n_points]),
                device=device,
            )
        if not isinstance(self.edge_data, TensorDict):
            self.edge_data = TensorDict(
                dict(self.edge_data),
                batch_size=torch.Size([self.n_edges]),
                device=device,
            )
        if not isinstance(self.triangle_data, TensorDict):
            self.triangle_data = TensorDict(
                dict(self.triangle_data),
                batch_size=torch.Size([self.n_triangles]),
                device=device,
            )

    @property
    def n_spatial_dims(self) -> int:
        return self.points.shape[-1]

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_edges(self) -> int:
        return self.edges.shape[0]

    @property
    def n_triangles(self) -> int:
        return self.triangles.shape[0]

    @property
    def edge_lengths(self) -> torch.Tensor:
        """Euclidean length of each edge, shape (n_edges,)."""
        return (self.points[self.edges[:, 1]] - self.points[self.edges[:, 0]]).norm(dim=-1)

    @property
    def triangle_areas(self) -> torch.Tensor:
        """Compute triangle areas using the Gram determinant method.

        This works in any spatial dimension. For a triangle (v0, v1, v2):
            Area = (1/2) * sqrt(det(E^T @ E))
        where E is the matrix with columns (v1 - v0, v2 - v0).

        Returns:
            Tensor of shape (n_triangles,). Not cached: the element arrays may
            be replaced between calls.
        """
        ### Relative vectors from V0 to V1 and V2
        # Shape: (n_triangles, 2, n_spatial_dims)
        relative_vectors = (
            self.points[self.triangles[:, 1:]] - self.points[self.triangles[:, [0]]]
        )

        ### Gram matrix, shape (n_triangles, 2, 2)
        gram_matrix = torch.matmul(relative_vectors, relative_vectors.transpose(-2, -1))

        return gram_matrix.det().abs().sqrt() / 2

    @property
    def triangle_centroids(self) -> torch.Tensor:
        """Arithmetic mean of the vertices of each triangle, shape (n_triangles, n_spatial_dims)."""
        return self.points[self.triangles].mean(dim=1)

    def get_topology(
        self, strategy: Literal["indexed", "pairwise"] = "indexed"
    ) -> "Topology":
        """Build the full vertex, edge and triangle topology of this mesh.

        Args:
            strategy: "indexed" (default) restricts pair tests to elements that
                share a vertex; "pairwise" tests every pair. Both produce the
                same records in the same order.

        Returns:
            Topology with all three passes built. It keeps a reference to this
            mesh and must be rebuilt if the element arrays are modified.

        Example:
            >>> topology = mesh.get_topology()
            >>> topology.tris[0].tri_connections
        """
        from torchtopo.topology import Topology

        return Topology(self, strategy=strategy).build()

    def extract_triangle_edges(self) -> "Mesh":
        """Return a copy of this mesh whose edges are the unique triangle edges.

        Each edge is stored with its smaller vertex index first; edges are
        sorted lexicographically. Existing edges and edge data are dropped.
        """
        from torchtopo.neighbors._element_neighbors import TRIANGLE_EDGE_SLOTS

        device = self.points.device
        if self.n_triangles == 0:
            edges = torch.zeros((0, 2), dtype=torch.int64, device=device)
        else:
            candidate_edges = self.triangles[:, TRIANGLE_EDGE_SLOTS.to(device)]
            edges = torch.unique(
                torch.sort(candidate_edges, dim=-1)[0].reshape(-1, 2), dim=0
            )

        return Mesh(
            points=self.points,
            edges=edges,
            triangles=self.triangles,
            point_data=self.point_data,
            triangle_data=self.triangle_data,
        )

    def get_vertex_to_edges_adjacency(self) -> "Adjacency":
        """Compute the edges incident to each vertex.

        Returns:
            Adjacency where adjacency.to_list()[i] lists the edges having point
            i as an endpoint.
        """
        from torchtopo.neighbors import get_vertex_to_edges_adjacency

        return get_vertex_to_edges_adjacency(self)

    def get_vertex_to_triangles_adjacency(self) -> "Adjacency":
        """Compute the star of each vertex (all triangles containing it)."""
        from torchtopo.neighbors import get_vertex_to_triangles_adjacency

        return get_vertex_to_triangles_adjacency(self)

    def get_edge_to_edges_adjacency(self) -> "Adjacency":
        """Compute edge-to-edges adjacency based on shared endpoints."""
        from torchtopo.neighbors import get_edge_to_edges_adjacency

        return get_edge_to_edges_adjacency(self)

    def get_triangle_to_triangles_adjacency(self) -> "Adjacency":
        """Compute triangle-to-triangles adjacency based on shared edges."""
        from torchtopo.neighbors import get_triangle_to_triangles_adjacency

        return get_triangle_to_triangles_adjacency(self)

    def get_boundary_edges(self) -> torch.Tensor:
        """Triangle edges used by exactly one triangle, shape (n_boundary_edges, 2)."""
        from torchtopo.boundaries import get_boundary_edges

        return get_boundary_edges(self)

    def get_boundary_vertices(self) -> torch.Tensor:
        """Boolean mask of shape (n_points,) marking vertices on a boundary edge."""
        from torchtopo.boundaries import get_boundary_vertices

        return get_boundary_vertices(self)

    def get_boundary_triangles(self) -> torch.Tensor:
        """Boolean mask of shape (n_triangles,) marking triangles with a boundary edge."""
        from torchtopo.boundaries import get_boundary_triangles

        return get_boundary_triangles(self)
