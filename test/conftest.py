"""Pytest configuration and shared fixtures for torchtopo tests.

This module provides the device parametrization and the small meshes reused
across the topology, neighbor and boundary tests.
"""

import pytest
import torch


### Pytest Hooks ###


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with 'cuda' if CUDA is not available."""
    if torch.cuda.is_available():
        return  # CUDA available, run all tests

    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


### Mesh Generators ###


def make_square_mesh(device: str = "cpu"):
    """Unit square split along the diagonal (0, 2) into (0, 1, 2) and (2, 3, 0)."""
    from torchtopo.mesh import Mesh

    points = torch.tensor(
        [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]], device=device
    )
    triangles = torch.tensor([[0, 1, 2], [2, 3, 0]], device=device, dtype=torch.int64)
    return Mesh(points=points, triangles=triangles)


def make_grid_mesh(nx: int, ny: int, device: str = "cpu", with_edges: bool = True):
    """Structured triangulation of an nx-by-ny grid of unit squares.

    Square (i, j) with corners a=(i, j), b=(i+1, j), c=(i+1, j+1), d=(i, j+1)
    is split into (a, b, c) and (c, d, a). With `with_edges`, the unique
    triangle edges are stored as the mesh edges.
    """
    from torchtopo.mesh import Mesh

    xs, ys = torch.meshgrid(
        torch.arange(nx + 1, dtype=torch.float32),
        torch.arange(ny + 1, dtype=torch.float32),
        indexing="ij",
    )
    points = torch.stack([xs.reshape(-1), ys.reshape(-1)], dim=1)

    def vid(i, j):
        return i * (ny + 1) + j

    triangles = []
    for i in range(nx):
        for j in range(ny):
            a, b, c, d = vid(i, j), vid(i + 1, j), vid(i + 1, j + 1), vid(i, j + 1)
            triangles.append([a, b, c])
            triangles.append([c, d, a])

    mesh = Mesh(
        points=points.to(device),
        triangles=torch.tensor(triangles, dtype=torch.int64, device=device),
    )
    return mesh.extract_triangle_edges() if with_edges else mesh


### Pytest Fixtures ###


@pytest.fixture(
    params=[
        "cpu",
        pytest.param("cuda", marks=pytest.mark.cuda),
    ]
)
def device(request):
    """Parametrize tests over all available devices (CPU, CUDA).

    CUDA tests are automatically skipped if CUDA is not available via
    the pytest_collection_modifyitems hook.
    """
    return request.param


@pytest.fixture(params=["indexed", "pairwise"])
def strategy(request):
    """Parametrize tests over both topology build strategies."""
    return request.param


@pytest.fixture
def square_mesh():
    return make_square_mesh()


@pytest.fixture
def grid_mesh():
    """3x2 triangulated grid with its unique edges."""
    return make_grid_mesh(3, 2)
