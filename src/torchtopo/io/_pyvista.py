"""Conversion between torchtopo meshes and pyvista PolyData."""

import logging

import numpy as np
import pyvista as pv
import torch

from torchtopo.mesh import Mesh

logger = logging.getLogger(__name__)


def _split_cell_array(cell_array: np.ndarray) -> list[np.ndarray]:
    """Split a VTK cell array `[n0, i..., n1, j..., ...]` into one array per cell."""
    cells = []
    position = 0
    while position < len(cell_array):
        n_cell_points = int(cell_array[position])
        cells.append(cell_array[position + 1 : position + 1 + n_cell_points])
        position += n_cell_points + 1
    return cells


def from_pyvista(pv_mesh: pv.DataSet) -> Mesh:
    """Convert a pyvista mesh into a Mesh with edges and triangles.

    Line cells become edges (a polyline of n points yields its n - 1 segments).
    Polygons and triangle strips are triangulated with `pv_mesh.triangulate()`;
    faces that already are triangles keep their vertex order. Numeric point
    data arrays are copied into `point_data`. Datasets that are not PolyData
    are reduced to their surface first.

    Args:
        pv_mesh: Input pyvista dataset.

    Returns:
        Mesh with float32 points and int64 element arrays.

    Example:
        >>> mesh = from_pyvista(pv.Sphere(theta_resolution=8, phi_resolution=8))
        >>> topology = mesh.get_topology()
    """
    if not isinstance(pv_mesh, pv.PolyData):
        logger.debug("Extracting surface of %s before conversion.", type(pv_mesh).__name__)
        pv_mesh = pv_mesh.extract_surface()

    ### Edges from line cells
    edges = []
    for polyline in _split_cell_array(np.asarray(pv_mesh.lines)):
        edges.extend(zip(polyline[:-1].tolist(), polyline[1:].tolist()))

    ### Triangles from faces and strips; triangulate() keeps point numbering
    triangles = np.zeros((0, 3), dtype=np.int64)
    if len(pv_mesh.faces) > 0 or len(pv_mesh.strips) > 0:
        surface = pv_mesh.triangulate()
        # Every cell of the triangulated face array reads [3, i, j, k]
        triangles = np.asarray(surface.faces).reshape(-1, 4)[:, 1:]

    ### Numeric point data
    point_data = {}
    for name in pv_mesh.point_data.keys():
        array = np.asarray(pv_mesh.point_data[name])
        if array.dtype.kind not in "biuf":
            logger.debug("Skipping non-numeric point data array %r.", name)
            continue
        point_data[name] = torch.as_tensor(array)

    logger.debug(
        "Converted pyvista mesh: %d points, %d edges, %d triangles.",
        pv_mesh.n_points,
        len(edges),
        len(triangles),
    )

    return Mesh(
        points=torch.as_tensor(np.asarray(pv_mesh.points), dtype=torch.float32),
        edges=torch.tensor(edges, dtype=torch.int64).reshape(-1, 2),
        triangles=torch.tensor(triangles, dtype=torch.int64).reshape(-1, 3),
        point_data=point_data,
    )


def to_pyvista(mesh: Mesh) -> pv.PolyData:
    """Convert a Mesh into pyvista PolyData.

    Points with fewer than three coordinates are padded with zeros. Edges
    become line cells, triangles become faces, and point data is copied.

    Raises:
        ValueError: If the mesh has more than three spatial dimensions.
    """
    if mesh.n_spatial_dims > 3:
        raise ValueError(
            f"pyvista meshes live in 3D, but got {mesh.n_spatial_dims=}."
        )

    points = np.zeros((mesh.n_points, 3), dtype=np.float32)
    points[:, : mesh.n_spatial_dims] = mesh.points.detach().cpu().numpy()

    faces = None
    if mesh.n_triangles > 0:
        triangles = mesh.triangles.cpu().numpy()
        faces = np.hstack([np.full((len(triangles), 1), 3), triangles]).ravel()

    lines = None
    if mesh.n_edges > 0:
        edges = mesh.edges.cpu().numpy()
        lines = np.hstack([np.full((len(edges), 1), 2), edges]).ravel()

    pv_mesh = pv.PolyData(points, faces=faces, lines=lines)
    for name, values in mesh.point_data.items():
        pv_mesh.point_data[name] = values.detach().cpu().numpy()

    return pv_mesh
