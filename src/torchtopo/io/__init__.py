"""Conversion of meshes from and to other libraries."""

from torchtopo.io._pyvista import from_pyvista, to_pyvista

__all__ = [
    "from_pyvista",
    "to_pyvista",
]
