"""Local labels, connection records and edge matching for triangle meshes.

This module provides:
1. Labels: slots of vertices and edges inside an element
2. Records: typed connections between a mesh element and its neighbours
3. Matching: locating an edge inside a triangle and the common edge of two
   triangles
"""

from torchtopo.connections._labels import EdgeLabel, EdgePosition, VertexLabel
from torchtopo.connections._matching import common_edge, match_edge_in_tri
from torchtopo.connections._records import (
    EdgeToEdge,
    EdgeToTri,
    TriToTri,
    VertexToEdge,
    VertexToTri,
)

__all__ = [
    # Labels
    "VertexLabel",
    "EdgeLabel",
    "EdgePosition",
    # Records
    "VertexToEdge",
    "VertexToTri",
    "EdgeToEdge",
    "EdgeToTri",
    "TriToTri",
    # Matching
    "match_edge_in_tri",
    "common_edge",
]
