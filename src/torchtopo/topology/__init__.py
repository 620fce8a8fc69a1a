"""Vertex, edge and triangle topology built from a mesh's element arrays."""

from torchtopo.topology._topology import (
    EdgeTopology,
    Topology,
    TriTopology,
    VertexTopology,
)

__all__ = [
    "Topology",
    "VertexTopology",
    "EdgeTopology",
    "TriTopology",
]
