from torchtopo.mesh import Mesh
from torchtopo.builder import MeshBuilder
from torchtopo.tags import TagSet
from torchtopo.connections import (
    EdgeLabel,
    EdgePosition,
    VertexLabel,
    EdgeToEdge,
    EdgeToTri,
    TriToTri,
    VertexToEdge,
    VertexToTri,
    common_edge,
    match_edge_in_tri,
)
from torchtopo.topology import (
    Topology,
    VertexTopology,
    EdgeTopology,
    TriTopology,
)
