"""Locating edges inside triangles.

Both functions take plain vertex-index sequences (tuples, lists, or rows
converted with `.tolist()`) so they can be called in tight loops without
touching tensors.
"""

from typing import Sequence

from torchtopo.connections._labels import EdgeLabel, EdgePosition

_E0_FORWARD = EdgePosition(EdgeLabel.E0, False)
_E0_REVERSED = EdgePosition(EdgeLabel.E0, True)
_E1_FORWARD = EdgePosition(EdgeLabel.E1, False)
_E1_REVERSED = EdgePosition(EdgeLabel.E1, True)
_E2_FORWARD = EdgePosition(EdgeLabel.E2, False)
_E2_REVERSED = EdgePosition(EdgeLabel.E2, True)


def match_edge_in_tri(
    edge: Sequence[int], tri: Sequence[int]
) -> EdgePosition | None:
    """Find where an edge sits among the canonical edges of a triangle.

    The canonical edges (t0, t1), (t1, t2), (t2, t0) are tried in label order,
    each first in its forward then in its reversed orientation. Sharing a
    single vertex is not a match.

    Args:
        edge: Vertex indices (u0, u1) of the edge.
        tri: Vertex indices (t0, t1, t2) of the triangle.

    Returns:
        Position of the first matching canonical edge, with `is_reversed` set
        when (u0, u1) runs opposite to it, or None if the edge is not an edge
        of the triangle.

    Example:
        >>> match_edge_in_tri((1, 0), (0, 1, 2))
        EdgePosition(label=<EdgeLabel.E0: 0>, is_reversed=True)
        >>> match_edge_in_tri((0, 2), (0, 1, 2))
        EdgePosition(label=<EdgeLabel.E2: 2>, is_reversed=True)
    """
    u0, u1 = edge
    t0, t1, t2 = tri

    if u0 == t0 and u1 == t1:
        return _E0_FORWARD
    if u1 == t0 and u0 == t1:
        return _E0_REVERSED

    if u0 == t1 and u1 == t2:
        return _E1_FORWARD
    if u1 == t1 and u0 == t2:
        return _E1_REVERSED

    if u0 == t2 and u1 == t0:
        return _E2_FORWARD
    if u1 == t2 and u0 == t0:
        return _E2_REVERSED

    return None


def common_edge(
    tri0: Sequence[int], tri1: Sequence[int]
) -> tuple[EdgeLabel, EdgePosition] | None:
    """Find the edge shared by two triangles.

    The canonical edges of `tri0` are matched against `tri1` in label order
    and the first hit is returned. In a non-degenerate mesh at most one of
    them can match.

    Returns:
        `(label in tri0, position in tri1)`, or None when the triangles do not
        share a full edge.

    Example:
        >>> common_edge((0, 1, 2), (3, 2, 1))
        (<EdgeLabel.E1: 1>, EdgePosition(label=<EdgeLabel.E1: 1>, is_reversed=True))
    """
    a, b, c = tri0

    position = match_edge_in_tri((a, b), tri1)
    if position is not None:
        return EdgeLabel.E0, position

    position = match_edge_in_tri((b, c), tri1)
    if position is not None:
        return EdgeLabel.E1, position

    position = match_edge_in_tri((c, a), tri1)
    if position is not None:
        return EdgeLabel.E2, position

    return None
