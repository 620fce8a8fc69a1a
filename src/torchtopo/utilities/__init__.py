"""Utility functions for torchtopo."""

from torchtopo.utilities._validation import check_vertex_indices

__all__ = [
    "check_vertex_indices",
]
