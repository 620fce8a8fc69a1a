import torch


def check_vertex_indices(elements: torch.Tensor, n_vertices: int, name: str) -> None:
    """Raise if any vertex index of `elements` falls outside [0, n_vertices).

    Args:
        elements: Integer tensor of shape (n_elements, n_vertices_per_element).
        n_vertices: Size of the vertex pool the elements refer to.
        name: Name of the element array, used in the error message.

    Raises:
        IndexError: If an index is negative or not smaller than `n_vertices`.
    """
    if elements.numel() == 0:
        return

    min_index = int(elements.min())
    max_index = int(elements.max())
    if min_index < 0 or max_index >= n_vertices:
        raise IndexError(
            f"`{name}` references vertices outside [0, {n_vertices}), "
            f"got {min_index=} and {max_index=}."
        )
