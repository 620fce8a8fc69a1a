"""Ragged neighbour lists in offset-indices (CSR) form."""

import torch
from tensordict import tensorclass


@tensorclass
class Adjacency:
    """Neighbour lists of a set of source elements, packed into two tensors.

    Attributes:
        offsets: Start of each source's slice in `indices`, plus a final entry
            equal to `len(indices)`. Shape (n_sources + 1,), dtype int64.
        indices: All neighbour indices, concatenated source by source.
            Shape (total_neighbors,), dtype int64.

    Source i owns `indices[offsets[i]:offsets[i + 1]]`.

    Example:
        >>> adj = Adjacency(
        ...     offsets=torch.tensor([0, 2, 2, 3]),
        ...     indices=torch.tensor([4, 7, 1]),
        ... )
        >>> adj.to_list()
        [[4, 7], [], [1]]
    """

    offsets: torch.Tensor  # shape: (n_sources + 1,), dtype: int64
    indices: torch.Tensor  # shape: (total_neighbors,), dtype: int64

    def __post_init__(self):
        if not torch.compiler.is_compiling():
            if len(self.offsets) < 1:
                raise ValueError(
                    f"`offsets` needs n_sources + 1 >= 1 entries, but got {len(self.offsets)=}."
                )
            if self.offsets[0].item() != 0:
                raise ValueError(
                    f"`offsets` must start at 0, but got {self.offsets[0].item()=}."
                )
            last_offset = self.offsets[-1].item()
            n_indices = len(self.indices)
            if last_offset != n_indices:
                raise ValueError(
                    f"`offsets` must end at len(indices), but got {last_offset=} != {n_indices=}."
                )

    @classmethod
    def no_neighbors(cls, n_sources: int, device: torch.device | str = "cpu") -> "Adjacency":
        """Adjacency in which every one of `n_sources` sources has no neighbours."""
        return cls(
            offsets=torch.zeros(n_sources + 1, dtype=torch.int64, device=device),
            indices=torch.zeros(0, dtype=torch.int64, device=device),
        )

    def to_list(self) -> list[list[int]]:
        """Unpack into one Python list per source, keeping the stored order."""
        offsets = self.offsets.tolist()
        indices = self.indices.tolist()
        return [indices[start:end] for start, end in zip(offsets[:-1], offsets[1:])]

    def counts(self) -> torch.Tensor:
        """Number of neighbours of each source, shape (n_sources,)."""
        return self.offsets[1:] - self.offsets[:-1]

    @property
    def n_sources(self) -> int:
        return len(self.offsets) - 1

    @property
    def n_total_neighbors(self) -> int:
        return len(self.indices)
