"""Named groups of element indices."""


class TagSet:
    """Mapping from tag names to the indices of the elements carrying them.

    Indices are kept in registration order; an index may be registered under
    several names.

    Example:
        >>> tags = TagSet()
        >>> tags.register("inlet", 0)
        >>> tags.register("inlet", 85)
        >>> tags.get_registered_indices("inlet")
        [0, 85]
        >>> tags.get_registered_indices("outlet") is None
        True
    """

    def __init__(self):
        self._tag_map: dict[str, list[int]] = {}

    def register(self, name: str, index: int) -> None:
        """Associate element `index` with tag `name`, creating the tag if needed."""
        self._tag_map.setdefault(name, []).append(index)

    def get_registered_indices(self, name: str) -> list[int] | None:
        """Indices registered under `name`, or None for an unknown tag."""
        return self._tag_map.get(name)

    def names(self) -> list[str]:
        return list(self._tag_map)

    def __contains__(self, name: str) -> bool:
        return name in self._tag_map

    def __len__(self) -> int:
        return len(self._tag_map)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tag_map!r})"
