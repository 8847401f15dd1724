"""Grouping results."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Grouping[K, T]:
    """Key plus the elements sharing that key, in their original relative order.

    Iterating a grouping iterates its elements, so groupings can be grouped,
    flattened or ordered again.

    Example:
        ```python
        groups = await people.group_by_async(lambda p: p.age // 18)
        for group in groups:
            print(group.key, [p.name for p in group])
        ```

    """

    key: K
    """Key shared by all elements of the group."""

    elements: tuple[T, ...]
    """Elements of the group, in source order."""

    def __iter__(self) -> Iterator[T]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


def group_stable[K, T](items: Iterable[T], keys: Iterable[K]) -> tuple[Grouping[K, T], ...]:
    """Group items by precomputed keys, keeping first-seen key order.

    Keys must be hashable.

    """
    groups: dict[K, list[T]] = {}
    for item, key in zip(items, keys, strict=True):
        groups.setdefault(key, []).append(item)
    return tuple(Grouping(key=key, elements=tuple(elements)) for key, elements in groups.items())
