from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, List


@dataclass(frozen=True)
class LineDelta:
    """
    Changes needed to move an order's product set to a requested one.
    Products present on both sides are not listed and keep their lines.
    """
    to_add: FrozenSet[int]
    to_remove: FrozenSet[int]

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def sorted_additions(self) -> List[int]:
        return sorted(self.to_add)

    def sorted_removals(self) -> List[int]:
        return sorted(self.to_remove)


def reconcile(current: AbstractSet[int], requested: AbstractSet[int]) -> LineDelta:
    """
    Diff the persisted product IDs of an order against the requested ones.
    No I/O: the caller validates `requested` and applies the delta.
    """
    return LineDelta(
        to_add=frozenset(requested - current),
        to_remove=frozenset(current - requested),
    )
