"""Define the inventory of items moved by the pick-and-place cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from motion_sequencing.spatial import Point3D

if TYPE_CHECKING:
    from collections.abc import Sequence


class Inventory(Protocol):
    """Provides the pickup and dropoff positions of each item in a fixed worklist."""

    def __len__(self) -> int:
        """Return the number of items in the worklist."""
        ...

    def pickup_position(self, item_index: int) -> Point3D:
        """Retrieve the position (world frame) from which the indexed item is picked up."""
        ...

    def dropoff_position(self, item_index: int) -> Point3D:
        """Retrieve the position (world frame) at which the indexed item is released."""
        ...


@dataclass(frozen=True)
class ItemSlots:
    """The pickup and dropoff positions of a single item."""

    pickup: Point3D
    dropoff: Point3D


@dataclass(frozen=True)
class ItemInventory:
    """An inventory backed by a fixed list of item slots."""

    items: tuple[ItemSlots, ...]

    def __len__(self) -> int:
        """Return the number of items in the worklist."""
        return len(self.items)

    def pickup_position(self, item_index: int) -> Point3D:
        """Retrieve the position from which the indexed item is picked up."""
        return self.items[item_index].pickup

    def dropoff_position(self, item_index: int) -> Point3D:
        """Retrieve the position at which the indexed item is released."""
        return self.items[item_index].dropoff

    @classmethod
    def from_positions(
        cls,
        pickups: Sequence[Sequence[float]],
        dropoffs: Sequence[Sequence[float]],
    ) -> ItemInventory:
        """Construct an inventory from parallel lists of (x, y, z) pickup and dropoff positions."""
        if len(pickups) != len(dropoffs):
            raise ValueError(f"Got {len(pickups)} pickup but {len(dropoffs)} dropoff positions.")
        return cls(
            tuple(
                ItemSlots(Point3D.from_sequence(p), Point3D.from_sequence(d))
                for p, d in zip(pickups, dropoffs)
            ),
        )
