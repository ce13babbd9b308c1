"""Define named waypoints and resolve them into target end-effector poses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from motion_sequencing.spatial import EulerRPY, Pose3D

if TYPE_CHECKING:
    from collections.abc import Mapping

    from motion_sequencing.tasks.inventory import Inventory

HOME = "home"
PICKUP = "pickup"
DROPOFF = "dropoff"
ITEM_PICKUP = "item-pickup"
ITEM_DROPOFF = "item-dropoff"

FIXED_WAYPOINT_NAMES = (HOME, PICKUP, DROPOFF)
"""Names of the configuration-independent waypoints every resolver must provide."""

ITEM_WAYPOINT_NAMES = (ITEM_PICKUP, ITEM_DROPOFF)
"""Names of the waypoints whose positions are looked up per item in the inventory."""

TOP_DOWN_APPROACH = EulerRPY(np.pi, 0.0, 0.0)
"""Approach orientation flipped 180 degrees about the world x-axis (gripper pointing down)."""


class InvalidIndexError(IndexError):
    """An error raised when an item index falls outside the worklist."""

    def __init__(self, item_index: int | None, worklist_size: int) -> None:
        """Initialize the error with the offending index and the size of the worklist."""
        super().__init__(f"Item index {item_index} is outside a worklist of {worklist_size}.")
        self.item_index = item_index
        self.worklist_size = worklist_size


@dataclass(frozen=True)
class WaypointSpec:
    """A named motion target, optionally tied to one item of the worklist."""

    name: str
    item_index: int | None = None
    """Zero-based index of the item whose slot is targeted (None for fixed waypoints)."""

    def __str__(self) -> str:
        """Return a human-readable description of the waypoint (items are shown one-based)."""
        if self.item_index is None:
            return self.name
        return f"{self.name} (item {self.item_index + 1})"


class WaypointResolver:
    """Maps symbolic waypoints to target end-effector poses in the world frame."""

    def __init__(
        self,
        fixed_waypoints: Mapping[str, Pose3D],
        inventory: Inventory,
        approach: EulerRPY = TOP_DOWN_APPROACH,
    ) -> None:
        """Initialize the resolver with its fixed waypoints and the item inventory.

        :param fixed_waypoints: Map from waypoint names to fixed poses (must include home,
            pickup, and dropoff)
        :param inventory: Provides the per-item pickup and dropoff positions
        :param approach: Orientation composed with every item position
        """
        missing = [name for name in FIXED_WAYPOINT_NAMES if name not in fixed_waypoints]
        if missing:
            raise ValueError(f"Fixed waypoints are missing required names: {missing}")

        clashing = [name for name in ITEM_WAYPOINT_NAMES if name in fixed_waypoints]
        if clashing:
            raise ValueError(f"Fixed waypoints cannot reuse item waypoint names: {clashing}")

        self.fixed_waypoints = dict(fixed_waypoints)
        self.inventory = inventory
        self.approach = approach

    @property
    def worklist_size(self) -> int:
        """Retrieve the number of items in the worklist."""
        return len(self.inventory)

    def check_index(self, item_index: int | None) -> int:
        """Verify that an item index lies within the worklist.

        :raises InvalidIndexError: If the index is missing, negative, or too large
        """
        if item_index is None or not 0 <= item_index < self.worklist_size:
            raise InvalidIndexError(item_index, self.worklist_size)
        return item_index

    def resolve(self, name: str, item_index: int | None = None) -> Pose3D:
        """Resolve a named waypoint into a target pose.

        :param name: Name of a fixed waypoint or one of the item waypoints
        :param item_index: Zero-based item index (required by item waypoints, ignored otherwise)
        :return: Target end-effector pose in the world frame
        :raises InvalidIndexError: If an item waypoint's index is outside the worklist
        :raises KeyError: If the waypoint name is unknown
        """
        if name == ITEM_PICKUP:
            position = self.inventory.pickup_position(self.check_index(item_index))
        elif name == ITEM_DROPOFF:
            position = self.inventory.dropoff_position(self.check_index(item_index))
        elif name in self.fixed_waypoints:
            return self.fixed_waypoints[name]
        else:
            raise KeyError(f"Unknown waypoint '{name}'; known: {sorted(self.fixed_waypoints)}")

        return Pose3D.from_position(position, self.approach)

    def resolve_spec(self, spec: WaypointSpec) -> Pose3D:
        """Resolve a waypoint specification into a target pose."""
        return self.resolve(spec.name, spec.item_index)
