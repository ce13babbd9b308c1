"""Define the declarative plan of phases executed by the task sequencer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from motion_sequencing.tasks.waypoints import (
    DROPOFF,
    HOME,
    ITEM_DROPOFF,
    ITEM_PICKUP,
    PICKUP,
    WaypointSpec,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class SequencerState(Enum):
    """States of the pick-and-place state machine."""

    APPROACH_PICKUP = "approach_pickup"
    PICKUP = "pickup"
    APPROACH_DROPOFF = "approach_dropoff"
    DROPOFF = "dropoff"
    RETURN_HOME = "return_home"
    FINISHED = "finished"

    @property
    def status(self) -> str:
        """Retrieve the status line announced when a phase in this state begins."""
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    SequencerState.APPROACH_PICKUP: "MOVING ABOVE PICKUP POINT",
    SequencerState.PICKUP: "MOVING TO ITEM",
    SequencerState.APPROACH_DROPOFF: "MOVING TO DROP OFF ZONE",
    SequencerState.DROPOFF: "PLACING ITEM AT DROP OFF ZONE",
    SequencerState.RETURN_HOME: "RETURNING HOME",
    SequencerState.FINISHED: "ACTION FINISHED",
}

TASK_STATES = (
    SequencerState.APPROACH_PICKUP,
    SequencerState.PICKUP,
    SequencerState.APPROACH_DROPOFF,
    SequencerState.DROPOFF,
)
"""States visited, in order, by every per-item task."""


def next_state(state: SequencerState, *, items_remaining: bool) -> SequencerState:
    """Compute the state that follows the given one.

    :param state: Current state of the sequencer
    :param items_remaining: Whether any item is still waiting after the current task
    :return: Next state (FINISHED is absorbing)
    """
    if state in (SequencerState.RETURN_HOME, SequencerState.FINISHED):
        return SequencerState.FINISHED
    if state == SequencerState.DROPOFF:
        return SequencerState.APPROACH_PICKUP if items_remaining else SequencerState.RETURN_HOME

    return TASK_STATES[TASK_STATES.index(state) + 1]


@dataclass(frozen=True)
class Phase:
    """One motion of the sequence: a state of the state machine and the waypoint it targets."""

    state: SequencerState
    waypoint: WaypointSpec
    item_index: int | None = None
    """Index of the item whose task this phase belongs to (None for the return home)."""


@dataclass(frozen=True)
class Task:
    """One complete pickup-to-dropoff cycle for a single item."""

    item_index: int

    @property
    def waypoints(self) -> tuple[WaypointSpec, ...]:
        """Retrieve the task's four waypoints in execution order."""
        return (
            WaypointSpec(PICKUP),
            WaypointSpec(ITEM_PICKUP, self.item_index),
            WaypointSpec(DROPOFF),
            WaypointSpec(ITEM_DROPOFF, self.item_index),
        )

    def phases(self) -> tuple[Phase, ...]:
        """Pair each of the task's waypoints with the state that moves to it."""
        return tuple(
            Phase(state, wp, self.item_index) for state, wp in zip(TASK_STATES, self.waypoints)
        )


@dataclass(frozen=True)
class TaskPlan:
    """An ordered list of per-item tasks followed by a single return to the home waypoint."""

    tasks: tuple[Task, ...]
    home: WaypointSpec = field(default_factory=lambda: WaypointSpec(HOME))

    @classmethod
    def from_worklist(cls, item_indices: Iterable[int]) -> TaskPlan:
        """Construct a plan visiting the given items in order.

        Indices are not checked here; an out-of-range index fails when its task is executed.
        """
        return cls(tuple(Task(idx) for idx in item_indices))

    @classmethod
    def for_inventory_size(cls, num_items: int) -> TaskPlan:
        """Construct a plan visiting every item of an inventory in index order."""
        return cls.from_worklist(range(num_items))

    def __len__(self) -> int:
        """Return the total number of phases in the plan."""
        return len(self.tasks) * len(TASK_STATES) + 1

    def phases(self) -> Iterator[Phase]:
        """Yield every phase of the plan in execution order, ending with the return home."""
        for task in self.tasks:
            yield from task.phases()
        yield Phase(SequencerState.RETURN_HOME, self.home)
