"""Import classes and definitions that plan and sequence pick-and-place tasks."""

from .inventory import Inventory as Inventory
from .inventory import ItemInventory as ItemInventory
from .inventory import ItemSlots as ItemSlots
from .sequencer import PhaseReport as PhaseReport
from .sequencer import SequenceReport as SequenceReport
from .sequencer import StepCounts as StepCounts
from .sequencer import TaskSequencer as TaskSequencer
from .task_plan import Phase as Phase
from .task_plan import SequencerState as SequencerState
from .task_plan import Task as Task
from .task_plan import TaskPlan as TaskPlan
from .task_plan import next_state as next_state
from .waypoints import InvalidIndexError as InvalidIndexError
from .waypoints import WaypointResolver as WaypointResolver
from .waypoints import WaypointSpec as WaypointSpec
