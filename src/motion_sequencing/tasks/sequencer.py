"""Sequence the arm through every phase of a pick-and-place task plan.

Every phase has the same shape: resolve the target waypoint, solve inverse kinematics, recompute
and validate the achieved pose, interpolate from the previous configuration, then render each
interpolated step. The configuration reached by one phase is passed by value into the next.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from motion_sequencing.io.logging import log_info
from motion_sequencing.kinematics.pose_validation import PoseValidator, ValidationStatus
from motion_sequencing.motion_planning import interpolate
from motion_sequencing.tasks.task_plan import SequencerState, next_state

if TYPE_CHECKING:
    from motion_sequencing.execution import ActuatorSynchronizer
    from motion_sequencing.kinematics import JointConfiguration, KinematicModel, PoseValidation
    from motion_sequencing.spatial import Pose3D
    from motion_sequencing.tasks.task_plan import Phase, TaskPlan
    from motion_sequencing.tasks.waypoints import WaypointResolver


@dataclass(frozen=True)
class StepCounts:
    """Number of interpolation steps used by each class of motion."""

    approach_pickup: int = 10
    pickup: int = 10
    approach_dropoff: int = 10
    dropoff: int = 10
    return_home: int = 10

    def __post_init__(self) -> None:
        """Verify that every motion has at least one step."""
        for f in fields(self):
            if getattr(self, f.name) < 1:
                raise ValueError(f"Step count '{f.name}' must be at least 1.")

    @classmethod
    def uniform(cls, steps: int) -> StepCounts:
        """Construct step counts using the same number of steps for every motion."""
        return cls(steps, steps, steps, steps, steps)

    def for_state(self, state: SequencerState) -> int:
        """Retrieve the step count of the motion performed in the given state."""
        if state == SequencerState.FINISHED:
            raise ValueError("The finished state performs no motion.")
        return getattr(self, state.value)


@dataclass(frozen=True)
class PhaseReport:
    """The record of one executed phase."""

    phase: Phase
    target: Pose3D
    q_start: JointConfiguration
    q_end: JointConfiguration
    validation: PoseValidation
    steps: int


@dataclass(frozen=True)
class SequenceReport:
    """The ordered records of every phase executed in one run."""

    phases: tuple[PhaseReport, ...]

    def __len__(self) -> int:
        """Return the number of executed phases."""
        return len(self.phases)

    @property
    def final_configuration(self) -> JointConfiguration:
        """Retrieve the configuration reached at the end of the run."""
        return self.phases[-1].q_end

    @property
    def unreachable(self) -> list[PhaseReport]:
        """Retrieve the phases whose achieved pose fell outside the position tolerance."""
        return [
            report
            for report in self.phases
            if report.validation.status == ValidationStatus.UNREACHABLE_POSE
        ]

    def states(self) -> list[SequencerState]:
        """Retrieve the state of each executed phase in order."""
        return [report.phase.state for report in self.phases]


class TaskSequencer:
    """Executes a task plan phase by phase, threading the arm configuration between phases."""

    def __init__(
        self,
        model: KinematicModel,
        resolver: WaypointResolver,
        synchronizer: ActuatorSynchronizer,
        validator: PoseValidator | None = None,
        step_counts: StepCounts | None = None,
        *,
        escalate_unreachable: bool = False,
    ) -> None:
        """Initialize the sequencer with its collaborators.

        :param model: Kinematic model used to solve and verify each target pose
        :param resolver: Maps waypoints to target poses
        :param synchronizer: Renders the arm and gripper at each interpolated step
        :param validator: Checks achieved poses (defaults to a 5 mm position tolerance)
        :param step_counts: Interpolation steps per motion class (defaults to 10 for each)
        :param escalate_unreachable: Raise `UnreachablePoseError` instead of only reporting
        """
        self.model = model
        self.resolver = resolver
        self.synchronizer = synchronizer
        self.validator = PoseValidator() if validator is None else validator
        self.step_counts = StepCounts() if step_counts is None else step_counts
        self.escalate_unreachable = escalate_unreachable

    def execute_phase(
        self,
        phase: Phase,
        q_start: JointConfiguration,
        steps: int | None = None,
    ) -> PhaseReport:
        """Move the arm from a start configuration to the phase's target waypoint.

        :param phase: State and waypoint of the motion
        :param q_start: Arm configuration at the start of the motion
        :param steps: Interpolation steps (defaults to the step count of the phase's state)
        :return: Report whose `q_end` is the start configuration of the next phase
        :raises InvalidIndexError: If the phase targets an item outside the worklist
        :raises UnreachablePoseError: If escalation is enabled and the pose is out of tolerance
        """
        num_steps = self.step_counts.for_state(phase.state) if steps is None else steps
        log_info(f"STATUS: {phase.state.status} -> {phase.waypoint}")

        target = self.resolver.resolve_spec(phase.waypoint)
        q_end = self.model.inverse_solve(target, seed=q_start)

        achieved = self.model.forward(q_end)
        validation = self.validator.validate(target, achieved)
        if self.escalate_unreachable:
            validation.raise_if_unreachable()

        segment = interpolate(q_start, q_end, num_steps)
        self.synchronizer.follow(segment)

        return PhaseReport(phase, target, q_start, q_end, validation, num_steps)

    def run(self, plan: TaskPlan, q_start: JointConfiguration) -> SequenceReport:
        """Execute every phase of the plan in order, ending with the return home.

        :param plan: Tasks for each item in the worklist followed by the home waypoint
        :param q_start: Arm configuration before the first phase
        :return: Reports of all executed phases
        """
        if len(q_start) != self.model.dof:
            raise ValueError(
                f"Start configuration has {len(q_start)} joints; the robot has {self.model.dof}.",
            )

        log_info("STATUS: INITIALIZING ACTION")

        state = SequencerState.APPROACH_PICKUP if plan.tasks else SequencerState.RETURN_HOME
        tasks_completed = 0
        reports: list[PhaseReport] = []
        q_current = q_start

        for phase in plan.phases():
            if phase.state != state:
                raise RuntimeError(f"Plan enters {phase.state.name} while expecting {state.name}.")

            report = self.execute_phase(phase, q_current)
            reports.append(report)
            q_current = report.q_end

            if state == SequencerState.DROPOFF:
                tasks_completed += 1
            state = next_state(state, items_remaining=tasks_completed < len(plan.tasks))

        log_info(f"STATUS: {SequencerState.FINISHED.status}")
        return SequenceReport(tuple(reports))
