"""Define the interface through which the sequencer consumes robot kinematics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from motion_sequencing.kinematics.configuration import JointConfiguration, JointLimits
    from motion_sequencing.spatial import Pose3D


class KinematicModel(Protocol):
    """Forward and inverse kinematics of a robot arm.

    Implementations hold no execution state: both operations are functions of their inputs
    (aside from solver internals). The inverse solver is not guaranteed to converge exactly, so
    callers must recompute `forward` on its result before trusting it.
    """

    @property
    def dof(self) -> int:
        """Retrieve the number of joints in the robot."""
        ...

    @property
    def joint_limits(self) -> JointLimits:
        """Retrieve the position limits of the robot's joints."""
        ...

    def forward(self, config: JointConfiguration) -> Pose3D:
        """Compute the end-effector pose reached by the given joint configuration."""
        ...

    def inverse_solve(
        self,
        pose: Pose3D,
        seed: JointConfiguration | None = None,
    ) -> JointConfiguration:
        """Compute a candidate joint configuration placing the end-effector at the given pose.

        :param pose: Target end-effector pose
        :param seed: Optional initial guess for the solver
        :return: Best configuration found, even if the solver did not fully converge
        """
        ...
