"""Drive the gripper in lockstep with the arm at every interpolated step."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from motion_sequencing.spatial import Pose3D

if TYPE_CHECKING:
    from motion_sequencing.kinematics import JointConfiguration, KinematicModel
    from motion_sequencing.motion_planning import TrajectorySegment
    from motion_sequencing.visualization import Visualizer

GRIPPER_MOUNT_OFFSET = Pose3D.from_xyz_rpy(pitch_rad=-np.pi / 2)
"""Orientation of the gripper relative to the arm flange (-90 degrees about the flange y-axis)."""


def format_pose_overlay(pose: Pose3D, significant_figures: int = 2) -> str:
    """Format the top three rows of a pose's homogeneous matrix as overlay text.

    :param pose: Pose to be displayed
    :param significant_figures: Number of significant figures kept for each entry
    :return: Three lines of four space-separated values
    """
    rows = pose.to_homogeneous_matrix()[:3]
    return "\n".join(
        "  ".join(f"{value + 0.0:.{significant_figures}g}" for value in row) for row in rows
    )


class ActuatorSynchronizer:
    """Derives the gripper pose from the arm's end-effector pose and forwards both to a visualizer.

    The gripper has no timing of its own: its pose is a pure function of the arm configuration at
    each step, and nothing is kept between steps.
    """

    def __init__(
        self,
        model: KinematicModel,
        visualizer: Visualizer,
        mount_offset: Pose3D = GRIPPER_MOUNT_OFFSET,
    ) -> None:
        """Initialize the synchronizer.

        :param model: Kinematic model providing the arm's forward kinematics
        :param visualizer: Sink that renders each step
        :param mount_offset: Pose of the gripper relative to the arm's end-effector
        """
        self.model = model
        self.visualizer = visualizer
        self.mount_offset = mount_offset

    def actuator_pose(self, arm_pose: Pose3D) -> Pose3D:
        """Compute the gripper pose for the given end-effector pose."""
        return arm_pose @ self.mount_offset

    def on_step(self, config: JointConfiguration) -> Pose3D:
        """Render one step of the arm and its gripper.

        :param config: Arm configuration at this step
        :return: Gripper pose forwarded to the visualizer
        """
        arm_pose = self.model.forward(config)
        gripper_pose = self.actuator_pose(arm_pose)
        self.visualizer.render_frame(config, gripper_pose, format_pose_overlay(arm_pose))
        return gripper_pose

    def follow(self, segment: TrajectorySegment) -> None:
        """Render every configuration of a trajectory segment in order."""
        for config in segment:
            self.on_step(config)
