"""Define kinematic models of the Universal Robots UR3e arm used in the bundled deployments."""

from __future__ import annotations

from typing import Callable

import numpy as np

from motion_sequencing.kinematics.configuration import JointConfiguration
from motion_sequencing.kinematics.serial_chain import DHLink, JointType, SerialChain
from motion_sequencing.spatial import Pose3D

FULL_TURN = (-2 * np.pi, 2 * np.pi)

UR3E_LINKS = (
    DHLink(d=0.15185, a=0.0, alpha=np.pi / 2, limits=FULL_TURN),
    DHLink(d=0.0, a=-0.24355, alpha=0.0, limits=FULL_TURN),
    DHLink(d=0.0, a=-0.2132, alpha=0.0, limits=FULL_TURN),
    DHLink(d=0.13105, a=0.0, alpha=np.pi / 2, limits=FULL_TURN),
    DHLink(d=0.08535, a=0.0, alpha=-np.pi / 2, limits=FULL_TURN),
    DHLink(d=0.0921, a=0.0, alpha=0.0, limits=FULL_TURN),
)
"""Standard DH parameters of the six UR3e joints (base to wrist 3)."""

RAIL_LINK = DHLink(
    theta=np.pi,
    a=0.0,
    alpha=np.pi / 2,
    joint_type=JointType.PRISMATIC,
    limits=(-0.8, -0.01),
)
"""Prismatic linear rail carrying the UR3e base (travel in meters)."""

RAIL_MOUNT = Pose3D.from_xyz_rpy(roll_rad=np.pi / 2) @ Pose3D.from_xyz_rpy(pitch_rad=np.pi / 2)
"""Rotation aligning the rail's travel axis with the world x-axis and the arm's base with +z."""


def ur3e(base: Pose3D | None = None) -> SerialChain:
    """Construct the kinematic model of a fixed-base UR3e arm.

    :param base: Pose of the robot's base in the world frame (defaults to the world origin)
    :return: Six-joint serial chain
    """
    return SerialChain(
        name="UR3e",
        links=UR3E_LINKS,
        base=Pose3D.identity() if base is None else base,
        default_seed=JointConfiguration((0.0, -np.pi / 2, 0.0, -np.pi / 2, 0.0, 0.0)),
    )


def linear_ur3e(base: Pose3D | None = None) -> SerialChain:
    """Construct the kinematic model of a UR3e mounted on a linear rail.

    The first joint is the rail; the remaining six are the UR3e joints.

    :param base: Pose of the rail's origin in the world frame (defaults to the world origin)
    :return: Seven-joint serial chain
    """
    world_t_base = Pose3D.identity() if base is None else base
    return SerialChain(
        name="LinearUR3e",
        links=(RAIL_LINK, *UR3E_LINKS),
        base=world_t_base @ RAIL_MOUNT,
        default_seed=JointConfiguration((-0.4, 0.0, -np.pi / 2, 0.0, -np.pi / 2, 0.0, 0.0)),
    )


ROBOT_FACTORIES: dict[str, Callable[[Pose3D | None], SerialChain]] = {
    "ur3e": ur3e,
    "linear_ur3e": linear_ur3e,
}
"""Map from robot names used in deployment configs to functions constructing their models."""
