"""Define test doubles that make sequencer tests independent of the numerical IK solver."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from motion_sequencing.kinematics import JointConfiguration, JointLimits
from motion_sequencing.spatial import Point3D, Pose3D
from motion_sequencing.tasks import ItemInventory, WaypointResolver
from motion_sequencing.tasks.waypoints import TOP_DOWN_APPROACH

WORKSPACE_LIMIT_M = 1.0


@dataclass
class CartesianModel:
    """A three-joint "robot" whose joint values are the (x, y, z) of its end-effector.

    The end-effector always points straight down. Targets outside the workspace cube are clipped
    onto its surface, so they come back measurably short of the request.
    """

    workspace_limit_m: float = WORKSPACE_LIMIT_M
    seeds: list[JointConfiguration | None] = field(default_factory=list)
    """Seed passed to each call of `inverse_solve`, in call order."""

    @property
    def dof(self) -> int:
        return 3

    @property
    def joint_limits(self) -> JointLimits:
        limit = self.workspace_limit_m
        return JointLimits((-limit,) * 3, (limit,) * 3)

    def forward(self, config: JointConfiguration) -> Pose3D:
        return Pose3D.from_position(Point3D.from_sequence(config.values), TOP_DOWN_APPROACH)

    def inverse_solve(
        self,
        pose: Pose3D,
        seed: JointConfiguration | None = None,
    ) -> JointConfiguration:
        self.seeds.append(seed)
        return self.joint_limits.clip(JointConfiguration(pose.position.to_tuple()))


HOME_XYZ = (0.0, 0.0, 0.5)
PICKUP_XYZ = (0.3, 0.3, 0.5)
DROPOFF_XYZ = (-0.3, 0.3, 0.5)


def make_resolver(num_items: int, out_of_reach: set[int] | None = None) -> WaypointResolver:
    """Construct a resolver over a row of items reachable by a `CartesianModel`.

    :param num_items: Number of items in the worklist
    :param out_of_reach: Indices of items whose pickup positions lie outside the workspace
    """
    out_of_reach = set() if out_of_reach is None else out_of_reach
    xs = np.linspace(-0.5, 0.5, num_items) if num_items > 1 else np.zeros(num_items)
    pickups = [(x, 0.5, 0.5 if i not in out_of_reach else 2.0) for i, x in enumerate(xs)]
    dropoffs = [(x, -0.5, 0.1) for x in xs]

    fixed = {
        "home": Pose3D.from_position(Point3D(*HOME_XYZ), TOP_DOWN_APPROACH),
        "pickup": Pose3D.from_position(Point3D(*PICKUP_XYZ), TOP_DOWN_APPROACH),
        "dropoff": Pose3D.from_position(Point3D(*DROPOFF_XYZ), TOP_DOWN_APPROACH),
    }
    return WaypointResolver(fixed, ItemInventory.from_positions(pickups, dropoffs))
