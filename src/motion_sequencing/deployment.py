"""Assemble the sequencer and its collaborators from a deployment configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from motion_sequencing.execution import ActuatorSynchronizer
from motion_sequencing.io.config_schema import DeploymentConfig
from motion_sequencing.io.yaml_utils import load_yaml_data
from motion_sequencing.kinematics import (
    ROBOT_FACTORIES,
    JointConfiguration,
    PoseValidator,
    SerialChain,
)
from motion_sequencing.spatial import EulerRPY, Point3D, Pose3D
from motion_sequencing.tasks import (
    ItemInventory,
    StepCounts,
    TaskPlan,
    TaskSequencer,
    WaypointResolver,
)

if TYPE_CHECKING:
    from motion_sequencing.visualization import Visualizer

CONFIGS_DIR = Path(__file__).parent / "configs"
"""Path to the directory of deployment configurations bundled with the package."""


def bundled_deployments() -> dict[str, Path]:
    """Find the deployment configurations bundled with the package.

    :return: Map from deployment names (file stems) to their YAML paths
    """
    return {path.stem: path for path in sorted(CONFIGS_DIR.glob("*.yaml"))}


@dataclass(frozen=True)
class Deployment:
    """A fully assembled pick-and-place deployment, ready to be run."""

    config: DeploymentConfig
    model: SerialChain
    resolver: WaypointResolver
    start_configuration: JointConfiguration
    step_counts: StepCounts
    gripper_offset: Pose3D

    @classmethod
    def from_config(cls, config: DeploymentConfig) -> Deployment:
        """Construct the robot model, inventory, and waypoint resolver described by a config."""
        model = ROBOT_FACTORIES[config.robot](Pose3D.from_sequence(config.base))
        approach = EulerRPY.from_degrees(*config.approach_rpy_deg)

        fixed_waypoints = {}
        for name, data in config.waypoints.items():
            if len(data) == 3:
                fixed_waypoints[name] = Pose3D.from_position(Point3D.from_sequence(data), approach)
            else:
                fixed_waypoints[name] = Pose3D.from_sequence(data)

        inventory = ItemInventory.from_positions(
            [item.pickup for item in config.items],
            [item.dropoff for item in config.items],
        )

        return cls(
            config=config,
            model=model,
            resolver=WaypointResolver(fixed_waypoints, inventory, approach),
            start_configuration=JointConfiguration.from_sequence(config.start_configuration),
            step_counts=StepCounts(**config.steps.model_dump()),
            gripper_offset=Pose3D.from_position(
                Point3D.identity(),
                EulerRPY.from_degrees(*config.gripper_offset_rpy_deg),
            ),
        )

    @property
    def name(self) -> str:
        """Retrieve the name of the deployment."""
        return self.config.name

    @property
    def num_items(self) -> int:
        """Retrieve the number of items in the deployment's worklist."""
        return self.resolver.worklist_size

    def plan(self) -> TaskPlan:
        """Construct the plan visiting every item of the worklist in order."""
        return TaskPlan.for_inventory_size(self.num_items)

    def build_sequencer(
        self,
        visualizer: Visualizer,
        *,
        escalate_unreachable: bool | None = None,
    ) -> TaskSequencer:
        """Construct a sequencer that renders through the given visualizer.

        :param visualizer: Sink rendering each interpolated step
        :param escalate_unreachable: Override of the config's escalation policy (None = keep)
        :return: Sequencer wired to the deployment's model, resolver, and settings
        """
        escalate = self.config.escalate_unreachable
        if escalate_unreachable is not None:
            escalate = escalate_unreachable

        return TaskSequencer(
            model=self.model,
            resolver=self.resolver,
            synchronizer=ActuatorSynchronizer(self.model, visualizer, self.gripper_offset),
            validator=PoseValidator(self.config.tolerance_m),
            step_counts=self.step_counts,
            escalate_unreachable=escalate,
        )


def load_deployment(name_or_path: str | Path) -> Deployment:
    """Load a bundled deployment by name, or any deployment YAML file by path.

    :param name_or_path: Name of a bundled deployment (e.g., "bricks") or a path to a YAML file
    :return: Assembled deployment
    :raises FileNotFoundError: If neither a bundled deployment nor a file matches
    """
    bundled = bundled_deployments()
    yaml_path = bundled.get(str(name_or_path), Path(name_or_path))

    yaml_data = load_yaml_data(yaml_path, required_keys={"name", "robot", "waypoints"})
    config = DeploymentConfig.model_validate(yaml_data)
    return Deployment.from_config(config)
