"""Define Pydantic models for validating deployment YAML configuration files.

A deployment names the robot, its start configuration, the fixed waypoints, the items of the
worklist, and the motion settings. Validating the file up front turns missing fields or
malformed poses into clear errors at load time rather than partway through a run.

Example usage:
    yaml_data = load_yaml_data(Path("bricks.yaml"))
    config = DeploymentConfig.model_validate(yaml_data)  # Raises ValidationError on issues
"""

from __future__ import annotations

from typing import Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from motion_sequencing.kinematics.robots import ROBOT_FACTORIES
from motion_sequencing.tasks.waypoints import FIXED_WAYPOINT_NAMES, ITEM_WAYPOINT_NAMES

# =============================================================================
# Pose Schemata
# =============================================================================

XYZ = Tuple[float, float, float]
"""A three-tuple of floats representing a position (meters)."""

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""A six-tuple of floats representing a position (meters) and fixed-frame RPY angles (radians)."""

RPY_DEG = Tuple[float, float, float]
"""A three-tuple of fixed-frame roll, pitch, and yaw angles (degrees)."""

WaypointSchema = Union[XYZ, XYZ_RPY]
"""A waypoint is a position (taking the approach orientation) or a full XYZ-RPY pose."""


# =============================================================================
# Deployment Schemata
# =============================================================================


class StepCountsSchema(BaseModel):
    """Schema for the number of interpolation steps used by each class of motion."""

    approach_pickup: int = Field(default=10, ge=1)
    pickup: int = Field(default=10, ge=1)
    approach_dropoff: int = Field(default=10, ge=1)
    dropoff: int = Field(default=10, ge=1)
    return_home: int = Field(default=10, ge=1)

    model_config = ConfigDict(extra="forbid")


class ItemSchema(BaseModel):
    """Schema for the pickup and dropoff positions of one item in the worklist."""

    pickup: XYZ
    dropoff: XYZ

    model_config = ConfigDict(extra="forbid")


class DeploymentConfig(BaseModel):
    """Schema for a complete pick-and-place deployment."""

    name: str
    robot: Literal["ur3e", "linear_ur3e"]
    base: XYZ_RPY = (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    """Pose of the robot's base in the world frame."""

    start_configuration: List[float]
    tolerance_m: float = Field(default=0.005, ge=0.0)
    escalate_unreachable: bool = False
    frame_delay_s: float = Field(default=0.01, ge=0.0)
    steps: StepCountsSchema = Field(default_factory=StepCountsSchema)
    approach_rpy_deg: RPY_DEG = (180.0, 0.0, 0.0)
    gripper_offset_rpy_deg: RPY_DEG = (0.0, -90.0, 0.0)
    waypoints: Dict[str, WaypointSchema]
    items: List[ItemSchema] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_consistency(self) -> DeploymentConfig:
        """Verify that the waypoints and start configuration fit the robot."""
        missing = [name for name in FIXED_WAYPOINT_NAMES if name not in self.waypoints]
        if missing:
            raise ValueError(f"Deployment '{self.name}' is missing waypoints: {missing}")

        clashing = [name for name in ITEM_WAYPOINT_NAMES if name in self.waypoints]
        if clashing:
            raise ValueError(f"Waypoint names {clashing} are reserved for per-item targets")

        dof = ROBOT_FACTORIES[self.robot](None).dof
        if len(self.start_configuration) != dof:
            raise ValueError(
                f"Robot '{self.robot}' has {dof} joints, "
                f"but the start configuration has {len(self.start_configuration)} values",
            )

        return self
