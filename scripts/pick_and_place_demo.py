"""Demonstrate a pick-and-place sequence assembled directly in Python, without a YAML file.

A fixed-base UR3e moves a row of items from one side of its workspace to the other, showing the
live status panel for every interpolated step.

To run this script, use the commands:

    uv venv --clear && uv sync
    uv run scripts/pick_and_place_demo.py --items 3

"""

from __future__ import annotations

import logging

import click
import numpy as np

from motion_sequencing.execution import ActuatorSynchronizer
from motion_sequencing.io import configure_logging, console
from motion_sequencing.kinematics import JointConfiguration, PoseValidator, ur3e
from motion_sequencing.spatial import Point3D, Pose3D
from motion_sequencing.tasks import (
    ItemInventory,
    StepCounts,
    TaskPlan,
    TaskSequencer,
    WaypointResolver,
)
from motion_sequencing.tasks.waypoints import TOP_DOWN_APPROACH
from motion_sequencing.visualization import ConsoleVisualizer

# Workspace layout (meters, world frame); the robot base sits at the origin
ITEM_SPACING_M = 0.06
PICKUP_ROW_Y_M = 0.25
DROPOFF_ROW_Y_M = -0.25
TABLE_Z_M = 0.05
STANDBY = Point3D(0.3, 0.0, 0.35)


@click.command()
@click.option("--items", type=click.IntRange(1, 5), default=3, help="Number of items to move.")
@click.option("--steps", type=click.IntRange(min=1), default=20, help="Steps per motion.")
@click.option("--frame-delay", type=float, default=0.01, help="Pause (s) after each frame.")
def main(items: int, steps: int, frame_delay: float) -> None:
    """Move a row of items across the table and print the final configuration."""
    configure_logging(logging.INFO)

    xs = 0.25 + ITEM_SPACING_M * np.arange(items)
    inventory = ItemInventory.from_positions(
        pickups=[(x, PICKUP_ROW_Y_M, TABLE_Z_M) for x in xs],
        dropoffs=[(x, DROPOFF_ROW_Y_M, TABLE_Z_M) for x in xs],
    )

    standby = Pose3D.from_position(STANDBY, TOP_DOWN_APPROACH)
    resolver = WaypointResolver(
        {"home": standby, "pickup": standby, "dropoff": standby},
        inventory,
    )

    model = ur3e()
    q_start = JointConfiguration((0.0, -np.pi / 2, np.pi / 2, -np.pi / 2, -np.pi / 2, 0.0))

    with ConsoleVisualizer(frame_delay_s=frame_delay, title="pick-and-place demo") as viz:
        sequencer = TaskSequencer(
            model,
            resolver,
            ActuatorSynchronizer(model, viz),
            PoseValidator(),
            StepCounts.uniform(steps),
        )
        report = sequencer.run(TaskPlan.for_inventory_size(items), q_start)

    console.print(f"Executed {len(report)} phases ({len(report.unreachable)} out of tolerance).")
    console.print(f"Final configuration: {report.final_configuration}")


if __name__ == "__main__":
    main()
