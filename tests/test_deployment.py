"""Unit tests for loading, validating, and assembling deployment configurations."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import pytest
import yaml
from pydantic import ValidationError

from motion_sequencing.deployment import Deployment, bundled_deployments, load_deployment
from motion_sequencing.io.config_schema import DeploymentConfig
from motion_sequencing.io.yaml_utils import load_yaml_data
from motion_sequencing.tasks import Phase, SequencerState, TaskSequencer, WaypointSpec
from motion_sequencing.visualization import RecordingVisualizer


def _minimal_config_data(**overrides: Any) -> dict[str, Any]:
    """Construct the data of a small valid UR3e deployment, with optional overrides."""
    data: dict[str, Any] = {
        "name": "minimal",
        "robot": "ur3e",
        "start_configuration": [0.0, -1.57, 1.57, -1.57, -1.57, 0.0],
        "waypoints": {
            "home": [0.3, 0.0, 0.3],
            "pickup": [0.3, 0.1, 0.3],
            "dropoff": [0.3, -0.1, 0.3, np.pi, 0.0, 0.0],
        },
        "items": [{"pickup": [0.3, 0.1, 0.1], "dropoff": [0.3, -0.1, 0.1]}],
    }
    data.update(overrides)
    return data


def test_bundled_deployments_are_discovered() -> None:
    """Verify that both bundled deployments are found by name."""
    # Arrange/Act
    deployments = bundled_deployments()

    # Assert
    assert {"bricks", "plates"} <= set(deployments)
    assert all(path.suffix == ".yaml" for path in deployments.values())


def test_bricks_deployment_matches_the_rail_mounted_system() -> None:
    """Verify the bundled brick-stacking deployment: 9 items, 10 steps, a seven-joint robot."""
    # Arrange/Act
    deployment = load_deployment("bricks")

    # Assert
    assert deployment.num_items == 9
    assert deployment.model.dof == 7
    assert len(deployment.start_configuration) == 7
    assert deployment.step_counts.approach_pickup == 10
    assert len(deployment.plan()) == 37
    assert deployment.config.tolerance_m == 0.005
    home = deployment.resolver.resolve("home")
    assert home.position.to_tuple() == (-0.75, 0.5, 0.5)
    assert np.allclose(home.to_homogeneous_matrix()[:3, 2], [0.0, 0.0, -1.0])


def test_plates_deployment_matches_the_fixed_base_system() -> None:
    """Verify the bundled plate-moving deployment: 3 items, 50 steps, a six-joint robot."""
    # Arrange/Act
    deployment = load_deployment("plates")

    # Assert
    assert deployment.num_items == 3
    assert deployment.model.dof == 6
    assert deployment.step_counts.return_home == 50
    assert len(deployment.plan()) == 13


def test_six_element_waypoints_keep_their_own_orientation(tmp_path: Path) -> None:
    """Verify that an XYZ-RPY waypoint is used as given instead of taking the approach."""
    # Arrange
    yaml_path = tmp_path / "minimal.yaml"
    yaml_path.write_text(yaml.safe_dump(_minimal_config_data(approach_rpy_deg=[0.0, 0.0, 0.0])))

    # Act
    deployment = load_deployment(yaml_path)

    # Assert - The dropoff's pi roll survives while the 3D home takes the identity approach
    dropoff = deployment.resolver.resolve("dropoff").to_homogeneous_matrix()
    home = deployment.resolver.resolve("home").to_homogeneous_matrix()
    assert np.allclose(dropoff[:3, 2], [0.0, 0.0, -1.0])
    assert np.allclose(home[:3, 2], [0.0, 0.0, 1.0])


def test_build_sequencer_applies_the_escalation_override() -> None:
    """Verify that the escalation flag can be overridden when building the sequencer."""
    # Arrange
    deployment = Deployment.from_config(DeploymentConfig.model_validate(_minimal_config_data()))

    # Act
    default = deployment.build_sequencer(RecordingVisualizer())
    escalating = deployment.build_sequencer(RecordingVisualizer(), escalate_unreachable=True)

    # Assert
    assert isinstance(default, TaskSequencer)
    assert not default.escalate_unreachable
    assert escalating.escalate_unreachable
    assert escalating.validator.tolerance_m == 0.005


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"waypoints": {"pickup": [0, 0, 0], "dropoff": [0, 0, 0]}}, "missing waypoints"),
        ({"start_configuration": [0.0, 0.0]}, "6 joints"),
        ({"robot": "ur5"}, "robot"),
        ({"tolerance_m": -1.0}, "tolerance_m"),
        ({"steps": {"pickup": 0}}, "pickup"),
        ({"speed": 3.0}, "speed"),
    ],
)
def test_invalid_configs_are_rejected(overrides: dict[str, Any], message: str) -> None:
    """Verify that malformed deployments fail validation with an informative message."""
    # Arrange
    data = _minimal_config_data(**overrides)

    # Act/Assert
    with pytest.raises(ValidationError, match=message):
        DeploymentConfig.model_validate(data)


def test_item_waypoint_names_are_reserved() -> None:
    """Verify that a fixed waypoint cannot be named after a per-item waypoint."""
    # Arrange
    data = _minimal_config_data()
    data["waypoints"]["item-pickup"] = [0.0, 0.0, 0.0]

    # Act/Assert
    with pytest.raises(ValidationError, match="reserved"):
        DeploymentConfig.model_validate(data)


def test_load_yaml_data_checks_required_keys(tmp_path: Path) -> None:
    """Verify that loading YAML data fails if a required key is missing."""
    # Arrange
    yaml_path = tmp_path / "partial.yaml"
    yaml_path.write_text("name: partial\n")

    # Act/Assert
    assert load_yaml_data(yaml_path) == {"name": "partial"}
    with pytest.raises(KeyError, match="robot"):
        load_yaml_data(yaml_path, required_keys={"name", "robot"})


def test_load_deployment_rejects_unknown_names() -> None:
    """Verify that a name matching neither a bundled deployment nor a file is rejected."""
    # Arrange/Act/Assert
    with pytest.raises(FileNotFoundError):
        load_deployment("no-such-deployment")


def test_bricks_approach_above_pickup_in_ten_steps() -> None:
    """Verify the rail-mounted arm's first motion, from its start configuration to the pickup."""
    # Arrange
    deployment = load_deployment("bricks")
    recorder = RecordingVisualizer()
    sequencer = deployment.build_sequencer(recorder)
    phase = Phase(SequencerState.APPROACH_PICKUP, WaypointSpec("pickup"), 0)

    # Act
    report = sequencer.execute_phase(phase, deployment.start_configuration)

    # Assert - The path starts at the start configuration and ends at the solved configuration
    assert report.steps == 10
    assert len(recorder.frames) == 10
    assert recorder.configurations[0] == deployment.start_configuration
    assert recorder.configurations[-1] == report.q_end

    # Assert - The reported error is the distance from the target to the recomputed position
    achieved = deployment.model.forward(report.q_end).position.to_array()
    expected_error_m = float(np.linalg.norm(np.array([-0.75, 0.5, 0.5]) - achieved))
    assert report.validation.error_m == pytest.approx(expected_error_m)
    assert report.validation.within_tolerance
