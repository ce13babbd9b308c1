"""Unit tests for the command-line interface."""

from pathlib import Path

import yaml
from click.testing import CliRunner

from motion_sequencing.io.cli import cli


def test_list_shows_bundled_deployments() -> None:
    """Verify that `list` prints the names of the bundled deployments."""
    # Arrange/Act
    result = CliRunner().invoke(cli, ["list"])

    # Assert
    assert result.exit_code == 0
    assert "bricks" in result.output
    assert "plates" in result.output


def test_run_plates_headless() -> None:
    """Verify that the plates deployment runs to completion without drawing frames."""
    # Arrange/Act
    result = CliRunner().invoke(cli, ["run", "plates", "--headless"])

    # Assert
    assert result.exit_code == 0, result.output
    assert "13 phases executed" in result.output


def test_run_shows_per_phase_status_by_default() -> None:
    """Verify that a run announces every phase and reports the pose check of each motion."""
    # Arrange/Act
    result = CliRunner().invoke(cli, ["run", "plates", "--headless"])

    # Assert
    assert result.exit_code == 0, result.output
    assert "STATUS:" in result.output
    assert "Desired position" in result.output
    assert "Position error" in result.output


def test_run_quiet_hides_per_phase_status() -> None:
    """Verify that `--quiet` keeps only the summary of the run."""
    # Arrange/Act
    result = CliRunner().invoke(cli, ["run", "plates", "--headless", "--quiet"])

    # Assert
    assert result.exit_code == 0, result.output
    assert "STATUS:" not in result.output
    assert "Position error" not in result.output
    assert "13 phases executed" in result.output


def test_run_unknown_deployment_exits_with_error() -> None:
    """Verify that an unknown deployment name exits with status 1."""
    # Arrange/Act
    result = CliRunner().invoke(cli, ["run", "no-such-deployment", "--headless"])

    # Assert
    assert result.exit_code == 1
    assert "Could not load deployment" in result.output


def test_run_with_escalation_aborts_on_unreachable_item(tmp_path: Path) -> None:
    """Verify that `--escalate` turns an unreachable item into a failed run."""
    # Arrange - The only item sits far outside the UR3e's reach
    config = {
        "name": "out-of-reach",
        "robot": "ur3e",
        "start_configuration": [0.0, -1.57, 1.57, -1.57, -1.57, 0.0],
        "steps": {"approach_pickup": 2, "pickup": 2, "approach_dropoff": 2, "dropoff": 2},
        "waypoints": {"home": [0.3, 0.0, 0.3], "pickup": [3.0, 0.0, 0.3], "dropoff": [0.3, 0, 0.3]},
        "items": [{"pickup": [3.0, 0.0, 0.1], "dropoff": [0.3, -0.1, 0.1]}],
    }
    yaml_path = tmp_path / "out_of_reach.yaml"
    yaml_path.write_text(yaml.safe_dump(config))

    # Act
    result = CliRunner().invoke(cli, ["run", str(yaml_path), "--headless", "--escalate"])

    # Assert
    assert result.exit_code == 1
    assert "Sequence aborted" in result.output
