"""Unit tests for validating achieved poses against their targets."""

import logging

import pytest
from hypothesis import given

from motion_sequencing.kinematics import (
    DEFAULT_TOLERANCE_M,
    PoseValidator,
    UnreachablePoseError,
    ValidationStatus,
    validate_pose,
)
from motion_sequencing.spatial import Pose3D

from .strategies.spatial_strategies import poses_3d


def test_default_tolerance_is_five_millimeters() -> None:
    """Verify the default position tolerance."""
    assert DEFAULT_TOLERANCE_M == 0.005


@pytest.mark.parametrize(
    ("offset_m", "expected_within"),
    [(0.0, True), (0.125, True), (0.25, True), (0.375, False)],
)
def test_validate_pose_compares_position_error_to_tolerance(
    offset_m: float,
    expected_within: bool,
) -> None:
    """Verify that the tolerance is inclusive and that larger errors are reported."""
    # Arrange
    desired = Pose3D.from_xyz_rpy(0.0, 0.0, 0.0)
    achieved = Pose3D.from_xyz_rpy(0.0, 0.0, offset_m)

    # Act
    error_m, within = validate_pose(desired, achieved, tolerance_m=0.25)

    # Assert
    assert error_m == pytest.approx(offset_m, abs=1e-12)
    assert within == expected_within


@given(poses_3d())
def test_pose_is_always_within_tolerance_of_itself(pose: Pose3D) -> None:
    """Verify that any pose validates against itself with zero error."""
    # Arrange/Act
    error_m, within = validate_pose(pose, pose, tolerance_m=0.0)

    # Assert
    assert error_m == 0.0
    assert within


def test_validate_pose_rejects_negative_tolerance() -> None:
    """Verify that a negative tolerance is rejected."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="non-negative"):
        validate_pose(Pose3D.identity(), Pose3D.identity(), tolerance_m=-0.001)


def test_validator_reports_unreachable_pose_without_raising(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that an out-of-tolerance pose is logged as a warning and returned, not raised."""
    # Arrange
    validator = PoseValidator()
    desired = Pose3D.from_xyz_rpy(-0.75, 0.5, 0.5)
    achieved = Pose3D.from_xyz_rpy(-0.75, 0.5, 0.45)

    # Act
    with caplog.at_level(logging.INFO, logger="motion_sequencing"):
        result = validator.validate(desired, achieved)

    # Assert
    assert result.status == ValidationStatus.UNREACHABLE_POSE
    assert result.error_m == pytest.approx(0.05)
    assert any(r.levelno == logging.WARNING for r in caplog.records)
    assert "Desired position: (-0.7500, 0.5000, 0.5000)" in caplog.text
    assert "Actual position: (-0.7500, 0.5000, 0.4500)" in caplog.text


def test_validation_escalates_only_when_asked() -> None:
    """Verify that an unreachable result raises only through `raise_if_unreachable`."""
    # Arrange
    result = PoseValidator(tolerance_m=0.001).validate(
        Pose3D.from_xyz_rpy(1.0, 0.0, 0.0),
        Pose3D.from_xyz_rpy(1.01, 0.0, 0.0),
    )

    # Act/Assert
    with pytest.raises(UnreachablePoseError) as exc_info:
        result.raise_if_unreachable()
    assert exc_info.value.validation is result


def test_satisfied_validation_does_not_raise() -> None:
    """Verify that a result within tolerance escalates to nothing."""
    # Arrange
    pose = Pose3D.from_xyz_rpy(0.3, 0.0, 0.2)

    # Act
    result = PoseValidator().validate(pose, pose)

    # Assert
    assert result.status == ValidationStatus.SATISFIED
    result.raise_if_unreachable()
