"""Define utilities to check how closely a solved configuration reaches its target pose."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from motion_sequencing.io.logging import log_info, log_warning
from motion_sequencing.spatial import euclidean_distance_3d_m

if TYPE_CHECKING:
    from motion_sequencing.spatial import Pose3D

DEFAULT_TOLERANCE_M = 0.005
"""Maximum acceptable position error (meters) between desired and achieved poses (5 mm)."""


class ValidationStatus(Enum):
    """Named outcomes of validating an achieved pose against its target."""

    SATISFIED = "satisfied"
    UNREACHABLE_POSE = "unreachable_pose"


class UnreachablePoseError(Exception):
    """An error raised when a caller chooses to escalate an out-of-tolerance pose."""

    def __init__(self, validation: PoseValidation) -> None:
        """Initialize the error from the validation result that triggered it."""
        super().__init__(
            f"Achieved position {validation.achieved.position} is {validation.error_m:.4f} m "
            f"from the desired {validation.desired.position} "
            f"(tolerance {validation.tolerance_m} m).",
        )
        self.validation = validation


@dataclass(frozen=True)
class PoseValidation:
    """The result of comparing an achieved end-effector pose against the requested pose."""

    desired: Pose3D
    achieved: Pose3D
    error_m: float
    """Euclidean distance (meters) between the desired and achieved positions."""

    tolerance_m: float

    @property
    def within_tolerance(self) -> bool:
        """Evaluate whether the position error is no larger than the tolerance."""
        return self.error_m <= self.tolerance_m

    @property
    def status(self) -> ValidationStatus:
        """Retrieve the named outcome of the validation."""
        if self.within_tolerance:
            return ValidationStatus.SATISFIED
        return ValidationStatus.UNREACHABLE_POSE

    def raise_if_unreachable(self) -> None:
        """Escalate an out-of-tolerance result into an exception.

        :raises UnreachablePoseError: If the position error exceeds the tolerance
        """
        if not self.within_tolerance:
            raise UnreachablePoseError(self)


def validate_pose(desired: Pose3D, achieved: Pose3D, tolerance_m: float) -> tuple[float, bool]:
    """Compute the position error between two poses and whether it is within tolerance.

    Orientation error is not checked.

    :param desired: Requested end-effector pose
    :param achieved: End-effector pose recomputed from the solved configuration
    :param tolerance_m: Maximum acceptable position error (meters)
    :return: Tuple of the position error (meters) and whether it is within the tolerance
    """
    if tolerance_m < 0:
        raise ValueError(f"Position tolerance must be non-negative, got {tolerance_m}")
    error_m = euclidean_distance_3d_m(desired, achieved)
    return error_m, error_m <= tolerance_m


class PoseValidator:
    """Reports how far each achieved pose falls from its target, without halting motion."""

    def __init__(self, tolerance_m: float = DEFAULT_TOLERANCE_M) -> None:
        """Initialize the validator with its position tolerance (meters)."""
        if tolerance_m < 0:
            raise ValueError(f"Position tolerance must be non-negative, got {tolerance_m}")
        self.tolerance_m = tolerance_m

    def validate(self, desired: Pose3D, achieved: Pose3D) -> PoseValidation:
        """Compare the achieved pose against the desired pose and log the result.

        :param desired: Requested end-effector pose
        :param achieved: End-effector pose recomputed from the solved configuration
        :return: Validation result; an out-of-tolerance pose is reported, never raised
        """
        error_m, _ = validate_pose(desired, achieved, self.tolerance_m)
        result = PoseValidation(desired, achieved, error_m, self.tolerance_m)

        tolerance_mm = self.tolerance_m * 1000.0
        if result.within_tolerance:
            log_info(f"Pose satisfied within +-{tolerance_mm:g} mm.")
        else:
            log_warning(f"Pose does not meet the +-{tolerance_mm:g} mm tolerance.")

        log_info(f"Desired position: {desired.position}")
        log_info(f"Actual position: {achieved.position}")
        log_info(f"Position error: {error_m:.6f} m")

        return result
