"""Define a class to represent poses in 3D space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from motion_sequencing.spatial.frames import DEFAULT_FRAME
from motion_sequencing.spatial.points import Point3D
from motion_sequencing.spatial.rotations import EulerRPY, Quaternion

XYZ_RPY = Tuple[float, float, float, float, float, float]
"""A 6-tuple of (x, y, z, roll, pitch, yaw) values."""


@dataclass(frozen=True)
class Pose3D:
    """A position and orientation in 3D space."""

    position: Point3D
    orientation: Quaternion
    ref_frame: str = DEFAULT_FRAME

    def __matmul__(self, other: Pose3D) -> Pose3D:
        """Compose this pose with another pose expressed relative to it.

        Consider: pose_A_B @ pose_B_C = pose_A_C, meaning the pose of 'C' relative to frame A.
            Therefore, we see that the resulting pose takes the "left-side" reference frame.

        :param other: Pose right-multiplied with this pose
        :return: Composed pose, with orientations combined by their Hamilton product
        """
        if not isinstance(other, Pose3D):
            raise NotImplementedError(f"Cannot matrix-multiply Pose3D with: {other}")

        offset = self.orientation.rotate(other.position.to_array())
        position = Point3D.from_array(self.position.to_array() + offset)
        return Pose3D(position, self.orientation * other.orientation, self.ref_frame)

    def __str__(self) -> str:
        """Return a human-readable string representation of the Pose3D."""
        xyz_rpy = ", ".join(f"{value:.3f}" for value in self.to_xyz_rpy())
        return f'Pose3D([{xyz_rpy}], ref_frame="{self.ref_frame}")'

    @classmethod
    def identity(cls, ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Construct a Pose3D corresponding to the identity transformation."""
        return Pose3D(Point3D.identity(), Quaternion.identity(), ref_frame)

    @classmethod
    def from_xyz_rpy(
        cls,
        x: float = 0.0,
        y: float = 0.0,
        z: float = 0.0,
        roll_rad: float = 0.0,
        pitch_rad: float = 0.0,
        yaw_rad: float = 0.0,
        ref_frame: str = DEFAULT_FRAME,
    ) -> Pose3D:
        """Construct a Pose3D from the given XYZ coordinates and Euler RPY angles.

        :param x: Translation along the x-axis
        :param y: Translation along the y-axis
        :param z: Translation along the z-axis
        :param roll_rad: Fixed-frame roll angle (radians) about the x-axis
        :param pitch_rad: Fixed-frame pitch angle (radians) about the y-axis
        :param yaw_rad: Fixed-frame yaw angle (radians) about the z-axis
        :param ref_frame: Reference frame of the constructed pose
        :return: Constructed Pose3D instance
        """
        position = Point3D(float(x), float(y), float(z))
        orientation = EulerRPY(roll_rad, pitch_rad, yaw_rad).to_quaternion()

        return Pose3D(position, orientation, ref_frame)

    @classmethod
    def from_position(
        cls,
        position: Point3D,
        orientation: EulerRPY,
        ref_frame: str = DEFAULT_FRAME,
    ) -> Pose3D:
        """Compose a position with a fixed orientation given as Euler angles."""
        return Pose3D(position, orientation.to_quaternion(), ref_frame)

    def to_xyz_rpy(self) -> XYZ_RPY:
        """Convert the pose into a tuple of its (x, y, z, roll, pitch, yaw) values."""
        return (*self.position.to_tuple(), *self.orientation.to_euler_rpy().to_tuple())

    @classmethod
    def from_sequence(cls, data: XYZ_RPY | list[float], ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Construct a Pose3D from the given sequence of XYZ-RPY data.

        :param data: Sequence of six floats specifying (x, y, z, roll, pitch, yaw)
        :param ref_frame: Reference frame of the constructed Pose3D
        :return: Constructed Pose3D instance
        """
        if len(data) != 6:
            raise ValueError(f"Cannot construct Pose3D from sequence of length {len(data)}.")
        x, y, z, roll, pitch, yaw = data
        return Pose3D.from_xyz_rpy(x, y, z, roll, pitch, yaw, ref_frame)

    @classmethod
    def from_homogeneous_matrix(cls, matrix: np.ndarray, ref_frame: str = DEFAULT_FRAME) -> Pose3D:
        """Construct a Pose3D from a 4x4 homogeneous transformation matrix."""
        if matrix.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 matrix but received shape {matrix.shape}")

        position = Point3D(float(matrix[0, 3]), float(matrix[1, 3]), float(matrix[2, 3]))
        orientation = Quaternion.from_homogeneous_matrix(matrix)
        return Pose3D(position, orientation, ref_frame)

    def to_homogeneous_matrix(self) -> np.ndarray:
        """Convert the Pose3D into a 4x4 homogeneous transformation matrix."""
        matrix = self.orientation.to_homogeneous_matrix()
        matrix[:3, 3] = self.position.to_array()
        return matrix

    def approx_equal(self, other: Pose3D, rtol: float = 1e-05, atol: float = 1e-08) -> bool:
        """Evaluate whether another Pose3D is approximately equal to this one."""
        return (
            self.ref_frame == other.ref_frame
            and self.position.approx_equal(other.position, rtol=rtol, atol=atol)
            and self.orientation.approx_equal(other.orientation, rtol=rtol, atol=atol)
        )
