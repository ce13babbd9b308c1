"""Define a serial-chain kinematic model built from standard Denavit-Hartenberg parameters.

Forward kinematics is the product of the base transform, one DH transform per joint, and the tool
transform. Inverse kinematics uses damped least squares on the 6D pose error (position and
rotation vector), clipped to the joint limits, from a deterministic sequence of seeds. The solver
returns its best candidate even when it fails to converge, so callers must validate the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from motion_sequencing.kinematics.configuration import JointConfiguration, JointLimits
from motion_sequencing.spatial import Pose3D

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray


class JointType(Enum):
    """An enumeration of robot joint types."""

    REVOLUTE = 0
    PRISMATIC = 1


@dataclass(frozen=True)
class DHLink:
    """One link of a serial chain, described by standard Denavit-Hartenberg parameters."""

    d: float = 0.0
    """Offset (m) along the previous z-axis (variable for prismatic joints)."""

    a: float = 0.0
    """Length (m) of the common normal."""

    alpha: float = 0.0
    """Twist (rad) about the common normal."""

    theta: float = 0.0
    """Fixed joint angle (rad), used only by prismatic joints."""

    offset: float = 0.0
    """Constant added to the joint variable before computing the transform."""

    joint_type: JointType = JointType.REVOLUTE
    limits: tuple[float, float] = (-2 * np.pi, 2 * np.pi)
    """Lower and upper position limits (rad or m) of the joint."""

    def transform(self, q: float) -> NDArray[np.float64]:
        """Compute the 4x4 transform from this link's parent frame to its own frame.

        :param q: Joint variable (rad for revolute joints, m for prismatic joints)
        :return: Homogeneous transformation matrix Rz(theta) Tz(d) Tx(a) Rx(alpha)
        """
        if self.joint_type == JointType.REVOLUTE:
            theta, d = q + self.offset, self.d
        else:
            theta, d = self.theta, q + self.offset

        ct, st = np.cos(theta), np.sin(theta)
        ca, sa = np.cos(self.alpha), np.sin(self.alpha)
        return np.array(
            [
                [ct, -st * ca, st * sa, self.a * ct],
                [st, ct * ca, -ct * sa, self.a * st],
                [0.0, sa, ca, d],
                [0.0, 0.0, 0.0, 1.0],
            ],
        )


@dataclass(frozen=True)
class SolverSettings:
    """Parameters of the damped least-squares inverse kinematics solver."""

    max_iterations: int = 200
    damping: float = 0.05
    max_step: float = 0.25
    """Largest joint-space step (norm) taken in a single iteration."""

    position_tolerance_m: float = 1e-5
    orientation_tolerance_rad: float = 1e-4
    restarts: int = 6
    """Number of pseudo-random seeds tried after the caller's seed (or the default seed)."""

    random_seed: int = 0


def rotation_error(r_desired: NDArray[np.float64], r_current: NDArray[np.float64]) -> NDArray:
    """Compute the world-frame rotation vector taking the current orientation to the desired one.

    :param r_desired: Desired 3x3 rotation matrix
    :param r_current: Current 3x3 rotation matrix
    :return: Rotation vector (axis scaled by angle in radians)
    """
    r_err = r_desired @ r_current.T
    cos_angle = np.clip((np.trace(r_err) - 1.0) / 2.0, -1.0, 1.0)
    angle = float(np.arccos(cos_angle))
    vee = np.array(
        [r_err[2, 1] - r_err[1, 2], r_err[0, 2] - r_err[2, 0], r_err[1, 0] - r_err[0, 1]],
    )

    if angle < 1e-9:
        return 0.5 * vee
    if np.pi - angle > 1e-6:
        return angle / (2.0 * np.sin(angle)) * vee

    # Near pi the antisymmetric part vanishes; recover the axis from the symmetric part
    sym = (r_err + np.eye(3)) / 2.0
    column = int(np.argmax(np.diag(sym)))
    axis = sym[:, column] / np.sqrt(max(sym[column, column], 1e-12))
    return angle * axis / np.linalg.norm(axis)


@dataclass(frozen=True)
class SerialChain:
    """A kinematic model of a serial robot arm, usable as the sequencer's `KinematicModel`."""

    name: str
    links: tuple[DHLink, ...]
    base: Pose3D = field(default_factory=Pose3D.identity)
    """Pose of the chain's base frame in the world frame."""

    tool: Pose3D = field(default_factory=Pose3D.identity)
    """Pose of the tool (end-effector) frame relative to the final link frame."""

    default_seed: JointConfiguration | None = None
    settings: SolverSettings = field(default_factory=SolverSettings)

    @property
    def dof(self) -> int:
        """Retrieve the number of joints in the chain."""
        return len(self.links)

    @property
    def joint_limits(self) -> JointLimits:
        """Retrieve the position limits of the chain's joints."""
        return JointLimits.from_pairs([link.limits for link in self.links])

    def _check_dof(self, values: Sequence[float]) -> None:
        if len(values) != self.dof:
            raise ValueError(f"{self.name} has {self.dof} joints but got {len(values)} values.")

    def joint_frames(self, q: NDArray[np.float64]) -> list[NDArray[np.float64]]:
        """Compute the world-frame transform of the base and of every link frame.

        :param q: Joint values in their canonical order
        :return: List of N+1 homogeneous matrices: the base frame followed by each link frame
        """
        frames = [self.base.to_homogeneous_matrix()]
        for link, q_i in zip(self.links, q):
            frames.append(frames[-1] @ link.transform(float(q_i)))
        return frames

    def forward_matrix(self, q: NDArray[np.float64]) -> NDArray[np.float64]:
        """Compute the 4x4 world-frame transform of the tool frame for the given joint values."""
        return self.joint_frames(q)[-1] @ self.tool.to_homogeneous_matrix()

    def forward(self, config: JointConfiguration) -> Pose3D:
        """Compute the end-effector pose reached by the given joint configuration."""
        self._check_dof(config.values)
        return Pose3D.from_homogeneous_matrix(self.forward_matrix(config.to_array()))

    def jacobian(self, q: NDArray[np.float64]) -> NDArray[np.float64]:
        """Compute the 6xN geometric Jacobian (linear rows first) of the tool frame."""
        frames = self.joint_frames(q)
        p_tool = (frames[-1] @ self.tool.to_homogeneous_matrix())[:3, 3]

        jac = np.zeros((6, self.dof))
        for idx, link in enumerate(self.links):
            z_axis = frames[idx][:3, 2]
            origin = frames[idx][:3, 3]
            if link.joint_type == JointType.REVOLUTE:
                jac[:3, idx] = np.cross(z_axis, p_tool - origin)
                jac[3:, idx] = z_axis
            else:
                jac[:3, idx] = z_axis
        return jac

    def pose_error(self, target: NDArray[np.float64], q: NDArray[np.float64]) -> NDArray:
        """Compute the 6D error (position, rotation vector) from the tool pose to the target."""
        current = self.forward_matrix(q)
        e_position = target[:3, 3] - current[:3, 3]
        e_rotation = rotation_error(target[:3, :3], current[:3, :3])
        return np.concatenate([e_position, e_rotation])

    def _solve_from(
        self,
        target: NDArray[np.float64],
        q0: NDArray[np.float64],
        limits: JointLimits,
    ) -> tuple[NDArray[np.float64], float]:
        """Run damped least squares from one seed; return the final joint values and their cost."""
        s = self.settings
        q = limits.clip_array(q0)
        error = self.pose_error(target, q)

        for _ in range(s.max_iterations):
            if (
                np.linalg.norm(error[:3]) < s.position_tolerance_m
                and np.linalg.norm(error[3:]) < s.orientation_tolerance_rad
            ):
                break

            jac = self.jacobian(q)
            damped = jac @ jac.T + (s.damping**2) * np.eye(6)
            step = jac.T @ np.linalg.solve(damped, error)

            step_norm = float(np.linalg.norm(step))
            if step_norm > s.max_step:
                step *= s.max_step / step_norm

            q = limits.clip_array(q + step)
            error = self.pose_error(target, q)

        return q, _cost(error)

    def _seeds(self, seed: JointConfiguration | None, limits: JointLimits) -> list[NDArray]:
        """Build the deterministic list of initial guesses tried by the solver."""
        lower, upper = np.array(limits.lower), np.array(limits.upper)
        seeds = []
        if seed is not None:
            self._check_dof(seed.values)
            seeds.append(seed.to_array())
        if self.default_seed is not None:
            seeds.append(self.default_seed.to_array())
        seeds.append(np.clip(np.zeros(self.dof), lower, upper))

        rng = np.random.default_rng(self.settings.random_seed)
        seeds.extend(rng.uniform(lower, upper) for _ in range(self.settings.restarts))
        return seeds

    def inverse_solve(
        self,
        pose: Pose3D,
        seed: JointConfiguration | None = None,
    ) -> JointConfiguration:
        """Compute a joint configuration placing the end-effector as close as possible to a pose.

        :param pose: Target end-effector pose in the world frame
        :param seed: Optional initial guess, tried before the default and pseudo-random seeds
        :return: Best configuration found (within joint limits), even if not fully converged
        :raises ValueError: If the target pose contains non-finite values
        """
        target = pose.to_homogeneous_matrix()
        if not np.all(np.isfinite(target)):
            raise ValueError(f"Cannot solve IK for a non-finite target pose: {pose}")
        limits = self.joint_limits

        best_q, best_cost = None, np.inf
        for q0 in self._seeds(seed, limits):
            q, cost = self._solve_from(target, q0, limits)
            if best_q is None or cost < best_cost:
                best_q, best_cost = q, cost
            if self._converged(target, q):
                break

        return JointConfiguration.from_array(best_q)

    def _converged(self, target: NDArray[np.float64], q: NDArray[np.float64]) -> bool:
        error = self.pose_error(target, q)
        return bool(
            np.linalg.norm(error[:3]) < self.settings.position_tolerance_m
            and np.linalg.norm(error[3:]) < self.settings.orientation_tolerance_rad,
        )


def _cost(error: NDArray[np.float64]) -> float:
    """Score a 6D pose error, weighting position (m) and orientation (rad) equally."""
    return float(np.linalg.norm(error[:3]) + np.linalg.norm(error[3:]))
