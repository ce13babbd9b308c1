"""Define classes to represent robot joint configurations and their limits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import NDArray


@dataclass(frozen=True)
class JointConfiguration:
    """An ordered vector of joint positions (rad for revolute joints, m for prismatic joints)."""

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        """Store the joint values as a tuple of Python floats."""
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

    def __len__(self) -> int:
        """Return the number of joints (degrees of freedom) in the configuration."""
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        """Provide an iterator over the joint values in their canonical order."""
        yield from self.values

    def __getitem__(self, index: int) -> float:
        """Retrieve the value of the joint at the given index."""
        return self.values[index]

    def __str__(self) -> str:
        """Return a compact human-readable representation of the configuration."""
        return "[" + ", ".join(f"{v:.4f}" for v in self.values) + "]"

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> JointConfiguration:
        """Construct a configuration from a sequence (e.g., list or tuple) of joint values."""
        return cls(tuple(values))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> JointConfiguration:
        """Construct a configuration from a one-dimensional NumPy array."""
        if arr.ndim != 1:
            raise ValueError(f"JointConfiguration expects a 1D array, got shape {arr.shape}")
        return cls(tuple(arr.tolist()))

    @classmethod
    def zeros(cls, dof: int) -> JointConfiguration:
        """Construct the all-zero configuration for a robot with the given degrees of freedom."""
        return cls((0.0,) * dof)

    def to_array(self) -> NDArray[np.float64]:
        """Convert the configuration into a NumPy array."""
        return np.array(self.values, dtype=np.float64)

    def approx_equal(
        self,
        other: JointConfiguration,
        rtol: float = 1e-05,
        atol: float = 1e-08,
    ) -> bool:
        """Evaluate whether another configuration is approximately equal to this one."""
        if len(self) != len(other):
            return False
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=rtol, atol=atol))


@dataclass(frozen=True)
class JointLimits:
    """Lower and upper position limits for each joint of a robot."""

    lower: tuple[float, ...]
    upper: tuple[float, ...]

    def __post_init__(self) -> None:
        """Verify that the limits are consistent."""
        if len(self.lower) != len(self.upper):
            raise ValueError(f"Got {len(self.lower)} lower limits but {len(self.upper)} upper.")
        for idx, (low, high) in enumerate(zip(self.lower, self.upper)):
            if low > high:
                raise ValueError(f"Joint {idx} has lower limit {low} above upper limit {high}.")

    @property
    def dof(self) -> int:
        """Retrieve the number of joints constrained by the limits."""
        return len(self.lower)

    @classmethod
    def from_pairs(cls, pairs: Sequence[tuple[float, float]]) -> JointLimits:
        """Construct joint limits from a sequence of (lower, upper) pairs."""
        return cls(tuple(float(p[0]) for p in pairs), tuple(float(p[1]) for p in pairs))

    def contains(self, config: JointConfiguration, atol: float = 1e-9) -> bool:
        """Evaluate whether every joint value lies within its limits."""
        if len(config) != self.dof:
            return False
        q = config.to_array()
        above_lower = np.all(q >= np.array(self.lower) - atol)
        below_upper = np.all(q <= np.array(self.upper) + atol)
        return bool(above_lower and below_upper)

    def clip_array(self, q: NDArray[np.float64]) -> NDArray[np.float64]:
        """Clip an array of joint values into the limits."""
        return np.clip(q, np.array(self.lower), np.array(self.upper))

    def clip(self, config: JointConfiguration) -> JointConfiguration:
        """Return the configuration with every joint value clipped into its limits."""
        return JointConfiguration.from_array(self.clip_array(config.to_array()))
