"""Define the Linear Segment with Parabolic Blend (LSPB) time-scaling profile.

The profile maps normalized time t in [0, 1] to a path parameter s in [0, 1]. It accelerates
uniformly during the first blend, cruises at constant velocity, then decelerates uniformly during
the final blend: the trapezoidal velocity profile reduced to the unit interval.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

DEFAULT_CRUISE_VELOCITY = 1.5
"""Cruise velocity ds/dt of the linear segment, giving a blend duration of 1/3."""


def _blend_parameters(cruise_velocity: float) -> tuple[float, float]:
    """Compute the blend duration and the blend acceleration for a given cruise velocity."""
    if not 1.0 < cruise_velocity <= 2.0:
        raise ValueError(f"LSPB cruise velocity must be within (1, 2], got {cruise_velocity}")
    blend_time = (cruise_velocity - 1.0) / cruise_velocity
    return blend_time, cruise_velocity / blend_time


def lspb(t: float | NDArray, cruise_velocity: float = DEFAULT_CRUISE_VELOCITY) -> NDArray:
    """Evaluate the LSPB path parameter s(t) on the unit interval.

    :param t: Normalized time(s) within [0, 1] (values outside are clamped)
    :param cruise_velocity: Velocity of the linear segment, within (1, 2]
    :return: Path parameter(s) s(t) with s(0) = 0 and s(1) = 1
    """
    blend_time, accel = _blend_parameters(cruise_velocity)
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)

    rising = 0.5 * accel * t**2
    cruising = cruise_velocity * t - 0.5 * accel * blend_time**2
    falling = 1.0 - 0.5 * accel * (1.0 - t) ** 2

    return np.where(t <= blend_time, rising, np.where(t < 1.0 - blend_time, cruising, falling))


def lspb_velocity(t: float | NDArray, cruise_velocity: float = DEFAULT_CRUISE_VELOCITY) -> NDArray:
    """Evaluate the LSPB path velocity ds/dt on the unit interval.

    :param t: Normalized time(s) within [0, 1] (values outside are clamped)
    :param cruise_velocity: Velocity of the linear segment, within (1, 2]
    :return: Path velocity ds/dt, zero at both ends of the interval
    """
    blend_time, accel = _blend_parameters(cruise_velocity)
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)

    return np.where(
        t <= blend_time,
        accel * t,
        np.where(t < 1.0 - blend_time, cruise_velocity, accel * (1.0 - t)),
    )


def lspb_samples(steps: int, cruise_velocity: float = DEFAULT_CRUISE_VELOCITY) -> NDArray:
    """Sample the LSPB profile at `steps` uniformly spaced times from 0 to 1 (inclusive).

    A single sample is taken at t = 1, so a one-step motion jumps straight to its end.
    """
    if steps < 1:
        raise ValueError(f"LSPB requires at least one sample, got {steps}")
    if steps == 1:
        return np.ones(1)
    return lspb(np.linspace(0.0, 1.0, steps), cruise_velocity)
