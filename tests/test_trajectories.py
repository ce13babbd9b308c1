"""Unit tests for joint-space interpolation between configurations."""

import hypothesis.strategies as st
import numpy as np
import pytest
from hypothesis import given

from motion_sequencing.kinematics import JointConfiguration
from motion_sequencing.motion_planning import interpolate

from .strategies.kinematics_strategies import configuration_pairs


@given(configuration_pairs(), st.integers(min_value=2, max_value=100))
def test_interpolate_hits_both_endpoints_exactly(
    pair: tuple[JointConfiguration, JointConfiguration],
    steps: int,
) -> None:
    """Verify that a segment starts at the start configuration and ends at the end configuration."""
    # Arrange
    q_start, q_end = pair

    # Act
    segment = interpolate(q_start, q_end, steps)

    # Assert - Endpoints are exact, not merely close
    assert len(segment) == steps
    assert segment.start == q_start
    assert segment.end == q_end


@given(configuration_pairs(), st.integers(min_value=2, max_value=100))
def test_interpolated_joints_move_monotonically(
    pair: tuple[JointConfiguration, JointConfiguration],
    steps: int,
) -> None:
    """Verify that every joint moves monotonically from its start value to its end value."""
    # Arrange/Act
    q_start, q_end = pair
    path = np.array([config.values for config in interpolate(q_start, q_end, steps)])

    # Assert - Each joint's increments all share the sign of its total displacement
    direction = np.sign(q_end.to_array() - q_start.to_array())
    assert np.all(np.diff(path, axis=0) * direction >= -1e-12)


@given(configuration_pairs(), st.integers(min_value=1, max_value=50))
def test_every_step_is_a_convex_combination(
    pair: tuple[JointConfiguration, JointConfiguration],
    steps: int,
) -> None:
    """Verify that each step equals (1 - s) q_start + s q_end for its path parameter s."""
    # Arrange/Act
    q_start, q_end = pair
    segment = interpolate(q_start, q_end, steps)

    # Assert
    for step, config in enumerate(segment):
        w_start, w_end = segment.blend_weights(step)
        expected = w_start * q_start.to_array() + w_end * q_end.to_array()
        assert w_start + w_end == pytest.approx(1.0)
        assert np.allclose(config.to_array(), expected)


def test_one_step_segment_jumps_to_the_end() -> None:
    """Verify that a one-step segment contains only the end configuration."""
    # Arrange
    q_start = JointConfiguration((0.0, 0.0))
    q_end = JointConfiguration((1.0, -1.0))

    # Act
    segment = interpolate(q_start, q_end, steps=1)

    # Assert
    assert segment.configurations == (q_end,)


def test_interpolate_between_identical_configurations_holds_still() -> None:
    """Verify that interpolating a configuration to itself repeats it at every step."""
    # Arrange
    q = JointConfiguration((0.5, -1.0, 2.0))

    # Act/Assert
    assert all(config == q for config in interpolate(q, q, steps=10))


def test_interpolate_rejects_mismatched_lengths() -> None:
    """Verify that configurations with different numbers of joints cannot be interpolated."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="3 joints to 2 joints"):
        interpolate(JointConfiguration((0.0, 0.0, 0.0)), JointConfiguration((1.0, 1.0)), 10)


def test_interpolate_rejects_zero_steps() -> None:
    """Verify that a segment must contain at least one step."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="at least one sample"):
        interpolate(JointConfiguration((0.0,)), JointConfiguration((1.0,)), 0)
