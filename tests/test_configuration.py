"""Unit tests for joint configurations and joint limits."""

import numpy as np
import pytest
from hypothesis import given

from motion_sequencing.kinematics import JointConfiguration, JointLimits

from .strategies.kinematics_strategies import configurations


@given(configurations(dof=6))
def test_configuration_to_array_and_back(config: JointConfiguration) -> None:
    """Verify that JointConfigurations correctly convert to and from NumPy arrays."""
    # Arrange/Act
    result = JointConfiguration.from_array(config.to_array())

    # Assert
    assert result == config
    assert len(result) == 6


def test_configuration_values_are_python_floats() -> None:
    """Verify that configurations store their values as plain floats regardless of input type."""
    # Arrange/Act
    config = JointConfiguration.from_sequence([np.float32(1.5), 2, np.int64(-3)])

    # Assert
    assert config.values == (1.5, 2.0, -3.0)
    assert all(type(v) is float for v in config)


def test_from_array_rejects_matrices() -> None:
    """Verify that a 2D array cannot be interpreted as a configuration."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="1D array"):
        JointConfiguration.from_array(np.zeros((2, 3)))


@given(configurations(dof=4, limit=10.0))
def test_clip_places_configuration_within_limits(config: JointConfiguration) -> None:
    """Verify that clipping any configuration yields one contained in the limits."""
    # Arrange
    limits = JointLimits.from_pairs([(-1.0, 1.0), (-2.0, 0.5), (0.0, 3.0), (-np.pi, np.pi)])

    # Act
    clipped = limits.clip(config)

    # Assert - Clipping is idempotent and only changes values that were out of range
    assert limits.contains(clipped)
    assert limits.clip(clipped) == clipped
    if limits.contains(config, atol=0.0):
        assert clipped == config


def test_joint_limits_reject_inverted_bounds() -> None:
    """Verify that a lower limit above its upper limit is rejected."""
    # Arrange/Act/Assert
    with pytest.raises(ValueError, match="Joint 1"):
        JointLimits.from_pairs([(-1.0, 1.0), (2.0, 1.0)])


def test_contains_rejects_wrong_dof() -> None:
    """Verify that a configuration with the wrong number of joints is never within limits."""
    # Arrange
    limits = JointLimits.from_pairs([(-1.0, 1.0)] * 3)

    # Act/Assert
    assert limits.contains(JointConfiguration.zeros(3))
    assert not limits.contains(JointConfiguration.zeros(2))
