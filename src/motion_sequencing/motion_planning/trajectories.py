"""Define classes to represent joint-space trajectory segments between two configurations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from motion_sequencing.kinematics.configuration import JointConfiguration
from motion_sequencing.motion_planning.time_scaling import DEFAULT_CRUISE_VELOCITY, lspb_samples

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class TrajectorySegment:
    """An ordered sequence of configurations interpolated from a start to an end configuration."""

    configurations: tuple[JointConfiguration, ...]
    path_parameters: tuple[float, ...]
    """Time-scaling value s used to blend each configuration (0 = start, 1 = end)."""

    def __post_init__(self) -> None:
        """Verify that every configuration has a matching path parameter."""
        if len(self.configurations) != len(self.path_parameters):
            raise ValueError(
                f"Segment has {len(self.configurations)} configurations "
                f"but {len(self.path_parameters)} path parameters.",
            )

    def __len__(self) -> int:
        """Return the number of steps in the segment."""
        return len(self.configurations)

    def __iter__(self) -> Iterator[JointConfiguration]:
        """Provide an iterator over the segment's configurations in execution order."""
        yield from self.configurations

    def __getitem__(self, index: int) -> JointConfiguration:
        """Retrieve the configuration at the given step."""
        return self.configurations[index]

    @property
    def start(self) -> JointConfiguration:
        """Retrieve the first configuration of the segment."""
        return self.configurations[0]

    @property
    def end(self) -> JointConfiguration:
        """Retrieve the final configuration of the segment."""
        return self.configurations[-1]

    def blend_weights(self, step: int) -> tuple[float, float]:
        """Retrieve the (start, end) weights of the convex combination used at the given step."""
        s = self.path_parameters[step]
        return (1.0 - s, s)


def interpolate(
    q_start: JointConfiguration,
    q_end: JointConfiguration,
    steps: int,
    cruise_velocity: float = DEFAULT_CRUISE_VELOCITY,
) -> TrajectorySegment:
    """Build an LSPB time-scaled joint-space segment from one configuration to another.

    Every joint is blended by the same scalar s(t), so joints covering different distances start
    and stop together but do not share velocity or acceleration limits.

    :param q_start: Configuration at the start of the motion
    :param q_end: Configuration at the end of the motion
    :param steps: Number of configurations in the segment (1 gives a single jump to `q_end`)
    :param cruise_velocity: Cruise velocity of the LSPB profile on the unit interval
    :return: Segment whose first element equals `q_start` and last equals `q_end` (if steps >= 2)
    """
    if len(q_start) != len(q_end):
        raise ValueError(f"Cannot interpolate from {len(q_start)} joints to {len(q_end)} joints.")

    start, end = q_start.to_array(), q_end.to_array()
    samples = lspb_samples(steps, cruise_velocity)

    configurations = tuple(
        JointConfiguration.from_array((1.0 - s) * start + s * end) for s in samples
    )
    return TrajectorySegment(configurations, tuple(float(s) for s in samples))
