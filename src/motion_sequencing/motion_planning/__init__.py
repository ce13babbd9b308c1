"""Import classes and definitions for smooth joint-space motion between configurations."""

from .time_scaling import lspb as lspb
from .time_scaling import lspb_samples as lspb_samples
from .time_scaling import lspb_velocity as lspb_velocity
from .trajectories import TrajectorySegment as TrajectorySegment
from .trajectories import interpolate as interpolate
