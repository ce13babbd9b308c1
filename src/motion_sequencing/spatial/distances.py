"""Define utility functions to compute distance metrics between poses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from motion_sequencing.spatial.points import Point3D
    from motion_sequencing.spatial.poses import Pose3D


def euclidean_distance_3d_m(a: Pose3D | Point3D, b: Pose3D | Point3D) -> float:
    """Compute the straight-line distance (meters) between two 3D positions.

    Orientation is ignored: poses contribute only their positions.

    :param a: First 3D pose or point used to compute the distance
    :param b: Second 3D pose or point used to compute the distance
    :return: Non-negative Euclidean distance (meters) between the two positions
    """
    a_xyz = a.position.to_array() if hasattr(a, "position") else a.to_array()
    b_xyz = b.position.to_array() if hasattr(b, "position") else b.to_array()
    return float(np.linalg.norm(a_xyz - b_xyz))
