"""Import classes that execute planned motions step by step."""

from .synchronizer import GRIPPER_MOUNT_OFFSET as GRIPPER_MOUNT_OFFSET
from .synchronizer import ActuatorSynchronizer as ActuatorSynchronizer
from .synchronizer import format_pose_overlay as format_pose_overlay
