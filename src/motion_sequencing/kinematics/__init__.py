"""Import classes and definitions for robot kinematics."""

from .configuration import JointConfiguration as JointConfiguration
from .configuration import JointLimits as JointLimits
from .kinematic_model import KinematicModel as KinematicModel
from .pose_validation import DEFAULT_TOLERANCE_M as DEFAULT_TOLERANCE_M
from .pose_validation import PoseValidation as PoseValidation
from .pose_validation import PoseValidator as PoseValidator
from .pose_validation import UnreachablePoseError as UnreachablePoseError
from .pose_validation import ValidationStatus as ValidationStatus
from .pose_validation import validate_pose as validate_pose
from .robots import ROBOT_FACTORIES as ROBOT_FACTORIES
from .robots import linear_ur3e as linear_ur3e
from .robots import ur3e as ur3e
from .serial_chain import DHLink as DHLink
from .serial_chain import JointType as JointType
from .serial_chain import SerialChain as SerialChain
from .serial_chain import SolverSettings as SolverSettings
