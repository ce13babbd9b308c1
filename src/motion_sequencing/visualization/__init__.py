"""Import classes that render the arm and gripper at each step of a motion."""

from .visualizers import DEFAULT_FRAME_DELAY_S as DEFAULT_FRAME_DELAY_S
from .visualizers import ConsoleVisualizer as ConsoleVisualizer
from .visualizers import Frame as Frame
from .visualizers import RecordingVisualizer as RecordingVisualizer
from .visualizers import Visualizer as Visualizer
