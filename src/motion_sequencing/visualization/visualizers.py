"""Define the sink through which each interpolated step of a motion is rendered."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from motion_sequencing.io.logging import console as shared_console

if TYPE_CHECKING:
    from types import TracebackType

    from motion_sequencing.kinematics import JointConfiguration
    from motion_sequencing.spatial import Pose3D


DEFAULT_FRAME_DELAY_S = 0.01
"""Pause (seconds) after each rendered frame so that motions are watchable by a person."""


class Visualizer(Protocol):
    """Renders the arm and its gripper once per interpolation step."""

    def render_frame(
        self,
        config: JointConfiguration,
        actuator_pose: Pose3D,
        status_text: str,
    ) -> None:
        """Render one frame; returns only once the frame has been drawn."""
        ...


@dataclass(frozen=True)
class Frame:
    """A single rendered step: the arm configuration, the gripper pose, and the status overlay."""

    configuration: JointConfiguration
    actuator_pose: Pose3D
    status_text: str


@dataclass
class RecordingVisualizer:
    """A headless visualizer that records every frame it is asked to render."""

    frames: list[Frame] = field(default_factory=list)

    def render_frame(
        self,
        config: JointConfiguration,
        actuator_pose: Pose3D,
        status_text: str,
    ) -> None:
        """Record the frame without drawing anything."""
        self.frames.append(Frame(config, actuator_pose, status_text))

    @property
    def configurations(self) -> list[JointConfiguration]:
        """Retrieve the arm configurations of all recorded frames in order."""
        return [frame.configuration for frame in self.frames]

    def clear(self) -> None:
        """Discard all recorded frames."""
        self.frames.clear()


class ConsoleVisualizer:
    """Renders each frame as a single live status panel in the terminal.

    The panel is the visualizer's only overlay: each frame replaces it in place, and leaving the
    context manager always releases it. Use as:

        with ConsoleVisualizer() as viz:
            sequencer.run(plan, q_start)
    """

    def __init__(
        self,
        console: Console | None = None,
        frame_delay_s: float = DEFAULT_FRAME_DELAY_S,
        title: str = "Arm status",
    ) -> None:
        """Initialize the visualizer.

        :param console: Rich console to draw on (defaults to the package's shared console)
        :param frame_delay_s: Pause (seconds) after each frame; zero disables pacing
        :param title: Title shown on the status panel
        """
        if frame_delay_s < 0:
            raise ValueError(f"Frame delay must be non-negative, got {frame_delay_s}")

        self.console = shared_console if console is None else console
        self.frame_delay_s = frame_delay_s
        self.title = title
        self.frames_rendered = 0
        self._live: Live | None = None

    def __enter__(self) -> ConsoleVisualizer:
        """Acquire the on-screen overlay."""
        self._live = Live(console=self.console, auto_refresh=False, transient=False)
        self._live.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Release the on-screen overlay, even if the sequence raised."""
        if self._live is not None:
            self._live.stop()
            self._live = None

    def render_frame(
        self,
        config: JointConfiguration,
        actuator_pose: Pose3D,
        status_text: str,
    ) -> None:
        """Replace the overlay with this frame's status, then pause for the frame delay."""
        if self._live is None:
            raise RuntimeError("ConsoleVisualizer must be entered (`with`) before rendering.")

        self.frames_rendered += 1
        panel = Panel(
            Group(
                Text(status_text, style="magenta"),
                Text(f"joints:  {config}", style="cyan"),
                Text(f"gripper: {actuator_pose.position}", style="green"),
            ),
            title=Text(f"{self.title} [frame {self.frames_rendered}]"),
            expand=False,
        )
        self._live.update(panel, refresh=True)

        if self.frame_delay_s > 0:
            time.sleep(self.frame_delay_s)
