"""
Frame loop: turns variable frame timings into small fixed integration slices.

The host calls tick() once per displayed frame with a monotonic timestamp.
The first call only records a baseline; every later call integrates the
clamped elapsed time in bounded Euler sub-steps and then draws.
"""

import math
from dataclasses import dataclass
from typing import List

from vanderscope.render.canvas import PhaseCanvas
from vanderscope.simulation import Simulation


@dataclass(frozen=True)
class LoopConfig:
    max_frame_dt: float = 0.1  # clamp for gaps after a stalled or hidden window
    max_step: float = 0.005  # largest Euler slice

    def __post_init__(self):
        if self.max_frame_dt <= 0:
            raise ValueError(f"max_frame_dt must be positive, got {self.max_frame_dt}")
        if self.max_step <= 0:
            raise ValueError(f"max_step must be positive, got {self.max_step}")


def substeps(elapsed: float, max_step: float) -> List[float]:
    """
    Slice elapsed time into steps of max_step plus one final remainder.

    The slice count is fixed up front so float residue can't add a
    vanishing extra step (0.1 / 0.005 is exactly 20 slices).
    """
    if elapsed <= 0:
        return []
    n = max(1, math.ceil(elapsed / max_step - 1e-9))
    last = elapsed - (n - 1) * max_step
    return [max_step] * (n - 1) + [last]


class FrameLoop:
    """Drives a Simulation and a PhaseCanvas from frame timestamps."""

    def __init__(
        self,
        simulation: Simulation,
        canvas: PhaseCanvas | None,
        config: LoopConfig | None = None,
    ):
        self.sim = simulation
        self.canvas = canvas
        self.cfg = config or LoopConfig()

        self.last_frame: float | None = None
        self.frames_drawn = 0

    @property
    def running(self) -> bool:
        return self.last_frame is not None

    def tick(self, timestamp: float) -> bool:
        """
        Advance one frame.

        Args:
            timestamp: Monotonic time in seconds.

        Returns:
            True if the frame integrated and drew, False for the baseline call.
        """
        if self.last_frame is None:
            self.last_frame = timestamp
            return False

        elapsed = min(max(timestamp - self.last_frame, 0.0), self.cfg.max_frame_dt)
        self.last_frame = timestamp

        for dt in substeps(elapsed, self.cfg.max_step):
            self.sim.step(dt)

        if self.canvas is not None:
            self.canvas.render_frame(self.sim.state)
        self.frames_drawn += 1
        return True
