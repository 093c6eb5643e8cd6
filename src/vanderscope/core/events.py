"""
Upward zero-crossing detector with a breathing minimum interval.

Turns the continuous x(t) of the oscillator into discrete onsets. An onset is
reported when x goes from strictly negative to non-negative within one step
and more than gate(time) seconds have passed since the previous onset.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GateConfig:
    """Minimum inter-onset interval and its slow modulation."""

    min_interval: float = 0.15  # seconds
    gate_amplitude: float = 0.2
    gate_rate: float = 0.1  # rad per second

    def __post_init__(self):
        if self.min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {self.min_interval}")
        if self.gate_rate <= 0:
            raise ValueError(f"gate_rate must be positive, got {self.gate_rate}")


class ZeroCrossingDetector:
    """
    Observes x once per integration step.

    prev_x starts equal to the initial x, so the very first observation can
    only fire if x itself crossed zero during that first step.
    """

    def __init__(self, config: GateConfig | None = None, x0: float = 0.1):
        self.cfg = config or GateConfig()
        self.prev_x = x0
        self.last_event_time = 0.0

    def gate(self, time: float) -> float:
        return self.cfg.min_interval + self.cfg.gate_amplitude * math.sin(time * self.cfg.gate_rate)

    def observe(self, x: float, time: float) -> bool:
        """
        Record the post-step x and report whether an onset fired.

        Args:
            x: Current (post-step) x.
            time: Current elapsed time, non-decreasing between calls.

        Returns:
            True when this step produced an onset.
        """
        crossing_up = self.prev_x < 0 and x >= 0
        fired = crossing_up and (time - self.last_event_time) > self.gate(time)

        if fired:
            self.last_event_time = time

        self.prev_x = x
        return fired

    def reset(self, x0: float) -> None:
        self.prev_x = x0
        self.last_event_time = 0.0
