"""
Van der Pol oscillator with a slowly breathing damping parameter.

    dx/dt = y
    dy/dt = mu(t) * (1 - x^2) * y - x
    mu(t) = mu_base + mu_amplitude * sin(t * mu_rate)

Integration is plain explicit Euler. Stability comes from the caller keeping
dt small (see vanderscope.render.loop), there is no adaptive step control.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class OscillatorParams:
    """Modulation of the damping coefficient around its base value."""

    mu_amplitude: float = 0.8
    mu_rate: float = 0.1  # rad per simulated second

    def __post_init__(self):
        if not math.isfinite(self.mu_amplitude) or not math.isfinite(self.mu_rate):
            raise ValueError("mu modulation must be finite")
        if self.mu_rate <= 0:
            raise ValueError(f"mu_rate must be positive, got {self.mu_rate}")


# Named presets. "simple" is the gentler modulation of the first iteration.
VARIANTS: Dict[str, OscillatorParams] = {
    "canonical": OscillatorParams(mu_amplitude=0.8, mu_rate=0.1),
    "simple": OscillatorParams(mu_amplitude=0.5, mu_rate=0.05),
}


@dataclass
class OscillatorState:
    x: float = 0.1
    y: float = 0.0
    t: float = 0.0  # simulated time, drives mu
    time: float = 0.0  # elapsed time, drives the event gate


class VanDerPolOscillator:
    """
    Two-variable Euler integrator.

    The state object is mutated in place by step() and reset() only.
    """

    def __init__(
        self,
        mu_base: float = 1.5,
        params: OscillatorParams | None = None,
        state: OscillatorState | None = None,
    ):
        self.params = params or OscillatorParams()
        self.mu_base = mu_base
        self.state = state or OscillatorState()

    def mu(self, t: float) -> float:
        return self.mu_base + self.params.mu_amplitude * math.sin(t * self.params.mu_rate)

    def derivatives(self, x: float, y: float, t: float) -> Tuple[float, float]:
        """Right-hand side of the system at (x, y, t)."""
        m = self.mu(t)
        return y, m * (1.0 - x * x) * y - x

    def step(self, dt: float) -> None:
        """
        Advance the state by one Euler slice.

        dt must be positive; callers are expected to slice frame time
        before getting here.
        """
        s = self.state
        dx, dy = self.derivatives(s.x, s.y, s.t)

        s.x += dx * dt
        s.y += dy * dt
        s.t += dt
        s.time += dt

    def reset(self, x: float, y: float, mu_base: float) -> None:
        self.mu_base = mu_base
        self.state.x = x
        self.state.y = y
        self.state.t = 0.0
        self.state.time = 0.0
