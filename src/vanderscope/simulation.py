"""
Simulation state owned by the render loop.

Bundles the oscillator, the onset detector and the tone trigger so that a
reset replaces everything in one call and nothing lives in module globals.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from vanderscope.audio.tone import ToneTrigger
from vanderscope.core.events import GateConfig, ZeroCrossingDetector
from vanderscope.core.notes import NoteEvent
from vanderscope.core.oscillator import OscillatorParams, OscillatorState, VanDerPolOscillator

DEFAULT_X = 0.1
DEFAULT_Y = 0.0
DEFAULT_MU_BASE = 1.5

# Half-width of the visible phase plane; also the pitch normalization range
VALUE_RANGE = 5.0


# Longest leading decimal number; trailing text is ignored ("0.5-" -> 0.5)
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(value: Any, fallback: float) -> float:
    """
    Parse the numeric prefix of user text.

    Half-typed entries like "1.5e" or "2abc" keep their leading number.
    Returns fallback when no number leads the text or it overflows to inf.
    """
    m = _NUMBER_PREFIX.match(str(value))
    if m is None:
        return fallback
    v = float(m.group(1))
    return v if math.isfinite(v) else fallback


@dataclass(frozen=True)
class InitialConditions:
    x: float = DEFAULT_X
    y: float = DEFAULT_Y
    mu_base: float = DEFAULT_MU_BASE

    @classmethod
    def parse(cls, x: Any, y: Any, mu_base: Any) -> "InitialConditions":
        return cls(
            x=parse_float(x, DEFAULT_X),
            y=parse_float(y, DEFAULT_Y),
            mu_base=parse_float(mu_base, DEFAULT_MU_BASE),
        )


class Simulation:
    """
    One running oscillator plus its onset gate.

    step() is the only place state advances; every fired onset is mapped to
    a NoteEvent, sent to the tone trigger (if any) and reported to on_note.
    """

    def __init__(
        self,
        initial: InitialConditions | None = None,
        params: OscillatorParams | None = None,
        gate: GateConfig | None = None,
        tone: ToneTrigger | None = None,
        value_range: float = VALUE_RANGE,
        on_note: Callable[[NoteEvent], None] | None = None,
    ):
        self.initial = initial or InitialConditions()
        self.oscillator = VanDerPolOscillator(self.initial.mu_base, params)
        self.detector = ZeroCrossingDetector(gate, self.initial.x)
        self.tone = tone
        self.value_range = value_range
        self.on_note = on_note
        self.notes_fired = 0

        self.reset(self.initial)

    @property
    def state(self) -> OscillatorState:
        return self.oscillator.state

    def reset(self, initial: InitialConditions | None = None) -> None:
        """Overwrite oscillator and gate state with fresh initial conditions."""
        if initial is not None:
            self.initial = initial
        ic = self.initial
        self.oscillator.reset(ic.x, ic.y, ic.mu_base)
        self.detector.reset(ic.x)

    def step(self, dt: float) -> NoteEvent | None:
        self.oscillator.step(dt)
        s = self.oscillator.state

        if not self.detector.observe(s.x, s.time):
            return None

        note = NoteEvent.from_state(s.x, s.y, self.value_range)
        if self.tone is not None:
            self.tone.trigger(note.pitch, note.velocity)
        self.notes_fired += 1
        if self.on_note is not None:
            self.on_note(note)
        return note
