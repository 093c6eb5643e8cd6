"""
Map oscillator state onto MIDI-like note requests.

x picks a degree of the scale, |y| sets how hard the note is struck.
"""

import math
from dataclasses import dataclass
from typing import Sequence

A4 = 440.0

NATURAL_MINOR = (0, 2, 3, 5, 7, 10)
ROOT_NOTE = 60  # MIDI C4


def midi_to_frequency(note: float, a4: float = A4) -> float:
    return float(a4 * (2.0 ** ((note - 69.0) / 12.0)))


def pitch_from_x(
    x: float,
    value_range: float,
    scale: Sequence[int] = NATURAL_MINOR,
    root: int = ROOT_NOTE,
) -> int:
    """
    Quantize x onto one of len(scale) pitches.

    x is normalized by the drawing range and clamped to [-1, 1], then the
    unit interval is split into equal buckets, one per scale degree. The top
    bucket also takes u == 1.
    """
    xn = max(-1.0, min(1.0, x / value_range))
    u = (xn + 1.0) / 2.0
    i = min(len(scale) - 1, math.floor(u * len(scale)))
    return root + scale[i]


def velocity_from_y(y: float) -> float:
    """Velocity in [0, 100]; saturates once |y| >= 1."""
    return min(1.0, abs(y)) * 100.0


@dataclass(frozen=True)
class NoteEvent:
    pitch: int
    velocity: float  # 0-127

    @classmethod
    def from_state(cls, x: float, y: float, value_range: float) -> "NoteEvent":
        return cls(pitch=pitch_from_x(x, value_range), velocity=velocity_from_y(y))

    @property
    def frequency(self) -> float:
        return midi_to_frequency(self.pitch)
