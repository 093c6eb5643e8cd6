"""Simulation core: integrator, event gate and note mapping."""

from vanderscope.core.events import GateConfig, ZeroCrossingDetector
from vanderscope.core.notes import (
    NATURAL_MINOR,
    ROOT_NOTE,
    NoteEvent,
    midi_to_frequency,
    pitch_from_x,
    velocity_from_y,
)
from vanderscope.core.oscillator import (
    VARIANTS,
    OscillatorParams,
    OscillatorState,
    VanDerPolOscillator,
)
