"""
Short decaying sine tones played through the pygame mixer.

Each note is rendered to its own buffer and handed to the mixer as an
independent Sound, so overlapping notes never share an envelope. The mixer
itself is opened lazily by AudioOutput the first time a note needs it.
"""

import numpy as np
import pygame

from vanderscope.core.notes import midi_to_frequency

# Envelope shape, seconds
ATTACK_S = 0.01
DECAY_END_S = 0.5
STOP_S = 0.6
PEAK_GAIN = 0.4
FLOOR_GAIN = 0.0001


def synthesize_tone(
    frequency: float,
    velocity: float,
    sample_rate: int = 44100,
) -> np.ndarray:
    """
    Render one note as float32 samples in [-1, 1].

    Envelope: linear 0 -> peak over 10ms, exponential peak -> 0.0001 by
    500ms, then held at the floor until the tone stops at 600ms.

    Args:
        frequency: Tone frequency in Hz.
        velocity: MIDI-style velocity; 127 maps to full peak gain.
        sample_rate: Output sample rate in Hz.

    Returns:
        1-D float32 array of round(0.6 * sample_rate) samples.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")

    n = int(round(STOP_S * sample_rate))
    peak = float(np.clip(velocity / 127.0, 0.0, 1.0)) * PEAK_GAIN
    if peak <= 0.0:
        return np.zeros(n, dtype=np.float32)

    t = np.arange(n, dtype=np.float64) / sample_rate

    env = np.empty(n, dtype=np.float64)
    attack = t < ATTACK_S
    env[attack] = peak * t[attack] / ATTACK_S

    decay = ~attack & (t < DECAY_END_S)
    progress = (t[decay] - ATTACK_S) / (DECAY_END_S - ATTACK_S)
    env[decay] = peak * (FLOOR_GAIN / peak) ** progress

    env[t >= DECAY_END_S] = FLOOR_GAIN

    tone = np.sin(2.0 * np.pi * frequency * t) * env
    return tone.astype(np.float32)


def to_pcm16(samples: np.ndarray, channels: int = 1) -> np.ndarray:
    """Convert float samples to the int16 layout pygame.sndarray expects."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, None], channels, axis=1)
    return np.ascontiguousarray(pcm)


class AudioOutput:
    """
    Lazily opened handle on the pygame mixer.

    The mixer is initialised on the first acquire() and reused for the rest
    of the process. suspend() pauses every channel; the next acquire()
    resumes them without waiting.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        channels: int = 1,
        buffer: int = 512,
        voices: int = 32,
    ):
        self.requested_rate = sample_rate
        self.requested_channels = channels
        self.buffer = buffer
        self.voices = voices

        self.sample_rate = sample_rate
        self.channels = channels
        self._ready = False
        self._suspended = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def suspended(self) -> bool:
        return self._suspended

    def acquire(self) -> "AudioOutput":
        if not self._ready:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(
                    frequency=self.requested_rate,
                    size=-16,
                    channels=self.requested_channels,
                    buffer=self.buffer,
                )
            # The device may not grant exactly what was asked for
            self.sample_rate, _, self.channels = pygame.mixer.get_init()
            pygame.mixer.set_num_channels(self.voices)
            self._ready = True

        if self._suspended:
            pygame.mixer.unpause()
            self._suspended = False

        return self

    def suspend(self) -> None:
        if self._ready and not self._suspended:
            pygame.mixer.pause()
            self._suspended = True

    def play(self, samples: np.ndarray) -> pygame.mixer.Sound:
        """Play a float buffer on its own channel, stealing the oldest if all are busy."""
        sound = pygame.sndarray.make_sound(to_pcm16(samples, self.channels))
        channel = pygame.mixer.find_channel(True)
        channel.play(sound)
        return sound

    def close(self) -> None:
        if self._ready:
            pygame.mixer.quit()
        self._ready = False
        self._suspended = False


class ToneTrigger:
    """Fire-and-forget note player with a runtime on/off switch."""

    def __init__(self, output: AudioOutput | None = None, enabled: bool = True):
        self.output = output or AudioOutput()
        self.enabled = enabled

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def trigger(self, pitch: int, velocity: float):
        """
        Play one note. Disabling only affects later calls; notes already
        handed to the mixer ring out.
        """
        if not self.enabled:
            return None

        out = self.output.acquire()
        samples = synthesize_tone(midi_to_frequency(pitch), velocity, out.sample_rate)
        return out.play(samples)
