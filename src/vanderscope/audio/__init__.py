"""Tone synthesis and audio output."""

from vanderscope.audio.tone import AudioOutput, ToneTrigger, synthesize_tone
