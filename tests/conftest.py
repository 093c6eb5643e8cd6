"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from vanderscope.render.canvas import CanvasConfig, PhaseCanvas
from vanderscope.simulation import InitialConditions, Simulation


class RecordingOutput:
    """Stands in for AudioOutput; keeps every buffer it is asked to play."""

    def __init__(self, sample_rate: int = 22050):
        self.sample_rate = sample_rate
        self.channels = 1
        self.acquire_calls = 0
        self.suspend_calls = 0
        self.played: list[np.ndarray] = []

    def acquire(self):
        self.acquire_calls += 1
        return self

    def suspend(self):
        self.suspend_calls += 1

    def play(self, samples):
        self.played.append(samples)
        return samples

    def close(self):
        pass


@pytest.fixture(scope="session", autouse=True)
def pygame_fonts():
    pygame.font.init()
    yield
    pygame.font.quit()


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def default_sim() -> Simulation:
    """Simulation at the default initial conditions, no audio."""
    return Simulation(InitialConditions())


@pytest.fixture
def small_canvas() -> PhaseCanvas:
    return PhaseCanvas(CanvasConfig(width=200, height=100))
