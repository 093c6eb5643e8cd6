"""
Interactive window: phase-plane canvas plus a small control strip.

Controls:
    x0 / y0 / mu   initial conditions, read on rerun
    Rerun          reset simulation and clear the canvas   (Enter, R)
    Audio          toggle note output                      (F2, A)
    Tab            cycle text field focus
    Esc            quit
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List

import pygame

from vanderscope.audio.tone import AudioOutput, ToneTrigger
from vanderscope.core.events import GateConfig
from vanderscope.core.notes import NoteEvent
from vanderscope.core.oscillator import OscillatorParams
from vanderscope.render.canvas import CanvasConfig, PhaseCanvas
from vanderscope.render.loop import FrameLoop, LoopConfig
from vanderscope.render.widgets import Button, TextField
from vanderscope.simulation import InitialConditions, Simulation


@dataclass
class AppConfig:
    """Everything needed to build a running app."""

    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    params: OscillatorParams = field(default_factory=OscillatorParams)
    gate: GateConfig = field(default_factory=GateConfig)
    initial: InitialConditions = field(default_factory=InitialConditions)
    fps: int = 60
    audio_enabled: bool = True
    max_duration: float | None = None  # seconds of wall time before exiting
    title: str = "Van der Pol"


class VanDerPolApp:
    """
    Owns the simulation, the canvas and the controls.

    Event handling and the rerun/toggle actions are plain methods so they can
    be driven without opening a window.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        output: AudioOutput | None = None,
        on_note: Callable[[NoteEvent], None] | None = None,
    ):
        self.cfg = config or AppConfig()
        cfg = self.cfg

        self.tone = ToneTrigger(output or AudioOutput(), enabled=cfg.audio_enabled)
        self.sim = Simulation(
            initial=cfg.initial,
            params=cfg.params,
            gate=cfg.gate,
            tone=self.tone,
            value_range=cfg.canvas.value_range,
            on_note=on_note,
        )
        self.canvas = PhaseCanvas(cfg.canvas)
        self.loop = FrameLoop(self.sim, self.canvas, cfg.loop)

        ic = cfg.initial
        self.fields: List[TextField] = [
            TextField("x0", (40, 10, 80, 26), f"{ic.x:g}"),
            TextField("y0", (160, 10, 80, 26), f"{ic.y:g}"),
            TextField("mu", (280, 10, 80, 26), f"{ic.mu_base:g}"),
        ]
        self.rerun_button = Button("Rerun", (380, 10, 80, 26))
        self.audio_button = Button(self._audio_label(), (470, 10, 110, 26))

        self.running = False
        self.paused = False

    def _audio_label(self) -> str:
        return f"Audio: {'on' if self.tone.enabled else 'off'}"

    @property
    def focused_field(self) -> TextField | None:
        return next((f for f in self.fields if f.focused), None)

    def rerun(self) -> InitialConditions:
        """
        Re-read the fields and restart from the parsed initial conditions.

        The audio output is made live even while muted, so toggling audio
        back on plays the next note without a cold mixer start.
        """
        ic = InitialConditions.parse(*(f.text for f in self.fields))
        self.sim.reset(ic)
        self.canvas.clear()
        self.tone.output.acquire()
        return ic

    def toggle_audio(self) -> bool:
        enabled = self.tone.toggle()
        self.audio_button.text = self._audio_label()
        if enabled:
            self.tone.output.acquire()
        return enabled

    def resize(self, width: int, height: int) -> None:
        self.canvas.resize(width, height)

    def _cycle_focus(self) -> None:
        current = self.focused_field
        idx = self.fields.index(current) + 1 if current else 0
        for f in self.fields:
            f.focused = False
        self.fields[idx % len(self.fields)].focused = True

    def handle_event(self, ev) -> None:
        if ev.type == pygame.QUIT:
            self.running = False
            return

        if ev.type == pygame.VIDEORESIZE:
            self.resize(ev.w, ev.h)
            return

        if ev.type == pygame.WINDOWMINIMIZED:
            self.paused = True
            self.tone.output.suspend()
            return
        if ev.type == pygame.WINDOWRESTORED:
            self.paused = False
            return

        if ev.type == pygame.MOUSEBUTTONDOWN:
            if self.rerun_button.handle(ev):
                self.rerun()
                return
            if self.audio_button.handle(ev):
                self.toggle_audio()
                return
            for f in self.fields:
                f.handle(ev)
            return

        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE:
                self.running = False
            elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.rerun()
            elif ev.key == pygame.K_TAB:
                self._cycle_focus()
            elif ev.key == pygame.K_F2:
                self.toggle_audio()
            elif self.focused_field is not None:
                self.focused_field.handle(ev)
            elif ev.key == pygame.K_a:
                self.toggle_audio()
            elif ev.key == pygame.K_r:
                self.rerun()

    def draw_controls(self, surf: pygame.Surface) -> None:
        for f in self.fields:
            f.draw(surf)
        self.rerun_button.draw(surf)
        self.audio_button.draw(surf)

    def run(self) -> int:
        """
        Open the window and loop until quit or max_duration.

        Returns:
            Number of frames drawn.
        """
        pygame.display.init()
        pygame.font.init()
        screen = pygame.display.set_mode(self.canvas.size, pygame.RESIZABLE)
        pygame.display.set_caption(self.cfg.title)
        clock = pygame.time.Clock()

        start = time.perf_counter()
        self.running = True
        try:
            while self.running:
                for ev in pygame.event.get():
                    self.handle_event(ev)

                now = time.perf_counter()
                if not self.paused:
                    self.loop.tick(now)

                screen.blit(self.canvas.surface, (0, 0))
                self.draw_controls(screen)
                pygame.display.flip()

                if self.cfg.max_duration is not None and now - start >= self.cfg.max_duration:
                    break
                clock.tick(self.cfg.fps)
        finally:
            pygame.display.quit()

        return self.loop.frames_drawn
