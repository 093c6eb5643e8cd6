"""
Phase-plane drawing surface.

The trajectory is never redrawn as a polyline; each frame washes the
surface with a faint black layer and plots only the current point, so older
positions fade into a trail on their own.
"""

from dataclasses import dataclass

import numpy as np
import pygame

from vanderscope.core.oscillator import OscillatorState

BACKGROUND = (0, 0, 0)
POINT_COLOR = (255, 255, 255)
AXES_ALPHA = 128  # 0.5 opacity
HUD_ALPHA = 217  # 0.85 opacity


@dataclass
class CanvasConfig:
    """Configuration for the phase-plane canvas."""

    width: int = 1280
    height: int = 720
    value_range: float = 5.0  # half-width of the visible plane, both axes
    trail_alpha: float = 0.02  # opacity of the per-frame fade wash
    point_radius: float = 2.5
    show_axes: bool = True
    show_hud: bool = True
    hud_padding: int = 12
    tick_size: int = 4

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas size must be positive, got {self.width}x{self.height}")
        if self.value_range <= 0:
            raise ValueError(f"value_range must be positive, got {self.value_range}")


class PhaseCanvas:
    """
    Draws the oscillator state onto an off-screen pygame Surface.

    The host blits `surface` onto the display; widgets are drawn on the
    display afterwards so they never leave trails.
    """

    def __init__(self, config: CanvasConfig | None = None):
        self.cfg = config or CanvasConfig()
        if not pygame.font.get_init():
            pygame.font.init()

        self.label_font = pygame.font.SysFont("arial", 12)
        self.hud_font = pygame.font.SysFont("menlo,consolas,dejavusansmono,monospace", 14)

        self.surface: pygame.Surface = pygame.Surface((self.cfg.width, self.cfg.height))
        self._fade: pygame.Surface | None = None
        self._axes: pygame.Surface | None = None
        self._build_layers()
        self.clear()

    @property
    def size(self) -> tuple[int, int]:
        return self.cfg.width, self.cfg.height

    def to_px_x(self, x: float) -> float:
        r = self.cfg.value_range
        return (x / (2 * r) + 0.5) * self.cfg.width

    def to_px_y(self, y: float) -> float:
        r = self.cfg.value_range
        return (0.5 - y / (2 * r)) * self.cfg.height

    def clear(self) -> None:
        self.surface.fill(BACKGROUND)

    def resize(self, width: int, height: int) -> None:
        """Match a new window size. The old trail is discarded."""
        self.cfg.width = max(1, int(width))
        self.cfg.height = max(1, int(height))
        self.surface = pygame.Surface((self.cfg.width, self.cfg.height))
        self._build_layers()
        self.clear()

    def _build_layers(self) -> None:
        size = (self.cfg.width, self.cfg.height)

        self._fade = pygame.Surface(size, pygame.SRCALPHA)
        fade_alpha = max(1, int(round(self.cfg.trail_alpha * 255)))
        self._fade.fill((*BACKGROUND, fade_alpha))

        # Axes never change between resizes, so draw them once
        self._axes = pygame.Surface(size, pygame.SRCALPHA)
        self._draw_axes(self._axes)
        self._axes.set_alpha(AXES_ALPHA)

    def _draw_axes(self, layer: pygame.Surface) -> None:
        cfg = self.cfg
        white = (255, 255, 255)
        ox = self.to_px_x(0)
        oy = self.to_px_y(0)

        pygame.draw.line(layer, white, (0, oy), (cfg.width, oy))
        pygame.draw.line(layer, white, (ox, 0), (ox, cfg.height))

        limit = int(np.floor(cfg.value_range))
        for v in range(-limit, limit + 1):
            px = self.to_px_x(v)
            py = self.to_px_y(v)

            # x-axis tick, label below
            pygame.draw.line(layer, white, (px, oy - cfg.tick_size), (px, oy + cfg.tick_size))
            label = self.label_font.render(str(v), True, white)
            layer.blit(label, label.get_rect(midtop=(px, oy + 6)))

            # y-axis tick, label to the left (origin already labelled)
            pygame.draw.line(layer, white, (ox - cfg.tick_size, py), (ox + cfg.tick_size, py))
            if v != 0:
                label = self.label_font.render(str(v), True, white)
                layer.blit(label, label.get_rect(midright=(ox - 8, py)))

        x_label = self.label_font.render("x", True, white)
        layer.blit(x_label, x_label.get_rect(midtop=(cfg.width - 12, oy + 6)))
        y_label = self.label_font.render("y", True, white)
        layer.blit(y_label, y_label.get_rect(midbottom=(ox + 12, 12)))

    def hud_text(self, state: OscillatorState) -> str:
        # Fixed width so the numbers don't jitter
        return f"x: {state.x:7.2f}  y: {state.y:7.2f}"

    def _draw_hud(self, state: OscillatorState) -> None:
        text = self.hud_font.render(self.hud_text(state), True, (255, 255, 255))
        text.set_alpha(HUD_ALPHA)
        pad = self.cfg.hud_padding
        self.surface.blit(text, text.get_rect(topright=(self.cfg.width - pad, pad)))

    def render_frame(self, state: OscillatorState) -> pygame.Surface:
        """Fade the previous frame and draw the current point on top."""
        self.surface.blit(self._fade, (0, 0))

        if self.cfg.show_axes:
            self.surface.blit(self._axes, (0, 0))

        center = (self.to_px_x(state.x), self.to_px_y(state.y))
        pygame.draw.circle(self.surface, POINT_COLOR, center, self.cfg.point_radius)

        if self.cfg.show_hud:
            self._draw_hud(state)

        return self.surface

    def to_array(self) -> np.ndarray:
        """Current surface as an (H, W, 3) uint8 array."""
        arr = pygame.surfarray.array3d(self.surface)
        return np.transpose(arr, (1, 0, 2))
