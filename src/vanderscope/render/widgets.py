"""
Minimal pygame controls for the control strip: text fields and buttons.
"""

import pygame

_fonts: dict = {}


def font(size: int) -> pygame.font.Font:
    if size not in _fonts:
        if not pygame.font.get_init():
            pygame.font.init()
        _fonts[size] = pygame.font.SysFont("menlo,consolas,dejavusansmono,monospace", size)
    return _fonts[size]


class TextField:
    """Single-line numeric entry. Text is kept raw; parsing happens on rerun."""

    ALLOWED = set("0123456789+-.eE")

    def __init__(self, label: str, rect, text: str = "", max_len: int = 12):
        self.label = label
        self.rect = pygame.Rect(rect)
        self.text = text
        self.max_len = max_len
        self.focused = False

    def handle(self, ev) -> bool:
        """Returns True if the event was consumed."""
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            self.focused = self.rect.collidepoint(ev.pos)
            return self.focused
        if ev.type == pygame.KEYDOWN and self.focused:
            if ev.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
                return True
            if ev.unicode and ev.unicode in self.ALLOWED and len(self.text) < self.max_len:
                self.text += ev.unicode
                return True
        return False

    def draw(self, surf: pygame.Surface) -> None:
        border = (220, 220, 240) if self.focused else (90, 90, 110)
        pygame.draw.rect(surf, (18, 18, 28), self.rect, border_radius=4)
        pygame.draw.rect(surf, border, self.rect, 1, border_radius=4)

        f = font(14)
        label = f.render(self.label, True, (170, 170, 190))
        surf.blit(label, label.get_rect(midright=(self.rect.left - 6, self.rect.centery)))
        value = f.render(self.text, True, (240, 240, 250))
        surf.blit(value, value.get_rect(midleft=(self.rect.left + 6, self.rect.centery)))


class Button:
    def __init__(self, text: str, rect):
        self.text = text
        self.rect = pygame.Rect(rect)

    def handle(self, ev) -> bool:
        """True when the button was clicked."""
        return (
            ev.type == pygame.MOUSEBUTTONDOWN
            and ev.button == 1
            and self.rect.collidepoint(ev.pos)
        )

    def draw(self, surf: pygame.Surface) -> None:
        pygame.draw.rect(surf, (32, 32, 48), self.rect, border_radius=4)
        pygame.draw.rect(surf, (120, 120, 150), self.rect, 1, border_radius=4)
        label = font(14).render(self.text, True, (235, 235, 245))
        surf.blit(label, label.get_rect(center=self.rect.center))
