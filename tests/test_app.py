"""Tests for the interactive app's actions and event handling (no window)."""

import pygame
import pytest

from vanderscope.app import AppConfig, VanDerPolApp
from vanderscope.core.oscillator import OscillatorState
from vanderscope.render.canvas import CanvasConfig
from vanderscope.simulation import InitialConditions


@pytest.fixture
def app(output) -> VanDerPolApp:
    cfg = AppConfig(canvas=CanvasConfig(width=640, height=360))
    return VanDerPolApp(cfg, output=output)


def _key(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=0)


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


class TestRerun:
    def test_fields_start_with_initial_conditions(self, app):
        assert [f.text for f in app.fields] == ["0.1", "0", "1.5"]

    def test_rerun_parses_and_resets(self, app, output):
        for _ in range(200):
            app.sim.step(0.005)
        app.canvas.render_frame(app.sim.state)

        app.fields[0].text = "junk"
        app.fields[1].text = ""
        app.fields[2].text = "2.0"
        ic = app.rerun()

        assert ic == InitialConditions(0.1, 0.0, 2.0)
        assert app.sim.state == OscillatorState(x=0.1, y=0.0, t=0.0, time=0.0)
        assert app.sim.oscillator.mu_base == 2.0
        assert not app.canvas.to_array().any()
        assert output.acquire_calls == 1

    def test_rerun_with_audio_off_still_opens_output(self, output):
        app = VanDerPolApp(AppConfig(audio_enabled=False), output=output)
        app.rerun()
        assert output.acquire_calls == 1
        # muted: nothing is played
        assert not app.tone.enabled
        assert output.played == []

    def test_enter_reruns(self, app):
        app.sim.step(0.005)
        app.handle_event(_key(pygame.K_RETURN))
        assert app.sim.state.t == 0.0

    def test_rerun_button(self, app):
        app.sim.step(0.005)
        app.handle_event(_click(app.rerun_button.rect.center))
        assert app.sim.state.t == 0.0


class TestAudioToggle:
    def test_toggle_updates_label(self, app, output):
        assert app.audio_button.text == "Audio: on"
        assert app.toggle_audio() is False
        assert app.audio_button.text == "Audio: off"
        assert output.acquire_calls == 0

        assert app.toggle_audio() is True
        assert app.audio_button.text == "Audio: on"
        assert output.acquire_calls == 1

    def test_button_and_shortcuts(self, app):
        app.handle_event(_click(app.audio_button.rect.center))
        assert not app.tone.enabled
        app.handle_event(_key(pygame.K_F2))
        assert app.tone.enabled
        app.handle_event(_key(pygame.K_a, "a"))
        assert not app.tone.enabled


class TestFields:
    def test_tab_focus_and_typing(self, app):
        app.handle_event(_key(pygame.K_TAB, "\t"))
        assert app.focused_field is app.fields[0]

        app.handle_event(_key(pygame.K_BACKSPACE))
        app.handle_event(_key(pygame.K_BACKSPACE))
        app.handle_event(_key(pygame.K_BACKSPACE))
        for ch in "-2.5":
            app.handle_event(_key(ord(ch), ch))
        assert app.fields[0].text == "-2.5"

        app.handle_event(_key(pygame.K_TAB, "\t"))
        assert app.focused_field is app.fields[1]

    def test_letters_ignored_while_typing(self, app):
        app.handle_event(_click(app.fields[2].rect.center))
        assert app.focused_field is app.fields[2]
        app.handle_event(_key(pygame.K_a, "a"))
        assert app.fields[2].text == "1.5"
        # the shortcut must not fire while a field has focus
        assert app.tone.enabled

    def test_click_elsewhere_drops_focus(self, app):
        app.handle_event(_click(app.fields[0].rect.center))
        app.handle_event(_click((500, 300)))
        assert app.focused_field is None


class TestWindowEvents:
    def test_quit(self, app):
        app.running = True
        app.handle_event(pygame.event.Event(pygame.QUIT))
        assert not app.running

    def test_escape(self, app):
        app.running = True
        app.handle_event(_key(pygame.K_ESCAPE))
        assert not app.running

    def test_resize_keeps_simulation(self, app):
        for _ in range(10):
            app.sim.step(0.005)
        before = OscillatorState(**vars(app.sim.state))

        app.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=300, h=200, size=(300, 200)))

        assert app.canvas.size == (300, 200)
        assert app.sim.state == before

    def test_minimize_pauses_and_suspends_audio(self, app, output):
        app.handle_event(pygame.event.Event(pygame.WINDOWMINIMIZED))
        assert app.paused
        assert output.suspend_calls == 1
        app.handle_event(pygame.event.Event(pygame.WINDOWRESTORED))
        assert not app.paused


def test_draw_controls(app):
    surf = pygame.Surface((640, 360))
    app.draw_controls(surf)
    assert pygame.surfarray.array3d(surf)[:, :40].any()
