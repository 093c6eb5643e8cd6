"""Tests for input parsing and the Simulation state object."""

import pytest

from vanderscope.audio.tone import ToneTrigger
from vanderscope.simulation import (
    DEFAULT_MU_BASE,
    DEFAULT_X,
    DEFAULT_Y,
    InitialConditions,
    Simulation,
    parse_float,
)


class TestParseFloat:
    @pytest.mark.parametrize("raw", ["", "   ", "abc", "-", ".", "e5", None, "inf", "-inf", "nan", "1e999"])
    def test_junk_falls_back(self, raw):
        assert parse_float(raw, 0.1) == 0.1

    @pytest.mark.parametrize(
        "raw, expected",
        [("2.5", 2.5), (" -1 ", -1.0), ("1e-3", 0.001), (".5", 0.5), ("-.25", -0.25),
         ("5.", 5.0), (3, 3.0), (0.25, 0.25)],
    )
    def test_valid_values(self, raw, expected):
        assert parse_float(raw, 0.1) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("1.5e", 1.5), ("0.5-", 0.5), ("1.2.3", 1.2), ("2abc", 2.0), ("1_000", 1.0),
         ("3e+", 3.0), ("-4.5e2x", -450.0)],
    )
    def test_leading_number_is_kept(self, raw, expected):
        assert parse_float(raw, 0.1) == expected


class TestInitialConditions:
    def test_defaults(self):
        ic = InitialConditions()
        assert (ic.x, ic.y, ic.mu_base) == (0.1, 0.0, 1.5)

    def test_all_junk_gives_exact_defaults(self):
        ic = InitialConditions.parse("", "not a number", "nan")
        assert ic == InitialConditions(DEFAULT_X, DEFAULT_Y, DEFAULT_MU_BASE)

    def test_mixed(self):
        assert InitialConditions.parse("-0.5", "", "3") == InitialConditions(-0.5, 0.0, 3.0)


class TestSimulation:
    def test_first_step_from_defaults(self, default_sim):
        assert default_sim.step(0.005) is None
        s = default_sim.state
        assert s.x == pytest.approx(0.1)
        assert s.y == pytest.approx(-0.0005)
        assert s.t == pytest.approx(0.005)
        assert s.time == pytest.approx(0.005)

    def test_reset_overwrites_everything(self, default_sim):
        for _ in range(5000):
            default_sim.step(0.005)
        default_sim.reset(InitialConditions(x=-1.0, y=0.3, mu_base=2.0))

        s = default_sim.state
        assert (s.x, s.y, s.t, s.time) == (-1.0, 0.3, 0.0, 0.0)
        assert default_sim.oscillator.mu_base == 2.0
        assert default_sim.detector.prev_x == -1.0
        assert default_sim.detector.last_event_time == 0.0

    def test_reset_without_argument_reuses_initial(self, default_sim):
        for _ in range(100):
            default_sim.step(0.005)
        default_sim.reset()
        assert default_sim.state.x == DEFAULT_X
        assert default_sim.state.t == 0.0

    def test_notes_reach_trigger_and_callback(self, output):
        heard = []
        sim = Simulation(tone=ToneTrigger(output), on_note=heard.append)
        for _ in range(6000):  # 30 simulated seconds
            sim.step(0.005)

        assert sim.notes_fired > 0
        assert len(heard) == sim.notes_fired
        assert len(output.played) == sim.notes_fired
        for note in heard:
            assert 60 <= note.pitch <= 70
            assert 0 <= note.velocity <= 100

    def test_note_uses_post_step_state(self):
        heard = []
        sim = Simulation(InitialConditions(x=-0.01, y=1.0, mu_base=1.0), on_note=heard.append)
        sim.detector.last_event_time = -10.0  # open the gate immediately

        for _ in range(10):
            note = sim.step(0.005)
            if note:
                break

        assert heard and heard[0] is note
        assert sim.state.x >= 0
        assert note.velocity == pytest.approx(min(1.0, abs(sim.state.y)) * 100)

    def test_muted_trigger_still_counts_notes(self, output):
        tone = ToneTrigger(output, enabled=False)
        sim = Simulation(tone=tone)
        for _ in range(6000):
            sim.step(0.005)
        assert sim.notes_fired > 0
        assert output.played == []
