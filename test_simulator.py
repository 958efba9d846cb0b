"""Tests for SubstepController and the headless Simulator."""

import numpy as np
import pytest

from sim2d.heat import Heat2D
from sim2d.wave import Wave2D
from sim2d.life import Life2D
from sim2d.presets import PRESETS
from sim2d.simulator import Simulator
from sim2d.substep import MAX_SUBSTEPS, SubstepController


class _Probe:
    """Engine stand-in that records the dt of every step."""

    def __init__(self, dt, dt_max, fail_after=None):
        self.dt = dt
        self._dt_max = dt_max
        self.seen = []
        self.fail_after = fail_after

    def stable_dt_max(self):
        return self._dt_max

    def step(self):
        if self.fail_after is not None and len(self.seen) >= self.fail_after:
            raise RuntimeError("step failed")
        self.seen.append(self.dt)


class TestSubstepController:

    def test_within_bound_single_step(self):
        probe = _Probe(dt=0.5, dt_max=1.0)
        assert SubstepController().advance(probe) == 1
        assert probe.seen == [0.5]

    def test_at_bound_single_step(self):
        probe = _Probe(dt=1.0, dt_max=1.0)
        assert SubstepController().advance(probe) == 1

    def test_three_times_bound(self):
        probe = _Probe(dt=0.75, dt_max=0.25)
        assert SubstepController().advance(probe) == 3
        assert probe.seen == [0.25, 0.25, 0.25]
        assert probe.dt == 0.75

    def test_rounding_in_ratio(self):
        # 0.3 / 0.1 is slightly above 3 in floating point
        assert SubstepController().plan(3 * 0.1, 0.1)[0] == 3

    def test_just_above_bound_within_tolerance(self):
        ctrl = SubstepController()
        assert ctrl.plan(1.0 + 1e-12, 1.0)[0] == 1
        assert ctrl.plan(1.0 + 1e-6, 1.0)[0] == 2

    def test_fractional_ratio_rounds_up(self):
        substeps, subdt = SubstepController().plan(2.5, 1.0)
        assert substeps == 3
        assert subdt == pytest.approx(2.5 / 3)

    def test_cap(self):
        ctrl = SubstepController()
        probe = _Probe(dt=50.0, dt_max=1.0)
        assert ctrl.advance(probe) == MAX_SUBSTEPS == 10
        assert probe.seen == [5.0] * 10
        assert probe.dt == 50.0
        assert ctrl.is_capped(50.0, 1.0)
        assert not ctrl.is_capped(10.0, 1.0)

    def test_custom_cap(self):
        assert SubstepController(max_substeps=4).plan(100.0, 1.0) == (4, 25.0)

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            SubstepController(max_substeps=0)

    def test_dt_restored_when_step_raises(self):
        probe = _Probe(dt=4.0, dt_max=1.0, fail_after=2)
        with pytest.raises(RuntimeError):
            SubstepController().advance(probe)
        assert probe.dt == 4.0

    def test_heat_engine(self):
        eng = Heat2D(33, 33, alpha=0.2)
        dt_max = eng.stable_dt_max()
        eng.dt = 3 * dt_max
        eng.paint(16, 16, 4, 1.0)
        assert SubstepController().advance(eng) == 3
        assert eng.dt == 3 * dt_max
        assert eng.generation == 3
        assert np.all(np.isfinite(eng.field))

    def test_wave_engine(self):
        eng = Wave2D(33, 33, c=1.0)
        dt_max = eng.stable_dt_max()
        eng.dt = 3 * dt_max
        assert SubstepController().advance(eng) == 3
        assert eng.dt == 3 * dt_max

    def test_life_steps_once(self):
        eng = Life2D(8, 8)
        assert SubstepController().advance(eng) == 1
        assert eng.generation == 1


@pytest.fixture
def sim():
    return Simulator(mode="heat", nx=32, ny=24)


class TestSimulator:

    def test_defaults(self, sim):
        heat = sim.engines["heat"]
        wave = sim.engines["wave"]
        assert heat.alpha == 0.2
        assert heat.dt == pytest.approx(min(1e-4, PRESETS["heat"]["dt_safety"] * heat.stable_dt_max()))
        assert wave.c == 1.0
        assert wave.dt == pytest.approx(min(1e-3, 0.9 * wave.stable_dt_max()))
        assert sim.engines["life"].field.any()
        assert sim.palette == "fire"
        assert not sim.paused

    def test_pixel_buffer_shape(self, sim):
        rgba = sim.frame()
        assert rgba.shape == (24, 32, 4)
        assert rgba.dtype == np.uint8
        assert len(sim.pixel_bytes()) == 32 * 24 * 4

    def test_empty_heat_renders_black(self, sim):
        assert np.all(sim.pixels() == np.array([0, 0, 0, 255], dtype=np.uint8))

    def test_empty_wave_renders_mid_palette(self, sim):
        sim.set_mode("wave")
        sim.set_palette(0)
        rgba = sim.pixels()
        assert rgba[0, 0].tolist() == [127, 127, 127, 255]

    def test_pause(self, sim):
        sim.set_paused(True)
        sim.frame()
        assert sim.engine.generation == 0
        sim.toggle_pause()
        sim.frame()
        assert sim.engine.generation == 1

    def test_single_step_while_paused(self, sim):
        sim.set_paused(True)
        sim.single_step()
        assert sim.engine.generation == 1

    def test_adjust_heat(self, sim):
        assert sim.adjust("alpha") == pytest.approx(0.24)
        assert sim.adjust("alpha", up=False) == pytest.approx(0.2)
        dt = sim.engine.dt
        sim.adjust("dt")
        assert sim.engine.dt == pytest.approx(dt * 1.2)

    def test_adjust_wave(self, sim):
        sim.set_mode("wave")
        assert sim.adjust("c") == pytest.approx(1.1)
        assert sim.adjust("c", up=False) == pytest.approx(1.0)

    def test_adjust_unknown_key(self, sim):
        with pytest.raises(KeyError):
            sim.adjust("c")
        sim.set_mode("life")
        with pytest.raises(KeyError):
            sim.adjust("dt")

    def test_unstable_status(self, sim):
        assert sim.status()["unstable"] is False
        for _ in range(100):
            if sim.status()["unstable"]:
                break
            sim.adjust("dt")
        status = sim.status()
        assert status["unstable"] is True
        assert status["dt"] > status["dt_max"]
        sim.frame()
        assert sim.last_substeps > 1
        assert sim.engine.dt == status["dt"]

    def test_default_heat_stays_bounded(self, sim):
        sim.paint(16, 12)
        for _ in range(50):
            sim.frame()
        field = sim.engine.field
        assert float(field.max()) <= 0.5 + 1e-6
        assert float(field.min()) >= -1e-6
        assert float(field.max()) > 0.0

    def test_paint_heat(self, sim):
        sim.paint(16, 12)
        assert sim.engine.field[12, 16] == pytest.approx(0.5)
        assert sim.engine.field.sum() > 0

    def test_paint_life_sets_cells(self, sim):
        sim.set_mode("life")
        sim.reset()
        sim.paint(10, 10)
        sim.paint(10, 10)
        alive = sim.engine.field
        assert alive[10, 10] == 1
        assert alive[10, 12] == 1
        assert alive[12, 12] == 0
        assert int(alive.sum()) == 13

    def test_toggle_and_randomize_only_touch_life(self, sim):
        sim.toggle(5, 5)
        sim.randomize(0.5)
        assert not sim.engine.field.any()
        sim.set_mode("life")
        sim.reset()
        sim.toggle(5, 5)
        assert sim.engine.field[5, 5] == 1

    def test_randomize_is_reproducible(self, sim):
        sim.set_mode("life")
        sim.randomize(0.25)
        first = sim.engine.field.copy()
        sim.frame()
        sim.randomize(0.25)
        assert np.array_equal(sim.engine.field, first)

    def test_reset_routes_to_active_engine(self, sim):
        sim.set_mode("life")
        sim.reset()
        assert not sim.engine.field.any()
        sim.set_mode("wave")
        sim.paint(16, 12)
        sim.frame()
        sim.reset()
        assert not sim.engine.field.any()
        assert not sim.engine.u_prev.any()

    def test_palette_switch(self, sim):
        sim.set_palette(2)
        assert sim.palette == "blue_red"
        sim.set_palette(7)
        sim.set_palette(-1)
        assert sim.palette == "blue_red"

    def test_engines_persist_across_modes(self, sim):
        sim.paint(16, 12)
        field = sim.engine.field.copy()
        sim.set_mode("life")
        sim.set_mode("heat")
        assert np.array_equal(sim.engine.field, field)

    def test_unknown_mode(self, sim):
        with pytest.raises(KeyError):
            sim.set_mode("fluid")

    def test_status_life(self, sim):
        sim.set_mode("life")
        status = sim.status()
        assert status["mode"] == "life"
        assert "dt_max" not in status

    def test_unknown_palette(self):
        with pytest.raises(KeyError):
            Simulator(palette="viridis", nx=8, ny=8)
