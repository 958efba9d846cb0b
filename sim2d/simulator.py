"""
Simulator: headless simulation session

Holds one engine per mode, routes control operations to the active one,
advances it once per frame through SubstepController and renders the
current field to an RGBA8 pixel buffer. Zero pygame dependency.

Usage:
    from sim2d.simulator import Simulator
    sim = Simulator(mode="wave", nx=256, ny=256)
    sim.paint(128, 128)
    rgba = sim.frame()  # (ny, nx, 4) uint8
"""

from .heat import Heat2D
from .wave import Wave2D
from .life import Life2D
from .colormaps import COLORMAPS, COLORMAP_ORDER, apply_colormap
from .substep import SubstepController
from .presets import (
    DEFAULT_PALETTE, GRID_SIZE, MODE_ORDER, WARN_MARGIN, get_preset,
)

# Engine class registry
ENGINE_CLASSES = {
    "heat": Heat2D,
    "wave": Wave2D,
    "life": Life2D,
}


class Simulator:
    """Interactive session over the heat, wave and life engines."""

    def __init__(self, mode="heat", nx=GRID_SIZE, ny=GRID_SIZE,
                 palette=DEFAULT_PALETTE, max_substeps=None):
        self.nx = nx
        self.ny = ny
        self.paused = False
        if palette not in COLORMAPS:
            raise KeyError(f"unknown palette: {palette!r}")
        self.palette_index = COLORMAP_ORDER.index(palette)
        if max_substeps is None:
            self.substepper = SubstepController()
        else:
            self.substepper = SubstepController(max_substeps)
        self.last_substeps = 0

        # Engines persist across mode switches
        self.engines = {name: self._create_engine(name) for name in MODE_ORDER}
        self.mode = None
        self.set_mode(mode)

    def _create_engine(self, engine_name):
        preset = get_preset(engine_name)
        cls = ENGINE_CLASSES[preset["engine"]]

        if engine_name == "heat":
            eng = cls(self.nx, self.ny, alpha=preset["alpha"])
        elif engine_name == "wave":
            eng = cls(self.nx, self.ny, c=preset["c"])
        else:
            eng = cls(self.nx, self.ny)

        if "dt" in preset:
            eng.dt = min(preset["dt"], eng.stable_dt_max() * preset["dt_safety"])
        if "density" in preset:
            eng.randomize(preset["density"])
        return eng

    @property
    def engine(self):
        return self.engines[self.mode]

    @property
    def preset(self):
        return get_preset(self.mode)

    @property
    def palette(self):
        return COLORMAP_ORDER[self.palette_index]

    # --- Control operations ---

    def set_mode(self, name):
        if name not in self.engines:
            raise KeyError(f"unknown mode: {name!r}")
        self.mode = name

    def set_paused(self, paused):
        self.paused = bool(paused)

    def toggle_pause(self):
        self.paused = not self.paused

    def reset(self):
        """Zero the active engine (reset for PDEs, clear for life)."""
        self.engine.clear()

    def adjust(self, key, up=True):
        """Scale a parameter up or down by its fixed factor. Returns new value."""
        defs = {d["key"]: d for d in self.engine.get_param_defs()}
        factor = defs[key]["factor"]
        value = self.engine.get_params()[key]
        value = value * factor if up else value / factor
        self.engine.set_params(**{key: value})
        return value

    def paint(self, ix, iy, radius=None, amp=None):
        """Stamp at a cell. Life sets a disc of live cells instead."""
        preset = self.preset
        if radius is None:
            radius = preset["brush_radius"]
        if self.mode == "life":
            self.engine.toggle(ix, iy, radius)
            return
        if amp is None:
            amp = preset["brush_amp"]
        self.engine.paint(ix, iy, radius, amp)

    def toggle(self, ix, iy, radius=0):
        self.engine.toggle(ix, iy, radius)

    def randomize(self, p=None, rng=None):
        if p is None:
            p = self.preset.get("density", 0.15)
        self.engine.randomize(p, rng=rng)

    def set_palette(self, index):
        """Switch palette by position. Out-of-range indices are ignored."""
        if 0 <= index < len(COLORMAP_ORDER):
            self.palette_index = index

    def single_step(self):
        """Advance one frame regardless of pause."""
        self._advance()
        return self.engine.field

    # --- Per-frame ---

    def _advance(self):
        self.last_substeps = self.substepper.advance(self.engine)

    def frame(self):
        """Advance unless paused, then return the RGBA pixel buffer."""
        if not self.paused:
            self._advance()
        return self.pixels()

    def pixels(self):
        """(ny, nx, 4) uint8 RGBA image of the current field."""
        return apply_colormap(self.engine.normalized(), self.palette_index)

    def pixel_bytes(self):
        """Row-major RGBA8 bytes, nx * ny * 4 long."""
        return self.pixels().tobytes()

    def status(self):
        """Values the HUD displays."""
        eng = self.engine
        info = {
            "mode": self.mode,
            "label": eng.engine_label,
            "paused": self.paused,
            "palette": self.palette,
            "generation": eng.generation,
        }
        info.update(eng.get_params())
        dt_max = eng.stable_dt_max()
        if dt_max is not None:
            info["dt_max"] = dt_max
            info["unstable"] = eng.dt > dt_max * WARN_MARGIN
            info["capped"] = self.substepper.is_capped(eng.dt, dt_max)
        return info
