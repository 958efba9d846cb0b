"""
Simulation Presets

Each preset defines an engine type and the configuration the interactive
sandbox starts it with. The "engine" field determines which engine to
instantiate (heat, wave, life).

For the PDE engines "dt" is a ceiling: the start dt is
min(dt, dt_safety * stable_dt_max()). The heat bound 0.5 * h^2 / alpha is
twice the 2D FTCS limit h^2 / (4 alpha), so heat starts at 0.45 of it.
"""

GRID_SIZE = 256       # nx = ny
DISPLAY_SCALE = 2     # window pixels per cell
DEFAULT_PALETTE = "fire"

# HUD warns about substepping once dt exceeds the bound by this factor
WARN_MARGIN = 1.05

PRESETS = {
    "heat": {
        "engine": "heat",
        "name": "Heat equation",
        "description": "Explicit diffusion (FTCS)",
        "alpha": 0.2, "dt": 1e-4, "dt_safety": 0.45,
        "brush_radius": 6, "brush_amp": 0.5,
    },
    "wave": {
        "engine": "wave",
        "name": "Wave equation",
        "description": "Leapfrog wave propagation",
        "c": 1.0, "dt": 1e-3, "dt_safety": 0.9,
        "brush_radius": 6, "brush_amp": 0.5,
    },
    "life": {
        "engine": "life",
        "name": "Game of Life",
        "description": "Conway B3/S23, dead border",
        "density": 0.15,
        "brush_radius": 2,
    },
}

# Menu order: keys 1, 2, 3
MODE_ORDER = ["heat", "wave", "life"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) in menu order."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in MODE_ORDER]
