"""
sim2d - interactive 2D grid simulations

Explicit heat diffusion, leapfrog waves and Conway's Game of Life on
rectangular grids, with palettes for rendering fields to RGBA8.
"""

from .grid import Grid
from .heat import Heat2D
from .wave import Wave2D
from .life import Life2D
from .substep import SubstepController
from .colormaps import gray, fire, blue_red, apply_colormap, get_colormap
from .simulator import Simulator

__all__ = [
    "Grid", "Heat2D", "Wave2D", "Life2D", "SubstepController",
    "gray", "fire", "blue_red", "apply_colormap", "get_colormap",
    "Simulator",
]
