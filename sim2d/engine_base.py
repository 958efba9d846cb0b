"""
Abstract Base Classes for Simulation Engines

All engines (heat, wave, life) implement SimEngine so the simulator and
viewer can drive any of them interchangeably. The two PDE engines share
FieldEngine, which owns the Grid, the buffer arena and the 5-point
Laplacian.

Buffers are allocated once. A step writes into the scratch buffer and
then rotates integer role handles; arrays are never reallocated or
copied during a swap.
"""

from abc import ABC, abstractmethod
import numpy as np

from .grid import Grid

# Floor for alpha / c in stability bounds
EPSILON = 1e-12


class SimEngine(ABC):
    """Base class for grid simulation engines."""

    engine_name = ""   # e.g. "heat", "life"
    engine_label = ""  # e.g. "Heat", "Game of Life"

    def __init__(self, nx=256, ny=256):
        self.nx = nx
        self.ny = ny
        self.generation = 0

    @abstractmethod
    def step(self):
        """Advance one time step. Returns the current field."""

    def step_n(self, n):
        """Advance n steps. Returns final field."""
        for _ in range(n):
            self.step()
        return self.field

    @property
    @abstractmethod
    def field(self):
        """Current (ny, nx) field. Live buffer, do not keep across steps."""

    @abstractmethod
    def normalized(self):
        """Current field mapped to [0, 1] for display."""

    def stable_dt_max(self):
        """Largest stable time step, or None for engines without one."""
        return None

    @abstractmethod
    def set_params(self, **params):
        """Update engine parameters."""

    @abstractmethod
    def get_params(self):
        """Return dict of current parameter values."""

    @abstractmethod
    def clear(self):
        """Zero the state in place."""

    def paint(self, ix, iy, radius=6, amp=0.5):
        """Perturb the field around (ix, iy). No-op by default."""

    def toggle(self, ix, iy, radius=0):
        """Flip or set cells around (ix, iy). No-op by default."""

    def randomize(self, p=0.15, rng=None):
        """Reseed the state at random. No-op by default."""

    @property
    def stats(self):
        """Return current field statistics."""
        field = self.field
        return {
            "generation": self.generation,
            "mass": float(field.sum()),
            "min": float(field.min()),
            "max": float(field.max()),
        }

    @classmethod
    def get_param_defs(cls):
        """Return list of adjustable parameter definitions.

        Each entry is a dict:
            {"key": "alpha", "label": "alpha", "factor": 1.2, "fmt": ".4f"}
        Adjusting multiplies (up) or divides (down) the value by factor;
        the HUD shows each entry as label=value formatted with fmt.
        """
        return []


class FieldEngine(SimEngine):
    """Explicit finite-difference engine on a Grid with zero boundaries.

    Subclasses set n_buffers and implement step() in terms of the role
    handles and _laplacian().
    """

    n_buffers = 2

    def __init__(self, nx=256, ny=256, dt=1e-4):
        self.grid = Grid(nx, ny)
        super().__init__(self.grid.nx, self.grid.ny)
        self.dt = dt

        # Buffer arena (float32 for 2x bandwidth vs float64)
        self._buffers = [np.zeros(self.grid.shape, dtype=np.float32)
                         for _ in range(self.n_buffers)]
        self._cur = 0

        # Pre-allocate interior work buffers to avoid per-step allocation
        interior = (self.grid.ny - 2, self.grid.nx - 2)
        self._lap = np.empty(interior, dtype=np.float32)
        self._tmp = np.empty(interior, dtype=np.float32)

    @property
    def field(self):
        return self._buffers[self._cur]

    @property
    def buffers(self):
        """The arena, in allocation order."""
        return tuple(self._buffers)

    def _laplacian(self, u):
        """5-point Laplacian of the interior of u into self._lap."""
        inv_hx2 = np.float32(1.0 / (self.grid.hx * self.grid.hx))
        inv_hy2 = np.float32(1.0 / (self.grid.hy * self.grid.hy))
        c = u[1:-1, 1:-1]
        out = self._lap
        tmp = self._tmp

        # x direction runs along axis 1
        np.add(u[1:-1, 2:], u[1:-1, :-2], out=out)
        out -= c
        out -= c
        out *= inv_hx2

        np.add(u[2:, 1:-1], u[:-2, 1:-1], out=tmp)
        tmp -= c
        tmp -= c
        tmp *= inv_hy2
        out += tmp
        return out

    @staticmethod
    def _zero_boundary(u):
        u[0, :] = 0.0
        u[-1, :] = 0.0
        u[:, 0] = 0.0
        u[:, -1] = 0.0

    def paint(self, ix, iy, radius=6, amp=0.5):
        """Add amp inside a disc around (ix, iy), interior cells only.

        The scan window is [c - radius, c + radius) on each axis, clipped
        to [1, n - 2].
        """
        ix, iy, radius = int(ix), int(iy), int(radius)
        y0, y1 = max(1, iy - radius), min(self.grid.ny - 1, iy + radius)
        x0, x1 = max(1, ix - radius), min(self.grid.nx - 1, ix + radius)
        if y0 >= y1 or x0 >= x1:
            return
        Y, X = np.ogrid[y0:y1, x0:x1]
        mask = (X - ix) ** 2 + (Y - iy) ** 2 <= radius * radius
        region = self.field[y0:y1, x0:x1]
        region[mask] += np.float32(amp)

    def reset(self):
        """Zero the current field."""
        self.field[:] = 0.0
        self.generation = 0

    def clear(self):
        self.reset()

    def set_params(self, dt=None, **_kw):
        if dt is not None:
            self.dt = dt

    def get_params(self):
        return {"dt": self.dt}
