"""
Wave Engine - Leapfrog Integration

Solves d2u/dt2 = c^2 * laplacian(u) with u = 0 on the boundary, using the
central difference in time:

  u_next = 2u - u_prev + (c*dt)^2 * laplacian(u)

Three buffers rotate roles every step: the previous field becomes the
scratch target, the current field becomes previous, and the freshly
computed field becomes current.

Stability (CFL): dt <= min(hx, hy) / (c * sqrt(2)).
"""

import math
import numpy as np

from .engine_base import EPSILON, FieldEngine


class Wave2D(FieldEngine):

    engine_name = "wave"
    engine_label = "Wave"
    n_buffers = 3

    def __init__(self, nx=256, ny=256, c=1.0, dt=1e-3):
        """
        Args:
            nx, ny: Grid points per axis (>= 2)
            c: Wave speed
            dt: Nominal time step
        """
        super().__init__(nx, ny, dt)
        self.c = c
        self._prev = 1
        self._next = 2

    @property
    def u_prev(self):
        return self._buffers[self._prev]

    @property
    def u_next(self):
        return self._buffers[self._next]

    def step(self):
        """Advance one leapfrog step and rotate prev/current/scratch."""
        u = self.field
        prev = self.u_prev
        nxt = self.u_next

        lap = self._laplacian(u)
        lap *= np.float32((self.c * self.c) * (self.dt * self.dt))
        inner = nxt[1:-1, 1:-1]
        np.multiply(u[1:-1, 1:-1], np.float32(2.0), out=inner)
        inner -= prev[1:-1, 1:-1]
        inner += lap
        self._zero_boundary(nxt)

        self._prev, self._cur = self._cur, self._prev
        self._cur, self._next = self._next, self._cur
        self.generation += 1
        return self.field

    def stable_dt_max(self):
        h = min(self.grid.hx, self.grid.hy)
        return h / (max(EPSILON, self.c) * math.sqrt(2.0))

    def normalized(self):
        """Signed field centred on 0.5, scaled by the peak magnitude."""
        u = self.field
        vmax = max(1e-6, float(np.abs(u).max()))
        return np.clip(np.float32(0.5) + u * np.float32(0.5 / vmax), 0.0, 1.0)

    def reset(self):
        """Zero the current and previous fields."""
        self.field[:] = 0.0
        self.u_prev[:] = 0.0
        self.generation = 0

    def set_params(self, c=None, dt=None, **_kw):
        if c is not None:
            self.c = c
        if dt is not None:
            self.dt = dt

    def get_params(self):
        return {"c": self.c, "dt": self.dt}

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "c", "label": "c", "factor": 1.1, "fmt": ".4f"},
            {"key": "dt", "label": "dt", "factor": 1.2, "fmt": ".6g"},
        ]
