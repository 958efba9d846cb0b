"""
Heat Engine - Explicit Diffusion

Solves du/dt = alpha * laplacian(u) on the unit square with u = 0 on the
boundary, using forward-time central-space (FTCS) updates:

  u_next = u + dt * alpha * laplacian(u)

FTCS is only conditionally stable: dt must stay below
0.5 * min(hx^2, hy^2) / alpha. Larger requested steps are split by
SubstepController.
"""

import numpy as np

from .engine_base import EPSILON, FieldEngine


class Heat2D(FieldEngine):

    engine_name = "heat"
    engine_label = "Heat"
    n_buffers = 2

    def __init__(self, nx=256, ny=256, alpha=0.2, dt=1e-4):
        """
        Args:
            nx, ny: Grid points per axis (>= 2)
            alpha: Diffusivity
            dt: Nominal time step
        """
        super().__init__(nx, ny, dt)
        self.alpha = alpha
        self._next = 1

    @property
    def u_next(self):
        return self._buffers[self._next]

    def step(self):
        """Advance one FTCS step and swap current/scratch."""
        u = self.field
        nxt = self.u_next

        lap = self._laplacian(u)
        lap *= np.float32(self.dt * self.alpha)
        np.add(u[1:-1, 1:-1], lap, out=nxt[1:-1, 1:-1])
        self._zero_boundary(nxt)

        self._cur, self._next = self._next, self._cur
        self.generation += 1
        return self.field

    def stable_dt_max(self):
        h2 = min(self.grid.hx * self.grid.hx, self.grid.hy * self.grid.hy)
        return 0.5 * h2 / max(EPSILON, self.alpha)

    def normalized(self):
        """Scale by the current maximum; negative values clamp to 0."""
        u = self.field
        vmax = max(1e-6, float(u.max()))
        return np.clip(u * np.float32(1.0 / vmax), 0.0, 1.0)

    def set_params(self, alpha=None, dt=None, **_kw):
        if alpha is not None:
            self.alpha = alpha
        if dt is not None:
            self.dt = dt

    def get_params(self):
        return {"alpha": self.alpha, "dt": self.dt}

    @classmethod
    def get_param_defs(cls):
        return [
            {"key": "alpha", "label": "alpha", "factor": 1.2, "fmt": ".4f"},
            {"key": "dt", "label": "dt", "factor": 1.2, "fmt": ".6g"},
        ]
