"""
Game of Life Engine - Conway's B3/S23

Binary automaton on its own uint8 grid (no physical spacing). Cells
outside the grid count as dead: there is no wraparound.

  alive, 2 or 3 neighbours  -> alive
  dead, exactly 3           -> alive
  otherwise                 -> dead

Random seeding draws from an explicit numpy Generator. Without one, a
generator with the fixed seed SEED is built per call, so repeated
randomize() calls produce bit-identical fields.
"""

import numbers

import numpy as np
from .engine_base import SimEngine

SEED = 12345

# Moore neighbourhood offsets into the padded grid
_MOORE = [(dy, dx) for dy in (0, 1, 2) for dx in (0, 1, 2) if (dy, dx) != (1, 1)]


class Life2D(SimEngine):

    engine_name = "life"
    engine_label = "Game of Life"

    def __init__(self, nx=256, ny=256):
        if not isinstance(nx, numbers.Integral) or not isinstance(ny, numbers.Integral):
            raise TypeError(f"life grid size must be integer, got {nx!r} x {ny!r}")
        if nx < 1 or ny < 1:
            raise ValueError(f"life grid must be non-empty, got {nx} x {ny}")
        super().__init__(int(nx), int(ny))
        shape = (self.ny, self.nx)

        # Current / scratch arena, values exactly 0 or 1
        self._buffers = [np.zeros(shape, dtype=np.uint8) for _ in range(2)]
        self._cur = 0
        self._next = 1

        # Work buffers: zero-padded copy of the state and neighbour counts
        self._padded = np.zeros((self.ny + 2, self.nx + 2), dtype=np.uint8)
        self._count = np.empty(shape, dtype=np.uint8)

    @property
    def field(self):
        return self._buffers[self._cur]

    @property
    def buffers(self):
        return tuple(self._buffers)

    def count_neighbors(self):
        """Live Moore neighbours of every cell, dead outside the grid."""
        p = self._padded
        p[1:-1, 1:-1] = self.field
        n = self._count
        n[:] = 0
        for dy, dx in _MOORE:
            n += p[dy:dy + self.ny, dx:dx + self.nx]
        return n

    def step(self):
        """Advance one generation into scratch, then swap."""
        a = self.field
        b = self._buffers[self._next]
        n = self.count_neighbors()

        b[:] = (n == 3) | ((a == 1) & (n == 2))

        self._cur, self._next = self._next, self._cur
        self.generation += 1
        return self.field

    def randomize(self, p=0.15, rng=None):
        """Set every cell alive independently with probability p."""
        if rng is None:
            rng = np.random.default_rng(SEED)
        self.field[:] = rng.random((self.ny, self.nx)) < p
        self.generation = 0

    def toggle(self, ix, iy, radius=0):
        """Flip one cell (radius <= 0) or set a disc of cells alive."""
        ix, iy, radius = int(ix), int(iy), int(radius)
        if ix < 0 or iy < 0 or ix >= self.nx or iy >= self.ny:
            return
        if radius <= 0:
            self.field[iy, ix] ^= 1
            return
        y0, y1 = max(0, iy - radius), min(self.ny, iy + radius + 1)
        x0, x1 = max(0, ix - radius), min(self.nx, ix + radius + 1)
        Y, X = np.ogrid[y0:y1, x0:x1]
        mask = (X - ix) ** 2 + (Y - iy) ** 2 <= radius * radius
        region = self.field[y0:y1, x0:x1]
        region[mask] = 1

    def clear(self):
        self.field[:] = 0
        self.generation = 0

    def normalized(self):
        return self.field.astype(np.float32)

    def set_params(self, **_kw):
        pass

    def get_params(self):
        return {}

    @property
    def stats(self):
        alive_count = int(self.field.sum(dtype=np.int64))
        total = self.nx * self.ny
        return {
            "generation": self.generation,
            "mass": float(alive_count),
            "min": float(self.field.min()),
            "max": float(self.field.max()),
            "alive_pct": alive_count / total * 100,
        }
