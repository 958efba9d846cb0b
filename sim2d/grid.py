"""
Rectangular Grid

Unit-square coordinate space shared by the heat and wave engines.
Fields live in numpy arrays of shape (ny, nx), so the C-order
flattening of a field matches index(i, j) = j*nx + i.
"""

import numbers


class Grid:
    """Fixed nx x ny grid with spacing hx = 1/(nx-1), hy = 1/(ny-1)."""

    __slots__ = ("_nx", "_ny", "_hx", "_hy")

    def __init__(self, nx=256, ny=256):
        if not isinstance(nx, numbers.Integral) or not isinstance(ny, numbers.Integral):
            raise TypeError(f"grid size must be integer, got {nx!r} x {ny!r}")
        if nx < 2 or ny < 2:
            raise ValueError(f"grid needs at least 2 points per axis, got {nx} x {ny}")
        self._nx = int(nx)
        self._ny = int(ny)
        self._hx = 1.0 / (self._nx - 1)
        self._hy = 1.0 / (self._ny - 1)

    @property
    def nx(self):
        return self._nx

    @property
    def ny(self):
        return self._ny

    @property
    def hx(self):
        return self._hx

    @property
    def hy(self):
        return self._hy

    @property
    def size(self):
        return self._nx * self._ny

    @property
    def shape(self):
        """Array shape of a field on this grid (rows = y)."""
        return (self._ny, self._nx)

    def index(self, i, j):
        return j * self._nx + i

    def is_boundary(self, i, j):
        return i == 0 or j == 0 or i == self._nx - 1 or j == self._ny - 1

    def __repr__(self):
        return f"Grid(nx={self._nx}, ny={self._ny})"
