"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def small_heat():
    """16x12 heat engine at 90% of the 2D FTCS limit 1 / (2 alpha (1/hx^2 + 1/hy^2)).

    stable_dt_max() is looser than that limit on non-square grids.
    """
    from sim2d.heat import Heat2D
    eng = Heat2D(16, 12, alpha=0.2)
    g = eng.grid
    eng.dt = 0.9 / (2.0 * eng.alpha * (1.0 / g.hx ** 2 + 1.0 / g.hy ** 2))
    return eng


@pytest.fixture
def small_wave():
    """16x12 wave engine at 90% of its stable dt."""
    from sim2d.wave import Wave2D
    eng = Wave2D(16, 12, c=1.0)
    eng.dt = 0.9 * eng.stable_dt_max()
    return eng
