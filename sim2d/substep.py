"""
Adaptive Substepping

A requested dt above an engine's stability bound is split into several
equal substeps. The substep dt only lives for the duration of advance();
the engine's nominal dt is always restored.

The substep count is capped (10 by default) to bound per-frame work. A
step that would need more still runs, with the capped count.

The count is ceil(dt / dt_max) evaluated with a relative tolerance of
1e-9, so dt = k * dt_max gives exactly k substeps even when the division
rounds up. A dt within that tolerance above dt_max therefore runs as a
single step instead of two.
"""

import math

MAX_SUBSTEPS = 10
_RATIO_TOL = 1e-9


class SubstepController:
    """Steps an engine at its nominal dt, splitting unstable steps."""

    def __init__(self, max_substeps=MAX_SUBSTEPS):
        if max_substeps < 1:
            raise ValueError(f"max_substeps must be >= 1, got {max_substeps}")
        self.max_substeps = max_substeps

    def plan(self, dt, dt_max):
        """Return (substeps, subdt) for a requested dt."""
        if dt_max is None or dt <= dt_max:
            return 1, dt
        ratio = dt / dt_max
        # dt = k * dt_max must give k substeps despite rounding in the ratio
        needed = max(1, math.ceil(ratio * (1.0 - _RATIO_TOL)))
        substeps = min(self.max_substeps, needed)
        return substeps, dt / substeps

    def is_capped(self, dt, dt_max):
        """True if even the capped substep dt exceeds the bound."""
        _, subdt = self.plan(dt, dt_max)
        return dt_max is not None and subdt > dt_max * (1.0 + _RATIO_TOL)

    def advance(self, engine):
        """Advance one frame. Returns the number of substeps run."""
        dt_max = engine.stable_dt_max()
        if dt_max is None:
            engine.step()
            return 1

        dt = engine.dt
        substeps, subdt = self.plan(dt, dt_max)
        try:
            engine.dt = subdt
            for _ in range(substeps):
                engine.step()
        finally:
            engine.dt = dt
        return substeps
