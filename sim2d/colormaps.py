"""
Palettes for Field Visualization

Maps float values [0, 1] to RGBA colors. Every palette clamps its input,
computes channels in float32 and truncates to uint8, so a palette applied
to a whole field gives exactly the bytes of applying it cell by cell.

A palette called with a scalar returns an (r, g, b, a) tuple of ints;
called with an array it returns a uint8 array with a trailing axis of 4.
"""

import numpy as np

_ZERO = np.float32(0.0)
_ONE = np.float32(1.0)
_FULL = np.float32(255.0)


def _prepare(v):
    """Clamp to [0, 1] in float32. NaN maps to 0."""
    arr = np.nan_to_num(np.asarray(v, dtype=np.float32), nan=0.0)
    return np.clip(arr, _ZERO, _ONE)


def _pack(v, r, g, b):
    """Scale [0, 1] channels to bytes and attach an opaque alpha."""
    out = np.empty(np.shape(v) + (4,), dtype=np.uint8)
    out[..., 0] = (_FULL * r).astype(np.uint8)
    out[..., 1] = (_FULL * g).astype(np.uint8)
    out[..., 2] = (_FULL * b).astype(np.uint8)
    out[..., 3] = 255
    if out.ndim == 1:
        return tuple(int(c) for c in out)
    return out


# --- Palette Definitions ---

def gray(v):
    """Black to white."""
    v = _prepare(v)
    return _pack(v, v, v, v)


def fire(v):
    """Black body ramp: red first, green from 0.3, blue from 0.6."""
    v = _prepare(v)
    r = np.minimum(np.float32(1.5) * v, _ONE)
    g = np.minimum(np.maximum(np.float32(1.5) * (v - np.float32(0.3)), _ZERO), _ONE)
    b = np.minimum(np.maximum(np.float32(1.5) * (v - np.float32(0.6)), _ZERO), _ONE)
    return _pack(v, r, g, b)


def blue_red(v):
    """Blue at 0 to red at 1, no green."""
    v = _prepare(v)
    return _pack(v, v, np.zeros_like(v), _ONE - v)


# Registry of all palettes, in key-binding order (1, 2, 3)
COLORMAPS = {
    "gray": gray,
    "fire": fire,
    "blue_red": blue_red,
}

COLORMAP_ORDER = list(COLORMAPS.keys())


def get_colormap(key):
    """Get a palette function by name or by position in COLORMAP_ORDER."""
    if isinstance(key, str):
        return COLORMAPS[key]
    return COLORMAPS[COLORMAP_ORDER[key]]


def apply_colormap(field, palette):
    """
    Apply a palette to a 2D float field.

    Args:
        field: 2D numpy array, values expected in [0, 1] (clamped otherwise)
        palette: palette function, name, or index

    Returns:
        (H, W, 4) uint8 RGBA image
    """
    if not callable(palette):
        palette = get_colormap(palette)
    return palette(np.asarray(field))
