"""
Banding transform: raw sample -> repeating [0,1] intensity.
"""

from __future__ import annotations

import numpy as np

from .models import ViewWindow, validate_banding_factor


def to_intensity(samples, window: ViewWindow, banding_factor: float = 1.0):
    """Map raw samples onto [0,1] using the view window and a stripe count.

    The window is split into banding_factor equal bands and each sample gets
    its fractional position inside its band, so factor 1 is a plain linear
    normalization and larger factors give repeating contour bands.

    Samples are not clamped to the window first. Anything at or past the far
    edge is 1.0. Samples below view_min wrap through floor() of a negative
    quotient, which lands them in a band below the window rather than at 0.
    The result is clipped to [0,1] to absorb rounding at band edges.

    Accepts a scalar or an array; returns a float64 array of the same shape
    (0-d for scalars).
    """
    factor = validate_banding_factor(banding_factor)
    offset = np.asarray(samples, dtype=np.float64) - window.view_min
    inside = offset < window.span

    # Out-of-window lanes are computed too and discarded by the where().
    with np.errstate(invalid="ignore", over="ignore", divide="ignore", under="ignore"):
        band_width = np.float64(window.span) / factor
        if np.isfinite(band_width) and band_width > 0:
            banded = offset - band_width * np.floor(offset / band_width)
            position = banded / band_width
        else:
            # span / factor left the float range
            q = offset / window.span * factor
            position = q - np.floor(q)
        intensity = np.where(inside, position, 1.0)
    return np.clip(np.nan_to_num(intensity, nan=0.0), 0.0, 1.0)
