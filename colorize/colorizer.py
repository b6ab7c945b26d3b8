"""
Frame colorizer: window + banding + palette over a whole frame.
"""

from __future__ import annotations

import numpy as np

from .banding import to_intensity
from .models import FloatImage, PaletteMode, ViewWindow
from .palettes import OPAQUE, encode, pack


def colorize(
    image: FloatImage,
    mode: PaletteMode,
    window: ViewWindow,
    banding_factor: float = 1.0,
) -> np.ndarray:
    """Render one frame with one palette and banding factor.

    Returns a fresh (width*height,) little-endian uint32 buffer in the frame's
    sample order, every pixel fully opaque. Pure: the same inputs always give
    a byte-identical buffer.
    """
    intensity = to_intensity(image.samples, window, banding_factor)
    r, g, b = encode(mode, intensity)
    return pack(r, g, b, OPAQUE).reshape(-1)
