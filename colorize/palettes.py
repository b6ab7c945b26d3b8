"""
Palette encoders: [0,1] intensity -> 8-bit (r, g, b) channels.

Every encoder is a pure, vectorised function of the intensity array and returns
three uint8 arrays of the same shape. Alpha is not an encoder concern; the
frame colorizer forces it when packing.
"""

from __future__ import annotations

import numpy as np

from .models import PIXEL_DTYPE, PaletteMode

NRGB_MAX = 0xFFFFFF   # 24-bit ramp
SNRGB_MAX = 0xFFFF    # 16-bit ramp
OPAQUE = 0xFF


# ----------------------------
# Packing
# ----------------------------

def pack(r, g, b, a=OPAQUE):
    """Pack channels into uint32 pixels: byte 0 = R, 1 = G, 2 = B, 3 = A.

    Equivalent to r | g << 8 | b << 16 | a << 24, stored little-endian.
    """
    r = np.asarray(r, dtype=np.uint32)
    g = np.asarray(g, dtype=np.uint32)
    b = np.asarray(b, dtype=np.uint32)
    a = np.asarray(a, dtype=np.uint32)
    packed = r | (g << np.uint32(8)) | (b << np.uint32(16)) | (a << np.uint32(24))
    return packed.astype(PIXEL_DTYPE)


def unpack(pixels) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Inverse of pack(): return (r, g, b, a) uint8 arrays."""
    pixels = np.asarray(pixels, dtype=np.uint32)
    return tuple(((pixels >> np.uint32(shift)) & np.uint32(0xFF)).astype(np.uint8)
                 for shift in (0, 8, 16, 24))


def _split_ramp(value: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    r = (value & 0xFF).astype(np.uint8)
    g = ((value >> 8) & 0xFF).astype(np.uint8)
    b = ((value >> 16) & 0xFF).astype(np.uint8)
    return r, g, b


def _round_half_away(x: np.ndarray) -> np.ndarray:
    # Non-negative inputs only; np.rint would round half to even.
    floor = np.floor(x)
    return floor + ((x - floor) >= 0.5)


# ----------------------------
# Encoders
# ----------------------------

def encode_nickrgb(intensity):
    """Single monotonic ramp through the whole 24-bit RGB space."""
    p = np.asarray(intensity, dtype=np.float64)
    value = (p * float(NRGB_MAX)).astype(np.uint32)
    return _split_ramp(value)


def encode_shortnrgb(intensity):
    """Same ramp as NickRGB with a 16-bit ceiling (R and G only)."""
    p = np.asarray(intensity, dtype=np.float64)
    value = (p * float(SNRGB_MAX)).astype(np.uint32)
    return _split_ramp(value)


def encode_roygbiv(intensity):
    """Six-segment hue wheel: red at 1.0 down to magenta at 0.0.

    The segment position and its fraction are held in single precision so
    band edges land on the same pixel values on every platform.
    """
    p = np.asarray(intensity, dtype=np.float64)
    a = ((1.0 - p) / 0.20).astype(np.float32)
    x = np.floor(a)
    frac = (a - x).astype(np.float64)
    y = np.floor(255.0 * frac)
    seg = np.clip(x, 0, 5).astype(np.int64)

    r = np.select([seg == 0, seg == 1, seg == 2, seg == 3, seg == 4],
                  [255.0, 255.0 - y, 0.0, 0.0, y], default=255.0)
    g = np.select([seg == 0, seg == 1, seg == 2, seg == 3],
                  [y, 255.0, 255.0, 255.0 - y], default=0.0)
    b = np.select([seg <= 1, seg == 2], [0.0, y], default=255.0)
    return r.astype(np.uint8), g.astype(np.uint8), b.astype(np.uint8)


def encode_greyscale(intensity):
    """grey = round(intensity * 255) on all three channels."""
    p = np.asarray(intensity, dtype=np.float64)
    grey = _round_half_away(p * 255.0).astype(np.uint8)
    return grey, grey.copy(), grey.copy()


def encode_binary(intensity):
    """Black below 0.5, white from 0.5 up."""
    p = np.asarray(intensity, dtype=np.float64)
    grey = np.where(p >= 0.5, 255, 0).astype(np.uint8)
    return grey, grey.copy(), grey.copy()


ENCODERS = {
    PaletteMode.NICKRGB: encode_nickrgb,
    PaletteMode.SHORTNRGB: encode_shortnrgb,
    PaletteMode.ROYGBIV: encode_roygbiv,
    PaletteMode.GREYSCALE: encode_greyscale,
    PaletteMode.BINARY: encode_binary,
}


def encode(mode, intensity):
    """Dispatch to the encoder for mode. Returns (r, g, b) uint8 arrays."""
    return ENCODERS[PaletteMode.parse(mode)](intensity)


def encode_pixel(mode, intensity: float) -> tuple[int, int, int]:
    """Scalar form of encode(): one intensity -> (r, g, b) ints."""
    r, g, b = encode(mode, np.atleast_1d(np.float64(intensity)))
    return int(r[0]), int(g[0]), int(b[0])
