"""
Value types shared by the windowing, banding, palette and scheduling modules.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .errors import InvalidArgumentError


# Packed pixels are little-endian so that byte 0 is always R, whatever the host.
PIXEL_DTYPE = np.dtype("<u4")


@dataclass(frozen=True)
class FloatImage:
    """One decoded frame: row-major float32 samples plus its dimensions.

    The samples array is flagged read-only so it can be shared by every
    concurrent render job for the frame.
    """

    width: int
    height: int
    samples: np.ndarray

    def __post_init__(self):
        samples = np.ascontiguousarray(self.samples, dtype=np.float32).reshape(-1)
        if self.width < 0 or self.height < 0:
            raise InvalidArgumentError(
                f"Frame dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if samples.size != self.width * self.height:
            raise InvalidArgumentError(
                f"Frame has {samples.size} samples, expected "
                f"{self.width}x{self.height}={self.width * self.height}"
            )
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "FloatImage":
        """Build a frame from a 2-D (height, width) or 1-D array."""
        data = np.asarray(data)
        if data.ndim == 1:
            return cls(width=int(data.shape[0]), height=1, samples=data)
        if data.ndim != 2:
            raise InvalidArgumentError(f"Expected a 1-D or 2-D array, got shape {data.shape}")
        height, width = data.shape
        return cls(width=int(width), height=int(height), samples=data)

    @property
    def is_empty(self) -> bool:
        return self.samples.size == 0


@dataclass(frozen=True)
class ViewWindow:
    """Value range mapped onto the full [0,1] intensity scale. span is never 0."""

    view_min: float
    view_max: float
    span: float


class PaletteMode(str, Enum):
    """Closed set of false-color palettes. Values double as filename tags."""

    NICKRGB = "nickrgb"
    SHORTNRGB = "snrgb"
    ROYGBIV = "roygbiv"
    GREYSCALE = "greyscale"
    BINARY = "binary"

    @classmethod
    def parse(cls, value) -> "PaletteMode":
        """Resolve a member, tag or member name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = _PALETTE_ALIASES.get(key, key)
            for mode in cls:
                if key in (mode.value, mode.name.lower()):
                    return mode
        raise InvalidArgumentError(
            f"Unknown palette mode: {value!r}. "
            f"Expected one of: {', '.join(m.value for m in cls)}"
        )


_PALETTE_ALIASES = {
    "grayscale": "greyscale",
    "grey": "greyscale",
    "gray": "greyscale",
    "shortnrgb": "snrgb",
    "rainbow": "roygbiv",
}

# Default palette order used for fan-out and config defaults.
ALL_PALETTES = (
    PaletteMode.GREYSCALE,
    PaletteMode.ROYGBIV,
    PaletteMode.NICKRGB,
    PaletteMode.BINARY,
    PaletteMode.SHORTNRGB,
)


def validate_banding_factor(value) -> float:
    """Return value as a float, or raise InvalidArgumentError."""
    try:
        factor = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Banding factor must be a number, got {value!r}") from None
    if not math.isfinite(factor) or factor <= 0:
        raise InvalidArgumentError(f"Banding factor must be positive and finite, got {value!r}")
    return factor


@dataclass(frozen=True)
class RenderJob:
    """One (banding factor, palette) rendering task for a single frame."""

    banding_factor: float
    mode: PaletteMode

    def __post_init__(self):
        object.__setattr__(self, "banding_factor", validate_banding_factor(self.banding_factor))
        object.__setattr__(self, "mode", PaletteMode.parse(self.mode))
