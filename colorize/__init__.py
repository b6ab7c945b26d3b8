"""
False-color rendering of float image planes.

This package provides:
- window: view window (value range) computation
- banding: sample -> banded [0,1] intensity
- palettes: intensity -> RGB encoders and pixel packing
- colorizer: whole-frame rendering for one palette/banding factor
- scheduler: parallel fan-out over banding factors x palettes
"""

from .errors import (
    ColorizeError,
    InvalidArgumentError,
    EmptyInputError,
    DecodeError,
    WriteError,
)
from .models import FloatImage, ViewWindow, PaletteMode, RenderJob, ALL_PALETTES, PIXEL_DTYPE
from .window import compute_window
from .banding import to_intensity
from .palettes import pack, unpack, encode, encode_pixel
from .colorizer import colorize
from .scheduler import RenderResult, build_jobs, render_all

__all__ = [
    # errors
    "ColorizeError", "InvalidArgumentError", "EmptyInputError", "DecodeError", "WriteError",
    # models
    "FloatImage", "ViewWindow", "PaletteMode", "RenderJob", "ALL_PALETTES", "PIXEL_DTYPE",
    # pipeline
    "compute_window", "to_intensity", "pack", "unpack", "encode", "encode_pixel",
    "colorize", "RenderResult", "build_jobs", "render_all",
]
