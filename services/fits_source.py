"""
FITS frame source: streams every image HDU of a file as a FloatImage.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import numpy as np
from astropy import log as astropy_log
from astropy.io import fits
from astropy.io.fits.verify import VerifyError

from colorize.errors import DecodeError
from colorize.models import FloatImage
from .logger import app_logger

_IMAGE_HDUS = (fits.PrimaryHDU, fits.ImageHDU, fits.CompImageHDU)
_READ_ERRORS = (OSError, ValueError, TypeError, VerifyError)

astropy_log.setLevel("WARNING")


@dataclass(frozen=True)
class Frame:
    """One decoded image plane and its HDU position in the file."""

    index: int
    image: FloatImage
    name: str = ""


def to_float_plane(data: np.ndarray) -> np.ndarray:
    """Reduce HDU data to one 2-D float32 plane with non-finite values zeroed.

    Cubes contribute their first plane; 1-D data becomes a single row.
    """
    plane = np.asarray(data)
    while plane.ndim > 2:
        plane = plane[0]
    if plane.ndim == 1:
        plane = plane.reshape(1, -1)

    plane = np.array(plane, dtype=np.float32, copy=True)
    plane[~np.isfinite(plane)] = 0.0
    return plane


def _load_hdu(hdul, index, path):
    """Return HDU index, None past the end. HDUs are parsed lazily on access."""
    try:
        return hdul[index]
    except IndexError:
        return None
    except _READ_ERRORS as e:
        raise DecodeError(f"Failed to read HDU {index} of {path}: {e}") from e


def iter_frames(path) -> Iterator[Frame]:
    """Yield frames one HDU at a time.

    HDUs without data (NAXIS = 0) and table HDUs are skipped. Any failure to
    open or read the file raises DecodeError and ends the stream.
    """
    path = Path(path)
    try:
        hdul = fits.open(path)
    except _READ_ERRORS as e:
        raise DecodeError(f"Failed to open FITS file {path}: {e}") from e

    with hdul:
        for index in itertools.count():
            hdu = _load_hdu(hdul, index, path)
            if hdu is None:
                break

            if not isinstance(hdu, _IMAGE_HDUS):
                app_logger.debug(f"{path.name}[{index}]: skipping {type(hdu).__name__}")
                continue

            try:
                naxis = int(hdu.header.get('NAXIS', 0))
                data = hdu.data if naxis else None
            except _READ_ERRORS as e:
                raise DecodeError(f"Failed to read HDU {index} of {path}: {e}") from e

            if data is None or data.size == 0:
                app_logger.debug(f"{path.name}[{index}]: no image data, skipping")
                continue

            plane = to_float_plane(data)
            height, width = plane.shape
            app_logger.debug(f"{path.name}[{index}]: {width}x{height} {data.dtype}")
            yield Frame(
                index=index,
                image=FloatImage(width=width, height=height, samples=plane),
                name=str(hdu.name or ""),
            )
