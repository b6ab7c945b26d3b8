"""
Raster writer: packed RGBA pixel buffers -> BMP/PNG/TIFF files
"""
import os
import tempfile

import numpy as np
from PIL import Image

from colorize.errors import WriteError

FORMATS = {
    '.bmp': 'BMP',
    '.png': 'PNG',
    '.tif': 'TIFF',
    '.tiff': 'TIFF',
}


def buffer_to_image(buffer, width, height, flip_vertical=True, path=None):
    """
    Wrap a packed pixel buffer as a PIL RGBA image.

    The buffer is little-endian uint32 with R in byte 0 and A in byte 3, so
    its raw bytes are already RGBA; Pillow handles any reordering the target
    format needs (BMP stores BGRA).

    Args:
        buffer: (width*height,) packed pixels, row-major, first row first
        width, height: Frame dimensions
        flip_vertical: FITS stores the bottom row first; flip so it lands at
                       the bottom of the raster
        path: Destination reported on WriteError
    """
    pixels = np.ascontiguousarray(buffer, dtype='<u4')
    if pixels.size != width * height:
        raise WriteError(f"Buffer has {pixels.size} pixels, expected {width}x{height}", path=path)

    rgba = pixels.view(np.uint8).reshape(height, width, 4)
    if flip_vertical:
        rgba = rgba[::-1]
    return Image.fromarray(np.ascontiguousarray(rgba))


def save_image_atomic(img, output_path, format_name):
    """
    Save image atomically so a crash never leaves a half-written file.
    Uses temp file + rename.
    """
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(
        suffix='.tmp',
        dir=output_dir if output_dir else '.',
        prefix='.saving_'
    )

    try:
        os.close(fd)  # PIL reopens by name
        img.save(temp_path, format_name)
        os.replace(temp_path, output_path)
    except Exception:
        try:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        except OSError:
            pass  # Best effort cleanup
        raise


def write_raster(path, buffer, width, height, flip_vertical=True):
    """
    Write a packed pixel buffer to disk; format is taken from the extension.

    Raises:
        WriteError: unsupported extension or any I/O / encoder failure
    """
    path = str(path)
    ext = os.path.splitext(path)[1].lower()
    format_name = FORMATS.get(ext)
    if format_name is None:
        raise WriteError(f"Unsupported raster format '{ext}' for {path}", path=path)

    img = buffer_to_image(buffer, width, height, flip_vertical=flip_vertical, path=path)
    try:
        save_image_atomic(img, path, format_name)
    except (OSError, ValueError) as e:
        raise WriteError(f"Failed to write {path}: {e}", path=path) from e
    return path
