"""
Test raster output
"""
import pytest
import os
import sys
import numpy as np
from PIL import Image

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from colorize.errors import WriteError
from colorize.palettes import pack
from services.raster_writer import buffer_to_image, write_raster


def _column(*colors):
    """Packed 1-pixel-wide buffer, one color per row"""
    r, g, b = zip(*colors)
    return pack(np.array(r), np.array(g), np.array(b))


class TestWriteRaster:
    """Test file output"""

    def test_bmp_channel_order(self, temp_dir):
        """Red stays red after the BGRA reorder"""
        path = os.path.join(temp_dir, "red_blue.bmp")
        buffer = pack(np.array([255, 0]), np.array([0, 0]), np.array([0, 255]))
        write_raster(path, buffer, 2, 1)

        with Image.open(path) as img:
            assert img.format == 'BMP'
            assert img.size == (2, 1)
            rgb = img.convert('RGB')
            assert rgb.getpixel((0, 0)) == (255, 0, 0)
            assert rgb.getpixel((1, 0)) == (0, 0, 255)

    def test_png_keeps_alpha(self, temp_dir):
        """PNG output is RGBA and opaque"""
        path = os.path.join(temp_dir, "out.png")
        write_raster(path, _column((10, 20, 30)), 1, 1)

        with Image.open(path) as img:
            assert img.mode == 'RGBA'
            assert img.getpixel((0, 0)) == (10, 20, 30, 255)

    def test_flip_vertical_default(self, temp_dir):
        """First buffer row is written at the bottom"""
        path = os.path.join(temp_dir, "flip.png")
        write_raster(path, _column((0, 0, 0), (255, 255, 255)), 1, 2)

        with Image.open(path) as img:
            assert img.getpixel((0, 0))[:3] == (255, 255, 255)
            assert img.getpixel((0, 1))[:3] == (0, 0, 0)

    def test_no_flip(self, temp_dir):
        """flip_vertical=False keeps buffer order"""
        path = os.path.join(temp_dir, "noflip.png")
        write_raster(path, _column((0, 0, 0), (255, 255, 255)), 1, 2, flip_vertical=False)

        with Image.open(path) as img:
            assert img.getpixel((0, 0))[:3] == (0, 0, 0)

    def test_creates_directory_no_temp_left(self, temp_dir):
        """Output directories are created; no temp files remain"""
        out_dir = os.path.join(temp_dir, "nested", "renders")
        path = os.path.join(out_dir, "a.tiff")
        write_raster(path, _column((1, 2, 3)), 1, 1)

        assert os.listdir(out_dir) == ["a.tiff"]


class TestWriteErrors:
    """Test write failures become WriteError"""

    def test_unsupported_extension(self, temp_dir):
        """Unknown formats are rejected"""
        with pytest.raises(WriteError):
            write_raster(os.path.join(temp_dir, "x.jpg"), _column((0, 0, 0)), 1, 1)

    def test_size_mismatch(self, temp_dir):
        """Buffer must match dimensions"""
        path = os.path.join(temp_dir, "x.bmp")
        with pytest.raises(WriteError) as exc_info:
            write_raster(path, _column((0, 0, 0)), 2, 2)
        assert exc_info.value.path == path
        assert not os.path.exists(path)

    def test_unwritable_location(self, temp_dir):
        """I/O errors carry the target path"""
        blocker = os.path.join(temp_dir, "not_a_dir")
        with open(blocker, 'w') as f:
            f.write("x")
        path = os.path.join(blocker, "x.bmp")

        with pytest.raises(WriteError) as exc_info:
            write_raster(path, _column((0, 0, 0)), 1, 1)
        assert exc_info.value.path == path


class TestBufferToImage:
    """Test buffer reinterpretation"""

    def test_image_mode_and_size(self):
        """Buffers become RGBA images of width x height"""
        img = buffer_to_image(pack(np.zeros(6), np.zeros(6), np.zeros(6)), 3, 2)
        assert img.mode == 'RGBA'
        assert img.size == (3, 2)
