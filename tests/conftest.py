"""
Pytest configuration and fixtures
"""
import pytest
import os
import sys
import tempfile
import shutil

import numpy as np

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Keep logs and config out of the real user folder; must run before app imports
os.environ.setdefault("FITSCONVERTER_HOME", tempfile.mkdtemp(prefix="fitsconv_home_"))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp(prefix="fitsconv_test_")
    yield temp_path
    # Cleanup after test
    if os.path.exists(temp_path):
        shutil.rmtree(temp_path)


@pytest.fixture
def temp_config(temp_dir):
    """Path for a temporary config file"""
    return os.path.join(temp_dir, "config.json")


@pytest.fixture
def two_pixel_image():
    """2x1 frame with samples [0.0, 1.0]"""
    from colorize.models import FloatImage
    return FloatImage(width=2, height=1, samples=np.array([0.0, 1.0], dtype=np.float32))


@pytest.fixture
def gradient_image():
    """64x32 frame ramping from -50 to 1000"""
    from colorize.models import FloatImage
    data = np.linspace(-50.0, 1000.0, 64 * 32, dtype=np.float32).reshape(32, 64)
    return FloatImage.from_array(data)


@pytest.fixture
def noisy_image():
    """Reproducible random frame with astronomical-looking range"""
    from colorize.models import FloatImage
    rng = np.random.default_rng(1234)
    data = rng.normal(loc=1200.0, scale=80.0, size=(24, 40)).astype(np.float32)
    return FloatImage.from_array(data)


@pytest.fixture
def fits_file(temp_dir):
    """Multi-extension FITS: empty primary, a 2-D image, a table, a 3-D cube"""
    from astropy.io import fits

    image = np.arange(12, dtype=np.float32).reshape(3, 4)
    image[1, 1] = np.nan
    cube = np.stack([np.full((2, 5), 7.0), np.full((2, 5), 9.0)]).astype(np.float32)
    table = fits.BinTableHDU.from_columns(
        [fits.Column(name='a', format='J', array=np.array([1, 2, 3]))], name='TAB'
    )

    hdul = fits.HDUList([
        fits.PrimaryHDU(),
        fits.ImageHDU(image, name='SCI'),
        table,
        fits.ImageHDU(cube, name='CUBE'),
    ])
    path = os.path.join(temp_dir, "exposure.fits")
    hdul.writeto(path)
    return path


# Mark slow tests
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
