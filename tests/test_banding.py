"""
Test the banding transform (sample -> [0,1] intensity)
"""
import pytest
import os
import sys
import numpy as np

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from colorize.banding import to_intensity
from colorize.errors import InvalidArgumentError
from colorize.models import ViewWindow
from colorize.window import compute_window

UNIT = ViewWindow(view_min=0.0, view_max=1.0, span=1.0)


class TestLinearNormalization:
    """banding_factor == 1 is a plain linear ramp"""

    def test_linear_values(self):
        """Samples inside the window map to their fractional position"""
        samples = np.array([0.0, 0.25, 0.5, 0.75])
        np.testing.assert_array_equal(to_intensity(samples, UNIT, 1), samples)

    def test_far_edge_is_full_intensity(self):
        """The window maximum maps to 1.0, not 0.0"""
        assert float(to_intensity(1.0, UNIT, 1)) == 1.0

    def test_above_window_is_full_intensity(self):
        """Samples past the window are 1.0"""
        result = to_intensity(np.array([1.5, 100.0, 1e30]), UNIT, 1)
        np.testing.assert_array_equal(result, [1.0, 1.0, 1.0])

    def test_monotonic_inside_window(self):
        """Intensity never decreases as samples increase"""
        rng = np.random.default_rng(3)
        samples = np.sort(rng.uniform(-20.0, 80.0, 2000))
        window = compute_window(samples)
        inside = samples[samples < window.view_max]

        result = to_intensity(inside, window, 1)
        assert np.all(np.diff(result) >= 0)

    def test_scalar_input(self):
        """Scalars are accepted and give a 0-d result"""
        result = to_intensity(0.5, UNIT, 1)
        assert np.ndim(result) == 0
        assert float(result) == 0.5


class TestBanding:
    """banding_factor > 1 repeats the ramp"""

    def test_two_bands(self):
        """Window [0,1] splits into two bands of width 0.5"""
        samples = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
        result = to_intensity(samples, UNIT, 2)
        np.testing.assert_array_equal(result, [0.0, 0.5, 0.0, 0.5, 1.0])

    def test_far_edge_not_wrapped(self):
        """Sample at the far edge stays 1.0 with any factor"""
        for factor in (2, 10, 20, 50, 100):
            assert float(to_intensity(1.0, UNIT, factor)) == 1.0

    def test_offset_window(self):
        """Bands are measured from view_min"""
        window = ViewWindow(view_min=100.0, view_max=200.0, span=100.0)
        result = to_intensity(np.array([100.0, 110.0, 125.0, 150.0]), window, 4)
        np.testing.assert_allclose(result, [0.0, 0.4, 0.0, 0.0], atol=1e-12)

    def test_below_window_wraps(self):
        """Below-window samples wrap into the band under view_min"""
        result = to_intensity(np.array([-0.25, -1.75]), UNIT, 1)
        np.testing.assert_allclose(result, [0.75, 0.25])

    def test_fractional_factor(self):
        """Non-integer factors are allowed"""
        result = to_intensity(np.array([0.0, 0.5]), UNIT, 0.5)
        np.testing.assert_array_equal(result, [0.0, 0.25])


class TestIntensityRange:
    """Output is always within [0, 1]"""

    @pytest.mark.parametrize("factor", [0.3, 1, 2, 3, 7.3, 10, 100, 1000])
    def test_range(self, factor):
        """Any finite input gives an intensity in [0,1]"""
        rng = np.random.default_rng(11)
        samples = rng.uniform(-1e4, 1e4, 5000)
        window = compute_window(samples[:100], 0.1, 0.9)

        result = to_intensity(samples, window, factor)
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    @pytest.mark.parametrize("factor", [0, -1, float('nan'), float('inf'), "abc"])
    def test_invalid_factor(self, factor):
        """Non-positive or non-finite factors are rejected"""
        with pytest.raises(InvalidArgumentError):
            to_intensity(0.5, UNIT, factor)

    def test_subnormal_factor(self):
        """A factor so small that span / factor overflows still gives [0,1]"""
        result = to_intensity(np.array([0.25, 0.5]), UNIT, 5e-324)
        assert np.all(np.isfinite(result))
        np.testing.assert_allclose(result, [0.0, 0.0], atol=1e-300)

    def test_extreme_frame_range(self):
        """A frame spanning most of the float32 range with a tiny factor"""
        samples = np.array([-3e38, 3e38], dtype=np.float32)
        window = compute_window(samples)

        result = to_intensity(samples, window, 1e-300)
        np.testing.assert_array_equal(result, [0.0, 1.0])
