"""
View window: the value sub-range of a frame that maps onto [0,1].
"""

from __future__ import annotations

import math

import numpy as np

from .errors import EmptyInputError, InvalidArgumentError
from .models import ViewWindow


def compute_window(
    samples: np.ndarray,
    start_percent: float = 0.0,
    end_percent: float = 1.0,
) -> ViewWindow:
    """Compute the view window for a frame.

    The window is the [start_percent, end_percent] slice of the data's
    [min, max] range; (0, 1) is the full range. A zero span (flat frame or
    equal percentages) is coerced to 1.0 so banding never divides by zero.

    Raises:
        EmptyInputError: samples is empty
        InvalidArgumentError: percentages are not finite or start > end
    """
    start = float(start_percent)
    end = float(end_percent)
    if not (math.isfinite(start) and math.isfinite(end)):
        raise InvalidArgumentError(f"Window percentages must be finite, got ({start}, {end})")
    if start > end:
        raise InvalidArgumentError(f"Window start {start} is past window end {end}")

    samples = np.asarray(samples)
    if samples.size == 0:
        raise EmptyInputError("Cannot compute a view window over an empty frame")

    data_min = float(np.min(samples))
    data_max = float(np.max(samples))
    distance = data_max - data_min

    view_min = data_min + distance * start
    view_max = data_min + distance * end
    span = view_max - view_min
    if span == 0:
        span = 1.0

    return ViewWindow(view_min=view_min, view_max=view_max, span=span)
