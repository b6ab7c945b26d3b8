"""
Render fan-out: every (banding factor x palette) combination for one frame.

One worker task is submitted per banding factor and renders all requested
palettes for it in turn. Each finished buffer goes straight to the sink, so at
most one buffer per worker is alive at a time.
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from services.logger import app_logger

from .colorizer import colorize
from .errors import InvalidArgumentError
from .models import FloatImage, PaletteMode, RenderJob, ViewWindow, validate_banding_factor
from .window import compute_window

# sink(job, buffer) -> None. Raising marks that job as failed.
RenderSink = Callable[[RenderJob, np.ndarray], None]


@dataclass
class RenderResult:
    """Outcome of one render job.

    buffer is kept only when no sink was given; with a sink it is released
    as soon as the sink returns.
    """

    job: RenderJob
    buffer: Optional[np.ndarray] = None
    error: Optional[Exception] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


def build_jobs(banding_factors: Iterable[float], modes: Iterable) -> list[RenderJob]:
    """Validate and enumerate the factor x mode cross-product.

    Duplicates are dropped, first occurrence order is kept. Raises
    InvalidArgumentError before anything is rendered.
    """
    factors = []
    for factor in banding_factors:
        factor = validate_banding_factor(factor)
        if factor not in factors:
            factors.append(factor)

    palettes = []
    for mode in modes:
        mode = PaletteMode.parse(mode)
        if mode not in palettes:
            palettes.append(mode)

    return [RenderJob(factor, mode) for factor in factors for mode in palettes]


def _render_group(
    image: FloatImage,
    window: ViewWindow,
    jobs: list[RenderJob],
    sink: Optional[RenderSink],
) -> list[RenderResult]:
    results = []
    for job in jobs:
        started = time.perf_counter()
        buffer = colorize(image, job.mode, window, job.banding_factor)
        result = RenderResult(job=job)

        if sink is None:
            result.buffer = buffer
        else:
            try:
                sink(job, buffer)
            except Exception as e:
                app_logger.error(
                    f"Render {job.mode.value} x{job.banding_factor:g} failed: {e}"
                )
                result.error = e
            del buffer

        result.elapsed = time.perf_counter() - started
        results.append(result)
    return results


def render_all(
    image: FloatImage,
    banding_factors: Iterable[float],
    modes: Iterable,
    sink: Optional[RenderSink] = None,
    *,
    window: tuple[float, float] = (0.0, 1.0),
    max_workers: Optional[int] = None,
) -> list[RenderResult]:
    """Render every (banding factor, palette) pair for one frame in parallel.

    Args:
        image: Decoded frame, shared read-only by all jobs
        banding_factors: Stripe counts to render
        modes: PaletteMode members or their names
        sink: Called as sink(job, buffer) from the worker as each job
              finishes; failures are recorded per job and never stop others
        window: (start_percent, end_percent) of the data range
        max_workers: Pool width, defaults to one worker per factor up to
                     the CPU count

    Returns:
        One RenderResult per job in completion order, or [] for an empty frame.

    Raises:
        InvalidArgumentError: bad factor, palette or worker count, before any
                              rendering starts
    """
    jobs = build_jobs(banding_factors, modes)
    if max_workers is not None and (
        isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1
    ):
        raise InvalidArgumentError(f"Worker count must be a positive integer, got {max_workers!r}")

    if image.is_empty:
        app_logger.debug("Skipping empty frame")
        return []
    if not jobs:
        return []

    view = compute_window(image.samples, *window)

    groups: dict[float, list[RenderJob]] = {}
    for job in jobs:
        groups.setdefault(job.banding_factor, []).append(job)

    workers = max_workers if max_workers is not None else min(len(groups), os.cpu_count() or 1)
    app_logger.debug(
        f"Rendering {len(jobs)} jobs for {image.width}x{image.height} frame "
        f"on {workers} workers (window {view.view_min:g}..{view.view_max:g})"
    )

    results: list[RenderResult] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render") as executor:
        futures = [
            executor.submit(_render_group, image, view, group, sink)
            for group in groups.values()
        ]
        for future in as_completed(futures):
            results.extend(future.result())

    return results
