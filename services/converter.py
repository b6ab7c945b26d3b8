"""
FITS -> false-color raster conversion driver.

Frames are decoded and rendered one at a time; within a frame every banding
factor x palette combination is rendered in parallel and written as soon as
it is ready.
"""
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

from colorize.scheduler import render_all
from .config import Config
from .fits_source import iter_frames
from .logger import app_logger
from .raster_writer import write_raster


def format_factor(banding_factor):
    """Render a banding factor for filenames: 2.0 -> '2', 2.5 -> '2.5'"""
    factor = float(banding_factor)
    if factor.is_integer():
        return str(int(factor))
    return repr(factor)


def build_output_filename(pattern, stem, frame_index, mode, banding_factor, ext):
    """
    Build an output filename from pattern.
    Supports tokens: {stem}, {frame}, {mode}, {factor}, {ext}

    Every (frame, mode, factor) triple maps to a distinct name as long as the
    pattern uses all three tokens.
    """
    mode_tag = getattr(mode, 'value', mode)
    result = pattern
    result = result.replace('{stem}', stem)
    result = result.replace('{frame}', str(frame_index))
    result = result.replace('{mode}', str(mode_tag))
    result = result.replace('{factor}', format_factor(banding_factor))
    result = result.replace('{ext}', ext.lstrip('.').lower())
    return result


@dataclass
class ConversionReport:
    """Summary of one file's conversion"""
    source: str
    frames: int = 0
    written: list = field(default_factory=list)
    failures: list = field(default_factory=list)  # (path, error message)
    elapsed: float = 0.0

    @property
    def ok(self):
        return not self.failures


def convert_file(path, config=None, output_directory=None):
    """
    Render every configured banding factor x palette for each frame of a FITS file.

    Args:
        path: FITS file
        config: Config (defaults loaded when None)
        output_directory: Overrides config; empty means next to the input

    Returns:
        ConversionReport

    Raises:
        DecodeError: the file or one of its frames could not be decoded
    """
    config = config or Config()
    path = Path(path)
    started = time.perf_counter()

    out_dir = output_directory or config.get('output_directory') or str(path.parent)
    pattern = config.get('filename_pattern')
    ext = config.get('output_format', 'bmp')
    flip = config.get('flip_vertical', True)
    factors = config.get('banding_factors')
    modes = config.get('palette_modes')
    window = config.get_view_window()
    max_workers = config.get('max_workers')

    report = ConversionReport(source=str(path))
    app_logger.info(f"Converting {path.name} -> {out_dir}")

    for frame in iter_frames(path):
        image = frame.image

        def write_job(job, buffer, frame_index=frame.index, image=image):
            filename = build_output_filename(
                pattern, path.stem, frame_index, job.mode, job.banding_factor, ext
            )
            output_path = os.path.join(out_dir, filename)
            write_raster(output_path, buffer, image.width, image.height, flip_vertical=flip)
            report.written.append(output_path)
            app_logger.debug(f"✓ Saved: {filename}")

        results = render_all(
            image, factors, modes, write_job,
            window=window, max_workers=max_workers,
        )
        report.frames += 1

        failed = [r for r in results if not r.ok]
        for result in failed:
            report.failures.append((
                getattr(result.error, 'path', None),
                str(result.error),
            ))
        app_logger.info(
            f"Frame {frame.index} ({image.width}x{image.height}): "
            f"{len(results) - len(failed)}/{len(results)} renders written"
        )

    report.elapsed = time.perf_counter() - started
    if report.failures:
        app_logger.warning(f"{path.name}: {len(report.failures)} renders failed")
    app_logger.info(
        f"Finished {path.name}: {report.frames} frames, "
        f"{len(report.written)} files in {report.elapsed:.1f}s"
    )
    return report
