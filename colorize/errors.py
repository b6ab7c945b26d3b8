"""
Error taxonomy for the colorization pipeline.
"""


class ColorizeError(Exception):
    """Base class for every error raised by the colorize package."""


class InvalidArgumentError(ColorizeError, ValueError):
    """Bad job parameters (unknown palette, non-positive banding factor, ...)."""


class EmptyInputError(ColorizeError, ValueError):
    """A frame has no samples to window or colorize."""


class DecodeError(ColorizeError):
    """A FITS file or one of its HDUs could not be decoded. Fatal for the file."""


class WriteError(ColorizeError):
    """A rendered buffer could not be written. Reported per job."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
