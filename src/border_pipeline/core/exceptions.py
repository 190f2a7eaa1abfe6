"""Custom exceptions for the border pipeline."""

from .models import ErrorKind


class BorderPipelineError(Exception):
    """Base exception for all border pipeline errors."""


class UsageError(BorderPipelineError):
    """Error raised before processing starts: bad input, unusable folders."""


class ConfigurationError(UsageError):
    """Error raised for invalid configuration options."""


class ImageProcessingError(BorderPipelineError):
    """Error raised when processing a single image fails."""

    kind: ErrorKind = ErrorKind.DECODE_ERROR


class UnsupportedFormatError(ImageProcessingError):
    """The file extension is not one of jpg, jpeg or png."""

    kind = ErrorKind.UNSUPPORTED_FORMAT


class DecodeError(ImageProcessingError):
    """The image data could not be decoded."""

    kind = ErrorKind.DECODE_ERROR


class ImageIOError(ImageProcessingError):
    """Reading the input or writing the output failed."""

    kind = ErrorKind.IO_ERROR
