"""Protocol definitions for dependency injection and testability."""

from typing import Protocol

from .models import BorderConfig, ImageJob


class ImageProcessorProtocol(Protocol):
    """Callable that turns one job's input file into its output file.

    Implementations raise ``ImageProcessingError`` subclasses on failure.
    """

    def __call__(self, job: ImageJob, config: BorderConfig) -> None:
        ...
