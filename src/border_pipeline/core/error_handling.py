# src/border_pipeline/core/error_handling.py

import functools
import logging
from typing import Any, Callable, Dict, List, TypeVar

from PIL import UnidentifiedImageError

from .exceptions import BorderPipelineError, DecodeError, ImageIOError
from .logging_config import LOGGER_NAME
from .models import ErrorKind

F = TypeVar("F", bound=Callable[..., Any])


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception raised while processing one image to an ErrorKind."""
    kind = getattr(exc, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind
    if isinstance(exc, UnidentifiedImageError):
        return ErrorKind.DECODE_ERROR
    if isinstance(exc, OSError):
        return ErrorKind.IO_ERROR
    return ErrorKind.DECODE_ERROR


def with_error_handling(func: F) -> F:
    """
    A decorator to wrap functions with standardized error handling.

    Pipeline errors are logged and re-raised untouched. Pillow's
    ``UnidentifiedImageError`` becomes a ``DecodeError`` and any other
    ``OSError`` becomes an ``ImageIOError``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = logging.getLogger(f"{LOGGER_NAME}.{func.__name__}")
        try:
            return func(*args, **kwargs)
        except BorderPipelineError as e:
            logger.debug(f"Error in '{func.__name__}': {e}")
            raise
        except UnidentifiedImageError as e:
            logger.debug(f"Error in '{func.__name__}': {e}")
            raise DecodeError(f"Failed to identify image in {func.__name__}: {e}") from e
        except OSError as e:
            logger.debug(f"Error in '{func.__name__}': {e}")
            raise ImageIOError(f"I/O failure in {func.__name__}: {e}") from e

    return wrapper  # type: ignore[return-value]


class BatchOperationContextManager:
    """
    Context manager for batch operations to collect and summarize errors.
    """

    def __init__(self, operation_name: str = "Batch Operation"):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = logging.getLogger(
            f"{LOGGER_NAME}.{self.__class__.__name__}"
        )

    def __enter__(self) -> "BatchOperationContextManager":
        self.logger.debug(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.debug(
                    f"  Error {i + 1}/{len(self.errors)} for item "
                    f"'{error_detail['item']}': {error_detail['error']}"
                )
        elif exc_type:
            self.logger.error(
                f"{self.operation_name} failed due to an unhandled exception: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        else:
            self.logger.debug(f"{self.operation_name} completed successfully.")

        # Never suppress exceptions raised inside the block
        return False

    def add_error(self, error_message: str, item_identifier: str = "Unknown item") -> None:
        """
        Report an error for a specific item of the batch.

        Args:
            error_message: The error message or exception string.
            item_identifier: A string identifying the item that failed (e.g., filename).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(
            f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}"
        )

    @property
    def error_count(self) -> int:
        return len(self.errors)
