"""Core utilities and shared components for the border pipeline."""

from .image_utils import (
    BorderLayout,
    add_border,
    compute_layout,
    get_orientation,
    is_supported_image,
    load_image,
    output_format_for,
    process_image,
    save_image,
)
from .logging_config import (
    LOGGER_NAME,
    get_logger,
    set_debug_logging,
    setup_logger,
)
from .exceptions import (
    BorderPipelineError,
    ConfigurationError,
    DecodeError,
    ImageIOError,
    ImageProcessingError,
    UnsupportedFormatError,
    UsageError,
)
from .error_handling import (
    BatchOperationContextManager,
    classify_error,
    with_error_handling,
)
from .models import (
    Batch,
    BatchResult,
    BatchSummary,
    BorderConfig,
    ErrorKind,
    ImageJob,
    Orientation,
    ProcessingResult,
    StatsSummary,
)
from .partitioner import count_batches, discover_jobs, partition_jobs
from .stats import ProcessingStats

__all__ = [
    "BorderConfig",
    "ImageJob",
    "Batch",
    "ProcessingResult",
    "BatchResult",
    "BatchSummary",
    "StatsSummary",
    "ErrorKind",
    "Orientation",
    "BorderLayout",
    "add_border",
    "compute_layout",
    "get_orientation",
    "is_supported_image",
    "load_image",
    "save_image",
    "output_format_for",
    "process_image",
    "discover_jobs",
    "partition_jobs",
    "count_batches",
    "ProcessingStats",
    "LOGGER_NAME",
    "setup_logger",
    "get_logger",
    "set_debug_logging",
    "BorderPipelineError",
    "UsageError",
    "ConfigurationError",
    "ImageProcessingError",
    "UnsupportedFormatError",
    "DecodeError",
    "ImageIOError",
    "BatchOperationContextManager",
    "classify_error",
    "with_error_handling",
]
