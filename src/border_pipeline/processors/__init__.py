"""Batch worker pool and the pipeline built on it."""

from .channel import BoundedChannel, ChannelClosed
from .common import (
    format_summary,
    log_configuration,
    log_final_statistics,
    output_folder_for,
    prepare_output_folder,
    run_pipeline,
    run_processing,
)
from .worker_pool import WorkerPool, process_batch, process_job

__all__ = [
    "BoundedChannel",
    "ChannelClosed",
    "WorkerPool",
    "process_batch",
    "process_job",
    "run_pipeline",
    "run_processing",
    "output_folder_for",
    "prepare_output_folder",
    "log_configuration",
    "log_final_statistics",
    "format_summary",
]
