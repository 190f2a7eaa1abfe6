"""Pipeline wiring shared by the CLI and the tests."""

import os
import threading
import time
from typing import List, Optional

from ..core import (
    Batch,
    BatchResult,
    BorderConfig,
    ImageJob,
    ProcessingStats,
    StatsSummary,
    UsageError,
    count_batches,
    discover_jobs,
    get_logger,
    partition_jobs,
    process_image,
)
from ..core.protocols import ImageProcessorProtocol
from .channel import BoundedChannel
from .worker_pool import WorkerPool


def output_folder_for(input_folder: str, config: BorderConfig) -> str:
    """Return the folder outputs are written to."""
    if not config.separate_folder:
        return input_folder
    return os.path.join(input_folder, config.output_folder_name)


def prepare_output_folder(output_folder: str) -> None:
    """
    Create the output folder (and parents) if it does not exist yet.

    Raises:
        UsageError: If the output folder cannot be created
    """
    try:
        os.makedirs(output_folder, exist_ok=True)
    except OSError as e:
        raise UsageError(f"Error creating output folder {output_folder}: {e}") from e


def run_pipeline(
    jobs: List[ImageJob],
    config: BorderConfig,
    job_processor: ImageProcessorProtocol = process_image,
    stats: Optional[ProcessingStats] = None,
) -> ProcessingStats:
    """
    Push ``jobs`` through the worker pool and aggregate the results.

    Batches are fed from the calling thread into a channel sized to the pool.
    A closer thread waits for every worker to return before closing the
    result channel, so the consuming loop below sees every result and then
    ends.
    """
    logger = get_logger()
    stats = stats if stats is not None else ProcessingStats()

    if not jobs:
        logger.info("No images to process.")
        return stats

    batch_channel: BoundedChannel[Batch] = BoundedChannel(config.max_workers)
    # Room for every batch, so workers never wait on the consumer
    result_channel: BoundedChannel[BatchResult] = BoundedChannel(
        len(jobs) // config.batch_size + 1
    )

    pool = WorkerPool(job_processor, config, batch_channel, result_channel)
    pool.start()

    num_batches = count_batches(len(jobs), config.batch_size)
    logger.info(
        f"Processing {len(jobs)} images in {num_batches} batches "
        f"with {pool.size} workers"
    )

    try:
        for batch in partition_jobs(jobs, config.batch_size):
            batch_channel.put(batch)
    finally:
        batch_channel.close()

    def close_results_when_done() -> None:
        try:
            pool.join()
        finally:
            result_channel.close()

    closer = threading.Thread(target=close_results_when_done, name="result-closer")
    closer.start()

    for batch_result in result_channel:
        stats.merge(batch_result)
        logger.debug(
            f"Merged batch {batch_result.batch_id}: "
            f"{batch_result.success_count}/{len(batch_result.results)} successful"
        )

    closer.join()
    return stats


def log_configuration(config: BorderConfig, using_defaults: bool = False) -> None:
    """Log processing configuration."""
    logger = get_logger()
    logger.info("=" * 80)
    logger.info("CONFIGURATION")
    logger.info("=" * 80)
    if using_defaults:
        logger.info("Using default configuration (no flags provided)")
    logger.info(f"  Target dimensions:      {config.target_width}x{config.target_height}")
    logger.info(
        f"  Landscape borders:      Vertical={config.landscape_vert_border * 100:.1f}%, "
        f"Horizontal={config.landscape_horiz_border * 100:.1f}%"
    )
    logger.info(
        f"  Portrait borders:       Vertical={config.portrait_vert_border * 100:.1f}%, "
        f"Horizontal={config.portrait_horiz_border * 100:.1f}%"
    )
    logger.info(f"  Batch size:             {config.batch_size}")
    logger.info(f"  Max workers:            {config.max_workers}")
    logger.info(f"  JPEG quality:           {config.jpeg_quality}")
    logger.info(f"  Output prefix:          {config.output_prefix}")
    logger.info(f"  Separate output folder: {config.separate_folder}")
    logger.info("=" * 80)


def format_summary(summary: StatsSummary) -> List[str]:
    """Render the final report as lines of text."""
    lines = [
        "📊 === Processing Summary ===",
        f"✅ Total images processed: {summary.total_images}",
        f"❌ Failed images: {summary.failed_images}",
    ]

    if summary.total_images > 0 and summary.fastest and summary.slowest:
        lines.append(
            f"⏱️  Average processing time: {summary.average_duration:.2f} seconds"
        )
        lines.append(
            f"🚀 Fastest image: {summary.fastest.filename} "
            f"({summary.fastest.duration:.2f} seconds)"
        )
        lines.append(
            f"🐢 Slowest image: {summary.slowest.filename} "
            f"({summary.slowest.duration:.2f} seconds)"
        )

    lines.append("📈 Batch Statistics:")
    for batch in summary.batches:
        lines.append(
            f"📦 Batch {batch.batch_id} (worker {batch.worker_id}): "
            f"{batch.succeeded}/{batch.total} successful "
            f"({batch.success_ratio * 100:.0f}%), took {batch.duration:.2f} seconds"
        )
    return lines


def log_final_statistics(summary: StatsSummary, total_time: float) -> None:
    """Log final processing statistics."""
    logger = get_logger()
    processed = summary.processed_count
    overall_rate = processed / total_time if total_time > 0 else 0

    logger.info("=" * 80)
    logger.info("PROCESSING COMPLETED")
    logger.info("=" * 80)
    logger.info(f"Total execution time: {total_time:.2f} seconds")
    logger.info(f"Overall processing rate: {overall_rate:.1f} images/sec")
    for line in format_summary(summary):
        logger.info(line)
    logger.info("=" * 80)


def run_processing(
    input_folder: str,
    config: BorderConfig,
    job_processor: ImageProcessorProtocol = process_image,
    using_defaults: bool = False,
) -> StatsSummary:
    """
    Process every supported image in ``input_folder``.

    Raises:
        UsageError: If the input folder cannot be read or the output folder
            cannot be created. Nothing has been processed at that point.
    """
    log_configuration(config, using_defaults)
    start_time = time.time()

    output_folder = output_folder_for(input_folder, config)
    jobs = discover_jobs(input_folder, output_folder, config)
    prepare_output_folder(output_folder)

    stats = run_pipeline(jobs, config, job_processor)

    summary = stats.summary()
    log_final_statistics(summary, time.time() - start_time)
    return summary
