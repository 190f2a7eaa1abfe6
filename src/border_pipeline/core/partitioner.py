"""Job discovery and batch partitioning."""

import os
from typing import Iterable, Iterator, List

from .exceptions import UsageError
from .image_utils import build_output_path, is_supported_image
from .logging_config import get_logger
from .models import Batch, BorderConfig, ImageJob


def list_image_files(input_folder: str) -> List[str]:
    """
    List supported image files directly inside ``input_folder``.

    Directories and files with other extensions are skipped silently.
    Names are returned sorted so batch formation is reproducible.

    Raises:
        UsageError: If the folder cannot be read
    """
    logger = get_logger()
    try:
        entries = sorted(os.scandir(input_folder), key=lambda entry: entry.name)
    except OSError as e:
        raise UsageError(f"Error reading directory {input_folder}: {e}") from e

    files = []
    for entry in entries:
        if entry.is_dir():
            continue
        if not is_supported_image(entry.name):
            logger.debug(f"Skipping unsupported file: {entry.name}")
            continue
        files.append(entry.name)

    logger.info(f"Found {len(files)} image files in {input_folder}")
    return files


def create_jobs(
    filenames: Iterable[str], input_folder: str, output_folder: str, config: BorderConfig
) -> List[ImageJob]:
    """Create work items from a list of filenames."""
    return [
        ImageJob(
            input_path=os.path.join(input_folder, filename),
            output_path=build_output_path(output_folder, filename, config.output_prefix),
        )
        for filename in filenames
    ]


def discover_jobs(
    input_folder: str, output_folder: str, config: BorderConfig
) -> List[ImageJob]:
    """Discover the images in ``input_folder`` and build one job per image."""
    return create_jobs(list_image_files(input_folder), input_folder, output_folder, config)


def partition_jobs(jobs: Iterable[ImageJob], batch_size: int) -> Iterator[Batch]:
    """
    Group jobs into batches of ``batch_size``, preserving input order.

    Every batch is full except possibly the last one. No jobs means no
    batches.

    Raises:
        ValueError: If ``batch_size`` is smaller than 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    batch: List[ImageJob] = []
    batch_id = 0
    for job in jobs:
        batch.append(job)
        if len(batch) == batch_size:
            batch_id += 1
            yield Batch(batch_id=batch_id, jobs=tuple(batch))
            batch = []

    if batch:
        yield Batch(batch_id=batch_id + 1, jobs=tuple(batch))


def count_batches(job_count: int, batch_size: int) -> int:
    """Number of batches ``partition_jobs`` produces for ``job_count`` jobs."""
    return (job_count + batch_size - 1) // batch_size
