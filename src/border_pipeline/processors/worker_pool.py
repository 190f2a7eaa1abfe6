"""Fixed-size pool of worker threads consuming batches from a channel."""

import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from ..core import (
    Batch,
    BatchResult,
    BorderConfig,
    ImageJob,
    ImageProcessingError,
    ProcessingResult,
    classify_error,
    get_logger,
)
from ..core.error_handling import BatchOperationContextManager
from ..core.protocols import ImageProcessorProtocol
from .channel import BoundedChannel


def process_job(
    job_processor: ImageProcessorProtocol, job: ImageJob, config: BorderConfig
) -> ProcessingResult:
    """
    Run one job and time it, turning any failure into an error result.

    The stopwatch covers the whole call, file I/O included.
    """
    logger = get_logger()
    filename = os.path.basename(job.input_path)
    start = time.perf_counter()

    try:
        job_processor(job, config)
    except ImageProcessingError as e:
        duration = time.perf_counter() - start
        logger.error(f"❌ Error processing {filename}: {e}")
        return ProcessingResult(
            filename=filename, duration=duration, error=e.kind, error_message=str(e)
        )
    except Exception as e:  # noqa: BLE001
        duration = time.perf_counter() - start
        logger.error(f"❌ Unexpected error processing {filename}: {e}", exc_info=True)
        return ProcessingResult(
            filename=filename,
            duration=duration,
            error=classify_error(e),
            error_message=str(e),
        )

    duration = time.perf_counter() - start
    logger.info(f"✅ Successfully processed {filename} in {duration:.2f} seconds")
    return ProcessingResult(filename=filename, duration=duration)


def process_batch(
    batch: Batch,
    config: BorderConfig,
    job_processor: ImageProcessorProtocol,
    worker_id: int = 0,
) -> BatchResult:
    """
    Process the jobs of one batch strictly in order.

    A failing job is recorded and the next one runs; the batch is never
    aborted.
    """
    start_time = time.time()
    results: List[ProcessingResult] = []

    with BatchOperationContextManager(
        operation_name=f"Batch {batch.batch_id} (worker {worker_id})"
    ) as batch_manager:
        for job in batch.jobs:
            result = process_job(job_processor, job, config)
            if not result.success:
                batch_manager.add_error(
                    item_identifier=result.filename,
                    error_message=result.error_message or result.error.value,
                )
            results.append(result)

    return BatchResult(
        batch_id=batch.batch_id,
        worker_id=worker_id,
        start_time=start_time,
        end_time=time.time(),
        results=tuple(results),
    )


class WorkerPool:
    """
    Runs ``config.max_workers`` long-lived workers, each pulling one batch at
    a time.

    Every worker occupies one thread of the executor for its whole life.
    Workers only read the shared config and only write to the result
    channel. A worker returns once the batch channel is closed and drained;
    workers that never receive a batch simply return straight away.
    """

    def __init__(
        self,
        job_processor: ImageProcessorProtocol,
        config: BorderConfig,
        batch_channel: BoundedChannel[Batch],
        result_channel: BoundedChannel[BatchResult],
    ):
        self._job_processor = job_processor
        self._config = config
        self._batch_channel = batch_channel
        self._result_channel = result_channel
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures: List[Future] = []
        self._logger = get_logger()

    @property
    def size(self) -> int:
        return self._config.max_workers

    def start(self) -> None:
        """Submit one worker per executor thread."""
        if self._executor is not None:
            raise RuntimeError("Worker pool already started")

        self._logger.debug(f"Starting {self.size} workers")
        self._executor = ThreadPoolExecutor(
            max_workers=self.size, thread_name_prefix="worker"
        )
        self._futures = [
            self._executor.submit(self._run_worker, worker_id)
            for worker_id in range(self.size)
        ]

    def join(self) -> None:
        """
        Block until every worker has returned.

        Raises:
            Exception: The first error that escaped a worker, after all
                workers have finished
        """
        if self._executor is None:
            return
        self._executor.shutdown(wait=True)
        self._logger.debug(f"All {len(self._futures)} workers finished")

        for future in self._futures:
            future.result()

    def _run_worker(self, worker_id: int) -> None:
        for batch in self._batch_channel:
            self._logger.debug(
                f"Worker {worker_id} picked up batch {batch.batch_id} "
                f"with {len(batch)} images"
            )
            batch_result = process_batch(
                batch, self._config, self._job_processor, worker_id
            )
            self._result_channel.put(batch_result)
