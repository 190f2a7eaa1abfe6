"""Thread-safe aggregation of batch results."""

import threading
from typing import List, Optional

from .models import BatchResult, BatchSummary, ProcessingResult, StatsSummary


def _extremum_key(result: ProcessingResult):
    # Filename breaks duration ties so merge order never changes the winner
    return (result.duration, result.filename)


class ProcessingStats:
    """
    Running totals for one pipeline run.

    Workers never touch this object; the single consumer loop feeds it with
    ``merge`` and the report is read with ``summary``. Both take the same
    lock, and the lock is never held across I/O.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_images = 0
        self._failed_images = 0
        self._total_duration = 0.0
        self._batch_results: List[BatchResult] = []
        self._fastest: Optional[ProcessingResult] = None
        self._slowest: Optional[ProcessingResult] = None

    def merge(self, batch_result: BatchResult) -> None:
        """Fold one batch result into the totals."""
        with self._lock:
            self._batch_results.append(batch_result)

            for result in batch_result.results:
                if not result.success:
                    self._failed_images += 1
                    continue

                self._total_images += 1
                self._total_duration += result.duration

                if self._fastest is None or _extremum_key(result) < _extremum_key(self._fastest):
                    self._fastest = result
                if self._slowest is None or _extremum_key(result) > _extremum_key(self._slowest):
                    self._slowest = result

    def summary(self) -> StatsSummary:
        """Return a consistent snapshot of the totals and per-batch breakdown."""
        with self._lock:
            average = (
                self._total_duration / self._total_images if self._total_images else 0.0
            )
            batches = [
                BatchSummary(
                    batch_id=batch.batch_id,
                    worker_id=batch.worker_id,
                    succeeded=batch.success_count,
                    total=len(batch.results),
                    duration=batch.duration,
                )
                for batch in sorted(self._batch_results, key=lambda b: b.batch_id)
            ]
            return StatsSummary(
                total_images=self._total_images,
                failed_images=self._failed_images,
                total_duration=self._total_duration,
                average_duration=average,
                fastest=self._fastest,
                slowest=self._slowest,
                batches=batches,
            )
