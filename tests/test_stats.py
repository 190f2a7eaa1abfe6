"""Tests for the ProcessingStats aggregator."""

import itertools
import threading

import pytest

from border_pipeline.core.models import BatchResult, ErrorKind, ProcessingResult
from border_pipeline.core.stats import ProcessingStats


def _ok(filename, duration):
    return ProcessingResult(filename=filename, duration=duration)


def _failed(filename, kind=ErrorKind.DECODE_ERROR):
    return ProcessingResult(filename=filename, duration=0.01, error=kind, error_message="boom")


def _batch(batch_id, *results, start=0.0, end=1.0, worker_id=0):
    return BatchResult(
        batch_id=batch_id,
        worker_id=worker_id,
        start_time=start,
        end_time=end,
        results=tuple(results),
    )


SAMPLE_BATCHES = [
    _batch(1, _ok("a.jpg", 0.5), _ok("b.jpg", 0.25), _failed("c.jpg")),
    _batch(2, _ok("d.jpg", 2.0), _failed("e.png", ErrorKind.IO_ERROR)),
    _batch(3, _ok("f.png", 0.25), _ok("g.png", 1.0)),
    _batch(4),
]


class TestMerge:
    """Tests for ProcessingStats.merge."""

    def test_empty_stats_summary(self):
        """Test the summary of a run that saw no results."""
        summary = ProcessingStats().summary()

        assert summary.total_images == 0
        assert summary.failed_images == 0
        assert summary.average_duration == 0.0
        assert summary.fastest is None
        assert summary.slowest is None
        assert summary.batches == []

    def test_counts_successes_and_failures(self):
        """Test successes and failures are counted separately."""
        stats = ProcessingStats()
        for batch in SAMPLE_BATCHES:
            stats.merge(batch)

        summary = stats.summary()
        assert summary.total_images == 5
        assert summary.failed_images == 2
        assert summary.total_duration == pytest.approx(4.0)
        assert summary.average_duration == pytest.approx(0.8)

    def test_counts_match_results_after_each_merge(self):
        """Test total + failed equals the number of merged results at every step."""
        stats = ProcessingStats()
        seen = 0
        for batch in SAMPLE_BATCHES:
            stats.merge(batch)
            seen += len(batch.results)
            summary = stats.summary()
            assert summary.total_images + summary.failed_images == seen

    def test_first_success_seeds_fastest_and_slowest(self):
        """Test a single success is both fastest and slowest."""
        stats = ProcessingStats()
        stats.merge(_batch(1, _failed("x.jpg"), _ok("only.jpg", 3.0)))

        summary = stats.summary()
        assert summary.fastest.filename == "only.jpg"
        assert summary.slowest.filename == "only.jpg"

    def test_failures_never_become_extrema(self):
        """Test failed results are ignored for fastest and slowest."""
        stats = ProcessingStats()
        stats.merge(_batch(1, _failed("fail.jpg"), _ok("a.jpg", 1.0), _ok("b.jpg", 2.0)))

        summary = stats.summary()
        assert summary.fastest.filename == "a.jpg"
        assert summary.slowest.filename == "b.jpg"

    def test_fastest_and_slowest_bound_every_success(self):
        """Test fastest <= every successful duration <= slowest."""
        stats = ProcessingStats()
        for batch in SAMPLE_BATCHES:
            stats.merge(batch)

        summary = stats.summary()
        durations = [
            result.duration
            for batch in SAMPLE_BATCHES
            for result in batch.results
            if result.success
        ]
        assert all(summary.fastest.duration <= d <= summary.slowest.duration for d in durations)
        assert summary.slowest.filename == "d.jpg"

    def test_merge_is_order_independent(self):
        """Test every merge order gives the same totals and extrema."""
        outcomes = set()
        for order in itertools.permutations(SAMPLE_BATCHES):
            stats = ProcessingStats()
            for batch in order:
                stats.merge(batch)
            summary = stats.summary()
            outcomes.add(
                (
                    summary.total_images,
                    summary.failed_images,
                    round(summary.total_duration, 9),
                    summary.fastest.filename,
                    summary.slowest.filename,
                )
            )

        assert len(outcomes) == 1
        # b.jpg and f.png tie at 0.25 seconds; the tie resolves the same way every time
        assert outcomes.pop()[3] == "b.jpg"

    def test_concurrent_merges_lose_nothing(self):
        """Test many threads merging at once keep the counts consistent."""
        stats = ProcessingStats()
        batches = [
            _batch(i, _ok(f"{i}-a.jpg", 0.1 + i / 1000), _failed(f"{i}-b.jpg"))
            for i in range(1, 201)
        ]

        threads = [
            threading.Thread(target=lambda chunk=batches[n::8]: [stats.merge(b) for b in chunk])
            for n in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        summary = stats.summary()
        assert summary.total_images == 200
        assert summary.failed_images == 200
        assert len(summary.batches) == 200
        assert summary.fastest.filename == "1-a.jpg"
        assert summary.slowest.filename == "200-a.jpg"


class TestSummary:
    """Tests for ProcessingStats.summary."""

    def test_per_batch_breakdown(self):
        """Test per-batch success ratios and spans, ordered by batch id."""
        stats = ProcessingStats()
        stats.merge(_batch(2, _ok("c.jpg", 1.0), start=5.0, end=6.5, worker_id=3))
        stats.merge(_batch(1, _ok("a.jpg", 1.0), _failed("b.jpg"), start=1.0, end=3.0, worker_id=1))

        batches = stats.summary().batches

        assert [batch.batch_id for batch in batches] == [1, 2]
        assert batches[0].succeeded == 1
        assert batches[0].total == 2
        assert batches[0].success_ratio == 0.5
        assert batches[0].duration == pytest.approx(2.0)
        assert batches[0].worker_id == 1
        assert batches[1].success_ratio == 1.0
        assert batches[1].duration == pytest.approx(1.5)

    def test_all_failed_average_is_zero(self):
        """Test the average is guarded when nothing succeeded."""
        stats = ProcessingStats()
        stats.merge(_batch(1, _failed("a.jpg"), _failed("b.jpg")))

        summary = stats.summary()
        assert summary.total_images == 0
        assert summary.failed_images == 2
        assert summary.average_duration == 0.0
        assert summary.fastest is None
