"""Tests for job discovery and batch partitioning."""

import os

import pytest

from border_pipeline.core.exceptions import UsageError
from border_pipeline.core.models import BorderConfig, ImageJob
from border_pipeline.core.partitioner import (
    count_batches,
    create_jobs,
    discover_jobs,
    list_image_files,
    partition_jobs,
)
from border_pipeline.testing.fakes import setup_test_image_folder


def _jobs(count):
    return [ImageJob(input_path=f"in/{i}.jpg", output_path=f"out/{i}.jpg") for i in range(count)]


class TestPartitionJobs:
    """Tests for partition_jobs function."""

    @pytest.mark.parametrize("job_count", [0, 1, 2, 9, 10, 11, 25])
    @pytest.mark.parametrize("batch_size", [1, 2, 3, 10])
    def test_batch_count_and_sizes(self, job_count, batch_size):
        """Test ceil(N/B) batches, all full except possibly the last."""
        batches = list(partition_jobs(_jobs(job_count), batch_size))

        assert len(batches) == count_batches(job_count, batch_size)
        assert len(batches) == -(-job_count // batch_size)
        for batch in batches[:-1]:
            assert len(batch) == batch_size
        if batches:
            expected_last = job_count % batch_size or batch_size
            assert len(batches[-1]) == expected_last

    def test_every_job_appears_once_in_order(self):
        """Test that batches preserve input order and cover every job."""
        jobs = _jobs(7)
        batches = list(partition_jobs(jobs, 3))

        flattened = [job for batch in batches for job in batch.jobs]
        assert flattened == jobs

    def test_batch_ids_follow_partition_order(self):
        """Test batch ids start at 1 and increase."""
        batches = list(partition_jobs(_jobs(5), 2))
        assert [batch.batch_id for batch in batches] == [1, 2, 3]

    def test_no_jobs_no_batches(self):
        """Test that an empty job list yields nothing."""
        assert list(partition_jobs([], 10)) == []

    def test_invalid_batch_size(self):
        """Test batch sizes below 1 are rejected."""
        with pytest.raises(ValueError):
            list(partition_jobs(_jobs(3), 0))

    def test_accepts_any_iterable(self):
        """Test partitioning a generator of jobs."""
        batches = list(partition_jobs(iter(_jobs(4)), 4))
        assert len(batches) == 1
        assert len(batches[0]) == 4


class TestDiscovery:
    """Tests for list_image_files, create_jobs and discover_jobs."""

    def test_list_image_files_filters_entries(self, tmp_path):
        """Test that only supported files are listed, sorted by name."""
        folder = setup_test_image_folder(str(tmp_path / "input"))

        files = list_image_files(folder)

        assert files == sorted(
            ["photo1.jpg", "photo2.JPG", "photo3.jpeg", "scan1.png", "scan2.png"]
        )
        assert "readme.txt" not in files
        assert "nested.jpg" not in files

    def test_list_image_files_missing_folder(self, tmp_path):
        """Test that an unreadable folder is a usage error."""
        with pytest.raises(UsageError):
            list_image_files(str(tmp_path / "does-not-exist"))

    def test_list_image_files_empty_folder(self, tmp_path):
        """Test that an empty folder yields no files."""
        assert list_image_files(str(tmp_path)) == []

    def test_create_jobs_output_names(self):
        """Test output paths use the prefix and the output folder."""
        config = BorderConfig(output_prefix="framed_")
        jobs = create_jobs(["a.jpg", "b.png"], "in", "out", config)

        assert jobs[0].input_path == os.path.join("in", "a.jpg")
        assert jobs[0].output_path == os.path.join("out", "framed_a.jpg")
        assert jobs[1].output_path == os.path.join("out", "framed_b.png")

    def test_discover_and_partition_mixed_folder(self, tmp_path):
        """Test 3 jpg + 2 png + 1 txt with batch size 2 gives batches of 2, 2, 1."""
        folder = setup_test_image_folder(str(tmp_path / "input"))
        config = BorderConfig(batch_size=2)

        jobs = discover_jobs(folder, str(tmp_path / "output"), config)
        batches = list(partition_jobs(jobs, config.batch_size))

        assert len(jobs) == 5
        assert [len(batch) for batch in batches] == [2, 2, 1]
        assert all(not job.input_path.endswith(".txt") for job in jobs)
