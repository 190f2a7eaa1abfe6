"""Shared data models for the border pipeline."""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Category of a per-image failure."""

    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    DECODE_ERROR = "DecodeError"
    IO_ERROR = "IOError"


class Orientation(str, Enum):
    """Image orientation used to pick border ratios."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class BorderConfig(BaseModel):
    """Configuration for the processing job."""

    model_config = ConfigDict(frozen=True)

    target_width: int = Field(default=1080, ge=1)
    target_height: int = Field(default=1080, ge=1)
    landscape_vert_border: float = Field(default=0.05, ge=0.0, lt=0.5)
    landscape_horiz_border: float = Field(default=0.03, ge=0.0, lt=0.5)
    portrait_vert_border: float = Field(default=0.005, ge=0.0, lt=0.5)
    portrait_horiz_border: float = Field(default=0.18, ge=0.0, lt=0.5)
    batch_size: int = Field(default=10, ge=1)
    max_workers: int = Field(default=1000, ge=1)
    jpeg_quality: int = Field(default=100, ge=1, le=100)
    output_prefix: str = "bordered_"
    separate_folder: bool = True
    output_folder_name: str = "bordered_images"
    debug: bool = False

    def border_ratios(self, orientation: Orientation) -> Tuple[float, float]:
        """Return ``(vertical, horizontal)`` border ratios for an orientation."""
        if orientation is Orientation.LANDSCAPE:
            return self.landscape_vert_border, self.landscape_horiz_border
        return self.portrait_vert_border, self.portrait_horiz_border


class ImageJob(BaseModel):
    """Represents an image to be processed."""

    model_config = ConfigDict(frozen=True)

    input_path: str
    output_path: str


class Batch(BaseModel):
    """An ordered group of jobs handed to a single worker."""

    model_config = ConfigDict(frozen=True)

    batch_id: int
    jobs: Tuple[ImageJob, ...]

    def __len__(self) -> int:
        return len(self.jobs)


class ProcessingResult(BaseModel):
    """Result of processing a single image."""

    model_config = ConfigDict(frozen=True)

    filename: str
    duration: float = 0.0
    error: Optional[ErrorKind] = None
    error_message: str = ""

    @property
    def success(self) -> bool:
        return self.error is None


class BatchResult(BaseModel):
    """Outcome of one batch, emitted by the worker that processed it."""

    model_config = ConfigDict(frozen=True)

    batch_id: int
    worker_id: int = 0
    start_time: float
    end_time: float
    results: Tuple[ProcessingResult, ...] = ()

    @property
    def duration(self) -> float:
        """Wall-clock span of the batch in seconds."""
        return self.end_time - self.start_time

    @property
    def success_count(self) -> int:
        return sum(1 for result in self.results if result.success)


class BatchSummary(BaseModel):
    """Per-batch line of the final report."""

    model_config = ConfigDict(frozen=True)

    batch_id: int
    worker_id: int
    succeeded: int
    total: int
    duration: float

    @property
    def success_ratio(self) -> float:
        return self.succeeded / self.total if self.total else 0.0


class StatsSummary(BaseModel):
    """Snapshot of the aggregated processing statistics."""

    model_config = ConfigDict(frozen=True)

    total_images: int = 0
    failed_images: int = 0
    total_duration: float = 0.0
    average_duration: float = 0.0
    fastest: Optional[ProcessingResult] = None
    slowest: Optional[ProcessingResult] = None
    batches: List[BatchSummary] = Field(default_factory=list)

    @property
    def processed_count(self) -> int:
        """Number of results seen, successful or not."""
        return self.total_images + self.failed_images
