import pytest

from border_pipeline.core.exceptions import (
    BorderPipelineError,
    ConfigurationError,
    DecodeError,
    ImageIOError,
    ImageProcessingError,
    UnsupportedFormatError,
    UsageError,
)
from border_pipeline.core.models import ErrorKind


def test_per_image_errors_carry_their_kind() -> None:
    assert UnsupportedFormatError("x").kind == ErrorKind.UNSUPPORTED_FORMAT
    assert DecodeError("x").kind == ErrorKind.DECODE_ERROR
    assert ImageIOError("x").kind == ErrorKind.IO_ERROR


def test_per_image_errors_share_a_base() -> None:
    for error_cls in (UnsupportedFormatError, DecodeError, ImageIOError):
        with pytest.raises(ImageProcessingError):
            raise error_cls("boom")


def test_configuration_error_is_a_usage_error() -> None:
    with pytest.raises(UsageError):
        raise ConfigurationError("bad batch size")


def test_everything_derives_from_pipeline_error() -> None:
    assert issubclass(UsageError, BorderPipelineError)
    assert issubclass(ImageProcessingError, BorderPipelineError)
    assert not issubclass(ImageProcessingError, UsageError)
