"""Testing utilities and fakes for the border pipeline."""

from .fakes import (
    FakeImageProcessor,
    create_test_image,
    setup_test_image_folder,
    write_test_image,
)

__all__ = [
    "FakeImageProcessor",
    "create_test_image",
    "setup_test_image_folder",
    "write_test_image",
]
