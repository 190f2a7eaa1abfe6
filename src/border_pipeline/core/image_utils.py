"""Image processing utilities for the border pipeline."""

import io
import os
from typing import NamedTuple

from PIL import Image

from .error_handling import with_error_handling
from .exceptions import DecodeError, ImageIOError, UnsupportedFormatError
from .models import BorderConfig, ImageJob, Orientation

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png")

# Decoder used for each input extension
DECODER_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}

BACKGROUND_COLOR = (255, 255, 255)


class BorderLayout(NamedTuple):
    """Placement of the scaled image on the target canvas."""

    orientation: Orientation
    scale: float
    scaled_width: int
    scaled_height: int
    offset_x: int
    offset_y: int


def is_supported_image(filename: str) -> bool:
    """Check whether a filename has a jpg, jpeg or png extension (any case)."""
    return os.path.splitext(filename)[1].lower() in SUPPORTED_EXTENSIONS


def get_orientation(width: int, height: int) -> Orientation:
    """Landscape only when strictly wider than tall; squares are portrait."""
    return Orientation.LANDSCAPE if width > height else Orientation.PORTRAIT


def compute_layout(width: int, height: int, config: BorderConfig) -> BorderLayout:
    """
    Compute how an image of the given size is placed on the target canvas.

    The available drawing area is the canvas minus the orientation-specific
    borders on each side. The image is scaled uniformly so that it fits both
    dimensions of that area, then centered.

    Args:
        width: Original image width in pixels
        height: Original image height in pixels
        config: Border configuration

    Returns:
        BorderLayout with the scale factor, scaled size and top-left offset

    Raises:
        ValueError: If either dimension is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size: {width}x{height}")

    orientation = get_orientation(width, height)
    vert_ratio, horiz_ratio = config.border_ratios(orientation)

    available_width = config.target_width * (1 - 2 * horiz_ratio)
    available_height = config.target_height * (1 - 2 * vert_ratio)

    scale = min(available_width / width, available_height / height)

    # Truncate like integer conversion; never collapse to an empty image
    scaled_width = max(1, int(width * scale))
    scaled_height = max(1, int(height * scale))

    offset_x = (config.target_width - scaled_width) // 2
    offset_y = (config.target_height - scaled_height) // 2

    return BorderLayout(
        orientation=orientation,
        scale=scale,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        offset_x=offset_x,
        offset_y=offset_y,
    )


def add_border(image: Image.Image, config: BorderConfig) -> Image.Image:
    """
    Scale an image to fit the target canvas and pad it with a white border.

    Args:
        image: Decoded PIL Image
        config: Border configuration

    Returns:
        New RGB image of exactly ``target_width x target_height``
    """
    layout = compute_layout(image.width, image.height, config)

    canvas = Image.new(
        "RGB", (config.target_width, config.target_height), BACKGROUND_COLOR
    )

    source = image.convert("RGBA")
    scaled = source.resize(
        (layout.scaled_width, layout.scaled_height),
        resample=Image.Resampling.BILINEAR,
    )

    # Using the image as its own mask blends it over the opaque background
    canvas.paste(scaled, (layout.offset_x, layout.offset_y), scaled)
    return canvas


def output_format_for(output_path: str) -> str:
    """PNG when the output extension is .png, JPEG otherwise."""
    if os.path.splitext(output_path)[1].lower() == ".png":
        return "PNG"
    return "JPEG"


@with_error_handling
def load_image(input_path: str) -> Image.Image:
    """
    Read and decode an image, choosing the decoder from its extension.

    Raises:
        UnsupportedFormatError: The extension is not jpg, jpeg or png
        ImageIOError: The file could not be opened or read
        DecodeError: The bytes are not a valid image of the expected format
    """
    ext = os.path.splitext(input_path)[1].lower()
    decoder = DECODER_FORMATS.get(ext)
    if decoder is None:
        raise UnsupportedFormatError(f"Unsupported image format: {ext or '<none>'}")

    try:
        with open(input_path, "rb") as fh:
            data = fh.read()
    except OSError as e:
        raise ImageIOError(f"Error opening input file: {e}") from e

    try:
        image = Image.open(io.BytesIO(data), formats=[decoder])
        image.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Error decoding image: {e}") from e

    return image


@with_error_handling
def save_image(image: Image.Image, output_path: str, config: BorderConfig) -> None:
    """
    Encode an image to ``output_path``.

    Raises:
        ImageIOError: The output could not be created, encoded or written
    """
    format_type = output_format_for(output_path)
    save_kwargs = {"quality": config.jpeg_quality} if format_type == "JPEG" else {}

    try:
        with open(output_path, "wb") as fh:
            image.save(fh, format=format_type, **save_kwargs)
    except (OSError, ValueError) as e:
        raise ImageIOError(f"Error writing output image: {e}") from e


def process_image(job: ImageJob, config: BorderConfig) -> None:
    """Load → Add border → Save for a single job."""
    image = load_image(job.input_path)
    bordered = add_border(image, config)
    save_image(bordered, job.output_path, config)


def build_output_path(output_folder: str, filename: str, prefix: str) -> str:
    """Output files keep their name with the configured prefix."""
    return os.path.join(output_folder, f"{prefix}{filename}")
