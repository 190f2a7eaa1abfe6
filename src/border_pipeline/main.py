#!/usr/bin/env python3
"""
Border Pipeline CLI

Reads a folder → Scales each image onto a bordered canvas → Writes the results
Images are processed in batches by a pool of worker threads.
"""

import sys
import argparse
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from . import __version__
from .core import (
    BorderConfig,
    ConfigurationError,
    UsageError,
    get_logger,
    set_debug_logging,
)
from .processors import run_processing

DEFAULTS = BorderConfig()


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Options default to ``argparse.SUPPRESS`` so that only the flags the user
    actually passed show up in the namespace and override the config
    defaults.
    """
    parser = argparse.ArgumentParser(
        prog="border-pipeline",
        description="Add white borders to every image in a folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process a folder with the default settings
  border-pipeline ./photos

  # Custom canvas and batching
  border-pipeline --width 1920 --height 1080 --batch-size 20 --workers 8 ./photos

  # Write next to the originals instead of a separate folder
  border-pipeline --no-separate-folder --prefix framed_ -i ./photos
        """,
    )

    parser.add_argument(
        "input_folder", nargs="?", default=None, help="Input folder containing images"
    )
    parser.add_argument(
        "-i", "--input", dest="input", default=None,
        help="Input folder (alternative to the positional argument)",
    )
    parser.add_argument(
        "--width", dest="target_width", type=int, default=argparse.SUPPRESS,
        help=f"Target width for output images (default: {DEFAULTS.target_width})",
    )
    parser.add_argument(
        "--height", dest="target_height", type=int, default=argparse.SUPPRESS,
        help=f"Target height for output images (default: {DEFAULTS.target_height})",
    )
    parser.add_argument(
        "--landscape-vert", dest="landscape_vert_border", type=float,
        default=argparse.SUPPRESS,
        help=f"Vertical border ratio for landscape images (default: {DEFAULTS.landscape_vert_border})",
    )
    parser.add_argument(
        "--landscape-horiz", dest="landscape_horiz_border", type=float,
        default=argparse.SUPPRESS,
        help=f"Horizontal border ratio for landscape images (default: {DEFAULTS.landscape_horiz_border})",
    )
    parser.add_argument(
        "--portrait-vert", dest="portrait_vert_border", type=float,
        default=argparse.SUPPRESS,
        help=f"Vertical border ratio for portrait images (default: {DEFAULTS.portrait_vert_border})",
    )
    parser.add_argument(
        "--portrait-horiz", dest="portrait_horiz_border", type=float,
        default=argparse.SUPPRESS,
        help=f"Horizontal border ratio for portrait images (default: {DEFAULTS.portrait_horiz_border})",
    )
    parser.add_argument(
        "--batch-size", dest="batch_size", type=int, default=argparse.SUPPRESS,
        help=f"Number of images to process in each batch (default: {DEFAULTS.batch_size})",
    )
    parser.add_argument(
        "--workers", dest="max_workers", type=int, default=argparse.SUPPRESS,
        help=f"Maximum number of concurrent workers (default: {DEFAULTS.max_workers})",
    )
    parser.add_argument(
        "--jpeg-quality", dest="jpeg_quality", type=int, default=argparse.SUPPRESS,
        help=f"JPEG output quality 1-100 (default: {DEFAULTS.jpeg_quality})",
    )
    parser.add_argument(
        "--prefix", dest="output_prefix", type=str, default=argparse.SUPPRESS,
        help=f"Prefix for output filenames (default: {DEFAULTS.output_prefix})",
    )
    parser.add_argument(
        "--separate-folder", dest="separate_folder",
        action=argparse.BooleanOptionalAction, default=argparse.SUPPRESS,
        help=f"Write output into a '{DEFAULTS.output_folder_name}' subfolder (default: on)",
    )
    parser.add_argument(
        "--debug", dest="debug", action="store_true", default=argparse.SUPPRESS,
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments (``sys.argv[1:]`` when ``argv`` is None)."""
    return build_parser().parse_args(argv)


def build_config(args: argparse.Namespace) -> BorderConfig:
    """
    Create the config from the defaults plus the explicitly passed options.

    Raises:
        ConfigurationError: If an option value is out of range
    """
    overrides: Dict[str, Any] = {
        key: value
        for key, value in vars(args).items()
        if key in BorderConfig.model_fields
    }
    try:
        return BorderConfig(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the border pipeline.

    A single bare argument is taken as the input folder with every default.
    Otherwise named options are parsed and the input folder comes from
    ``--input`` or the trailing positional. Exits with status 1 on usage
    errors; per-image failures do not change the exit status.
    """
    argv = sys.argv[1:] if argv is None else argv
    logger = get_logger()
    parser = build_parser()
    args = parser.parse_args(argv)

    using_defaults = len(argv) == 1 and not argv[0].startswith("-")
    input_folder = args.input or args.input_folder

    if not input_folder:
        print("Error: Input folder is required")
        parser.print_help()
        sys.exit(1)

    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        parser.print_help()
        sys.exit(1)

    if config.debug:
        set_debug_logging()

    try:
        logger.info("Starting Border Pipeline")
        run_processing(input_folder, config, using_defaults=using_defaults)

    except UsageError as e:
        logger.error(f"{e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Processing failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
