"""
Command-line picture editor.

Usage:
    python -m picture_editor.cli photo.png out.png --filter BlackWhite --edges "Sobel 3x3 Horizontal" "Sobel 3x3 Vertical"
    python -m picture_editor.cli --list-kernels

Filters run in the order given, then edge detection (at most once).
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import image_io
from .config import configure_logging, load_settings
from .edge.detector import EdgeDetector
from .filters.pixel import FILTERS, PixelFilters
from .session import EditingSession

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser(filter_names: list[str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="picture-editor", description="Apply filters and edge detection to an image")
    parser.add_argument("input", nargs="?", help="Image to load (PNG, JPEG or BMP)")
    parser.add_argument("output", nargs="?", help="Where to save the result; the format follows the suffix")
    parser.add_argument("--filter", action="append", default=[], choices=filter_names, dest="filters",
                        help="Pixel filter to apply (repeatable, applied in order)")
    parser.add_argument("--edges", nargs="+", metavar="KERNEL",
                        help="Edge detection kernel names: X [Y]; a single name is used for both axes")
    parser.add_argument("--block-size", type=int, default=None, help="MagicMosaic block size in pixels")
    parser.add_argument("--list-kernels", action="store_true", help="Print the available kernel names and exit")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default from PICTURE_EDITOR_LOG_LEVEL)")
    return parser


def main(argv: list[str] | None = None) -> int:
    detector = EdgeDetector()
    parser = build_parser(list(FILTERS))
    args = parser.parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level)

    if args.list_kernels:
        for name in detector.list_names():
            print(name)
        return 0

    if not args.input or not args.output:
        parser.error("input and output are required unless --list-kernels is given")
    if args.edges and len(args.edges) > 2:
        parser.error("--edges takes one or two kernel names")

    try:
        block_size = settings.mosaic_block_size if args.block_size is None else args.block_size
        filters = PixelFilters(block_size)
        session = EditingSession(image_io.load(args.input), detector=detector, filters=filters)

        for name in args.filters:
            session.apply_filter(name)
        if args.edges:
            kernel_x = args.edges[0]
            kernel_y = args.edges[1] if len(args.edges) == 2 else None
            session.apply_edge_detection(kernel_x, kernel_y, same_for_both_axes=kernel_y is None)

        image_io.save(session.current, args.output)
    except ValueError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
