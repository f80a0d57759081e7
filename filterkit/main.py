"""
filterkit — Main Entry Point

Applies grayscale, invert and box blur to one image concurrently and writes
each result to its own file.
"""

import argparse
import logging
import sys
from typing import List, Optional

from filterkit.core import ConfigError, DecodeError
from filterkit.oiio import OiioAdapter
from filterkit.services import RunCoordinator, Settings

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_FILTER_FAILED = 3

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filterkit",
        description="Apply grayscale, invert and blur filters to an image in parallel.",
    )
    parser.add_argument("input", nargs="?", default=None,
                        help="Input image (default: input.jpg, or input_path from the settings file)")
    parser.add_argument("-o", "--output-dir", default=None,
                        help="Directory for output_gray.jpg, output_invert.jpg and output_blur.jpg")
    parser.add_argument("-q", "--quality", type=int, default=None,
                        help="JPEG output quality, 1-100 (default: 100)")
    parser.add_argument("--cadence", type=float, default=None,
                        help="Progress update interval as a fraction of image height (default: 0.02)")
    parser.add_argument("--sequential", action="store_true",
                        help="Run filters one after another instead of concurrently")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 3 if any filter fails")
    parser.add_argument("--config", default=None,
                        help="Settings file (default: ./filterkit.ini if present)")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Diagnostic log level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the filters once. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = Settings(args.config)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level or settings.get_log_level(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("OpenImageIO version: %s", OiioAdapter.get_oiio_version())

    config = settings.to_run_config(
        input_path=args.input,
        output_dir=args.output_dir,
        quality=args.quality,
        progress_cadence=args.cadence,
        parallel=False if args.sequential else None,
        strict=True if args.strict else None,
    )

    try:
        summary = RunCoordinator(config).run()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except DecodeError as e:
        print(f"Error: could not load {config.input_path}: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    if config.strict and not summary.all_succeeded:
        return EXIT_FILTER_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
