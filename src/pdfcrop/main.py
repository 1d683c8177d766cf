"""
Command line entry point: crop every PDF page in a directory to 4:3 PNGs.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config, DEFAULT_CONFIG_FILE_PATH, RESAMPLING_KERNEL_NAMES
from .converter import process_files
from .page_selection import parse_page_argument
from .pdf_handler import find_pdfs

log = logging.getLogger(__name__)


def configure_logging() -> None:
    log_level = (
        logging.DEBUG
        if os.environ.get("PDFCROP_DEBUG", "").lower() == "true"
        else logging.INFO
    )
    log_file = os.environ.get("PDFCROP_LOG_FILE")
    if log_file:
        logging.basicConfig(
            level=log_level,
            filename=log_file,
            filemode="w",
            format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        logging.basicConfig(
            level=log_level,
            format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pdfcrop",
        description="Render PDF pages to 4:3 center-cropped PNGs, one directory per PDF",
    )
    ap.add_argument(
        "page", nargs="?", default=None, help="Only convert this 1-based page number"
    )
    ap.add_argument(
        "--directory", default=".", help="Directory to scan for PDFs (non-recursive)"
    )
    ap.add_argument(
        "--output-dir",
        default=None,
        help="Where per-PDF output directories are created (defaults to --directory)",
    )
    ap.add_argument("--dpi", type=int, default=None, help="Rendering resolution")
    ap.add_argument("--width", type=int, default=None, help="Output width in pixels")
    ap.add_argument("--height", type=int, default=None, help="Output height in pixels")
    ap.add_argument(
        "--no-resize",
        action="store_true",
        help="Keep the cropped resolution instead of resizing",
    )
    ap.add_argument(
        "--kernel", choices=RESAMPLING_KERNEL_NAMES, default=None, help="Resampling filter"
    )
    ap.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_FILE_PATH,
        help="JSON settings file to load before applying flags",
    )
    ap.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings to --config and exit",
    )
    return ap


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse the command line, letting a dash-prefixed page value reach the page parser."""
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        # argparse reads "-abc" as an unknown flag rather than the page argument
        if args.page is None and len(extra) == 1 and not extra[0].startswith("--"):
            args.page = extra[0]
        else:
            parser.error(f"unrecognized arguments: {' '.join(extra)}")
    return args


def apply_overrides(config: Config, args: argparse.Namespace) -> None:
    if args.dpi is not None:
        config.DPI = args.dpi
    if args.width is not None:
        config.TARGET_WIDTH = args.width
    if args.height is not None:
        config.TARGET_HEIGHT = args.height
    if args.no_resize:
        config.RESIZE = False
    if args.kernel is not None:
        config.RESAMPLING_KERNEL = args.kernel


def run(config: Config, requested_page: int, directory: Path, output_root: Path) -> int:
    """Convert all PDFs in directory. Returns the number of pages written."""
    pdf_files = find_pdfs(directory)
    if not pdf_files:
        print(f"No PDF files found in {directory}")
        return 0

    written = process_files(pdf_files, requested_page, config, output_root)
    log.info(f"Wrote {written} page image(s) from {len(pdf_files)} PDF(s)")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        config = Config()
        config.load(args.config)
        apply_overrides(config, args)
        config.validate()
    except (ValueError, OSError) as e:
        log.error(f"Invalid configuration: {e}")
        return 1

    if args.save_config:
        try:
            config.save(args.config)
        except OSError as e:
            log.error(f"Saving configuration to {args.config} failed: {e}")
            return 1
        log.info(f"Saved configuration to {args.config}")
        return 0

    requested_page = parse_page_argument(args.page)
    directory = Path(args.directory)
    output_root = Path(args.output_dir) if args.output_dir else directory

    try:
        run(config, requested_page, directory, output_root)
    except OSError as e:
        log.error(f"Finding PDFs in {directory} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
