"""
Markdown Reading Timeline

This module serves as the entry point for the mdtimeline command-line tool.
It estimates how long a reader takes to reach each section of a Markdown
file and prints the header outline annotated with reading-time windows.

Usage:
    mdtimeline README.md
    mdtimeline notes.md --wpm 250 --format range
    mdtimeline notes.md --save-csv notes
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from mdtimeline.config import DisplayFormat, reload_settings
from mdtimeline.host.buffer import BufferHost, MarkdownBuffer
from mdtimeline.runtime.pipeline import Timeline
from mdtimeline.utils.logger import configure_logging, get_logger
from mdtimeline.utils.timeline_utils import print_timeline, save_timeline_to_csv

logger: logging.Logger = get_logger("mdtimeline")


def _build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="mdtimeline",
        description="Estimate reading time for each section of a Markdown file",
    )
    parser.add_argument(
        "file",
        type=str,
        help="Path to the Markdown file",
    )
    parser.add_argument(
        "--wpm",
        type=float,
        default=None,
        help="Reading speed in words per minute (default: 200 or MDTIMELINE_WORDS_PER_MINUTE)",
    )
    parser.add_argument(
        "--format",
        dest="display_format",
        choices=tuple(item.value for item in DisplayFormat),
        default=None,
        help=(
            "Annotation format: 'full' [00:00:00 - 00:01:30 @ 01:30], "
            "'range' [00:00:00 - 00:01:30], or 'short' [00:00:00]"
        ),
    )
    parser.add_argument(
        "--save-csv",
        type=str,
        default=None,
        help="Export the timeline to this CSV file",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides LOG_LEVEL)",
    )
    return parser


def main() -> None:
    """
    Main function to handle the command line interface logic.
    """
    load_dotenv()
    args: argparse.Namespace = _build_parser().parse_args()
    configure_logging(args.log_level)
    settings = reload_settings()

    file_path = Path(args.file)
    if not file_path.is_file():
        logger.error("Markdown file not found: %s", file_path)
        sys.exit(1)
    try:
        document = MarkdownBuffer.from_path(file_path)
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Unable to read %s: %s", file_path, err)
        sys.exit(1)

    host = BufferHost()
    timeline = Timeline(host, document, config=settings.estimator())
    timeline.configure(
        words_per_minute=args.wpm,
        display_format=args.display_format,
        enabled=True,
    )
    if not host.is_supported(document):
        logger.info("Treating %s as Markdown.", file_path)
        document.filetype = "markdown"

    entries = timeline.recompute()
    print_timeline(entries, use_color=not args.no_color)

    if args.save_csv:
        if not entries:
            logger.warning("Timeline did not produce any entries to export.")
        else:
            saved_path = save_timeline_to_csv(entries, args.save_csv)
            logger.info("Timeline exported to %s", saved_path)

    sys.exit(0)


if __name__ == "__main__":
    main()
