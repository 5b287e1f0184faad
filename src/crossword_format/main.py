"""
Command-line entry point for checking crossword files.

Usage:
    crossword-format puzzle.txt
    python -m crossword_format.main puzzle.txt --config config.yaml --json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import RunConfig, load_config
from .exceptions import CrosswordFormatError
from .pipeline import parse
from .report import format_report
from .utils import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse and validate a crossword text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  log_level: INFO
  max_errors: 5
  output: json
        """
    )
    parser.add_argument(
        "puzzle",
        help="Path to the crossword text file"
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full parse result as JSON"
    )
    parser.add_argument(
        "--max-errors",
        type=int,
        help="Maximum number of errors to print in the text report"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log pipeline progress to stderr"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else RunConfig()
    except CrosswordFormatError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    configure_logging(logging.DEBUG if args.verbose else config.logging_level)

    path = Path(args.puzzle)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {args.puzzle}: {e}", file=sys.stderr)
        return 1

    logger.debug("read %d characters from %s", len(text), path)
    result = parse(text)

    if args.json or config.output == "json":
        print(result.model_dump_json(indent=2))
    else:
        max_errors = args.max_errors if args.max_errors is not None else config.max_errors
        print(format_report(result, max_errors=max_errors))

    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
