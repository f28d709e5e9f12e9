"""CLI interface for report generation.

This module provides a command-line interface that renders a JSON (or YAML)
document, local or remote, into a PDF report using ReportGenerator.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .core.fetcher import HttpFetcher
from .core.generator import ReportGenerator
from .schemas.config import FONT_TYPES, ORIENTATIONS, PAGE_FORMATS, FetchConfig, PDFOptions

LOG_FORMAT = "%(asctime)s | %(name)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(log_level: str, log_file: Optional[Path] = None) -> None:
    """Setup logging: console + optional file handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file (UTF-8). If None, console only.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stdout,
    )
    logging.getLogger().setLevel(level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logging.getLogger().addHandler(fh)


def validate_source(source: str) -> None:
    """Validate the SOURCE argument.

    URLs are accepted as-is; anything else must be an existing file.

    Raises:
        SystemExit: If validation fails
    """
    if source.startswith(("http://", "https://")):
        return

    path = Path(source)
    if not path.exists():
        print(f"Error: Source file not found: {path}", file=sys.stderr)
        sys.exit(1)

    if not path.is_file():
        print(f"Error: Path is not a file: {path}", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a JSON document as a paginated PDF report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  json-pdf-report data.json
  json-pdf-report https://example.com/report.json --format letter
  json-pdf-report data.yaml --orientation landscape --no-page-numbers -o ./out

Reserved document keys:
  header   {"text", "align", "fontSize", "color"}  banner on every page
  footer   same shape; omit it to draw no footer
        """,
    )

    parser.add_argument(
        "source",
        type=str,
        help="URL returning JSON, or path to a .json/.yaml file",
    )

    parser.add_argument(
        "--format", "-f",
        choices=PAGE_FORMATS,
        default="a4",
        help="Page format (default: a4)",
    )

    parser.add_argument(
        "--orientation",
        choices=ORIENTATIONS,
        default="portrait",
        help="Page orientation (default: portrait)",
    )

    parser.add_argument(
        "--font-type",
        choices=FONT_TYPES,
        default="times",
        help="Font family (default: times)",
    )

    parser.add_argument(
        "--font-size",
        type=float,
        default=14,
        help="Body font size in points (default: 14)",
    )

    parser.add_argument(
        "--no-page-numbers",
        action="store_true",
        help="Do not stamp 'Page i of N' on pages",
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=None,
        help="Directory for the report (default: current directory)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: $JSON_PDF_FETCH_TIMEOUT or 30)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the log to this file",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        0 on success, 1 on error
    """
    args = build_parser().parse_args(argv)

    try:
        load_dotenv()
        validate_source(args.source)
        setup_logging(args.log_level, args.log_file)
        logger = logging.getLogger(__name__)

        options = PDFOptions(
            format=args.format,
            orientation=args.orientation,
            font_type=args.font_type,
            font_size=args.font_size,
            page_numbering=not args.no_page_numbers,
            output_dir=args.output_dir,
        )
        logger.info(f"Processing: {args.source}")
        with HttpFetcher(FetchConfig(timeout_sec=args.timeout)) as fetcher:
            result = ReportGenerator(args.source, options, fetcher).generate()

        print()
        print("=" * 60)
        print("Report generated successfully!")
        print("=" * 60)
        print(f"Output:       {result.path}")
        print(f"Pages:        {result.page_count}")
        print(f"Diagnostics:  {len(result.diagnostics)}")
        for diagnostic in result.diagnostics:
            print(f"  - [{diagnostic.kind}] {diagnostic.url or ''} {diagnostic.message}")
        print("=" * 60)

        return 0

    except KeyboardInterrupt:
        print("\nProcessing interrupted by user", file=sys.stderr)
        return 1

    except Exception as e:
        logging.getLogger(__name__).exception(f"Error during processing: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
