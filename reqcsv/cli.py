"""
Command line entry point.

Usage:
    reqcsv --pdf-path spec.pdf --output-path requirements.csv
    reqcsv --pdf-path spec.pdf --scoped --start-page 12 --end-page 40
    reqcsv --pdf-path spec.pdf --reduced --header Requirement
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from reqcsv import BASE_LOGGERNAME, __version__
from reqcsv import utils
from reqcsv.pipeline import process_document
from reqcsv.prj_exception import ReqCsvError
from reqcsv.prj_logger import ProjectLogger
from reqcsv.preprocess.normalize import build_preprocessor
from reqcsv.preprocess.text_extractor import PdfTextExtractor
from reqcsv.settings import (
    DEFAULT_CHAPTER_REGEX,
    DEFAULT_HEADER,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PDF_PATH,
    DEFAULT_REQUIREMENT_REGEX,
    ExtractionSettings,
)
from reqcsv.writer import RecordWriter, open_output

DEFAULT_CONFIG_FILE = "config.yaml"
SUCCESS_MESSAGE = "CSV file created successfully."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqcsv",
        description="Extract chapter, requirement and description records from a specification PDF into CSV.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Settings are resolved as: built-in defaults < config file < command line flags.
        """,
    )
    parser.add_argument("--pdf-path", type=Path, default=None, help=f"Path to the PDF file (default: {DEFAULT_PDF_PATH})")
    parser.add_argument("--output-path", type=Path, default=None, help=f"Path to the output CSV file (default: {DEFAULT_OUTPUT_PATH})")
    parser.add_argument("--chapter-regex", default=None, help=f"Regex pattern for chapters (default: {DEFAULT_CHAPTER_REGEX})")
    parser.add_argument("--requirement-regex", default=None, help=f"Regex pattern for requirements (default: {DEFAULT_REQUIREMENT_REGEX})")
    parser.add_argument("--header", default=None, help=f"Comma-separated CSV header (default: {DEFAULT_HEADER})")
    parser.add_argument("--config", type=Path, default=None, help=f"YAML config file (default: {DEFAULT_CONFIG_FILE} if present)")
    parser.add_argument("--start-page", type=int, default=None, help="First page to process, 1-based (default: 1)")
    parser.add_argument("--end-page", type=int, default=None, help="Last page to process, -1 for the last page (default: -1)")
    parser.add_argument("--scoped", action="store_true", default=None,
                        help="Attach requirements to the chapter that contains them instead of pairing every chapter with every requirement")
    parser.add_argument("--reduced", action="store_true", default=None,
                        help="Write a single requirement-number column")
    parser.add_argument("--no-progress", dest="show_progress", action="store_false", default=None,
                        help="Disable the page progress bar")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a DEBUG log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed logs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = ProjectLogger(
        BASE_LOGGERNAME,
        args.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    ).config().get_logger()

    overrides = {
        "pdf_path": args.pdf_path,
        "output_path": args.output_path,
        "chapter_regex": args.chapter_regex,
        "requirement_regex": args.requirement_regex,
        "header": args.header,
        "start_page": args.start_page,
        "end_page": args.end_page,
        "scoped": args.scoped,
        "reduced": args.reduced,
        "show_progress": args.show_progress,
    }

    try:
        if args.config is not None:
            config = utils.load_config(args.config, required=True)
        else:
            config = utils.load_config(DEFAULT_CONFIG_FILE)
        settings = ExtractionSettings.from_sources(config, overrides)
        chapter_pattern, requirement_pattern = settings.compile_patterns()
        logger.debug(f"Settings: {settings.model_dump()}")

        with PdfTextExtractor.open(settings.pdf_path) as extractor:
            with open_output(settings.output_path) as sink:
                writer = RecordWriter(sink, settings.header, expected_columns=settings.column_count)
                writer.write_header()
                report = process_document(
                    extractor,
                    writer,
                    chapter_pattern,
                    requirement_pattern,
                    start_page=settings.start_page,
                    end_page=settings.end_page,
                    mode=settings.mode,
                    preprocessor=build_preprocessor(settings.replace_tokens, settings.replace_with),
                    show_progress=settings.show_progress,
                )
    except ReqCsvError as e:
        logger.critical(str(e))
        return 1

    logger.info(
        f"Processed {report.pages_processed}/{report.total_pages} page(s), "
        f"wrote {report.records_written} record(s) to {settings.output_path}"
    )
    if report.pages_skipped:
        logger.warning(f"Skipped page(s): {report.pages_skipped}")
    if report.rows_failed:
        logger.warning(f"{report.rows_failed} row(s) could not be written")

    print(SUCCESS_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
