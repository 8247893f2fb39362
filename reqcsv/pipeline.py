import logging
from typing import List, Optional, Pattern

from pydantic import BaseModel, Field
from tqdm import tqdm

from reqcsv import BASE_LOGGERNAME
from reqcsv.prj_exception import TextExtractionError, exception_logger
from reqcsv.prj_logger import get_logs
from reqcsv.preprocess.normalize import TextPreprocessor
from reqcsv.preprocess.records import (
    extract_records,
    extract_requirement_numbers,
    extract_scoped_records,
)
from reqcsv.preprocess.text_extractor import TextExtractor
from reqcsv.settings import MODE_CROSS, MODE_REDUCED, MODE_SCOPED
from reqcsv.writer import RecordWriter

LOGGER_NAME = f"{BASE_LOGGERNAME}.pipeline"

logger = logging.getLogger(LOGGER_NAME)


class ExtractionReport(BaseModel):
    """Summary of one conversion run."""
    total_pages: int = 0
    pages_processed: int = 0
    pages_skipped: List[int] = Field(default_factory=list)
    records_written: int = 0
    rows_failed: int = 0


def get_page_range(page_count: int, start_page: int = 1, end_page: int = -1) -> range:
    """
    Return the 1-based page numbers to process.

    `end_page` of -1 means the last page; both ends are clamped to the
    document, and start > end yields an empty range.
    """
    if end_page == -1 or end_page > page_count:
        end_page = page_count
    start_page = max(start_page, 1)
    return range(start_page, end_page + 1)


def extract_page_rows(
    text: str,
    chapter_pattern: Pattern,
    requirement_pattern: Pattern,
    mode: str = MODE_CROSS,
    ) -> List[List[str]]:
    """Turn one page of text into CSV rows according to `mode`."""
    if mode == MODE_REDUCED:
        return [[number] for number in extract_requirement_numbers(text, requirement_pattern)]
    if mode == MODE_SCOPED:
        records = extract_scoped_records(text, chapter_pattern, requirement_pattern)
    elif mode == MODE_CROSS:
        records = extract_records(text, chapter_pattern, requirement_pattern)
    else:
        raise ValueError(f"Unknown extraction mode: {mode!r}")
    return [record.as_row() for record in records]


@get_logs(LOGGER_NAME)
def process_document(
    extractor: TextExtractor,
    writer: RecordWriter,
    chapter_pattern: Pattern,
    requirement_pattern: Pattern,
    *,
    start_page: int = 1,
    end_page: int = -1,
    mode: str = MODE_CROSS,
    preprocessor: Optional[TextPreprocessor] = None,
    show_progress: bool = False,
    ) -> ExtractionReport:
    """
    Extract records page by page and stream them into `writer`.

    A page whose text cannot be extracted is logged and skipped; a row that
    cannot be written is logged and skipped. Neither stops the run.

    Args:
        extractor: Source of page text (see `TextExtractor`).
        writer: Destination for rows; its header must already be written.
        chapter_pattern: Compiled chapter pattern.
        requirement_pattern: Compiled requirement pattern.
        start_page: First page to process (1-based).
        end_page: Last page to process, -1 for the last page of the document.
        mode: One of "cross", "scoped" or "reduced".
        preprocessor: Optional cleanup applied to each page before matching.
        show_progress: Show a tqdm progress bar on stderr.

    Returns:
        An `ExtractionReport` for the run.
    """
    get_page_text = exception_logger(LOGGER_NAME, (TextExtractionError,))(extractor.get_page_text)
    report = ExtractionReport(total_pages=extractor.page_count)
    pages = get_page_range(extractor.page_count, start_page, end_page)

    for page_number in tqdm(pages, desc="Pages", unit="page", disable=not show_progress):
        text = get_page_text(page_number)
        if text is None:
            report.pages_skipped.append(page_number)
            continue
        if preprocessor is not None:
            text = preprocessor.clean_text(text)

        rows = extract_page_rows(text, chapter_pattern, requirement_pattern, mode)
        logger.debug(f"Page {page_number}: {len(rows)} record(s)")
        for row in rows:
            if writer.write_row(row):
                report.records_written += 1
            else:
                report.rows_failed += 1
        report.pages_processed += 1

    return report
