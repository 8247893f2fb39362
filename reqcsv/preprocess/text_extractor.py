import logging
from pathlib import Path
from typing import Protocol, Union

import pymupdf

from reqcsv import BASE_LOGGERNAME
from reqcsv.prj_exception import DocumentLoadError, TextExtractionError


class TextExtractor(Protocol):
    """Anything that can report a page count and return the text of a 1-based page."""

    @property
    def page_count(self) -> int:
        ...

    def get_page_text(self, page_number: int) -> str:
        ...


class PdfTextExtractor:
    """
    Page-by-page plain text extraction backed by PyMuPDF.

    Use `PdfTextExtractor.open(path)` as a context manager so the document is
    closed on every exit path.
    """

    LOGGER_NAME = f"{BASE_LOGGERNAME}.PdfTextExtractor"

    def __init__(self, doc: pymupdf.Document, fp: Path) -> None:
        self._doc = doc
        self.fp = fp
        self._logger = logging.getLogger(self.LOGGER_NAME)

    @classmethod
    def open(cls, fp: Union[str, Path]) -> "PdfTextExtractor":
        """
        Load a PDF file.

        Args:
            fp: Path to the PDF file.

        Returns:
            An extractor over the loaded document.

        Raises:
            DocumentLoadError: If the file is missing, unreadable, not a PDF or
                password protected.
        """
        fp = Path(fp)
        if not fp.is_file():
            raise DocumentLoadError(f"Error opening PDF file: {fp} does not exist")
        try:
            doc = pymupdf.open(str(fp), filetype="pdf")
        except Exception as e:
            raise DocumentLoadError(f"Error loading PDF {fp}", e) from e
        if doc.needs_pass:
            doc.close()
            raise DocumentLoadError(f"Error loading PDF {fp}: document is encrypted")

        extractor = cls(doc, fp)
        extractor._logger.info(f"Loaded {fp.name} ({extractor.page_count} pages)")
        return extractor

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def get_page_text(self, page_number: int) -> str:
        """
        Return the text of one page in reading order.

        Args:
            page_number: 1-based page number.

        Raises:
            TextExtractionError: If the page cannot be loaded or decoded.
        """
        try:
            page = self._doc.load_page(page_number - 1)
            return page.get_text("text")
        except Exception as e:
            raise TextExtractionError(f"Error extracting text from page {page_number}", e) from e

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()

    def __enter__(self) -> "PdfTextExtractor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
