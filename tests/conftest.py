"""Shared pytest fixtures."""

import re
from pathlib import Path
from typing import Callable, List

import pymupdf
import pytest

from reqcsv.prj_exception import TextExtractionError

SAMPLE_TEXT = "1.1 Intro\n1.1.1 The system shall boot.\n1.2 Next"


class FakeExtractor:
    """In-memory stand-in for PdfTextExtractor; pages listed in `failing` raise."""

    def __init__(self, pages: List[str], failing=()):
        self.pages = pages
        self.failing = set(failing)
        self.requested: List[int] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_page_text(self, page_number: int) -> str:
        self.requested.append(page_number)
        if page_number in self.failing:
            raise TextExtractionError(f"Error extracting text from page {page_number}")
        return self.pages[page_number - 1]


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def chapter_pattern() -> re.Pattern:
    return re.compile(r"(\d+\.\d+)")


@pytest.fixture
def requirement_pattern() -> re.Pattern:
    return re.compile(r"(\d+\.\d+\.\d+)")


@pytest.fixture
def fake_extractor() -> Callable[..., FakeExtractor]:
    return FakeExtractor


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a real PDF with one text block per page."""

    def _make(pages: List[str], name: str = "spec.pdf") -> Path:
        doc = pymupdf.open()
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        path = tmp_path / name
        doc.save(str(path))
        doc.close()
        return path

    return _make


@pytest.fixture(autouse=True)
def reset_project_logger():
    """Drop handlers the CLI attaches so they do not outlive captured streams."""
    yield
    import logging

    from reqcsv import BASE_LOGGERNAME

    project_logger = logging.getLogger(BASE_LOGGERNAME)
    for handler in list(project_logger.handlers):
        project_logger.removeHandler(handler)
        handler.close()
    project_logger.setLevel(logging.NOTSET)
