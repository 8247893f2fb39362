"""Tests for PyMuPDF-backed page text extraction."""

from pathlib import Path

import pymupdf
import pytest

from reqcsv.prj_exception import DocumentLoadError, TextExtractionError
from reqcsv.preprocess.text_extractor import PdfTextExtractor


class TestOpen:

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DocumentLoadError, match="does not exist"):
            PdfTextExtractor.open(tmp_path / "nonexistent.pdf")

    def test_not_a_pdf(self, tmp_path: Path):
        bogus = tmp_path / "bogus.pdf"
        bogus.write_bytes(b"")
        with pytest.raises(DocumentLoadError):
            PdfTextExtractor.open(bogus)

    def test_encrypted_pdf(self, tmp_path: Path):
        doc = pymupdf.open()
        doc.new_page().insert_text((72, 72), "1.1.1 Restricted.")
        locked = tmp_path / "locked.pdf"
        doc.save(str(locked), encryption=pymupdf.PDF_ENCRYPT_AES_256, user_pw="reader", owner_pw="owner")
        doc.close()

        with pytest.raises(DocumentLoadError, match="encrypted"):
            PdfTextExtractor.open(locked)

    def test_page_count(self, make_pdf):
        path = make_pdf(["one", "two", "three"])
        with PdfTextExtractor.open(path) as extractor:
            assert extractor.page_count == 3


class TestGetPageText:

    def test_text_in_reading_order(self, make_pdf, sample_text):
        path = make_pdf([sample_text])
        with PdfTextExtractor.open(path) as extractor:
            text = extractor.get_page_text(1)
        assert text.index("1.1 Intro") < text.index("1.1.1 The system shall boot.") < text.index("1.2 Next")

    def test_pages_are_one_based(self, make_pdf):
        path = make_pdf(["first page", "second page"])
        with PdfTextExtractor.open(path) as extractor:
            assert "second page" in extractor.get_page_text(2)

    def test_blank_page(self, make_pdf):
        path = make_pdf([""])
        with PdfTextExtractor.open(path) as extractor:
            assert extractor.get_page_text(1).strip() == ""

    def test_out_of_range_page(self, make_pdf):
        path = make_pdf(["only page"])
        with PdfTextExtractor.open(path) as extractor:
            with pytest.raises(TextExtractionError, match="page 5"):
                extractor.get_page_text(5)

    def test_closed_on_exit(self, make_pdf):
        path = make_pdf(["x"])
        with PdfTextExtractor.open(path) as extractor:
            pass
        with pytest.raises(TextExtractionError):
            extractor.get_page_text(1)
