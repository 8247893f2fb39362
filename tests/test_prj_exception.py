"""Tests for the error types and the logging decorator."""

import logging

from reqcsv.prj_exception import (
    DocumentLoadError,
    ReqCsvError,
    TextExtractionError,
    exception_logger,
)


def _boom():
    raise KeyError("missing")


class TestReqCsvError:

    def test_plain_message(self):
        error = DocumentLoadError("Error opening PDF file")
        assert str(error) == "Error opening PDF file"
        assert isinstance(error, ReqCsvError)

    def test_wrapped_error_reports_origin(self):
        try:
            _boom()
        except KeyError as e:
            error = TextExtractionError("Error extracting text from page 3", e)
        assert str(error).startswith("Error extracting text from page 3: KeyError:")
        assert "_boom" in str(error)
        assert "test_prj_exception.py" in str(error)
        assert error.error_type == "KeyError"


class TestExceptionLogger:

    def test_logs_and_returns_none(self, caplog):
        @exception_logger("reqcsv.test", (TextExtractionError,))
        def fails():
            raise TextExtractionError("page 2 is corrupt")

        with caplog.at_level(logging.ERROR):
            assert fails() is None
        assert "page 2 is corrupt" in caplog.text

    def test_other_exceptions_propagate(self):
        @exception_logger("reqcsv.test", (TextExtractionError,))
        def fails():
            raise RuntimeError("not ours")

        try:
            fails()
        except RuntimeError as e:
            assert str(e) == "not ours"
        else:
            raise AssertionError("RuntimeError was swallowed")

    def test_passes_return_value(self):
        @exception_logger("reqcsv.test")
        def ok(x):
            return x * 2

        assert ok(21) == 42
