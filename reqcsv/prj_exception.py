'''
Define custom exception handling
'''

import logging
import traceback
from functools import wraps
from pathlib import Path


def exception_logger(loggername, exceptions=(Exception,)):
    """Log any of `exceptions` raised by the wrapped callable and return None instead."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                logger = logging.getLogger(loggername)
                logger.error(str(e))
                return None
        return wrapper
    return decorator


def get_error_message(error, type, tb):
    error_message = f"{type}:{error} occurred in {tb.name} (line {tb.lineno}) of {Path(tb.filename).name}"
    return error_message


class ReqCsvError(Exception):
    """Base error. When `error` is given its origin is appended to the message."""

    def __init__(self, message, error=None):
        super().__init__(message)
        self.error = error
        self.error_message = str(message)
        if error is not None:
            self.error_type = type(error).__name__
            frames = traceback.extract_tb(error.__traceback__)
            if frames:
                self.error_message = f"{message}: {get_error_message(error, self.error_type, frames[-1])}"
            else:
                self.error_message = f"{message}: {self.error_type}:{error}"
        else:
            self.error_type = type(self).__name__

    def __str__(self):
        return self.error_message


class DocumentLoadError(ReqCsvError):
    """The input PDF is missing, unreadable or cannot be parsed."""


class TextExtractionError(ReqCsvError):
    """Text could not be extracted from a single page."""


class OutputError(ReqCsvError):
    """The output CSV cannot be created or its header cannot be written."""


class SettingsError(ReqCsvError):
    """Invalid configuration file, flag value or regular expression."""
