import sys
import time
import logging
from functools import wraps

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(name)s - %(levelname)s - %(message)s'


def get_logs(loggername):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(loggername)
            start_time = time.perf_counter()
            logger.debug(f"Entering: {func.__name__}")
            output = func(*args, **kwargs)
            logger.debug(f"Exiting: {func.__name__}")
            end_time = time.perf_counter()
            elapsed_time = end_time - start_time
            logger.debug(f"{func.__name__} completed in {elapsed_time:.6f} seconds")
            return output
        return wrapper
    return decorator


class ProjectLogger:
    def __init__(self, name, log_file=None, level=logging.INFO):
        self._name = name
        self._log_file = log_file
        self._level = level
        self._logger = logging.getLogger(self._name)
        self._logger.setLevel(self._level)

    @property
    def name(self):
        return self._name

    @property
    def log_file(self):
        return self._log_file

    def config(self):
        # calling config() twice must not duplicate output
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        # diagnostics go to stderr so stdout only carries the final confirmation
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self._level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self._logger.addHandler(console_handler)

        if self._log_file:
            file_handler = logging.FileHandler(self._log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            self._logger.addHandler(file_handler)
        return self

    def get_logger(self):
        return self._logger
