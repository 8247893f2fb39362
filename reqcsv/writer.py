import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Sequence, Union

from reqcsv import BASE_LOGGERNAME
from reqcsv.prj_exception import OutputError


@contextmanager
def open_output(path: Union[str, Path]) -> Iterator[IO[str]]:
    """
    Create the output CSV file and close it on exit.

    Raises:
        OutputError: If the file (or its parent directory) cannot be created,
            or buffered rows cannot be flushed when it is closed.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        sink = open(path, "w", newline="", encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Error creating CSV file {path}", e) from e
    try:
        yield sink
    finally:
        try:
            sink.close()
        except OSError as e:
            raise OutputError(f"Error flushing CSV file {path}", e) from e


class RecordWriter:
    """
    Append-only CSV sink: one header row, then one row per record.

    A row that cannot be written is logged and skipped.
    """

    LOGGER_NAME = f"{BASE_LOGGERNAME}.RecordWriter"

    def __init__(self, sink: IO[str], header: Sequence[str], expected_columns: int = 3) -> None:
        self._writer = csv.writer(sink)
        self.header = list(header)
        self.expected_columns = expected_columns
        self.rows_written = 0
        self.rows_failed = 0
        self._logger = logging.getLogger(self.LOGGER_NAME)

    def write_header(self) -> None:
        """
        Write the header row.

        Raises:
            OutputError: If the header cannot be written.
        """
        if len(self.header) != self.expected_columns:
            self._logger.warning(
                f"Header has {len(self.header)} column(s) but records have {self.expected_columns}: {self.header}"
            )
        try:
            self._writer.writerow(self.header)
        except (csv.Error, OSError, UnicodeError) as e:
            raise OutputError("Error writing CSV header", e) from e

    def write_row(self, row: Sequence[str]) -> bool:
        """Write one data row. Returns False if the row was skipped."""
        try:
            self._writer.writerow(row)
        except (csv.Error, OSError, UnicodeError) as e:
            self.rows_failed += 1
            self._logger.error(f"Error writing record to CSV: {e}")
            return False
        self.rows_written += 1
        return True
