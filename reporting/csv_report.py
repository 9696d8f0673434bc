"""
CSV report sink.

The file layout is fixed for downstream consumers: a header line, then one
line per row, each with a trailing empty column. Role and description sets
are rendered with ``;`` separators so no field needs CSV quoting.
"""

import logging
import os
from types import TracebackType
from typing import IO, Iterable, Optional, Type

from core.errors import SinkUnavailable
from extraction.models import ReportRow

logger = logging.getLogger(__name__)

REPORT_HEADER = "Class Name,Method Name,Description,Roles,\n"


class ReportSink:
    """Scoped writer for the security report.

    Use as a context manager; the file is flushed and closed on every exit
    path, including when writing fails partway.
    """

    def __init__(self, report_file: str, encoding: str = "utf-8"):
        self.report_file = report_file
        self.encoding = encoding
        self.rows_written = 0
        self._handle: Optional[IO[str]] = None

    def open(self) -> "ReportSink":
        """Create the report file and write the header.

        Raises:
            SinkUnavailable: If the file or its parent directory cannot be created.
        """
        try:
            parent = os.path.dirname(os.path.abspath(self.report_file))
            os.makedirs(parent, exist_ok=True)
            self._handle = open(self.report_file, "w", encoding=self.encoding, newline="\n")
        except OSError as e:
            logger.error(f"Cannot create report file {self.report_file}: {e}")
            raise SinkUnavailable(
                f"Cannot create output stream for {self.report_file}: {e}",
                path=self.report_file,
            ) from e

        try:
            self._handle.write(REPORT_HEADER)
        except OSError as e:
            self.close()
            raise SinkUnavailable(
                f"Cannot write report header to {self.report_file}: {e}",
                path=self.report_file,
            ) from e
        logger.debug(f"Opened report sink {self.report_file}")
        return self

    def write_row(self, row: ReportRow) -> None:
        if self._handle is None:
            raise RuntimeError("Report sink is not open")
        self._handle.write(row.to_line())
        self.rows_written += 1

    def write_rows(self, rows: Iterable[ReportRow]) -> int:
        """Write every row in order and return how many were written."""
        count = 0
        for row in rows:
            self.write_row(row)
            count += 1
        return count

    def close(self) -> None:
        if self._handle is None:
            return
        try:
            self._handle.flush()
        finally:
            self._handle.close()
            self._handle = None
            logger.debug(f"Closed report sink {self.report_file} ({self.rows_written} rows)")

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> "ReportSink":
        return self.open()

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.close()


def open_report_sink(report_file: str, encoding: str = "utf-8") -> ReportSink:
    """Return an unopened sink; enter it with ``with`` to create the file."""
    return ReportSink(report_file, encoding=encoding)
