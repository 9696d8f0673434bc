"""
Audit driver.

Opens the report sink before any traversal, streams rows from the source
tree walker into it, and returns the run statistics. This is the only
place where report output happens.
"""

import logging
import os
from typing import Iterable, Sequence

from core.errors import AuditError
from extraction.config import DEFAULT_FILE_NAME_MARKERS, DEFAULT_STRICT_SYNTAX
from extraction.walker import AuditStats, iter_report_rows
from reporting.csv_report import open_report_sink

logger = logging.getLogger(__name__)


def generate_report(
    report_file: str,
    source_roots: Iterable[str],
    markers: Sequence[str] = DEFAULT_FILE_NAME_MARKERS,
    strict_syntax: bool = DEFAULT_STRICT_SYNTAX,
    base_package: str = "",
) -> AuditStats:
    """Scan the source roots and write the security report.

    Args:
        report_file: Destination CSV path.
        source_roots: Directories to scan.
        markers: File name substrings selecting candidate files.
        strict_syntax: Whether syntax errors abort the run.
        base_package: Informational only; logged with the run.

    Returns:
        AuditStats for the completed run.

    Raises:
        SinkUnavailable: If the report file cannot be created.
        TraversalIOFailure: If a directory or file cannot be read.
        SyntaxFailure: If a source file cannot be parsed.

    The report file is closed before any failure propagates; a file left
    behind by a failed run is incomplete and must not be used.
    """
    source_roots = list(source_roots)
    stats = AuditStats()

    logger.info(f"Report file      : {os.path.abspath(report_file)}")
    logger.info(f"Source roots     : {', '.join(source_roots)}")
    if base_package:
        logger.info(f"Base package     : {base_package}")

    with open_report_sink(report_file) as sink:
        try:
            sink.write_rows(
                iter_report_rows(
                    source_roots,
                    markers=markers,
                    strict_syntax=strict_syntax,
                    stats=stats,
                )
            )
        except AuditError as e:
            logger.error(f"Audit aborted after {sink.rows_written} rows: {e}")
            raise

    logger.info(f"Audit complete: {stats}")
    return stats
