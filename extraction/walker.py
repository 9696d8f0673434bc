"""
Source tree walker.

Recurses over source roots, selects candidate component source files,
parses each one and drives the role extraction engine over every top-level
type declaration. Rows are produced lazily; nothing here writes output.
"""

import logging
import os
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from core.errors import TraversalIOFailure
from extraction.config import (
    CLASS_MEMBER_NAME,
    JAVA_EXTENSION,
    DEFAULT_FILE_NAME_MARKERS,
    DEFAULT_STRICT_SYNTAX,
)
from extraction.engine import extract_report_rows
from extraction.models import ReportRow, TypeDeclaration
from extraction.parser import parse_file
from extraction.traversal import extract_declarations_from_tree

logger = logging.getLogger(__name__)


class AuditStats:
    """Statistics for an audit run."""

    def __init__(self):
        self.files_scanned = 0
        self.types_inspected = 0
        self.class_rows = 0
        self.method_rows = 0

    @property
    def rows_emitted(self) -> int:
        return self.class_rows + self.method_rows

    def record_row(self, row: ReportRow) -> None:
        if row.member_name == CLASS_MEMBER_NAME:
            self.class_rows += 1
        else:
            self.method_rows += 1

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_scanned": self.files_scanned,
            "types_inspected": self.types_inspected,
            "rows_emitted": self.rows_emitted,
            "class_rows": self.class_rows,
            "method_rows": self.method_rows,
        }

    def __str__(self) -> str:
        return (
            f"AuditStats(files={self.files_scanned}, types={self.types_inspected}, "
            f"rows={self.rows_emitted}, class_rows={self.class_rows}, "
            f"method_rows={self.method_rows})"
        )


def is_candidate_file(file_name: str, markers: Sequence[str] = DEFAULT_FILE_NAME_MARKERS) -> bool:
    """Check whether a file name denotes a component source unit.

    A candidate is a ``.java`` file whose name contains one of ``markers``.
    An empty marker list accepts every ``.java`` file.
    """
    if not file_name.endswith(JAVA_EXTENSION):
        return False
    if not markers:
        return True
    return any(marker in file_name for marker in markers)


def _list_directory(directory: str) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except OSError as e:
        raise TraversalIOFailure(f"Cannot list directory {directory}: {e}", path=directory) from e


def iter_candidate_files(
    path: str,
    markers: Sequence[str] = DEFAULT_FILE_NAME_MARKERS,
) -> Iterator[str]:
    """Yield candidate source files below ``path`` depth-first, siblings sorted by name.

    A ``path`` that is itself a file is yielded as-is, without filtering.

    Raises:
        TraversalIOFailure: If ``path`` does not exist or a directory cannot be listed.
    """
    if os.path.isdir(path):
        for entry in _list_directory(path):
            try:
                is_dir = entry.is_dir()
            except OSError as e:
                raise TraversalIOFailure(f"Cannot stat {entry.path}: {e}", path=entry.path) from e
            if is_dir:
                yield from iter_candidate_files(entry.path, markers)
            elif is_candidate_file(entry.name, markers):
                yield entry.path
    elif os.path.isfile(path):
        yield path
    else:
        raise TraversalIOFailure(f"Source path not found: {path}", path=path)


def parse_declarations(
    file_path: str,
    strict_syntax: bool = DEFAULT_STRICT_SYNTAX,
) -> List[TypeDeclaration]:
    """Parse one source file and return its top-level type declarations."""
    tree, _ = parse_file(file_path, strict=strict_syntax)
    return extract_declarations_from_tree(tree, file_path)


def iter_report_rows(
    source_roots: Iterable[str],
    markers: Sequence[str] = DEFAULT_FILE_NAME_MARKERS,
    strict_syntax: bool = DEFAULT_STRICT_SYNTAX,
    stats: Optional[AuditStats] = None,
) -> Iterator[ReportRow]:
    """Yield report rows for every candidate file under the source roots.

    Rows come out in root, then file, then declaration order. The sequence is
    lazy; calling this again walks the tree afresh.

    Args:
        source_roots: Directories (or single files) to scan.
        markers: File name substrings selecting candidate files.
        strict_syntax: Whether syntax errors abort the run.
        stats: Optional AuditStats updated as the walk progresses.

    Raises:
        TraversalIOFailure: If a directory or file cannot be read.
        SyntaxFailure: If a file cannot be parsed.
    """
    if stats is None:
        stats = AuditStats()

    for root in source_roots:
        logger.info(f"Scanning source root {os.path.abspath(root)}")
        for file_path in iter_candidate_files(root, markers):
            declarations = parse_declarations(file_path, strict_syntax)
            stats.files_scanned += 1
            emitted = 0
            for declaration in declarations:
                stats.types_inspected += 1
                for row in extract_report_rows(declaration):
                    stats.record_row(row)
                    emitted += 1
                    yield row
            logger.info(f"Scanned {file_path}: {len(declarations)} types, {emitted} rows")
