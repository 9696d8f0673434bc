"""
Layer 1: Role extraction

Tree-sitter-based Java source parser and security annotation extractor.
Decides which roles may invoke which class or method of managed components.
"""

from extraction.models import (
    Annotation,
    AnnotationValue,
    DeclarationKind,
    MemberDeclaration,
    MemberKind,
    ReportRow,
    TypeDeclaration,
    ValueKind,
)
from extraction.parser import create_parser, parse_file, parse_bytes, count_error_nodes
from extraction.traversal import extract_declarations_from_tree
from extraction.annotations import extract_annotation_contents, render_role_set
from extraction.engine import extract_report_rows
from extraction.walker import (
    AuditStats,
    is_candidate_file,
    iter_candidate_files,
    iter_report_rows,
)

__all__ = [
    # Data models
    "Annotation",
    "AnnotationValue",
    "DeclarationKind",
    "MemberDeclaration",
    "MemberKind",
    "ReportRow",
    "TypeDeclaration",
    "ValueKind",
    "AuditStats",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    # Mid-level extraction
    "extract_declarations_from_tree",
    "extract_annotation_contents",
    "render_role_set",
    "extract_report_rows",
    # High-level orchestration
    "is_candidate_file",
    "iter_candidate_files",
    "iter_report_rows",
]
