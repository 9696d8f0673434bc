"""Failure taxonomy for an audit run.

Every failure is fatal: the run stops, the report sink is closed, and the
caller receives a single ``AuditError`` carrying the original cause.
"""

from __future__ import annotations

from typing import Optional


class AuditError(RuntimeError):
    """Base class for all terminating audit failures."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class SinkUnavailable(AuditError):
    """The report destination could not be opened or created."""


class TraversalIOFailure(AuditError):
    """A directory or source file could not be read during the walk."""


class SyntaxFailure(AuditError):
    """A source unit could not be turned into a usable syntax tree."""


class ConfigValidationError(AuditError):
    """Raised when the audit configuration is invalid."""
