"""Core shared contracts and utilities."""

from core.errors import (
    AuditError,
    ConfigValidationError,
    SinkUnavailable,
    SyntaxFailure,
    TraversalIOFailure,
)
from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    set_run_id,
    stage_scope,
)
from core.audit_config import (
    AuditConfig,
    apply_overrides,
    load_audit_config,
    resolve_strict_syntax,
)
from core.run_artifacts import write_run_report

__all__ = [
    "AuditError",
    "ConfigValidationError",
    "SinkUnavailable",
    "SyntaxFailure",
    "TraversalIOFailure",
    "configure_structured_logging",
    "get_run_id",
    "set_run_id",
    "stage_scope",
    "AuditConfig",
    "apply_overrides",
    "load_audit_config",
    "resolve_strict_syntax",
    "write_run_report",
]
