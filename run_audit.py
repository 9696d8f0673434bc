#!/usr/bin/env python3
"""
Security roles audit for managed Java components.

Scans Java source roots for EJB-style beans, reads their declarative security
annotations and writes a CSV report of which roles may invoke which class or
method.

Usage:
    python run_audit.py --source-root src/main/java --project-name billing
    python run_audit.py --config audit.yml
    python run_audit.py --source-root src/main/java --report-file out/security.csv --all-java-files
"""

import argparse
import logging
import sys
from typing import List, Optional

from core.audit_config import AuditConfig, apply_overrides, load_audit_config
from core.errors import AuditError
from core.run_artifacts import write_run_report
from core.structured_logging import configure_structured_logging, set_run_id, stage_scope
from reporting.audit_report import generate_report

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Declarative Security Roles Audit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_audit.py --source-root src/main/java --project-name billing\n"
            "  python run_audit.py --config audit.yml --run-report-dir target/run_reports\n"
        )
    )

    parser.add_argument(
        "--config",
        default=None,
        help="YAML or JSON file with audit settings."
    )
    parser.add_argument(
        "--source-root",
        dest="source_roots",
        action="append",
        default=None,
        help="Source root to scan. Repeatable. Default: src/main/java"
    )
    parser.add_argument(
        "--report-file",
        default=None,
        help="CSV output path. Default: <build-dir>/<project-name>-security.csv"
    )
    parser.add_argument(
        "--project-name",
        default=None,
        help="Project name used in the default report file name."
    )
    parser.add_argument(
        "--build-dir",
        default=None,
        help="Build output directory used in the default report file name."
    )
    parser.add_argument(
        "--base-package",
        default=None,
        help="Base package of the scanned sources (informational)."
    )
    parser.add_argument(
        "--file-marker",
        dest="file_name_markers",
        action="append",
        default=None,
        help="File name substring selecting candidate sources. Repeatable. Default: Bean, me"
    )
    parser.add_argument(
        "--all-java-files",
        action="store_true",
        default=False,
        help="Scan every .java file instead of filtering by file name markers."
    )
    parser.add_argument(
        "--lenient-syntax",
        action="store_true",
        default=False,
        help="Log syntax errors instead of failing the audit."
    )
    parser.add_argument(
        "--run-report-dir",
        default=None,
        help="If set, write a JSON run summary to this directory."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> AuditConfig:
    """Merge the config file and command-line flags."""
    config = load_audit_config(args.config)
    markers = args.file_name_markers
    if args.all_java_files:
        markers = []
    return apply_overrides(
        config,
        project_name=args.project_name,
        build_dir=args.build_dir,
        report_file=args.report_file,
        base_package=args.base_package,
        source_roots=args.source_roots,
        file_name_markers=markers,
        strict_syntax=False if args.lenient_syntax else None,
    )


def run(args: argparse.Namespace) -> int:
    """Run one audit and return the process exit code."""
    run_id = set_run_id()
    config: Optional[AuditConfig] = None
    stats = None
    error: Optional[str] = None

    try:
        with stage_scope("config"):
            config = resolve_config(args)

        with stage_scope("scan"):
            stats = generate_report(
                report_file=config.resolved_report_file,
                source_roots=config.source_roots,
                markers=config.file_name_markers,
                strict_syntax=config.strict_syntax,
                base_package=config.base_package,
            )
    except AuditError as e:
        error = str(e)
        logger.error(f"Security audit failed: {e}")
        if e.__cause__ is not None:
            logger.debug("Caused by", exc_info=e.__cause__)

    if args.run_report_dir and config is not None:
        with stage_scope("report"):
            path = write_run_report(
                run_id=run_id,
                status="failed" if error else "success",
                report_file=config.resolved_report_file,
                stats=stats.to_dict() if stats is not None else None,
                error=error,
                output_dir=args.run_report_dir,
            )
            logger.info(f"Run summary written to {path}")

    if error:
        return 1

    logger.info(f"Report written to {config.resolved_report_file} ({stats.rows_emitted} rows)")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the audit."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
