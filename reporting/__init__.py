"""
Layer 2: Report output

CSV sink for security report rows and the audit driver that feeds it.
"""

from reporting.csv_report import REPORT_HEADER, ReportSink, open_report_sink
from reporting.audit_report import generate_report

__all__ = [
    "REPORT_HEADER",
    "ReportSink",
    "open_report_sink",
    "generate_report",
]
