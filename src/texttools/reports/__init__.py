"""
TextTools Reports Module

Tabular reports over a directory of text files and the writers that save them.
"""

from texttools.reports.audit import IaAuditReport, build_audit_report
from texttools.reports.matchlist import build_match_report
from texttools.reports.writers import CsvReportWriter, ReportWriter, TextReportWriter, writer_for

__all__ = [
    "IaAuditReport",
    "build_audit_report",
    "build_match_report",
    "CsvReportWriter",
    "ReportWriter",
    "TextReportWriter",
    "writer_for",
]
