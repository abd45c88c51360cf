"""
TextTools data models.

- pages: PageEntry and ContentType rows of the IA planning tables
- report: Worksheet and ReportFileType used by the report writers
"""

from texttools.models.pages import (
    LEVEL_COUNT,
    UNKNOWN_CONTENT_TYPE,
    ContentRole,
    ContentType,
    PageEntry,
)
from texttools.models.report import ReportFileType, Worksheet

__all__ = [
    "LEVEL_COUNT",
    "UNKNOWN_CONTENT_TYPE",
    "ContentRole",
    "ContentType",
    "PageEntry",
    "ReportFileType",
    "Worksheet",
]
