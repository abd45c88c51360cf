"""
Report writers.

Each worksheet of a report is saved as its own file named
``<report>-<worksheet>[-HHMMSS].<ext>`` in the output directory, either as
CSV or as ``|``-separated text.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from texttools.ia.paths import safe_file_name
from texttools.models.report import ReportFileType, Worksheet

logger = logging.getLogger(__name__)


class ReportWriter:
    """Base class: works out where each worksheet file goes."""

    extension = "txt"

    def __init__(
        self,
        report_name: str,
        directory: str | Path,
        include_time_suffix: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.report_name = report_name
        self.directory = Path(directory)
        self.include_time_suffix = include_time_suffix
        self._clock = clock or datetime.now

    def output_path(self, worksheet: Worksheet) -> Path:
        name = f"{self.report_name}-{worksheet.name}" if worksheet.name else self.report_name
        if self.include_time_suffix:
            name += f"-{self._clock().strftime('%H%M%S')}"
        return self.directory / safe_file_name(f"{name}.{self.extension}")

    def write(self, worksheets: Iterable[Worksheet]) -> List[Path]:
        """Write every worksheet; returns the files created."""
        worksheets = list(worksheets)
        if not worksheets:
            logger.warning("Attempted to write no worksheets to a file, so created nothing")
            return []

        self.directory.mkdir(parents=True, exist_ok=True)
        written = []
        for worksheet in worksheets:
            path = self.output_path(worksheet)
            self._write_worksheet(path, worksheet)
            logger.info("Written %d rows to %s", len(worksheet.rows), path)
            written.append(path)
        return written

    def _write_worksheet(self, path: Path, worksheet: Worksheet) -> None:
        raise NotImplementedError


class CsvReportWriter(ReportWriter):
    """One CSV file per worksheet."""

    extension = "csv"

    def _write_worksheet(self, path: Path, worksheet: Worksheet) -> None:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(worksheet.rows)


class TextReportWriter(ReportWriter):
    """One ``|``-separated text file per worksheet."""

    extension = "txt"

    def _write_worksheet(self, path: Path, worksheet: Worksheet) -> None:
        lines = ["|".join(row) for row in worksheet.rows]
        path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


def writer_for(
    file_type: ReportFileType | str,
    report_name: str,
    directory: str | Path,
    include_time_suffix: bool = True,
    clock: Optional[Callable[[], datetime]] = None,
) -> ReportWriter:
    """Writer matching the configured output type."""
    if ReportFileType(file_type) == ReportFileType.CSV:
        return CsvReportWriter(report_name, directory, include_time_suffix, clock)
    return TextReportWriter(report_name, directory, include_time_suffix, clock)
