"""
IA Table Parser

Parse the page list and content type CSV exports into PageEntry and
ContentType records.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from texttools.models.pages import ContentType, PageEntry

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class TableFormatError(Exception):
    """A table row could not be converted into a record."""

    def __init__(self, path: Path, row_number: int, detail: str):
        self.path = path
        self.row_number = row_number
        super().__init__(f"{path}: row {row_number}: {detail}")


class IaTableParser:
    """
    Parse IA planning tables from CSV files.

    Usage:
        parser = IaTableParser()
        content_types = parser.parse_content_types("contenttypes.csv")
        pages = parser.parse_pages("pagelist.csv")
    """

    def parse_pages(self, path: str | Path) -> List[PageEntry]:
        """
        Parse the page list, keeping table order.

        Args:
            path: CSV file with a header row

        Returns:
            One PageEntry per data row
        """
        pages = list(self._read_records(Path(path), PageEntry))
        logger.info("Found %d pages in %s", len(pages), path)
        return pages

    def parse_content_types(self, path: str | Path) -> List[ContentType]:
        """Parse the content type lookup table."""
        content_types = list(self._read_records(Path(path), ContentType))
        logger.info("Found %d content types in %s", len(content_types), path)
        return content_types

    def _read_records(self, path: Path, model: Type[RecordT]) -> Iterator[RecordT]:
        if not path.exists():
            raise FileNotFoundError(f"{path} does not exist")

        # utf-8-sig drops the BOM spreadsheet exports like to add
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            for row_number, row in enumerate(reader, start=2):
                cleaned = self._clean_row(row)
                if not any(value.strip() for value in cleaned.values()):
                    continue
                try:
                    yield model.model_validate(cleaned)
                except ValidationError as e:
                    raise TableFormatError(path, row_number, str(e)) from e

    @staticmethod
    def _clean_row(row: Dict[str, object]) -> Dict[str, str]:
        """Strip header whitespace and drop overflow cells (None keys)."""
        cleaned = {}
        for key, value in row.items():
            if key is None:
                continue
            cleaned[key.strip()] = "" if value is None else str(value)
        return cleaned


def index_content_types(content_types: List[ContentType]) -> Dict[str, ContentType]:
    """Name -> ContentType; the first row wins when a name repeats."""
    index: Dict[str, ContentType] = {}
    for content_type in content_types:
        index.setdefault(content_type.name, content_type)
    return index
