"""Tabular report structures shared by every command."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ReportFileType(str, Enum):
    """File format a report is saved as."""
    CSV = "csv"
    TXT = "txt"


class Worksheet(BaseModel):
    """A named sheet of string rows; the first row is usually the header."""
    name: str = Field("", description="Worksheet name, used in the file name")
    rows: List[List[str]] = Field(default_factory=list)

    def add_row(self, *cells: object) -> None:
        self.rows.append([str(cell) for cell in cells])
