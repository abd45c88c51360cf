"""
Pytest configuration and fixtures for TextTools tests.
"""

from __future__ import annotations

import csv
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Generator, List

import pytest

from texttools.config import reset_config

PAGE_HEADER = [
    "Id",
    "Group type",
    "Level 1",
    "Level 2",
    "Level 3",
    "Level 4",
    "Level 5",
    "Level 6",
    "Article Title",
    "Content Type",
    "Structure type",
    "Doc order",
    "Doc description (if applicable)",
    "Group description (if applicable)",
    "User research validation",
    "Content dimensions",
]

CONTENT_TYPE_HEADER = ["Content Type", "Description", "External links", "Structure"]


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop TEXTTOOLS_* variables and the config singleton around each test."""
    for key in list(os.environ):
        if key.startswith("TEXTTOOLS_"):
            monkeypatch.delenv(key)
    # Keep a stray .env in the working directory out of the settings
    monkeypatch.chdir(tmp_path)
    reset_config()

    yield

    reset_config()


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    """Clock that always returns the same instant."""
    instant = datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone.utc)
    return lambda: instant


# ============================================================================
# Table Fixtures
# ============================================================================


def page_row(**fields: str) -> Dict[str, str]:
    """A page list row keyed by header label."""
    row = {label: "" for label in PAGE_HEADER}
    row.update(fields)
    return row


def write_csv(path: Path, header: List[str], rows: List[Dict[str, str]]) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def sample_page_rows() -> List[Dict[str, str]]:
    """Home page, a three level main tree and one supportive page."""
    return [
        page_row(**{"Id": "1", "Group type": "Home page", "Article Title": "Welcome"}),
        page_row(**{"Id": "2", "Group type": "Main content", "Level 1": "Guides",
                    "Article Title": "Guides overview", "Content Type": "Landing page",
                    "Doc description (if applicable)": "Start here. See ID: 4 for setup."}),
        page_row(**{"Id": "3", "Group type": "Main content", "Level 1": "Guides", "Level 2": "Setup",
                    "Article Title": "Set up your org", "Content Type": "How-to",
                    "Content dimensions": "No doc dimension"}),
        page_row(**{"Id": "4", "Group type": "Main content", "Level 1": "Guides", "Level 2": "Setup",
                    "Level 3": "Sign in, quickly", "Article Title": "Sign in",
                    "Content Type": "Concept"}),
        page_row(**{"Id": "5", "Group type": "Main content", "Level 1": "Reference",
                    "Article Title": "API reference", "Content Type": "Reference"}),
        page_row(**{"Id": "6", "Group type": "Supportive content", "Level 1": "Glossary",
                    "Article Title": "Glossary", "Content Type": "Reference"}),
    ]


@pytest.fixture
def sample_content_type_rows() -> List[Dict[str, str]]:
    return [
        {"Content Type": "How-to", "Description": "Task-oriented steps.",
         "External links": "https://example.com/how-to", "Structure": "Intro, steps, next steps"},
        {"Content Type": "Concept", "Description": "Explains an idea.",
         "External links": "", "Structure": ""},
        {"Content Type": "Reference", "Description": "Lookup material.",
         "External links": "https://example.com/reference", "Structure": ""},
    ]


@pytest.fixture
def page_list_file(tmp_path: Path, sample_page_rows) -> Path:
    return write_csv(tmp_path / "pagelist.csv", PAGE_HEADER, sample_page_rows)


@pytest.fixture
def content_types_file(tmp_path: Path, sample_content_type_rows) -> Path:
    return write_csv(tmp_path / "contenttypes.csv", CONTENT_TYPE_HEADER, sample_content_type_rows)


@pytest.fixture
def make_row() -> Callable[..., Dict[str, str]]:
    """Factory for page list rows; pass header labels as a dict."""
    def factory(fields: Dict[str, str]) -> Dict[str, str]:
        return page_row(**fields)
    return factory


@pytest.fixture
def make_page_list(tmp_path: Path) -> Callable[[List[Dict[str, str]]], Path]:
    """Factory writing the given rows as a page list CSV."""
    def factory(rows: List[Dict[str, str]], name: str = "pages.csv") -> Path:
        return write_csv(tmp_path / name, PAGE_HEADER, rows)
    return factory
