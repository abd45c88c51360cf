"""
Output path, navigation title and weight resolution for IA pages.

A page's file lives at ``<root stub>/<level 1>/.../<level 6>/_index<suffix>``
below the Content directory. Every segment is sanitized with
``safe_file_name``; empty segments are skipped.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, List

from texttools.models.pages import ContentRole, PageEntry

INDEX_FILE_STEM = "_index"
DEFAULT_SUFFIX = ".md"
DEFAULT_SUPPORTIVE_OFFSET = 1000

# Characters no mainstream file system accepts in a name, plus ASCII controls
_ILLEGAL_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_DROPPED_PUNCTUATION = re.compile(r"[,'’]")
_WHITESPACE = re.compile(r"\s+")


class WeightPolicy(str, Enum):
    """How page weights are assigned."""
    LOAD_ORDER = "load-order"
    DOC_ORDER = "doc-order"


def safe_file_name(segment: str) -> str:
    """
    Turn a label into a file-system-safe path segment.

    Illegal characters, commas and apostrophes are dropped, runs of
    whitespace become a single hyphen. Never raises.
    """
    cleaned = _ILLEGAL_CHARACTERS.sub("", segment)
    cleaned = _DROPPED_PUNCTUATION.sub("", cleaned)
    return _WHITESPACE.sub("-", cleaned.strip())


def path_segments(page: PageEntry, root_stub: str = "") -> List[str]:
    """Sanitized, non-empty directory segments for a page."""
    segments = [safe_file_name(root_stub)]
    segments.extend(safe_file_name(level) for level in page.levels)
    return [segment for segment in segments if segment]


def relative_page_path(page: PageEntry, root_stub: str = "", suffix: str = DEFAULT_SUFFIX) -> str:
    """
    Content file path relative to the Content directory, forward-slashed.

    >>> relative_page_path(PageEntry(level1="Guides", level2="Set up"))
    'Guides/Set-up/_index.md'
    """
    return str(PurePosixPath(*path_segments(page, root_stub), f"{INDEX_FILE_STEM}{suffix}"))


def page_url_path(page: PageEntry, root_stub: str = "") -> str:
    """Site-relative URL of a page's directory, e.g. ``/Guides/Set-up/``."""
    segments = path_segments(page, root_stub)
    if not segments:
        return "/"
    return "/" + "/".join(segments) + "/"


def root_stub_for(page: PageEntry, main_root: str, supplemental_root: str) -> str:
    """Root folder of the section a page belongs to; home pages have none."""
    if page.content_role == ContentRole.HOME.value:
        return ""
    if page.content_role == ContentRole.SUPPORTIVE.value:
        return supplemental_root
    return main_root


def assign_weights(
    pages: Iterable[PageEntry],
    policy: WeightPolicy = WeightPolicy.LOAD_ORDER,
    supportive_offset: int = DEFAULT_SUPPORTIVE_OFFSET,
) -> List[PageEntry]:
    """
    Return copies of ``pages`` carrying their weight.

    LOAD_ORDER numbers pages in table order and pushes supportive content
    ``supportive_offset`` further down. DOC_ORDER copies the Doc order column.
    """
    weighted = []
    for position, page in enumerate(pages):
        if policy == WeightPolicy.DOC_ORDER:
            weight = page.doc_order
        else:
            weight = position
            if page.content_role == ContentRole.SUPPORTIVE.value:
                weight += supportive_offset
        weighted.append(page.model_copy(update={"weight": weight}))
    return weighted


def ordered(pages: Iterable[PageEntry]) -> List[PageEntry]:
    """Pages sorted by weight; ties keep table order."""
    return sorted(pages, key=lambda page: page.weight)
