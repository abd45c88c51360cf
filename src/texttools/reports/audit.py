"""
IA audit report for an existing documentation site.

Cross-references every article directory (a directory holding ``index.md``)
with the site's left navigation (``navbar.json``) and its redirects
(``conductor.json``).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from texttools.config import ConfigurationError
from texttools.ia.navigation import NavigationNode
from texttools.models.report import Worksheet
from texttools.reports.matchlist import read_lines

logger = logging.getLogger(__name__)

ARTICLE_FILE = "index.md"

AUDIT_HEADER = (
    "Directory",
    "Article Title",
    "Variant",
    "In Left Nav?",
    "Count of Redirects From This Doc",
    "URLs redirected to from this Doc",
    "Count of redirects To This Doc",
    "URLs redirecting to this doc",
)


@dataclass(frozen=True)
class SiteRedirect:
    """One redirect from the conductor file."""
    source: str
    target: str


def _normalize(path: str) -> str:
    return path.replace("\\", "/").strip().strip("/")


def _load_json_list(path: Path, label: str) -> List[dict]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read {label} {path}: {e}") from e
    if not isinstance(data, list):
        raise ConfigurationError(f"{label} {path} must contain a JSON list")
    return data


def load_redirects(path: str | Path) -> List[SiteRedirect]:
    """Read ``[{"from": ..., "to": ...}]``; keys are case-insensitive."""
    redirects = []
    for entry in _load_json_list(Path(path), "conductor file"):
        lowered = {str(k).lower(): v for k, v in entry.items()}
        redirects.append(
            SiteRedirect(source=_normalize(lowered.get("from") or ""), target=_normalize(lowered.get("to") or ""))
        )
    logger.info("Found %d redirects", len(redirects))
    return redirects


def clean_navbar_entry(entry: NavigationNode, root_path: str, parent_breadcrumb: str = "") -> None:
    """
    Normalize an entry and its descendants in place.

    Entries without a path take ``root path / guide name``; a trailing
    ``main`` segment is dropped; breadcrumbs read ``Parent > Child``.
    """
    if not entry.path.strip():
        entry.path = str(PurePosixPath(root_path, entry.guide_name)) if entry.guide_name.strip() else ""

    entry.path = _normalize(entry.path)
    if entry.path.endswith("main"):
        entry.path = entry.path[: -len("main")].rstrip("/")

    entry.breadcrumb = f"{parent_breadcrumb} > {entry.title}" if parent_breadcrumb else entry.title

    for child in entry.children:
        clean_navbar_entry(child, root_path, entry.breadcrumb)


def load_navbar(path: str | Path) -> List[NavigationNode]:
    """Read and clean the left navigation."""
    entries = [NavigationNode.from_dict(item) for item in _load_json_list(Path(path), "navbar file")]
    logger.info("Found %d main navbar entries: %s", len(entries), ", ".join(e.title for e in entries))
    for entry in entries:
        clean_navbar_entry(entry, entry.path)
    return entries


def navbar_breadcrumb(entries: List[NavigationNode], relative_path: str) -> Optional[str]:
    """Breadcrumb of the first navigation entry pointing at ``relative_path``."""
    for entry in entries:
        for node in entry.walk():
            if node.path == relative_path:
                return node.breadcrumb
    return None


def article_title(index_file: Path) -> str:
    for line in read_lines(index_file):
        if line.lower().startswith("title:"):
            return line[len("title:"):].strip()
    return "unknown"


def article_variants(directory: Path, index_file: Path) -> List[str]:
    """Subdirectory names when the article uses StackSnippets, else ``none``."""
    if any("stacksnippet" in line.lower() for line in read_lines(index_file)):
        return sorted(child.name for child in directory.iterdir() if child.is_dir())
    return ["none"]


class IaAuditReport:
    """
    Build the audit worksheet.

    Usage:
        report = IaAuditReport(navbar_file, conductor_file)
        worksheet = report.build(source_directory, recurse=True)
    """

    def __init__(self, navbar_file: str | Path, conductor_file: str | Path):
        for label, value in (("Navbar", navbar_file), ("Conductor", conductor_file)):
            if not Path(value).is_file():
                raise ConfigurationError(f"{label} file {value} does not exist")
        self.redirects = load_redirects(conductor_file)
        self.navbar = load_navbar(navbar_file)

    def build(self, source_directory: str | Path, recurse: bool = False) -> Worksheet:
        source_directory = Path(source_directory)
        if not source_directory.is_dir():
            raise ConfigurationError(f"Source directory {source_directory} does not exist")

        worksheet = Worksheet(name="filereport")
        worksheet.add_row(*AUDIT_HEADER)

        directories = source_directory.rglob("*") if recurse else source_directory.glob("*")
        for directory in sorted(d for d in directories if d.is_dir()):
            self._add_article(worksheet, source_directory, directory)

        logger.info("Report complete: %d articles", len(worksheet.rows) - 1)
        return worksheet

    def _add_article(self, worksheet: Worksheet, source_directory: Path, directory: Path) -> None:
        index_file = directory / ARTICLE_FILE
        if not index_file.is_file():
            return

        relative_path = directory.relative_to(source_directory).as_posix()
        title = article_title(index_file)
        variants = article_variants(directory, index_file)
        redirected_to = [r.target for r in self.redirects if r.source == relative_path]
        redirected_from = [r.source for r in self.redirects if r.target == relative_path]
        redirect_cells = (
            len(redirected_to),
            "\n".join(redirected_to),
            len(redirected_from),
            "\n".join(redirected_from),
        )

        if len(variants) == 1:
            if relative_path.endswith("main"):
                return
            breadcrumb = navbar_breadcrumb(self.navbar, relative_path) or ""
            worksheet.add_row(relative_path, title, variants[0], breadcrumb, *redirect_cells)
            return

        for variant in variants:
            worksheet.add_row(relative_path, title, variant, "n/a", *redirect_cells)


def build_audit_report(
    navbar_file: str | Path,
    conductor_file: str | Path,
    source_directory: str | Path,
    recurse: bool = False,
) -> List[Worksheet]:
    return [IaAuditReport(navbar_file, conductor_file).build(source_directory, recurse)]


__all__ = [
    "AUDIT_HEADER",
    "IaAuditReport",
    "SiteRedirect",
    "build_audit_report",
    "clean_navbar_entry",
    "load_navbar",
    "load_redirects",
    "navbar_breadcrumb",
]
