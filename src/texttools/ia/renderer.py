"""
Page content rendering for the IA prototype site.

Each page is a Hugo content file: a TOML front matter block, the article
title, a feedback link, the labelled planning fields that carry a value and
the content type description. Home pages get the fixed welcome text instead.

After assembly, ``ID: 42`` style references are turned into links to the
referenced page.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional
from urllib.parse import quote

from texttools.ia.paths import DEFAULT_SUFFIX, relative_page_path, root_stub_for
from texttools.models.pages import UNKNOWN_CONTENT_TYPE, ContentRole, ContentType, PageEntry

# ID, optional filler, a colon, optional filler, digits. Filler never crosses a line.
ID_REFERENCE = re.compile(r"\bID[^\w\n]*:[^\w\n]*(\d+)")

HOME_PAGE_INTRO = """\
Welcome to the Developer Documentation Information Architecture (IA) prototype. \
This site previews a restructured layout for our documentation so that finding \
and using our resources feels more intuitive.

The prototype is a visual guide to the proposed IA groupings. It shows how \
documents are categorised and how you move between them. As you explore you \
will find placeholders for existing and newly proposed documents, each with \
details of its content type, title, user research validation and more. The \
documents themselves are not hosted here; links to the existing content on \
the current developer site are provided where they exist.

Here's what we need from you:
* Explore the navigation menu to review the proposed groupings and where items sit.
* Consider how clear and intuitive the groupings are, and how easy the site is to navigate.
* Use the feedback link at the top of any page to tell us what works and what doesn't.

Your feedback shapes a documentation site that is informative, easy to \
navigate and intuitive. Thank you for your time and thoughtful contributions.
"""


class FieldSpec(NamedTuple):
    """A labelled planning field and when to leave it out."""
    label: str
    attribute: str
    ignore: str = ""
    on_new_line: bool = False


# Emitted in this order, each only when it carries a value
PLANNING_FIELDS = (
    FieldSpec("In Phase 1?", "in_phase1"),
    FieldSpec("In Phase 2?", "in_phase2"),
    FieldSpec("Related to help docs?", "help_docs_scope"),
)

ABOUT_FIELDS = (
    FieldSpec("Description", "doc_description"),
    FieldSpec("New or existing doc?", "document_type"),
    FieldSpec("Target personas", "target_personas"),
    FieldSpec("Dimensioned by", "dimensions", ignore="No doc dimension"),
    FieldSpec("Changes to be made", "suggested_changes"),
    FieldSpec("Links to original docs", "existing_links", on_new_line=True),
    FieldSpec("Why is this here?", "validation", on_new_line=True),
    FieldSpec("Page type", "structure_type"),
)


def clean_field_value(value: str) -> str:
    """Drop trailing ``- `` runs and leading quote characters left by the spreadsheet."""
    while value.endswith("- "):
        value = value[:-2]
    value = value.lstrip("'\"")
    return value.strip()


def emit_field(lines: List[str], spec: FieldSpec, value: str) -> None:
    """Append ``**label**: value`` unless the value is blank or ignored."""
    if not value or not value.strip() or value.strip() == spec.ignore.strip():
        return
    cleaned = clean_field_value(value)
    if not cleaned:
        return
    if spec.on_new_line:
        lines.extend([f"**{spec.label}**:", "", cleaned, ""])
    else:
        lines.extend([f"**{spec.label}**: {cleaned}", ""])


def absolute_page_url(relative_path: str, target_root_url: str) -> str:
    """
    Public URL of a page, URL-encoded and lower-cased for the feedback form.

    The local Content directory is replaced by ``target_root_url`` and the
    index file name is stripped.
    """
    directory = PurePosixPath(relative_path.replace("\\", "/")).parent
    url = target_root_url.rstrip("/") + "/"
    if str(directory) != ".":
        url += f"{directory}/"
    return quote(url, safe="").lower()


class PageRenderer:
    """
    Render page bodies.

    Usage:
        renderer = PageRenderer(content_types, pages, target_root_url="https://...")
        text = renderer.render(page)
    """

    def __init__(
        self,
        content_types: Dict[str, ContentType],
        pages: Iterable[PageEntry],
        target_root_url: str = "",
        version_string: str = "",
        feedback_url_template: str = "",
        main_root: str = "",
        supplemental_root: str = "",
        suffix: str = DEFAULT_SUFFIX,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.content_types = content_types
        self.pages = list(pages)
        self.target_root_url = target_root_url
        self.version_string = version_string
        self.feedback_url_template = feedback_url_template
        self.main_root = main_root
        self.supplemental_root = supplemental_root
        self.suffix = suffix
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        # First page wins when an ID repeats
        self._pages_by_id: Dict[str, PageEntry] = {}
        for page in self.pages:
            if page.id:
                self._pages_by_id.setdefault(page.id, page)

    def relative_path(self, page: PageEntry) -> str:
        """Page path below Content, using the page's own section root."""
        stub = root_stub_for(page, self.main_root, self.supplemental_root)
        return relative_page_path(page, stub, self.suffix)

    def content_type_for(self, page: PageEntry) -> ContentType:
        """Exact-name lookup; a miss yields the Unknown content type."""
        return self.content_types.get(page.content_type, UNKNOWN_CONTENT_TYPE)

    def render(self, page: PageEntry) -> str:
        """Full text of the page's content file."""
        front_matter = self._front_matter(page)
        lines = [f"## {page.title}", ""]

        if page.is_stub:
            return self._finish(front_matter, lines)

        feedback = self._feedback_line(page)
        if feedback:
            lines.extend([feedback, ""])

        if page.content_role == ContentRole.HOME.value:
            lines.append(HOME_PAGE_INTRO)
            return self._finish(front_matter, lines)

        for spec in PLANNING_FIELDS:
            emit_field(lines, spec, getattr(page, spec.attribute))

        if page.group_description.strip():
            lines.extend(["### Section Notes", "", clean_field_value(page.group_description), ""])

        lines.extend(["### About This Page", ""])
        for spec in ABOUT_FIELDS:
            emit_field(lines, spec, getattr(page, spec.attribute))

        lines.extend(self._content_type_lines(page))
        return self._finish(front_matter, lines)

    def _finish(self, front_matter: List[str], lines: List[str]) -> str:
        # ID references are only linked in the body; the front matter stays plain TOML
        body = self.resolve_id_links("\n".join(lines).rstrip("\n") + "\n")
        return "\n".join(front_matter) + "\n" + body

    def _front_matter(self, page: PageEntry) -> List[str]:
        title = page.nav_title.replace("'", "")
        timestamp = self._clock().isoformat(timespec="seconds")
        return [
            "+++",
            f"title = '{title}'",
            f"date = {timestamp}",
            f"weight = {page.weight}",
            "alwaysopen = false",
            "+++",
            "",
        ]

    def _feedback_line(self, page: PageEntry) -> str:
        if not self.feedback_url_template:
            return ""
        url = absolute_page_url(self.relative_path(page), self.target_root_url)
        feedback_url = (
            self.feedback_url_template
            .replace("{url}", url)
            .replace("{version}", quote(self.version_string, safe=""))
            .replace("{id}", quote(page.id, safe=""))
        )
        return f"[Give feedback on this page]({feedback_url})"

    def _content_type_lines(self, page: PageEntry) -> List[str]:
        content_type = self.content_type_for(page)
        link = content_type.external_links.strip()
        name = content_type.name.strip() or page.content_type.strip()
        heading = f"[{name}]({link})" if link else name
        lines = [f"**Content type**: {heading}", ""]
        if content_type.description.strip():
            lines.extend([content_type.description.strip(), ""])
        emit_field(lines, FieldSpec("Article Structure", "structure", on_new_line=True), content_type.structure)
        return lines

    def resolve_id_links(self, text: str) -> str:
        """
        Replace ``ID: n`` references with markdown links to page ``n``.

        Replacement is keyed by the literal matched text, so identical
        literals always resolve to the same target. Unknown IDs are left as
        written.
        """
        links: Dict[str, str] = {}
        for match in ID_REFERENCE.finditer(text):
            literal = match.group(0)
            if literal in links:
                continue
            target = self._pages_by_id.get(match.group(1))
            if target is None:
                continue
            links[literal] = f"[{target.nav_title}](/{self.relative_path(target)})"

        if not links:
            return text
        return ID_REFERENCE.sub(lambda m: links.get(m.group(0), m.group(0)), text)
