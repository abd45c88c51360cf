"""
IA prototype site builder.

Loads the page list and content types, filters pages by navigation depth,
writes one content file per page (home, then main, then supportive content)
into a freshly emptied ``Content`` directory, writes the navigation data file
and returns a manifest worksheet of everything written.

Usage:
    from texttools.config import get_config
    from texttools.ia.builder import SiteBuilder

    result = SiteBuilder(get_config()).build()
    for row in result.manifest.rows:
        print(row)
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from texttools.config import TextToolsConfig
from texttools.ia.navigation import (
    NAVIGATION_FILE_NAME,
    NavigationNode,
    NavigationTreeBuilder,
    serialize_navigation,
)
from texttools.ia.parser import IaTableParser, index_content_types
from texttools.ia.paths import WeightPolicy, assign_weights, ordered, path_segments, safe_file_name
from texttools.ia.renderer import PageRenderer
from texttools.logger import BuildLogger
from texttools.models.pages import ContentRole, ContentType, PageEntry
from texttools.models.report import Worksheet

logger = logging.getLogger(__name__)

MANIFEST_HEADER = ("Weight", "File", "Title")


@dataclass
class PlannedPage:
    """A page the build will write."""
    section: str
    page: PageEntry
    relative_path: str


@dataclass
class SitePlan:
    """Everything loaded and resolved before any file is touched."""
    content_types: Dict[str, ContentType]
    pages: List[PageEntry]
    sections: List[Tuple[str, List[PageEntry]]]
    navigation: List[NavigationNode]
    filtered_out: int = 0

    def planned_pages(self, renderer: PageRenderer) -> List[PlannedPage]:
        return [
            PlannedPage(section=name, page=page, relative_path=renderer.relative_path(page))
            for name, pages in self.sections
            for page in pages
        ]


@dataclass
class SiteBuildResult:
    """Outcome of a build."""
    content_directory: Path
    manifest: Worksheet
    written: List[Path] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)
    navigation_file: Optional[Path] = None


def within_depth(page: PageEntry, number_of_levels: int) -> bool:
    """True when no level deeper than ``number_of_levels`` is populated."""
    return page.depth <= number_of_levels


class SiteBuilder:
    """
    Build the IA prototype site described by a TextToolsConfig.

    Configuration problems raise ConfigurationError and navigation problems
    raise a NavigationError subclass, both before the output directory is
    touched. Individual page write failures are logged and reported in the
    result without stopping the build.
    """

    def __init__(
        self,
        config: TextToolsConfig,
        parser: Optional[IaTableParser] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.parser = parser or IaTableParser()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.build_log = BuildLogger(run="site")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def plan(self) -> SitePlan:
        """Validate configuration, load the tables and resolve the site."""
        config = self.config
        config.validate_site_inputs()

        logger.info("Reading content types from %s", config.content_types_file)
        content_types = index_content_types(self.parser.parse_content_types(config.content_types_file))

        logger.info("Reading pages from %s", config.page_list_file)
        loaded = assign_weights(
            self.parser.parse_pages(config.page_list_file),
            WeightPolicy(config.weight_policy),
            config.supportive_weight_offset,
        )
        pages = [p for p in loaded if within_depth(p, config.number_of_levels)]
        filtered_out = len(loaded) - len(pages)
        if filtered_out:
            logger.info(
                "Skipped %d pages deeper than level %d", filtered_out, config.number_of_levels
            )

        sections = self._sections(pages)
        main_pages = next(section_pages for name, section_pages in sections if name == "main")
        navigation = NavigationTreeBuilder(config.main_content_root).build(main_pages)

        self.build_log.log_tables_loaded(
            content_types=len(content_types), pages=len(pages), filtered_out=filtered_out
        )
        return SitePlan(
            content_types=content_types,
            pages=pages,
            sections=sections,
            navigation=navigation,
            filtered_out=filtered_out,
        )

    def _sections(self, pages: List[PageEntry]) -> List[Tuple[str, List[PageEntry]]]:
        config = self.config
        by_role = {
            role: ordered(p for p in pages if p.content_role == role.value) for role in ContentRole
        }

        main = by_role[ContentRole.MAIN]
        supportive = by_role[ContentRole.SUPPORTIVE]
        if config.stub_root_pages:
            main = self._with_stub(main, config.main_content_root, ContentRole.MAIN, 0)
            supportive = self._with_stub(
                supportive,
                config.supplemental_content_root,
                ContentRole.SUPPORTIVE,
                config.supportive_weight_offset,
            )

        sections = [("home", by_role[ContentRole.HOME]), ("main", main)]
        if config.show_supplemental_content:
            sections.append(("supplemental", supportive))
        return sections

    @staticmethod
    def _with_stub(
        pages: List[PageEntry], root_stub: str, role: ContentRole, weight: int
    ) -> List[PageEntry]:
        """Prepend a section home page unless there is no root folder or a page already sits there."""
        if not safe_file_name(root_stub) or not pages:
            return pages
        if any(not path_segments(page) for page in pages):
            logger.warning(
                "A %s page without level labels already lives at %s/_index; no stub added",
                role.value, safe_file_name(root_stub),
            )
            return pages
        return [PageEntry.stub(root_stub.strip(), role, weight)] + pages

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def renderer_for(self, plan: SitePlan) -> PageRenderer:
        config = self.config
        return PageRenderer(
            plan.content_types,
            plan.pages,
            target_root_url=config.target_root_url,
            version_string=config.version_string,
            feedback_url_template=config.feedback_url_template,
            main_root=config.main_content_root,
            supplemental_root=config.supplemental_content_root,
            suffix=config.content_file_suffix,
            clock=self.clock,
        )

    def build(self) -> SiteBuildResult:
        """Run the whole build and return the manifest."""
        config = self.config
        self.build_log.log_build_started(
            page_list=config.page_list_file,
            content_types=config.content_types_file,
            levels=config.number_of_levels,
        )

        plan = self.plan()
        renderer = self.renderer_for(plan)

        content_directory = self.prepare_content_directory()
        manifest = Worksheet(name="sitebuild")
        manifest.add_row(*MANIFEST_HEADER)
        result = SiteBuildResult(content_directory=content_directory, manifest=manifest)

        for planned in plan.planned_pages(renderer):
            self._write_page(result, renderer, planned)

        self._write_navigation(result, plan.navigation)

        self.build_log.log_build_completed(written=len(result.written), failed=len(result.failures))
        logger.info("Site built in %s", content_directory)
        return result

    def prepare_content_directory(self) -> Path:
        """Remove any previous Content directory and create an empty one."""
        content_directory = self.config.get_content_directory()
        if content_directory.exists():
            logger.debug("Removing previous output %s", content_directory)
            shutil.rmtree(content_directory)
        content_directory.mkdir(parents=True)
        return content_directory

    def _write_page(self, result: SiteBuildResult, renderer: PageRenderer, planned: PlannedPage) -> None:
        page = planned.page
        page_file = result.content_directory / planned.relative_path
        try:
            text = renderer.render(page)
            page_file.parent.mkdir(parents=True, exist_ok=True)
            page_file.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error("Could not write %s", page_file, exc_info=True)
            self.build_log.log_page_write_failed(path=str(page_file), error=e)
            result.failures.append((page_file, str(e)))
            return

        result.written.append(page_file)
        result.manifest.add_row(page.weight, page_file.resolve(), page.title)
        self.build_log.log_page_written(path=planned.relative_path, weight=page.weight, title=page.title)

    def _write_navigation(self, result: SiteBuildResult, roots: List[NavigationNode]) -> None:
        navigation_file = result.content_directory / NAVIGATION_FILE_NAME
        try:
            navigation_file.write_text(serialize_navigation(roots), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write %s", navigation_file, exc_info=True)
            result.failures.append((navigation_file, str(e)))
            return

        result.navigation_file = navigation_file
        result.manifest.add_row(0, NAVIGATION_FILE_NAME, "n/a")
        self.build_log.log_navigation_written(path=str(navigation_file), roots=len(roots))
