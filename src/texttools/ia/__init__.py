"""
TextTools IA Module

Generate an information-architecture prototype site from the IA planning
spreadsheet: content files per page plus the left-navigation data file.
"""

from texttools.ia.builder import SiteBuilder, SiteBuildResult, SitePlan
from texttools.ia.navigation import (
    DuplicateSiblingTitleError,
    NavigationError,
    NavigationNameCollisionError,
    NavigationNode,
    NavigationParentNotFoundError,
    NavigationTreeBuilder,
    serialize_navigation,
)
from texttools.ia.parser import IaTableParser, TableFormatError
from texttools.ia.paths import WeightPolicy, assign_weights, relative_page_path, safe_file_name
from texttools.ia.renderer import PageRenderer

__all__ = [
    "SiteBuilder",
    "SiteBuildResult",
    "SitePlan",
    "DuplicateSiblingTitleError",
    "NavigationError",
    "NavigationNameCollisionError",
    "NavigationNode",
    "NavigationParentNotFoundError",
    "NavigationTreeBuilder",
    "serialize_navigation",
    "IaTableParser",
    "TableFormatError",
    "WeightPolicy",
    "assign_weights",
    "relative_page_path",
    "safe_file_name",
    "PageRenderer",
]
