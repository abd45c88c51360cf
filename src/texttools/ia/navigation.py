"""
Left-navigation tree builder.

Rebuilds the navigation forest from the flat level columns of the page list
and serializes it as the ``navbar.const.js`` module the site generator imports:

    export const guides = [ {
      "title": "Guides",
      "path": "/Guides/",
      "subLinks": [ ... ]
    } ];

Parents are found through an index keyed by (parent node, child title), so a
missing ancestor or a repeated sibling title is reported as an error naming
the offending page instead of being guessed at.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from texttools.ia.paths import page_url_path, safe_file_name
from texttools.models.pages import PageEntry

logger = logging.getLogger(__name__)

NAVIGATION_FILE_NAME = "navbar.const.js"

# Words a JavaScript module cannot declare as a const
JS_RESERVED_WORDS = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "eval", "export",
    "extends", "false", "finally", "for", "function", "if", "implements", "import",
    "in", "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this", "throw",
    "true", "try", "typeof", "var", "void", "while", "with", "yield",
})


class NavigationError(Exception):
    """The page list does not describe a valid navigation tree."""

    def __init__(self, page: Optional[PageEntry], message: str):
        self.page = page
        if page is not None:
            message = f"Page {page.id!r} ({' > '.join(l for l in page.levels if l)}): {message}"
        super().__init__(message)


class NavigationParentNotFoundError(NavigationError):
    """A page appears before the page for its parent level."""

    def __init__(self, page: PageEntry, missing_level: int, missing_title: str):
        self.missing_level = missing_level
        self.missing_title = missing_title
        super().__init__(
            page,
            f"no level {missing_level} entry {missing_title!r} precedes it",
        )


class DuplicateSiblingTitleError(NavigationError):
    """Two pages share a title under the same parent."""

    def __init__(self, page: PageEntry, title: str):
        self.title = title
        super().__init__(page, f"duplicate navigation title {title!r} under the same parent")



class NavigationNameCollisionError(NavigationError):
    """Two navigation roots map to the same JavaScript constant."""

    def __init__(self, name: str, titles: List[str]):
        self.name = name
        self.titles = titles
        super().__init__(
            None,
            f"navigation roots {', '.join(repr(t) for t in titles)} share the constant name {name!r}",
        )


@dataclass
class NavigationNode:
    """A navigation entry; ``path`` is empty for container-only nodes."""

    title: str
    path: str = ""
    guide_name: str = ""
    breadcrumb: str = ""
    children: List["NavigationNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary for the site generator; empty strings and lists are omitted."""
        result: Dict[str, Any] = {}
        for key, value in (
            ("title", self.title),
            ("path", self.path),
            ("guideName", self.guide_name),
            ("breadcrumb", self.breadcrumb),
        ):
            if value and value.strip():
                result[key] = value
        if self.children:
            result["subLinks"] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NavigationNode":
        """Read an entry of an existing navbar JSON file; keys are case-insensitive."""
        lowered = {str(key).lower(): value for key, value in data.items()}
        return cls(
            title=lowered.get("title") or "",
            path=lowered.get("path") or "",
            guide_name=lowered.get("guidename") or "",
            breadcrumb=lowered.get("breadcrumb") or "",
            children=[cls.from_dict(child) for child in lowered.get("sublinks") or []],
        )

    def walk(self) -> Iterable["NavigationNode"]:
        """This node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class NavigationTreeBuilder:
    """
    Build the navigation forest from main content pages.

    Usage:
        builder = NavigationTreeBuilder(root_stub="")
        roots = builder.build(main_pages)
        text = serialize_navigation(roots)
    """

    def __init__(self, root_stub: str = ""):
        self.root_stub = root_stub
        self._roots: List[NavigationNode] = []
        self._index: Dict[Tuple[Optional[int], str], NavigationNode] = {}

    def build(self, pages: Iterable[PageEntry]) -> List[NavigationNode]:
        """
        Add every page, in the given order, to a fresh forest.

        Pages without any level label have no place in the navigation and
        are skipped, as are section stubs.

        Siblings are told apart by their sanitized title, the same form
        used for their directory names.

        Raises:
            NavigationParentNotFoundError: a level k page precedes its parent
            DuplicateSiblingTitleError: two siblings share a directory name
            NavigationNameCollisionError: two roots share a constant name
        """
        self._roots = []
        self._index = {}

        for page in pages:
            if page.is_stub:
                continue
            if page.depth == 0:
                logger.warning("Page %s has no level labels; left out of the navigation", page.id)
                continue
            self._add(page)

        constant_names(self._roots)
        return self._roots

    def _add(self, page: PageEntry) -> None:
        parent = self._find_parent(page)
        node = NavigationNode(title=page.nav_title, path=page_url_path(page, self.root_stub))

        key = self._key(parent, node.title)
        if key in self._index:
            raise DuplicateSiblingTitleError(page, node.title)
        self._index[key] = node

        if parent is None:
            self._roots.append(node)
        else:
            parent.children.append(node)

    def _find_parent(self, page: PageEntry) -> Optional[NavigationNode]:
        levels = page.levels
        parent: Optional[NavigationNode] = None
        for level_number in range(1, page.depth):
            title = levels[level_number - 1]
            node = self._index.get(self._key(parent, title))
            if node is None:
                raise NavigationParentNotFoundError(page, level_number, title)
            parent = node
        return parent

    @staticmethod
    def _key(parent: Optional[NavigationNode], title: str) -> Tuple[Optional[int], str]:
        return (id(parent) if parent else None, safe_file_name(title) or title)


def navigation_constant_name(title: str) -> str:
    """Lower-cased JavaScript identifier for a root title."""
    name = re.sub(r"\W+", "_", safe_file_name(title).lower()).strip("_")
    if not name:
        return "nav"
    if name[0].isdigit():
        name = f"_{name}"
    if name in JS_RESERVED_WORDS:
        name = f"{name}_"
    return name


def constant_names(roots: Iterable[NavigationNode]) -> List[str]:
    """
    Constant name of every root, in order.

    Raises:
        NavigationNameCollisionError: two roots map to the same name
    """
    names: List[str] = []
    titles_by_name: Dict[str, str] = {}
    for root in roots:
        name = navigation_constant_name(root.title)
        if name in titles_by_name:
            raise NavigationNameCollisionError(name, [titles_by_name[name], root.title])
        titles_by_name[name] = root.title
        names.append(name)
    return names


def serialize_navigation(roots: Iterable[NavigationNode]) -> str:
    """One ``export const`` declaration per root, separated by a blank line."""
    roots = list(roots)
    declarations = []
    for name, root in zip(constant_names(roots), roots):
        body = json.dumps(root.to_dict(), indent=2, ensure_ascii=False)
        declarations.append(f"export const {name} = [ {body} ];\n\n")
    return "".join(declarations)
