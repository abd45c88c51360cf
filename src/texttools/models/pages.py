"""
Pydantic models for the IA planning tables.

Each model maps one row of a CSV export. Field aliases are the spreadsheet
header labels so rows from ``csv.DictReader`` validate directly:

    PageEntry.model_validate(row)

Records are frozen once loaded; derived values such as ``weight`` are applied
with ``model_copy(update=...)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

LEVEL_COUNT = 6


class ContentRole(str, Enum):
    """Known values of the ``Group type`` column."""
    HOME = "Home page"
    MAIN = "Main content"
    SUPPORTIVE = "Supportive content"


def _none_to_default(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


def _blank_to_default(value: Any, default: str) -> str:
    if value is None or not str(value).strip():
        return default
    return str(value)


class PageEntry(BaseModel):
    """
    One row of the page list (``pagelist.csv``).

    ``content_role`` is kept as the raw cell text and compared by exact
    equality against ``ContentRole`` values.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    # Identity
    id: str = Field("0", alias="Id", description="Page ID used by ID: n references")
    edit_status: str = Field("", alias="Edit status")
    owner: str = Field("", alias="Owner")

    # Classification
    content_role: str = Field("", alias="Group type", description="Home page, Main content, ...")
    content_type: str = Field("Unknown", alias="Content Type", description="Key into content types")
    structure_type: str = Field("", alias="Structure type")
    doc_order: int = Field(0, alias="Doc order", description="Explicit sort key")

    # Hierarchy
    level1: str = Field("", alias="Level 1")
    level2: str = Field("", alias="Level 2")
    level3: str = Field("", alias="Level 3")
    level4: str = Field("", alias="Level 4")
    level5: str = Field("", alias="Level 5")
    level6: str = Field("", alias="Level 6")

    # Narrative
    title: str = Field("Article Title", alias="Article Title")
    keywords: str = Field("", alias="Keywords")
    in_phase1: str = Field("", alias="Included in phase 1?")
    in_phase2: str = Field("", alias="Included in phase 2")
    help_docs_scope: str = Field("", alias="Help docs scope (needs further discussion)")
    document_type: str = Field("", alias="Document change type")
    suggested_changes: str = Field("", alias="Changes to existing doc (if applicable)")
    existing_links: str = Field("", alias="Existing content link (if applicable)")
    dimensions: str = Field("", alias="Content dimensions")
    group_description: str = Field("", alias="Group description (if applicable)")
    doc_description: str = Field("", alias="Doc description (if applicable)")
    validation: str = Field("", alias="User research validation")
    target_personas: str = Field("", alias="Primary targetted personas")

    # Derived, never read from the table
    weight: int = Field(0, exclude=True, description="Position in the left hand menu")
    is_stub: bool = Field(False, exclude=True, description="Synthetic section home page")

    @field_validator("id", mode="before")
    @classmethod
    def _default_id(cls, v: Any) -> str:
        return _blank_to_default(v, "0").strip()

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, v: Any) -> str:
        return _blank_to_default(v, "Article Title")

    @field_validator("content_type", mode="before")
    @classmethod
    def _default_content_type(cls, v: Any) -> str:
        return _blank_to_default(v, "Unknown")

    @field_validator(
        "edit_status", "owner", "content_role", "structure_type",
        "level1", "level2", "level3", "level4", "level5", "level6",
        "keywords", "in_phase1", "in_phase2", "help_docs_scope", "document_type",
        "suggested_changes", "existing_links", "dimensions", "group_description",
        "doc_description", "validation", "target_personas",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return _none_to_default(v, "")

    @field_validator("doc_order", mode="before")
    @classmethod
    def _parse_doc_order(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def levels(self) -> Tuple[str, ...]:
        """The six level labels, stripped, shallowest first."""
        return tuple(
            level.strip()
            for level in (self.level1, self.level2, self.level3, self.level4, self.level5, self.level6)
        )

    @property
    def depth(self) -> int:
        """1-based index of the deepest populated level; 0 when none is set."""
        for index in range(LEVEL_COUNT, 0, -1):
            if self.levels[index - 1]:
                return index
        return 0

    @property
    def nav_title(self) -> str:
        """Deepest populated level label, or the article title."""
        for level in reversed(self.levels):
            if level:
                return level
        return self.title.strip()

    @property
    def role(self) -> Optional[ContentRole]:
        """The matching ContentRole, or None for unrecognised roles."""
        for role in ContentRole:
            if self.content_role == role.value:
                return role
        return None

    @classmethod
    def stub(cls, name: str, role: ContentRole, weight: int = 0) -> "PageEntry":
        """Section home page for a root folder that has no authored entry."""
        stub = cls(title=name, content_role=role.value, weight=weight, is_stub=True)
        # Stubs carry no ID and no content type; blank values would be defaulted
        return stub.model_copy(update={"id": "", "content_type": ""})


class ContentType(BaseModel):
    """
    One row of the content type lookup (``contenttypes.csv``).

    Looked up by exact, case-sensitive ``name``.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field("", alias="Content Type")
    description: str = Field("", alias="Description")
    external_links: str = Field("", alias="External links", description="Reference URL")
    structure: str = Field("", alias="Structure", description="Article structure template")

    @field_validator("name", "description", "external_links", "structure", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return _none_to_default(v, "")


UNKNOWN_CONTENT_TYPE = ContentType(name="Unknown", description="Unknown")
