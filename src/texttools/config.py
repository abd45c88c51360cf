"""
Centralized configuration for TextTools.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments (CLI options)
2. Environment variables (TEXTTOOLS_*)
3. .env file
4. Default values

Example:
    from texttools.config import get_config

    config = get_config()
    print(config.page_list_file)  # From TEXTTOOLS_PAGE_LIST_FILE or default

    # Override at runtime
    config = get_config(number_of_levels=3)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Invalid or incomplete configuration; aborts a run before any output."""


class TextToolsConfig(BaseSettings):
    """
    Central configuration for TextTools.

    All settings can be overridden via environment variables
    prefixed with TEXTTOOLS_.

    Example:
        export TEXTTOOLS_PAGE_LIST_FILE=~/ia/pagelist.csv
        export TEXTTOOLS_NUMBER_OF_LEVELS=3
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXTTOOLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input tables
    page_list_file: str = Field(
        default="pagelist.csv",
        description="IA page list exported from the planning spreadsheet",
    )
    content_types_file: str = Field(
        default="contenttypes.csv",
        description="Content type lookup table",
    )

    # Report options shared by every command
    source_directory: str = Field(
        default=".",
        description="Directory scanned by the text reports",
    )
    output_directory: str = Field(
        default=".",
        description="Directory that receives reports and the generated Content folder",
    )
    recurse_directories: bool = Field(
        default=False,
        description="Scan child directories of the source directory too",
    )
    file_pattern: str = Field(
        default="*.txt",
        description="Glob pattern for files scanned by the match report",
    )
    output_type: Literal["csv", "txt"] = Field(
        default="csv",
        description="Report file format",
    )
    include_time_suffix: bool = Field(
        default=True,
        description="Append -HHMMSS to report file names",
    )

    # Site generation
    number_of_levels: int = Field(
        default=6,
        description="Deepest navigation level included in the build (1-6)",
    )
    show_supplemental_content: bool = Field(
        default=False,
        description="Build the supportive content section",
    )
    stub_root_pages: bool = Field(
        default=True,
        description="Create a section home page for each non-empty root folder",
    )
    main_content_root: str = Field(
        default="",
        description="Folder that holds every main content page (empty for none)",
    )
    supplemental_content_root: str = Field(
        default="Supplemental",
        description="Folder that holds every supportive content page",
    )
    weight_policy: Literal["load-order", "doc-order"] = Field(
        default="load-order",
        description="Order pages by table position or by the Doc order column",
    )
    supportive_weight_offset: int = Field(
        default=1000,
        description="Added to the weight of supportive content in load-order mode",
    )
    content_file_suffix: str = Field(
        default=".md",
        description="Extension of generated content files",
    )

    # Page rendering
    target_root_url: str = Field(
        default="https://example.com/ia-prototype",
        description="Public URL the Content folder is served from",
    )
    version_string: str = Field(
        default="v1",
        description="Prototype version quoted in feedback links",
    )
    feedback_url_template: str = Field(
        default="https://example.com/feedback?page={url}&version={version}&id={id}",
        description="Feedback link; {url}, {version} and {id} are substituted",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for TextTools",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format",
    )

    @field_validator("page_list_file", "content_types_file", "source_directory", "output_directory")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    @field_validator("content_file_suffix")
    @classmethod
    def dotted_suffix(cls, v: str) -> str:
        """Always store the suffix with its leading dot."""
        v = v.strip()
        if v and not v.startswith("."):
            v = f".{v}"
        return v

    def get_content_directory(self) -> Path:
        """Directory the site build writes pages into."""
        return Path(self.output_directory) / "Content"

    def validate_site_inputs(self) -> None:
        """Raise ConfigurationError unless a site build can start."""
        for label, value in (
            ("Page list", self.page_list_file),
            ("Content types", self.content_types_file),
        ):
            if not Path(value).is_file():
                raise ConfigurationError(f"{label} file {value} does not exist")

        if self.number_of_levels < 1 or self.number_of_levels > 6:
            raise ConfigurationError(
                "Please set number of levels to generate to a value between 1 and 6"
            )


# Global singleton
_config: Optional[TextToolsConfig] = None


def get_config(**overrides) -> TextToolsConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        TextToolsConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = TextToolsConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
