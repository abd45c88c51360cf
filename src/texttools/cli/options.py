"""Options shared by TextTools commands."""

from typing import Any, Callable

import click

from texttools.config import TextToolsConfig, get_config


def core_report_options(pattern: str = "*.txt") -> Callable:
    """Add source directory, output type, recurse, file pattern and output directory."""

    def decorator(f: Callable) -> Callable:
        options = [
            click.option("--source-directory", "-d", "source_directory", default=None,
                         help="Source directory"),
            click.option("--output-type", "-t", "output_type", type=click.Choice(["csv", "txt"]),
                         default=None, help="Report file type (default csv)"),
            click.option("--recurse-directories", "-r", "recurse_directories", is_flag=True,
                         help="Also process every child directory of the source directory"),
            click.option("--file-pattern", "-f", "file_pattern", default=pattern, show_default=True,
                         help="File pattern for files to use within the source directory"),
            click.option("--output-directory", "-o", "output_directory", default=None,
                         help="Output directory for new files"),
        ]
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


def resolve_config(**cli_values: Any) -> TextToolsConfig:
    """Config with every option the user actually passed applied on top."""
    overrides = {key: value for key, value in cli_values.items() if value is not None}
    return get_config(**overrides)
