"""
TextTools CLI - Text report commands.

Usage:
    texttools report matchlist -d docs/ -r -f "*.md" --regex "https?://\\S+"
    texttools report audit -d site/content --navbar navbar.json --conductor conductor.json -t txt
"""

from typing import List, Optional

import click

from texttools.cli.options import core_report_options, resolve_config
from texttools.config import ConfigurationError, TextToolsConfig
from texttools.models.report import Worksheet


def _write(config: TextToolsConfig, report_name: str, worksheets: List[Worksheet]) -> None:
    from texttools.reports.writers import writer_for

    writer = writer_for(config.output_type, report_name, config.output_directory, config.include_time_suffix)
    for path in writer.write(worksheets):
        click.echo(f"Written {path}")


@click.group()
def report():
    """Build tabular reports over a directory of text files."""
    pass


@report.command("matchlist")
@core_report_options("*.txt")
@click.option("--regex", required=True, help="The regex to search for in the files")
def report_matchlist(
    source_directory: Optional[str],
    output_type: Optional[str],
    recurse_directories: bool,
    file_pattern: str,
    output_directory: Optional[str],
    regex: str,
):
    """Report every match of a regex in all files in a directory."""
    from texttools.reports.matchlist import build_match_report

    config = resolve_config(
        source_directory=source_directory,
        output_type=output_type,
        recurse_directories=recurse_directories or None,
        file_pattern=file_pattern,
        output_directory=output_directory,
    )
    click.echo(f"Text regex: {regex}")

    try:
        worksheets = build_match_report(
            config.source_directory, regex, config.file_pattern, config.recurse_directories
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    _write(config, "MatchList", worksheets)


@report.command("audit")
@core_report_options("index.md")
@click.option("--navbar", "navbar_file", required=True, help="The site's left navigation as a JSON file")
@click.option("--conductor", "conductor_file", required=True, help="The site's redirects as a JSON file")
def report_audit(
    source_directory: Optional[str],
    output_type: Optional[str],
    recurse_directories: bool,
    file_pattern: str,
    output_directory: Optional[str],
    navbar_file: str,
    conductor_file: str,
):
    """Cross-reference article directories with the left nav and redirects."""
    from texttools.reports.audit import build_audit_report

    config = resolve_config(
        source_directory=source_directory,
        output_type=output_type,
        recurse_directories=recurse_directories or None,
        output_directory=output_directory,
    )

    try:
        worksheets = build_audit_report(
            navbar_file, conductor_file, config.source_directory, config.recurse_directories
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    _write(config, "IAFileReport", worksheets)
