"""
TextTools CLI - IA prototype site generation and text reports.

Commands:
    texttools site build        Generate the IA prototype content and navigation
    texttools site plan         Show the pages a build would write
    texttools report matchlist  Report every regex match in a directory of files
    texttools report audit      Cross-reference articles, left nav and redirects
"""

import click

from texttools import __version__
from texttools.config import get_config
from texttools.logger import configure_logging

# Import command groups
from .site import site
from .report import report


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Console log level (default: TEXTTOOLS_LOG_LEVEL or info)",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Console log format (default: TEXTTOOLS_LOG_FORMAT or text)",
)
def main(log_level, log_format):
    """TextTools - Documentation tooling for IA restructuring projects."""
    config = get_config()
    configure_logging(log_level or config.log_level, log_format or config.log_format)


# Register command groups
main.add_command(site)
main.add_command(report)


if __name__ == "__main__":
    main()
