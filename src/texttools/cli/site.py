"""
TextTools CLI - IA prototype site commands.

Usage:
    texttools site build -p pagelist.csv -c contenttypes.csv -o out/
    texttools site build -p pagelist.csv -c contenttypes.csv --levels 3 --show-supplemental
    texttools site plan -p pagelist.csv -c contenttypes.csv --format json
"""

import json
from typing import Optional

import click
import yaml

from texttools.cli.options import resolve_config
from texttools.config import ConfigurationError
from texttools.ia.navigation import NavigationError
from texttools.ia.parser import TableFormatError

EXPECTED_ERRORS = (ConfigurationError, TableFormatError, NavigationError, FileNotFoundError)


def site_options(f):
    """Options shared by build and plan."""
    options = [
        click.option("--page-list", "-p", "page_list_file", default=None,
                     help="The page list spreadsheet as a CSV file"),
        click.option("--content-types", "-c", "content_types_file", default=None,
                     help="The content types list as a CSV file"),
        click.option("--levels", "-l", "number_of_levels", type=int, default=None,
                     help="Number of nav levels to include in the build (1-6)"),
        click.option("--show-supplemental", is_flag=True,
                     help="Include supportive content in the build"),
        click.option("--hide-supplemental", is_flag=True,
                     help="Leave supportive content out even when configured on"),
        click.option("--weight-policy", type=click.Choice(["load-order", "doc-order"]), default=None,
                     help="Order pages by table position or by the Doc order column"),
        click.option("--main-root", default=None, help="Folder for main content pages"),
        click.option("--supplemental-root", default=None, help="Folder for supportive content pages"),
        click.option("--output-directory", "-o", "output_directory", default=None,
                     help="Directory that receives the Content folder and report"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def supplemental_choice(show: bool, hide: bool) -> Optional[bool]:
    """True or False when a flag was passed, None to keep the configured value."""
    if show and hide:
        raise click.UsageError("--show-supplemental and --hide-supplemental cannot be combined")
    if show:
        return True
    if hide:
        return False
    return None


@click.group()
def site():
    """Generate the IA prototype site from the planning spreadsheet."""
    pass


@site.command("build")
@site_options
@click.option("--output-type", "-t", "output_type", type=click.Choice(["csv", "txt"]), default=None,
              help="Manifest report file type (default csv)")
@click.option("--root-url", "target_root_url", default=None, help="Public URL of the Content folder")
@click.option("--version-string", default=None, help="Prototype version quoted in feedback links")
def site_build(
    page_list_file: Optional[str],
    content_types_file: Optional[str],
    number_of_levels: Optional[int],
    show_supplemental: bool,
    hide_supplemental: bool,
    weight_policy: Optional[str],
    main_root: Optional[str],
    supplemental_root: Optional[str],
    output_directory: Optional[str],
    output_type: Optional[str],
    target_root_url: Optional[str],
    version_string: Optional[str],
):
    """Write one content file per page plus navbar.const.js, then the manifest report."""
    from texttools.ia.builder import SiteBuilder
    from texttools.reports.writers import writer_for

    config = resolve_config(
        page_list_file=page_list_file,
        content_types_file=content_types_file,
        number_of_levels=number_of_levels,
        show_supplemental_content=supplemental_choice(show_supplemental, hide_supplemental),
        weight_policy=weight_policy,
        main_content_root=main_root,
        supplemental_content_root=supplemental_root,
        output_directory=output_directory,
        output_type=output_type,
        target_root_url=target_root_url,
        version_string=version_string,
    )

    click.echo(f"Show supplemental content: {config.show_supplemental_content}")
    click.echo(f"Number of levels: {config.number_of_levels}")

    try:
        result = SiteBuilder(config).build()
    except EXPECTED_ERRORS as e:
        raise click.ClickException(str(e))

    writer = writer_for(
        config.output_type, "SiteBuildReport", config.output_directory, config.include_time_suffix
    )
    report_files = writer.write([result.manifest])

    click.echo(f"Site built in {result.content_directory}")
    click.echo(f"  Pages written: {len(result.written)}")
    if result.navigation_file:
        click.echo(f"  Navigation: {result.navigation_file}")
    for path in report_files:
        click.echo(f"  Report: {path}")

    if result.failures:
        click.echo(f"  Failed: {len(result.failures)}", err=True)
        for path, error in result.failures:
            click.echo(f"    {path}: {error}", err=True)


@site.command("plan")
@site_options
@click.option("--format", "output_format", type=click.Choice(["table", "json", "yaml"]), default="table")
def site_plan(
    page_list_file: Optional[str],
    content_types_file: Optional[str],
    number_of_levels: Optional[int],
    show_supplemental: bool,
    hide_supplemental: bool,
    weight_policy: Optional[str],
    main_root: Optional[str],
    supplemental_root: Optional[str],
    output_directory: Optional[str],
    output_format: str,
):
    """Show the pages a build would write without writing anything."""
    from texttools.ia.builder import SiteBuilder

    config = resolve_config(
        page_list_file=page_list_file,
        content_types_file=content_types_file,
        number_of_levels=number_of_levels,
        show_supplemental_content=supplemental_choice(show_supplemental, hide_supplemental),
        weight_policy=weight_policy,
        main_content_root=main_root,
        supplemental_content_root=supplemental_root,
        output_directory=output_directory,
    )

    builder = SiteBuilder(config)
    try:
        plan = builder.plan()
    except EXPECTED_ERRORS as e:
        raise click.ClickException(str(e))

    planned = plan.planned_pages(builder.renderer_for(plan))
    rows = [
        {
            "section": p.section,
            "weight": p.page.weight,
            "path": p.relative_path,
            "title": p.page.title,
            "id": p.page.id,
            "stub": p.page.is_stub,
        }
        for p in planned
    ]

    if output_format == "json":
        click.echo(json.dumps({"pages": rows, "navigation_roots": [n.title for n in plan.navigation]}, indent=2))
    elif output_format == "yaml":
        click.echo(yaml.dump(
            {"pages": rows, "navigation_roots": [n.title for n in plan.navigation]},
            default_flow_style=False,
            sort_keys=False,
        ))
    else:
        click.echo(f"{'Section':<14} {'Weight':>6}  {'Path':<50} {'Title'}")
        click.echo("-" * 100)
        for row in rows:
            click.echo(f"{row['section']:<14} {row['weight']:>6}  {row['path']:<50} {row['title']}")
        click.echo()
        click.echo(f"Pages: {len(rows)}  Skipped by depth: {plan.filtered_out}")
        click.echo(f"Navigation roots: {', '.join(n.title for n in plan.navigation) or '-'}")
