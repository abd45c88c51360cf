"""
TextTools - Documentation tooling for information-architecture projects.

Turns an IA planning spreadsheet (exported as CSV) into a prototype static
site: one markdown content file per planned page plus a navigation data file
for the site generator. Also produces simple tabular reports over a directory
of text files.

Key Features:
- Page table and content-type table loading into typed records
- Output path, navigation title and weight resolution from level columns
- Left-navigation tree reconstruction and serialization
- Page rendering with content-type lookup and "ID: n" cross-page links
- CSV / text manifest and match reports

Example usage:
    from texttools import SiteBuilder, get_config

    config = get_config(page_list_file="pagelist.csv", output_directory="out")
    result = SiteBuilder(config).build()
    print(f"{len(result.written)} pages written")
"""

__version__ = "0.1.0"
__all__ = [
    "SiteBuilder",
    "TextToolsConfig",
    "get_config",
    "__version__",
]


# Lazy imports to keep the CLI start-up light
def __getattr__(name: str):
    if name == "SiteBuilder":
        from texttools.ia.builder import SiteBuilder
        return SiteBuilder
    if name == "TextToolsConfig":
        from texttools.config import TextToolsConfig
        return TextToolsConfig
    if name == "get_config":
        from texttools.config import get_config
        return get_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
