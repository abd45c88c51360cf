"""Regex match report over a directory of text files."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List

from texttools.config import ConfigurationError
from texttools.models.report import Worksheet

logger = logging.getLogger(__name__)


def iter_source_files(source_directory: Path, file_pattern: str, recurse: bool) -> Iterator[Path]:
    """Files matching the pattern, sorted for a stable report."""
    matches = source_directory.rglob(file_pattern) if recurse else source_directory.glob(file_pattern)
    yield from sorted(p for p in matches if p.is_file())


def read_lines(path: Path) -> List[str]:
    """Non-blank lines of a file, stripped."""
    with open(path, encoding="utf-8", errors="replace") as f:
        return [line.strip() for line in f if line.strip()]


def build_match_report(
    source_directory: str | Path,
    regex: str,
    file_pattern: str = "*.txt",
    recurse: bool = False,
) -> List[Worksheet]:
    """
    Find every regex match in the source files.

    Returns two worksheets: ``matchlist`` (file, match) and ``matchcount``
    (match, count) in first-seen order.
    """
    if not regex or not regex.strip():
        raise ConfigurationError("A regex to search for is required")
    source_directory = Path(source_directory)
    if not source_directory.is_dir():
        raise ConfigurationError(f"Source directory {source_directory} does not exist")
    try:
        pattern = re.compile(regex)
    except re.error as e:
        raise ConfigurationError(f"Invalid regex {regex!r}: {e}") from e

    matchlist = Worksheet(name="matchlist")
    matchlist.add_row("file", "match")
    counts: Dict[str, int] = {}

    for source_file in iter_source_files(source_directory, file_pattern, recurse):
        logger.debug("Pulling data from %s", source_file.name)
        try:
            lines = read_lines(source_file)
        except OSError as e:
            logger.warning("Skipping unreadable file %s: %s", source_file, e)
            continue
        for line in lines:
            for match in pattern.finditer(line):
                matchlist.add_row(source_file.resolve(), match.group(0))
                counts[match.group(0)] = counts.get(match.group(0), 0) + 1

    matchcount = Worksheet(name="matchcount")
    matchcount.add_row("match", "count")
    for value, count in counts.items():
        matchcount.add_row(value, count)

    logger.info("Found %d matches", len(matchlist.rows) - 1)
    return [matchlist, matchcount]
