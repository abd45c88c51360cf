"""
Logging for TextTools runs.

Console logging for every module goes through the ``texttools`` logger
hierarchy (``logging.getLogger(__name__)``). ``configure_logging`` attaches a
single stderr handler to it.

Site builds additionally emit one structured JSON line per build event on the
``texttools.build`` logger so a run can be audited afterwards:

- build.started
- tables.loaded
- page.written
- page.write_failed
- navigation.written
- build.completed

Usage:
    from texttools.logger import BuildLogger, configure_logging

    configure_logging("info")
    build_log = BuildLogger(run="site")
    build_log.log_page_written(path="Guides/_index.md", weight=3, title="Guides")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_ROOT_LOGGER_NAME = "texttools"
_HANDLER_NAME = "texttools-console"

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_build_logger = logging.getLogger("texttools.build")


class _JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line unless it already is one."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith("{"):
            return message
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": message,
        }
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "info", log_format: str = "text") -> logging.Logger:
    """
    Attach the console handler to the ``texttools`` logger.

    Safe to call repeatedly; the handler is replaced rather than duplicated.

    Args:
        level: debug, info, warning or error
        log_format: text for humans, json for log shippers

    Returns:
        The configured ``texttools`` logger
    """
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)
    return root


class BuildLogger:
    """
    Structured logger for site build events.

    Each entry includes standard fields for filtering:
    - timestamp, level, event
    - service and run identifiers
    - event-specific attributes
    """

    def __init__(
        self,
        run: str,
        service_name: str = "texttools",
        extra_labels: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize build logger.

        Args:
            run: Name of the run (e.g. "site")
            service_name: Service name for log attribution
            extra_labels: Additional labels attached to every entry
        """
        self.run = run
        self.service_name = service_name
        self.extra_labels = extra_labels or {}
        self._logger = _build_logger

    def _emit(self, event: str, level: str = "info", **extra_fields: Any) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "service": self.service_name,
            "run": self.run,
        }
        entry.update({k: v for k, v in extra_fields.items() if v is not None})

        if self.extra_labels:
            entry["labels"] = self.extra_labels

        log_line = json.dumps(entry, default=str)

        if level == "error":
            self._logger.error(log_line)
        elif level == "warn":
            self._logger.warning(log_line)
        else:
            self._logger.info(log_line)

    def log_build_started(self, page_list: str, content_types: str, levels: int) -> None:
        """Log the start of a build."""
        self._emit(
            event="build.started",
            page_list=page_list,
            content_types=content_types,
            levels=levels,
        )

    def log_tables_loaded(self, content_types: int, pages: int, filtered_out: int) -> None:
        """Log how many records were read and kept."""
        self._emit(
            event="tables.loaded",
            content_types=content_types,
            pages=pages,
            filtered_out=filtered_out,
        )

    def log_page_written(self, path: str, weight: int, title: str) -> None:
        """Log a content file written to disk."""
        self._emit(event="page.written", path=path, weight=weight, title=title)

    def log_page_write_failed(self, path: str, error: BaseException) -> None:
        """Log a content file that could not be written."""
        self._emit(
            event="page.write_failed",
            level="error",
            path=path,
            error_type=type(error).__name__,
            error=str(error),
        )

    def log_navigation_written(self, path: str, roots: int) -> None:
        """Log the navigation data file."""
        self._emit(event="navigation.written", path=path, roots=roots)

    def log_build_completed(self, written: int, failed: int) -> None:
        """Log the end of a build."""
        self._emit(
            event="build.completed",
            level="warn" if failed else "info",
            written=written,
            failed=failed,
        )
