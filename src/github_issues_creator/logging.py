"""Structured logging configuration.

Each log record becomes one JSON object on stderr, so the log never interleaves
with the report printed on stdout. Every line carries the target repository and
whether the run is a dry run. The keys the importer uses to say what a record is
about (batch file, issue title, label, milestone, error) are lifted to the top
level; anything else passed via ``extra=`` is nested under ``"extra"``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Keys that are top-level fields in every JSON line.
CONTEXT_FIELDS: tuple[str, ...] = ("repo", "path", "title", "label", "milestone", "error")

# Attributes present on every LogRecord; whatever is left over came from `extra=`.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render records as JSON lines stamped with the run's repository and mode."""

    def __init__(self, *, repository: str | None = None, dry_run: bool = False) -> None:
        super().__init__()
        self.repository = repository
        self.dry_run = dry_run

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "dry_run": self.dry_run,
        }
        if self.repository:
            payload["repo"] = self.repository

        extra: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key in CONTEXT_FIELDS:
                payload[key] = value
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, repository: str | None = None, dry_run: bool = False) -> None:
    """Send all logging to stderr as JSON lines tagged with the run context."""

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter(repository=repository, dry_run=dry_run))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    # PyGithub logs full request/response dumps at DEBUG.
    logging.getLogger("github").setLevel(max(logging.getLogger().level, logging.INFO))
