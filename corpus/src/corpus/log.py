"""Structured JSON logging shared by the linter, site builder and API."""

import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TextIO

# Attributes every LogRecord carries; anything else came from `extra={...}`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    | {"message", "asctime", "taskName"}
)


class JsonFormatter(logging.Formatter):
    """Single-line JSON log formatter.

    Extra fields such as ``path`` or ``slug`` are emitted as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                log_entry[key] = value

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "INFO",
    suppress: Sequence[str] = (),
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger with the JSON formatter.

    Args:
        level: Root log level (e.g. "INFO", "DEBUG").
        suppress: Logger names to set to WARNING (e.g. "markdown_it",
                  "werkzeug") to reduce noise from third-party libs.
        stream: Where to write logs. Command-line tools pass ``sys.stderr``
                so their reports on stdout stay machine-readable.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in suppress:
        logging.getLogger(name).setLevel(logging.WARNING)
