"""Responder Logging — one-line JSON records for negotiation and error events.

Records carry the time they were created, level, logger and message, plus
whichever negotiation fields (``content_type``, ``status``, ``error_code``,
``path``) were passed through ``extra``.  ``setup_logging`` owns a single root
handler: calling it again (e.g. on every app lifespan) replaces that handler
instead of adding another one.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

RESPONSE_FIELDS = ("content_type", "status", "error_code", "path")

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_installed_handler: Optional[logging.Handler] = None


class ResponseLogFormatter(logging.Formatter):
    """Render a record and its response fields as a JSON object."""

    def __init__(self, fields: Iterable[str] = RESPONSE_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, record.__dict__[name])
            for name in self.fields
            if record.__dict__.get(name) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the responder's root handler."""
    global _installed_handler

    handler = logging.StreamHandler()
    handler.setFormatter(
        ResponseLogFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    )

    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.addHandler(handler)
    resolved = getattr(logging, level.upper(), None)
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    _installed_handler = handler
    return handler
