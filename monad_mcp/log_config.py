"""Process-wide logging setup shared by the HTTP and stdio entry points."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Optional

EXTRA_FIELDS = ("tool", "request_id", "error")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: str = "INFO", log_format: str = "json", stream: Optional[IO[str]] = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Logs never go to stdout so the stdio transport can use it for protocol
    messages.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), handlers=[handler], force=True)
