"""Log formatting for the Discogs client.

Library modules log through ``logging.getLogger(__name__)`` and pass the
request context as ``extra=`` fields named in :data:`DISCOGS_FIELDS`
(the API path, the HTTP status, the remaining quota, the cooldown length).
Both formatters render those fields next to the message, together with the
current request ID. ``setup_logging`` is for applications and the MCP entry
point; the library never configures handlers itself.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from discogs_api.services.request_context import get_request_id

# extra= keys used by discogs_api.sdk, mapped to their label in text output.
DISCOGS_FIELDS: dict[str, str] = {
    "discogs_path": "path",
    "status_code": "status",
    "rate_remaining": "remaining",
    "wait_seconds": "wait",
}

_BASE_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def discogs_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The Discogs context attached to *record*, skipping unset values."""
    fields = {}
    for key in DISCOGS_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            fields[key] = value
    return fields


def _format_exception(record: logging.LogRecord) -> str | None:
    if record.exc_info and record.exc_info[0] is not None:
        return "".join(traceback.format_exception(*record.exc_info))
    return None


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Discogs context goes under a ``"discogs"`` key; any other ``extra=``
    values are copied to the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        request_id = get_request_id()
        if request_id:
            entry["discogs_request_id"] = request_id

        fields = discogs_fields(record)
        if fields:
            entry["discogs"] = fields

        for key, value in vars(record).items():
            if key in _BASE_RECORD_ATTRS or key in DISCOGS_FIELDS or key.startswith("_"):
                continue
            entry[key] = value

        exception = _format_exception(record)
        if exception:
            entry["exception"] = exception

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``2024-05-01 12:00:00 WARNING  [1a2b3c4d] logger - msg path=releases/1 status=404``"""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        request_id = get_request_id()
        rid_prefix = f"[{request_id[:8]}] " if request_id else ""

        line = f"{ts} {record.levelname:<8} {rid_prefix}{record.name} - {record.message}"
        context = " ".join(
            f"{DISCOGS_FIELDS[key]}={value}" for key, value in discogs_fields(record).items()
        )
        if context:
            line += " " + context

        exception = _format_exception(record)
        if exception:
            line += "\n" + exception
        return line


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Send log output to stderr in the chosen format. Call once at startup.

    httpx logs every request at INFO; it is raised to WARNING so that only
    the client's own per-request lines (with path and status) show up.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if log_format.lower() == "json" else TextFormatter())
    root.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
