from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

LOG_LEVEL_ENV = "SERVICE_MOCK_LOG_LEVEL"

# LogRecord attributes that are not user-supplied ``extra`` fields.
_RESERVED = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys() | {"message", "asctime"}
)


class JsonLogFormatter(logging.Formatter):
    # One JSON object per line: level, logger, message, timestamp and any extra fields.
    def format(self, record: logging.LogRecord) -> str:
        fields = {key: value for key, value in vars(record).items() if key not in _RESERVED}
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "fields": fields,
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def resolve_level(level: str | int | None) -> int:
    """Resolve the effective level.

    The environment variable wins over the argument. Unknown level names fall
    back to INFO rather than failing startup.
    """
    raw = os.environ.get(LOG_LEVEL_ENV) or level
    if isinstance(raw, int):
        return raw
    if not raw:
        return logging.INFO
    resolved = logging.getLevelName(str(raw).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = "info", fmt: str = "text") -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S")
        )
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
