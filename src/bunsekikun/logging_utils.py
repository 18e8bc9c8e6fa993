"""Logging setup: JSON lines or plain text, with readable Japanese in access logs.

Uvicorn logs request paths percent-encoded, so `/api/jisho?keyword=猫` shows up
as `keyword=%E7%8C%AB`. Both formatters here decode access-log paths.
"""

import json
import logging
from copy import copy
from datetime import datetime, timezone
from typing import Any
from urllib.parse import unquote

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ACCESS_LOGGER = "uvicorn.access"

# Attributes every LogRecord has; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def access_message(record: logging.LogRecord) -> str | None:
    """Uvicorn access line with the path decoded, or None for other records."""
    if record.name != ACCESS_LOGGER or not isinstance(record.args, tuple) or len(record.args) != 5:
        return None
    client_addr, method, full_path, http_version, status_code = record.args
    if isinstance(full_path, str):
        full_path = unquote(full_path, encoding="utf-8", errors="replace")
    return f'{client_addr} - "{method} {full_path} HTTP/{http_version}" {status_code}'


class JSONFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        log_data: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": access_message(record) or record.getMessage(),
        }
        log_data.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not callable(value)
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_data["stack"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = access_message(record)
        if message is not None:
            record = copy(record)
            record.message = message
        return super().formatMessage(record)


def setup_structured_logging(level: str = "INFO", json_format: bool = True) -> logging.Handler:
    """Send every log line, uvicorn's access log included, through one handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else TextFormatter())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # Only failed requests reach the access log
    uvicorn_access = logging.getLogger(ACCESS_LOGGER)
    uvicorn_access.handlers = [handler]
    uvicorn_access.setLevel(logging.WARNING)
    return handler
