"""
JSON request logging for the HTTP middleware.

Each request gets its own RequestLogger bound to a fresh correlation ID;
every line it writes is a JSON object carrying that ID, so the start,
completion and failure of one request can be joined in the log stream.
"""

import json
import logging
import uuid
from datetime import UTC, datetime
from typing import Any

REQUEST_LOGGER_NAME = "kpi_dashboard.requests"
CORRELATION_ID_PREFIX = "REQ_"


def new_correlation_id() -> str:
    """Return a fresh request ID, e.g. REQ_1a2b3c4d5e6f."""
    return f"{CORRELATION_ID_PREFIX}{uuid.uuid4().hex[:12]}"


class RequestLogger:
    """Writes JSON log lines tagged with one request's correlation ID."""

    def __init__(self, correlation_id: str | None = None, name: str = REQUEST_LOGGER_NAME):
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id or new_correlation_id()

    def _emit(self, level: int, message: str, context: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": logging.getLevelName(level),
            "message": message,
            "correlation_id": self.correlation_id,
        }
        if context:
            entry["context"] = context
        self.logger.log(level, json.dumps(entry, default=str))

    def info(self, message: str, **context: Any) -> None:
        self._emit(logging.INFO, message, context)

    def error(self, message: str, **context: Any) -> None:
        self._emit(logging.ERROR, message, context)
