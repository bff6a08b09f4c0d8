import logging
import sys
import json
from typing import Any

from .config import settings

# Attributes callers pass through ``extra=`` that end up in the JSON line
EXTRA_FIELDS = (
    "request_id",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "user_id",
    "detail",
    "error",
)


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno,
        }

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def setup_logging(level: str = settings.LOG_LEVEL):
    """
    Configure root logger to output JSON to stdout.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    # Remove existing handlers to avoid duplicates (e.g. from Uvicorn)
    logger.handlers = []
    logger.addHandler(handler)

    # Access lines are already written by RequestTrackingMiddleware
    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.access").propagate = False
