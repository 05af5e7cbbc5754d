"""Structured Logging - JSON formatter, TRACE level, and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (record, path, section, error_code) surfaced when present
    - JSON format for log shippers, human-readable text otherwise
    - TRACE (5) sits below DEBUG and is used for first-run state creation and saves

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once by bootstrap, before config is loaded
"""

import json
import logging
from datetime import datetime, timezone

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_EXTRA_KEYS = ("record", "path", "section", "error_code", "feature")


def trace(logger: logging.Logger, msg: str, *args, **kwargs) -> None:
    """Log at TRACE level."""
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args, **kwargs)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def _resolve_level(level: str) -> int:
    if level.upper() == "TRACE":
        return TRACE
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure root logging for the process."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(_resolve_level(level))
