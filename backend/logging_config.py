"""Structured logging configuration for ComplianceLens."""

from __future__ import annotations

import logging
import sys

from backend.utils.time import utc_now

_CONTEXT_KEYS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "scoring_ms",
    "records",
)


class KeyValueFormatter(logging.Formatter):
    """Formats log records as ``[LEVEL] timestamp message key=value`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Request and scoring-pass context injected through ``extra=``.
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        parts = [
            f"[{log_entry['level']:<7}]",
            f"{log_entry['timestamp']}",
            f"{log_entry['logger']}:",
            f"{log_entry['message']}",
        ]
        for key in _CONTEXT_KEYS:
            if key in log_entry:
                parts.append(f"{key}={log_entry[key]}")

        if "exception" in log_entry:
            parts.append(f"\n{log_entry['exception']}")

        return " ".join(parts)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    root_logger = logging.getLogger()

    # Avoid adding handlers multiple times
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(KeyValueFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
