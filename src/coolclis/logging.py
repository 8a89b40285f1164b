"""Logging configuration with structured JSON output."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

APP_LOGGER = "coolclis"


class ColorCodes:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    BOLD = "\033[1m"


LEVEL_COLORS = {
    "DEBUG": ColorCodes.BLUE,
    "INFO": ColorCodes.GREEN,
    "WARNING": ColorCodes.YELLOW,
    "ERROR": ColorCodes.RED + ColorCodes.BOLD,
    "CRITICAL": ColorCodes.MAGENTA + ColorCodes.BOLD,
}


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON, color-coded by level."""

    def __init__(self, colors: bool = True):
        super().__init__()
        self.colors = colors

    def format(self, record: logging.LogRecord) -> str:
        msg = record.msg
        output: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        # Dict payloads are the common case: logger.debug({"event": ...})
        if isinstance(msg, dict):
            payload = dict(msg)
            output["msg"] = payload.pop("event", "")
            if payload:
                output["data"] = payload
        else:
            output["msg"] = record.getMessage()

        if hasattr(record, "data"):
            output["data"] = record.data

        if record.exc_info:
            output["exc"] = self.formatException(record.exc_info)

        json_str = json.dumps(output, default=str)
        if not self.colors:
            return json_str
        color = LEVEL_COLORS.get(record.levelname, "")
        return f"{color}{json_str}{ColorCodes.RESET}"


def configure_logging(level: str = "WARNING") -> None:
    """Set up application logging on stderr. Safe to call repeatedly."""
    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter(colors=sys.stderr.isatty()))
        app_logger.addHandler(handler)
        app_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the application namespace."""
    if name == APP_LOGGER or name.startswith(f"{APP_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER}.{name}")


def log_with_data(
    logger: logging.Logger,
    level: int,
    msg: str,
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """Log a message with optional structured data."""
    if data:
        logger.log(level, msg, extra={"data": data})
    else:
        logger.log(level, msg)
