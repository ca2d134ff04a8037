"""Logging infrastructure for Spice Route.

Provides centralized logging with configurable format (text/JSON) and level.
Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)

Log lines go to stderr so that ``query.py`` output on stdout (recipe panels,
``--debug`` JSON) can be piped without log noise mixed in.
"""

import json
import logging
import os
import sys
from typing import Any, Dict


# Extra record attributes set by call sites (``extra={...}``) and shown in both formats
CONTEXT_FIELDS = ("search_type", "recipe_name")


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the context extras present on ``record``."""
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON string with timestamp, level, logger name, message, search
            context, and optional traceback.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(record_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class RichTextFormatter(logging.Formatter):
    """Formatter that outputs one colored text line per record.

    Search context is appended as ``[key=value]`` pairs. Colors are only
    emitted when ``use_color`` is set (the handler stream is a terminal).
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%H:%M:%S")
        message = f"{timestamp} {record.levelname:<8} {record.name}: {record.getMessage()}"

        context = record_context(record)
        if context:
            message += " " + " ".join(f"[{key}={value}]" for key, value in context.items())

        if self.use_color and record.levelname in self.COLORS:
            message = f"{self.COLORS[record.levelname]}{message}{self.RESET}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def get_logger(name: str) -> logging.Logger:
    """Create and configure logger instance.

    Args:
        name: Logger name, typically module name.

    Returns:
        Configured logger instance.
    """
    logger_instance = logging.getLogger(name)

    # Streamlit re-executes the script on every interaction; never stack handlers
    if logger_instance.handlers:
        return logger_instance

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    log_type = os.getenv("LOG_TYPE", "text").lower()

    logger_instance.setLevel(log_level)
    # Streamlit installs its own root handler; avoid printing every line twice
    logger_instance.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if log_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(RichTextFormatter(use_color=sys.stderr.isatty()))

    logger_instance.addHandler(handler)
    return logger_instance


logger = get_logger("spice_route")

# Suppress request-level chatter from the Gemini SDK and its HTTP transport
logging.getLogger("google.genai").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
