"""Logging setup for the webp optimizer, local and inside AWS Lambda."""

import os
import sys
import json
import logging
from typing import Optional

STRUCTURED_FORMAT = (
    "%(asctime)s | %(name)s | %(levelname)-8s | "
    "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
)
SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

FORMAT_TYPES = ("structured", "simple", "json")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, the shape CloudWatch Logs Insights indexes."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def resolve_level(level: Optional[str] = None) -> int:
    """
    Pick the log level.

    Precedence: explicit ``level``, then LOG_LEVEL, then the Lambda
    runtime's AWS_LAMBDA_LOG_LEVEL, then INFO. Unknown names fall back to INFO.
    """
    name = level or os.getenv("LOG_LEVEL") or os.getenv("AWS_LAMBDA_LOG_LEVEL") or "INFO"
    return getattr(logging, name.upper(), logging.INFO)


def resolve_format(format_type: str = "structured") -> str:
    """
    Pick the formatter type.

    LOG_FORMAT wins; otherwise a Lambda function configured with
    AWS_LAMBDA_LOG_FORMAT=JSON gets JSON lines. Unknown names mean "simple".
    """
    env_format = os.getenv("LOG_FORMAT")
    if env_format:
        chosen = env_format.lower()
    elif os.getenv("AWS_LAMBDA_LOG_FORMAT", "").upper() == "JSON":
        chosen = "json"
    else:
        chosen = format_type.lower()
    return chosen if chosen in FORMAT_TYPES else "simple"


def build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JsonFormatter()
    if format_type == "structured":
        return logging.Formatter(STRUCTURED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(SIMPLE_FORMAT)


def setup_logger(
    name: str = "webp-optimizer",
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Configure a named logger writing to stdout.

    Args:
        name: Logger name (defaults to "webp-optimizer")
        level: Log level override (see resolve_level)
        format_type: "structured", "simple" or "json" (see resolve_format)

    Returns:
        Configured logger instance

    The logger gets a single handler and does not propagate, so records are
    not printed twice by the handler the Lambda runtime installs on root.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(resolve_format(format_type)))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = "webp-optimizer") -> logging.Logger:
    """Get a logger instance with consistent configuration."""
    return setup_logger(name)
