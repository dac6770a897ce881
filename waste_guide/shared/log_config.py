"""
Waste Guide - Logging Setup

Configures the ``waste_guide`` logger tree from ``config.logging``:
- text format for local runs
- JSON lines for log aggregators, including any ``extra={...}`` fields

Usage:
    from waste_guide.shared.log_config import configure_logging

    configure_logging()  # Uses get_config()
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from waste_guide.shared.config import Settings, get_config

ROOT_LOGGER = "waste_guide"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling again replaces the handler instead of stacking a second one.

    Args:
        config: Configuration object (uses default if not provided)

    Returns:
        The configured ``waste_guide`` logger
    """
    config = config or get_config()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(config.logging.level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_waste_guide_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._waste_guide_handler = True
    if config.logging.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    return logger
