"""Logging setup for the transit analyzer.

Modules log through ``logging.getLogger(__name__)`` and attach context
with ``extra={...}``. The stock formatter drops those fields, so the
handler installed here appends them to each line, either as key=value
pairs or as a JSON object when structured logging is enabled.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import ObservabilityConfig

ROOT_LOGGER_NAME = "transit_analyzer"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
    | {"message", "asctime", "taskName"}
)

_handler: Optional[logging.Handler] = None


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extra_fields(record)
        if extras:
            line += " | " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line, ``extra`` fields included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(
    config: ObservabilityConfig,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Install a single handler on the package logger.

    Calling this again replaces the previous handler, so the level and
    format can be changed at runtime.

    Args:
        config: Logging settings.
        handler: Custom handler (defaults to a stderr StreamHandler).

    Returns:
        The configured package logger.
    """
    global _handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root_logger.removeHandler(_handler)

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    formatter: logging.Formatter
    if config.structured:
        formatter = JsonFormatter()
    else:
        formatter = ExtraFormatter(config.format)
    handler.setFormatter(formatter)

    root_logger.addHandler(handler)
    root_logger.setLevel(config.level)
    # Let logs propagate so pytest's caplog still sees them
    root_logger.propagate = True

    _handler = handler
    return root_logger


def reset_logging() -> None:
    """Remove the installed handler (mainly for testing)."""
    global _handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root_logger.removeHandler(_handler)
    root_logger.setLevel(logging.NOTSET)
    _handler = None
