"""Logging configuration driven by ObservabilityConfig.

Components log through module loggers and attach context with
``extra={...}``. The structured formatter emits those extras as JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config
from .domain.errors import ConfigurationError

# Attributes present on every LogRecord; anything else came from ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger.

    Args:
        config: Observability settings (defaults to the app config).

    Raises:
        ConfigurationError: If the log level is not a known level name.
    """
    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {config.level}",
            setting_name="QR_LOG_LEVEL",
            expected_type="DEBUG|INFO|WARNING|ERROR|CRITICAL",
        )

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
