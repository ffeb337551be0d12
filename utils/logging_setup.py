from __future__ import annotations

import logging
import sys
from typing import Any

from config.settings import get_settings


_INITIALIZED: bool = False

# HTTP client libraries log every request at INFO; pages and AI calls are logged by our own steps
_QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "openai")

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "search_id=%(search_id)s step=%(step)s status=%(status)s "
    "provider=%(provider)s error=%(error)s"
)


class SafeExtraFormatter(logging.Formatter):
    """Renders the structured extra= fields used across discovery, scoring and extraction.

    Records that omit a field get "-" so one format string serves every logger.
    """

    DEFAULTS: dict[str, Any] = {
        "search_id": "-",
        "step": "-",
        "status": "-",
        "provider": "-",
        "error": "-",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for key, value in self.DEFAULTS.items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return super().format(record)


def init_logging(level: str | None = None) -> None:
    """Configure the root logger once per process (CLI, pipeline runner, worker threads)."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    log_level = getattr(logging, (level or get_settings().log_level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(SafeExtraFormatter(fmt=LOG_FORMAT))
        root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _INITIALIZED = True
