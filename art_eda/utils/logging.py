"""
Logging setup shared by the CLI, the orchestrator, the pruner and the reports.

Two output modes on stderr:
- console: ``time | LEVEL | logger | message``
- JSON (``LOG_JSON=true``): one object per line, with every ``extra=`` field
  promoted to a top-level key

Example:
    from art_eda.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", json_logs=True)
    log = get_logger(__name__)
    log.info("pruned", extra={"table": "public.work", "removed": 12})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

# psycopg_pool reports every connection it opens at INFO.
_QUIET_LOGGERS = ("psycopg.pool",)


def _json_formatter(record: logging.LogRecord) -> str:
    """Serialize a record to one JSON line; unknown types fall back to str()."""
    payload: Dict[str, Any] = {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update(
        (key, value)
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and key != "extra"
    )
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Install a single stderr handler on the root logger.

    Parameters
    ----------
    level : str
        Level name applied to the root logger and its handler.
    json_logs : bool
        Emit JSON lines instead of the console format.

    Loggers created before the call keep working; chatty third-party loggers
    are capped at WARNING.
    """
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json" if json_logs else "console",
                "level": level,
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }
    logging.config.dictConfig(config)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger; the root logger when `name` is None."""
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "get_logger"]
