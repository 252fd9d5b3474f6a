"""
Logging configuration for the URL shortener.

Modes (picked from Settings.env):
    - local: human-readable lines, DEBUG
    - dev:   JSON lines, DEBUG
    - prod:  JSON lines, INFO (also used for unknown values)

All service loggers live under the "url_shortener" namespace. Handlers and
the manager receive their logger explicitly instead of reaching for a global.
"""

import json
import logging
import sys
from typing import Any, MutableMapping, Tuple

from .config import ENV_DEV, ENV_LOCAL

LOGGER_NAME = "url_shortener"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; `extra` fields are merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """
    Attach key/value context (operation, request_id, ...) to each record.

    The context goes into `extra` for the JSON formatter and is appended to
    the message so it is also visible in the plain-text format.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        if extra:
            ctx = " ".join(f"{k}={v}" for k, v in extra.items())
            msg = f"{msg} [{ctx}]"
        return msg, kwargs


def setup_logging(env: str) -> logging.Logger:
    """
    Configure and return the service logger for the given environment.

    Safe to call more than once (each app build replaces the handler).
    """
    if env == ENV_LOCAL:
        level = logging.DEBUG
        formatter: logging.Formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    elif env == ENV_DEV:
        level = logging.DEBUG
        formatter = JsonFormatter()
    else:
        # Unknown env falls back to prod settings.
        level = logging.INFO
        formatter = JsonFormatter()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def with_context(logger: logging.Logger, **context: Any) -> ContextAdapter:
    """Return an adapter that stamps `context` on every record."""
    return ContextAdapter(logger, context)
