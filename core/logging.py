"""Logging setup: console always, daily-rotated file when ``BACKEND_LOG_DIR`` is set."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict

from core.utils.env import get_env

_configured = False

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = (
    "aiosqlite",
    "asyncpg",
    "boto3",
    "botocore",
    "h11",
    "httpcore",
    "httpx",
    "openai",
    "s3transfer",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "urllib3",
)


class _SkipHealthChecks(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


class _RelativePathFilter(logging.Filter):
    """Expose ``record.relpath`` with the container's ``/app/`` prefix stripped."""

    def filter(self, record: logging.LogRecord) -> bool:
        path = record.pathname or ""
        record.relpath = path[len("/app/"):] if path.startswith("/app/") else path
        return True


def _level(name: str, fallback: str) -> str:
    value = (get_env(name) or "").strip().upper()
    return value if isinstance(logging.getLevelName(value), int) else fallback


def _file_handler(log_dir: str, level: str) -> Dict[str, Any]:
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return {
        "class": "logging.handlers.TimedRotatingFileHandler",
        "level": level,
        "formatter": "standard",
        "filters": ["relpath"],
        "filename": str(directory / (get_env("BACKEND_LOG_FILE") or "backend.log")),
        "when": "midnight",
        "backupCount": int(get_env("BACKEND_LOG_RETENTION") or "7"),
        "encoding": "utf-8",
    }


def setup_logging(force: bool = False) -> None:
    """Apply the dictConfig once per process unless ``force`` is set."""

    global _configured
    if _configured and not force:
        return

    root_level = _level("BACKEND_LOG_LEVEL", "INFO")
    with_ms = (get_env("BACKEND_LOG_TIME_MS") or "").lower() in {"1", "true", "yes", "on"}
    timestamp = "%(asctime)s.%(msecs)03d" if with_ms else "%(asctime)s"

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": _level("BACKEND_LOG_CONSOLE_LEVEL", root_level),
            "formatter": "standard",
            "filters": ["relpath"],
            "stream": "ext://sys.stdout",
        },
    }
    log_dir = get_env("BACKEND_LOG_DIR")
    if log_dir:
        handlers["file"] = _file_handler(log_dir, _level("BACKEND_LOG_FILE_LEVEL", root_level))
    active = list(handlers)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "relpath": {"()": _RelativePathFilter},
                "skip_health": {"()": _SkipHealthChecks},
            },
            "formatters": {
                "standard": {
                    "format": f"{timestamp} %(levelname)s [%(relpath)s:%(lineno)d] - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": handlers,
            "root": {"level": root_level, "handlers": active},
            "loggers": {
                "uvicorn": {"level": "WARNING", "handlers": active, "propagate": False},
                "uvicorn.error": {"level": "WARNING", "handlers": active, "propagate": False},
                "uvicorn.access": {
                    "level": _level("BACKEND_ACCESS_LOG_LEVEL", "WARNING"),
                    "handlers": ["console"],
                    "filters": ["skip_health"],
                    "propagate": False,
                },
            },
        }
    )
    logging.captureWarnings(True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


__all__ = ["setup_logging"]
