"""
Logging Configuration Module.

Centralized logging setup for the ReadCycle service: one console handler,
an optional rotating file handler and per-package levels.

Formats:
- ``simple``: level, logger and message
- ``detailed``: adds timestamp, source location and function
- ``json``: one JSON object per line, safe for log shippers
"""

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def _get_logging_config():
    """Read the logging options, preferring the settings model over raw env vars.

    The settings module imports this one, so it is loaded lazily.
    """
    try:
        from readcycle.server.core.config import settings

        return {
            "log_level": settings.log_level.upper(),
            "log_format": settings.log_format,
            "log_file_dir": settings.log_file_dir,
            "enable_file_logging": settings.enable_file_logging,
        }
    except ImportError:
        return {
            "log_level": os.getenv("READCYCLE_LOG_LEVEL", "INFO").upper(),
            "log_format": os.getenv("READCYCLE_LOG_FORMAT", "detailed"),
            "log_file_dir": os.getenv("READCYCLE_LOG_FILE_DIR", "logs"),
            "enable_file_logging": os.getenv("READCYCLE_ENABLE_FILE_LOGGING", "false").lower()
            in ("true", "1", "yes"),
        }


_config = _get_logging_config()
LOG_LEVEL = _config["log_level"]
LOG_FORMAT = _config["log_format"]
LOG_FILE_DIR = _config["log_file_dir"]
ENABLE_FILE_LOGGING = _config["enable_file_logging"]

LOG_FILE_NAME = "readcycle.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

MODULE_LOG_LEVELS = {
    "readcycle.core": "INFO",
    "readcycle.core.database": "INFO",
    "readcycle.server": "INFO",
    "readcycle.server.api": "DEBUG",
    "readcycle.server.services": "DEBUG",
    "readcycle.server.middleware": "INFO",
    # Third-party noise
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "multipart": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Extra attributes passed through ``logger.x(..., extra={...})`` are copied
    into the object when they are JSON serializable.
    """

    _RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "module": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in self._RESERVED or key.startswith("_"):
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = repr(value)
            payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(fmt: str) -> logging.Formatter:
    """Formatter for a format name; unknown names fall back to ``detailed``."""
    if fmt == "json":
        return JsonFormatter()
    if fmt == "simple":
        return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Whether to enable file logging; also requires ``READCYCLE_ENABLE_FILE_LOGGING``
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = build_formatter(fmt)

    # Capture all levels, filter at handler level
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Path(LOG_FILE_DIR) / LOG_FILE_NAME,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually called with ``__name__``."""
    return logging.getLogger(name)


setup_logging()
