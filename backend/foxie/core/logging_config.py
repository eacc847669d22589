"""
Centralized logging configuration for the Foxie backend.

Console output is human-readable and colored; the optional file output is a
rotating JSON log. Structured fields are passed through
``extra={"extra_fields": {...}}`` on any log call.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

SENSITIVE_KEYS = ['password', 'token', 'secret', 'authorization', 'api_key', 'api-key', 'signature']


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        # Work on a copy so file handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:8s}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            log_data.update(extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config: Any) -> None:
    """
    Configure the root logger from application settings.

    Args:
        config: Settings object with the ``log_*`` fields
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if config.log_console_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ColoredFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(console_handler)

    if config.log_file_enabled:
        log_path = Path(config.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        if config.log_json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
        root_logger.addHandler(file_handler)

    for noisy in ("httpx", "httpcore", "urllib3", "google", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root_logger.info(
        f"Logging initialized: level={config.log_level.upper()}, "
        f"console={config.log_console_enabled}, file={config.log_file_enabled}"
    )


def filter_sensitive_data(data: Any, sensitive_keys: Optional[list] = None) -> Any:
    """
    Mask values whose key looks like a credential.

    Args:
        data: dict, list or primitive
        sensitive_keys: Substrings that mark a key as sensitive

    Returns:
        A copy of ``data`` with sensitive values replaced by "***FILTERED***"
    """
    keys = sensitive_keys or SENSITIVE_KEYS

    if isinstance(data, dict):
        return {
            key: "***FILTERED***" if any(s in str(key).lower() for s in keys)
            else filter_sensitive_data(value, keys)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [filter_sensitive_data(item, keys) for item in data]
    return data


def truncate_large_data(data: str, max_length: int = 5000) -> str:
    """Cut ``data`` to ``max_length`` characters, noting the original length."""
    if len(data) <= max_length:
        return data
    return data[:max_length] + f"... (truncated, total length: {len(data)})"
