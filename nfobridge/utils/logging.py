"""
Logging utilities for NFOBridge
"""
import os
import re
import sys
import logging
import logging.handlers
import threading
from pathlib import Path
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER_NAME = "NFOBridge"

_setup_lock = threading.Lock()


def _get_local_timezone():
    """Get the local timezone, respecting TZ environment variable"""
    tz_name = os.environ.get('TZ', 'UTC')
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        # If zone name is invalid, fallback to UTC
        return timezone.utc


class TimezoneAwareFormatter(logging.Formatter):
    """Formatter that respects the container timezone"""
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.timezone = _get_local_timezone()

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.timezone)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec='seconds')


def _setup_logging() -> logging.Logger:
    """Attach console and (optional) rotating file handlers once"""
    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_nfobridge_configured", False):
        return logger

    with _setup_lock:
        if getattr(logger, "_nfobridge_configured", False):
            return logger

        debug = os.environ.get("DEBUG", "false").lower() in ("1", "true", "yes", "y", "on")
        logger.setLevel(logging.DEBUG if debug else logging.INFO)
        formatter = TimezoneAwareFormatter('[%(asctime)s] %(levelname)s: %(message)s')

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

        log_dir = os.environ.get("LOG_DIR")
        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path / "nfobridge.log", maxBytes=50*1024*1024, backupCount=3, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        logger._nfobridge_configured = True
    return logger


_SENSITIVE_PATTERNS = [
    (r'api_key=([a-zA-Z0-9_\-]+)', r'api_key=***masked***'),
    (r'password=([^\s&]+)', r'password=***masked***'),
    (r'token=([a-zA-Z0-9_\-]+)', r'token=***masked***'),
    (r'key=([a-zA-Z0-9_\-]{8,})', r'key=***masked***'),
]


def _mask_sensitive_data(msg: str) -> str:
    """Mask API keys and other sensitive data in log messages"""
    masked_msg = msg
    for pattern, replacement in _SENSITIVE_PATTERNS:
        masked_msg = re.sub(pattern, replacement, masked_msg, flags=re.IGNORECASE)
    return masked_msg


def _log(level: str, msg: str):
    """Log through the NFOBridge logger with sensitive data masking"""
    logger = _setup_logging()
    getattr(logger, level.lower(), logger.info)(_mask_sensitive_data(msg))
