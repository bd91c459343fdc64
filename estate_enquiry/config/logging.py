"""
Centralized logging configuration for the enquiry service.

This module provides:
- JSON structured logging for log aggregation
- Console output plus an optional rotating log file
- Sensitive data filtering (emails, API keys, tokens, passwords)
- Request ID context support via contextvars
- Environment-based log levels and timestamp timezone
"""

import logging
import os
import re
from contextvars import ContextVar
from typing import Any, Dict, Optional
from datetime import datetime
from zoneinfo import ZoneInfo

from pythonjsonlogger import jsonlogger


# Context variable for request ID tracking across async operations
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class SensitiveDataFilter(logging.Filter):

    # Patterns to redact
    EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
    API_KEY_PATTERN = re.compile(r'(api[_-]?key|apikey|x-api-key)[\s:=]+[^\s&]+', re.IGNORECASE)
    TOKEN_PATTERN = re.compile(r'(token|bearer|authorization)[\s:=]+[^\s&]+', re.IGNORECASE)
    PASSWORD_PATTERN = re.compile(r'(password|passwd|pwd)[\s:=]+[^\s&]+', re.IGNORECASE)

    SENSITIVE_KEYS = {
        'password', 'passwd', 'pwd', 'secret', 'token', 'access_token',
        'api_key', 'apikey', 'authorization', 'auth', 'email', 'phone'
    }

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact sensitive data from log messages."""
        if isinstance(record.msg, str):
            record.msg = self._redact_value(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self._redact_dict(record.args)
            elif isinstance(record.args, (list, tuple)):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        # Structured fields passed through extra= land directly on the record
        for key in self.SENSITIVE_KEYS:
            if key in record.__dict__ and record.__dict__[key] is not None:
                record.__dict__[key] = '[REDACTED]'

        return True

    def _redact_value(self, value: Any) -> Any:
        """Redact sensitive data from a value."""
        if isinstance(value, str):
            value = self.EMAIL_PATTERN.sub('[EMAIL_REDACTED]', value)
            value = self.API_KEY_PATTERN.sub(r'\1=[REDACTED]', value)
            value = self.TOKEN_PATTERN.sub(r'\1=[REDACTED]', value)
            value = self.PASSWORD_PATTERN.sub(r'\1=[REDACTED]', value)
        elif isinstance(value, dict):
            value = self._redact_dict(value)
        elif isinstance(value, (list, tuple)):
            value = type(value)(self._redact_value(item) for item in value)
        return value

    def _redact_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Redact sensitive keys in dictionaries."""
        redacted = {}
        for key, value in data.items():
            if key.lower() in self.SENSITIVE_KEYS:
                redacted[key] = '[REDACTED]'
            else:
                redacted[key] = self._redact_value(value)
        return redacted


class RequestContextFilter(logging.Filter):
    """Add request ID to log records from context."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        record.request_id = request_id if request_id else '-'
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields."""

    def __init__(self, *args, timezone_name: str = 'UTC', **kwargs):
        super().__init__(*args, **kwargs)
        self.timezone = ZoneInfo(timezone_name)

    def formatTime(self, record, datefmt=None):
        """Render the record time in the configured timezone."""
        dt = datetime.fromtimestamp(record.created, tz=ZoneInfo('UTC')).astimezone(self.timezone)

        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat()

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record, self.datefmt)
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        if getattr(record, 'request_id', '-') != '-':
            log_record['request_id'] = record.request_id
        else:
            log_record.pop('request_id', None)


def configure_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure centralized logging for the application.

    Args:
        log_level: Optional log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                  If not provided, reads from LOG_LEVEL env var, defaults to INFO

    Returns:
        Configured root logger

    Environment Variables:
        LOG_LEVEL: Log level (default: INFO)
        LOG_TIMEZONE: Timezone used for timestamps (default: UTC)
        LOG_FILE: Path to log file (default: logs/app.log)
        LOG_FILE_ENABLED: Enable file logging (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10485760 = 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    level = getattr(logging, log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    formatter = CustomJsonFormatter(
        fmt='%(timestamp)s %(level)s %(name)s %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%S%z',
        timezone_name=os.getenv('LOG_TIMEZONE', 'UTC')
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SensitiveDataFilter())
    console_handler.addFilter(RequestContextFilter())
    root_logger.addHandler(console_handler)

    log_file_enabled = os.getenv('LOG_FILE_ENABLED', 'true').lower() == 'true'

    if log_file_enabled:
        from logging.handlers import RotatingFileHandler

        log_file = os.getenv('LOG_FILE', 'logs/app.log')
        max_bytes = int(os.getenv('LOG_MAX_BYTES', '10485760'))  # 10MB default
        backup_count = int(os.getenv('LOG_BACKUP_COUNT', '5'))

        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(SensitiveDataFilter())
        file_handler.addFilter(RequestContextFilter())
        root_logger.addHandler(file_handler)

    # Suppress overly verbose third-party loggers
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('apscheduler').setLevel(logging.WARNING)
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return logging.getLogger(name)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def clear_request_id() -> None:
    request_id_var.set(None)
