import json
import logging
import sys
from datetime import datetime
from typing import Optional

from rebalancer_config import LoggingConfig, get_config

# Attributes every LogRecord carries; anything else arrived through extra=
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'taskName', 'exc_info', 'exc_text', 'stack_info', 'message', 'asctime',
}


class StructuredFormatter(logging.Formatter):
    """Formatter emitting either JSON objects or readable lines, with extra fields attached"""

    def __init__(self, log_format: str = 'text'):
        super().__init__()
        self.log_format = log_format

    def format(self, record):
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        extras = {}
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith('_'):
                continue
            if isinstance(value, datetime):
                value = value.strftime('%Y-%m-%d %H:%M:%S %Z')
            extras[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.log_format == 'json':
            log_data.update(extras)
            return json.dumps(log_data, default=str)

        base_msg = f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"
        for key, value in extras.items():
            base_msg += f" [{key}={value}]"
        if 'exception' in log_data:
            base_msg += f"\n{log_data['exception']}"
        return base_msg


def configure_root_logger(logging_config: Optional[LoggingConfig] = None, stream=None) -> logging.Logger:
    """Configure the root logger with a single structured console handler"""
    logging_config = logging_config or get_config().logging
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, logging_config.level.upper()))

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(StructuredFormatter(logging_config.format))
    root_logger.addHandler(console_handler)

    return root_logger
