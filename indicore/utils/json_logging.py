"""JSON logging setup for scripts and demos."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# LogRecord attributes that are not user-supplied `extra` fields
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname', 'levelno',
    'lineno', 'module', 'msecs', 'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'taskName', 'getMessage',
}


class JSONFormatter(logging.Formatter):
    """Formats records as one JSON object per line, including `extra` fields."""

    def format(self, record):
        log_obj = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_obj[key] = value
        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_obj, default=str)


def setup_logging(log_dir: Optional[str] = None, prefix: str = 'indicore',
                  console_level: int = logging.INFO) -> Optional[Path]:
    """
    Configure the root logger.

    Args:
        log_dir: Directory for a JSON log file (no file when None)
        prefix: Log file name prefix
        console_level: Level of the console handler

    Returns:
        Path of the JSON log file, or None
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(console_handler)

    if log_dir is None:
        return None

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    log_file = path / f'{prefix}_{datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")}.json'

    # File handler with JSON formatter
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    return log_file
