"""
Logging configuration utility.
"""

import logging
import sys
from typing import Any, Dict, Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LEVEL = 'INFO'


def setup_logging(
    level: str = None,
    format_str: str = None,
    log_file: str = None,
    settings: Optional[Dict[str, Any]] = None
) -> logging.Logger:
    """
    Configure the root logger for a pinwatch run.

    Explicit arguments win over the ``logging`` section of the tool
    settings (keys ``level``, ``format`` and ``file``).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_str: Log message format
        log_file: Optional file to write logs to
        settings: The ``logging`` section of the tool settings

    Returns:
        Configured root logger
    """
    settings = settings or {}
    level = level or settings.get('level') or DEFAULT_LEVEL
    format_str = format_str or settings.get('format') or DEFAULT_FORMAT
    log_file = log_file or settings.get('file')

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    formatter = logging.Formatter(format_str)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # stdout is reserved for the report (and --json)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
