"""
Centralized logging configuration for the ontology interpreter.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

LOGGER_NAME = "ontology_interpreter"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Setup and configure logger for the interpreter.

    Module loggers (``logging.getLogger(__name__)``) inside the package are
    children of this logger and inherit its handlers.

    Args:
        name: Logger name
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional file path to write logs
        format_string: Custom format string
        stream: Console stream (default: stdout)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # Default format: timestamp - level - message
    if format_string is None:
        format_string = "%(asctime)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Console handler (stdout unless told otherwise)
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Global logger instance
_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Get or create global logger instance, configured from config.yaml."""
    global _logger
    if _logger is None:
        from .config import get_config
        logging_config = get_config().get_logging_config()
        _logger = setup_logger(
            level=logging_config['level'],
            log_file=logging_config['file'],
            format_string=logging_config['format']
        )
    return _logger
