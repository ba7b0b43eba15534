"""
Logging configuration for matchagent

Colored console output plus an optional plain-text log file, shared by the
agent server, the join handshake and the CLI.
"""

import logging
import sys
import re
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output"""

    COLORS = {
        'DEBUG': '\033[32m',      # Green text
        'INFO': '\033[36m',       # Cyan text
        'WARNING': '\033[33m',    # Yellow text
        'ERROR': '\033[31m',      # Red text
        'CRITICAL': '\033[41m\033[97m', # Red background + white text
        'RESET': '\033[0m'
    }

    ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def format(self, record):
        color = self.COLORS.get(record.levelname, '')
        reset = self.COLORS['RESET']

        original_levelname = record.levelname
        original_msg = record.msg

        # Only the level name and the message get colored
        record.levelname = f"{color}{original_levelname}{reset}"
        record.msg = f"{color}{original_msg}{reset}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
            record.msg = original_msg

    def format_without_color(self, record):
        """Format log record without adding color codes"""
        formatted = logging.Formatter.format(self, record)
        return self.ANSI_ESCAPE.sub('', formatted)


class NoColorFormatter(ColoredFormatter):
    """Formatter without colors, used for file output"""
    def format(self, record):
        return self.format_without_color(record)


BASE_FORMAT = '%(asctime)s.%(msecs)03d | %(levelname)-8s | %(filename)s:%(lineno)d - %(funcName)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    enable_colors: bool = True
) -> None:
    """
    Setup logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        enable_colors: Whether to enable colored output for console
    """
    # Remove existing handlers to avoid duplicates
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))

    if enable_colors:
        console_formatter = ColoredFormatter(BASE_FORMAT, datefmt=DATE_FORMAT)
    else:
        console_formatter = NoColorFormatter(BASE_FORMAT, datefmt=DATE_FORMAT)

    console_handler.setFormatter(console_formatter)
    logging.root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # File records all log levels
        file_handler.setFormatter(NoColorFormatter(BASE_FORMAT, datefmt=DATE_FORMAT))
        logging.root.addHandler(file_handler)

    logging.root.setLevel(logging.DEBUG)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
