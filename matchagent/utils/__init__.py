"""
Utility modules for matchagent.

Logging setup and configuration management shared by the server and CLI.
"""

from .logger_config import setup_logging, get_logger, ColoredFormatter
from .config_manager import ConfigManager, get_config, set_config

__all__ = ["setup_logging", "get_logger", "ColoredFormatter", "ConfigManager", "get_config", "set_config"]
