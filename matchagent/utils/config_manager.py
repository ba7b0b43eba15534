"""
Configuration management for the match agent.

Defaults are overlaid by an optional JSON file, then by MATCHAGENT_*
environment variables; the CLI applies its flags last through ``set``.
"""

import json
import os
from typing import Dict, Any, Optional
from matchagent.utils.logger_config import get_logger

logger = get_logger("config_manager")

DEFAULT_CONFIG_PATH = "config/agent_config.json"


class ConfigManager:
    """Centralized configuration management for the match agent"""

    ENV_MAPPINGS = {
        "MATCHAGENT_HOST": ("server", "host"),
        "MATCHAGENT_PORT": ("server", "port"),
        "MATCHAGENT_SHUTDOWN_GRACE": ("server", "shutdown_grace"),
        "MATCHAGENT_LOCAL_ROOT": ("agent", "local_root"),
        "MATCHAGENT_REMOTE_ROOT": ("agent", "remote_root"),
        "MATCHAGENT_MATCH": ("agent", "match"),
        "MATCHAGENT_JOIN_TIMEOUT": ("agent", "join_timeout"),
        "MATCHAGENT_DECIDER": ("agent", "decider"),
        "MATCHAGENT_LOG_LEVEL": ("log", "level"),
        "MATCHAGENT_LOG_DIR": ("log", "dir"),
        "MATCHAGENT_LOG_COLORS": ("log", "enable_colors"),
    }

    # Opaque identifiers and addresses, never retyped from the environment
    STRING_KEYS = {
        "server.host",
        "agent.local_root",
        "agent.remote_root",
        "agent.match",
        "agent.decider",
        "log.level",
        "log.dir",
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Path to configuration file (optional)
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables"""
        self._config = self._get_default_config()

        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                self._merge_config(file_config)
                logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load config file {self.config_path}: {e}")

        self._load_from_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            "server": {
                "host": "0.0.0.0",
                "port": 9000,
                "shutdown_grace": 0.5
            },
            "agent": {
                "local_root": "http://localhost:9000",
                "remote_root": "http://localhost:8000",
                "match": None,
                "join_timeout": None,
                "decider": "matchagent.models.decider:IdleDecider"
            },
            "log": {
                "level": "INFO",
                "dir": "logs/agent",
                "enable_colors": True
            }
        }

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        """Merge new configuration into existing config"""
        def merge_dict(target: Dict[str, Any], source: Dict[str, Any]) -> None:
            for key, value in source.items():
                if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                    merge_dict(target[key], value)
                else:
                    target[key] = value

        merge_dict(self._config, new_config)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables"""
        for env_var, config_path in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            key = ".".join(config_path)
            self.set(key, value if key in self.STRING_KEYS else self._parse_env_value(value))

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type"""
        if value.lower() in ('true', 'yes', 'on'):
            return True
        if value.lower() in ('false', 'no', 'off'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation

        Args:
            key: Configuration key (e.g., "agent.remote_root")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for k in key.split('.'):
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return default
        return current

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value as a string

        Non-string values (e.g. a numeric match id in a JSON file) are
        converted with str(); missing or null values give the default.
        """
        value = self.get(key)
        if value is None:
            return default
        return str(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation

        Args:
            key: Configuration key (e.g., "server.port")
            value: Value to set
        """
        keys = key.split('.')
        current = self._config

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section"""
        return self._config.get(section, {})

    def to_dict(self) -> Dict[str, Any]:
        """Get complete configuration as dictionary"""
        return json.loads(json.dumps(self._config))

    def save(self, path: Optional[str] = None) -> None:
        """
        Save current configuration to file

        Args:
            path: File path to save to (uses default if not specified)
        """
        save_path = path or self.config_path
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(save_path, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)

        logger.info(f"Configuration saved to {save_path}")


# Global configuration instance
_global_config: Optional[ConfigManager] = None


def get_config(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create global configuration instance

    Args:
        config_path: Configuration file path (optional)

    Returns:
        Global configuration manager instance
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_path)
    return _global_config


def set_config(config_manager: Optional[ConfigManager]) -> None:
    """Replace (or clear, with None) the global configuration instance"""
    global _global_config
    _global_config = config_manager
