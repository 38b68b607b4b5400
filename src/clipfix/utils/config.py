# src/clipfix/utils/config.py

"""
Manages application configuration settings.

This module provides a ConfigManager class that handles loading settings from a
JSON file, providing default values, and writing the defaults out on first
run. Settings cover logging, the timestamp format of the error line, and key
bindings.
"""

import json
import logging
import sys
from pathlib import Path

from clipfix.app_logic.actions import DEFAULT_BINDINGS

# Constants
APP_NAME = "clipfix"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "clipfix.log"

# Default settings for the application
DEFAULT_CONFIG = {
    "log_level": "INFO",
    "log_file": None,
    "timestamp_format": "%H:%M:%S",
    "key_bindings": dict(DEFAULT_BINDINGS),
}

# Set up a logger for this module
logger = logging.getLogger(__name__)

_config_manager = None


def get_config_dir() -> Path:
    """
    Determines the appropriate application configuration directory based on the OS.

    Returns:
        Path: The absolute path to the configuration directory.
    """
    if sys.platform == "win32":
        # Windows: %APPDATA%/clipfix
        return Path.home() / "AppData" / "Roaming" / APP_NAME
    elif sys.platform == "darwin":
        # macOS: ~/Library/Application Support/clipfix
        return Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        # Linux/other: ~/.config/clipfix
        return Path.home() / ".config" / APP_NAME


class ConfigManager:
    """
    Handles loading, accessing, and saving application configuration.

    Settings are loaded from a file on construction. A missing file is
    created with the defaults; a corrupted one is ignored in favour of the
    defaults.
    """

    def __init__(self, config_dir: Path | None = None):
        """
        Initializes the ConfigManager, determines the config path, and loads the
        configuration.

        Args:
            config_dir: Directory holding config.json. Defaults to the
                        per-OS location from get_config_dir().
        """
        self.config_dir = Path(config_dir) if config_dir is not None else get_config_dir()
        self.config_path = self.config_dir / CONFIG_FILE_NAME
        self.config = {}
        self.load_config()

    def load_config(self):
        """
        Loads configuration from the JSON file. If the file doesn't exist or is
        invalid, the default settings are used.
        """
        # Start with defaults, then override with user's config
        self.config = json.loads(json.dumps(DEFAULT_CONFIG))

        if not self.config_path.exists():
            logger.info(f"Config file not found. Creating default config at: {self.config_path}")
            self.save_config()  # This saves the default config
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except json.JSONDecodeError:
            logger.error(
                f"Could not decode JSON from {self.config_path}. "
                "Using default configuration."
            )
            return
        except OSError as e:
            logger.error(f"Could not read {self.config_path}: {e}. Using defaults.")
            return

        if not isinstance(user_config, dict):
            logger.error(f"{self.config_path} does not hold a JSON object. Using defaults.")
            return

        # Merge user config into defaults to ensure all keys exist
        self.config.update(user_config)
        logger.info(f"Successfully loaded configuration from {self.config_path}")

    def save_config(self):
        """
        Saves the current configuration to the JSON file.
        """
        try:
            # Ensure the directory exists before trying to write the file
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4, sort_keys=True)
            logger.info(f"Configuration saved to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration to {self.config_path}: {e}")

    def get(self, key: str, default=None):
        """
        Retrieves a configuration value.

        Args:
            key (str): The configuration key to retrieve.
            default: The value to return if the key is not found.

        Returns:
            The value associated with the key, or the default value.
        """
        return self.config.get(key, default)

    @property
    def log_path(self) -> Path:
        """Where the log file goes: 'log_file' if set, else the config dir."""
        log_file = self.get("log_file")
        if log_file:
            return Path(log_file).expanduser()
        return self.config_dir / LOG_FILE_NAME

    @property
    def key_bindings(self) -> dict:
        bindings = self.get("key_bindings")
        if not isinstance(bindings, dict):
            logger.warning("'key_bindings' is not a JSON object, using the default bindings.")
            return dict(DEFAULT_BINDINGS)
        return bindings


def get_config() -> ConfigManager:
    """Returns the shared ConfigManager, creating it on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
