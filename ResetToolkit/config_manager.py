#!/usr/bin/env python3
"""
Windows Reset Toolkit Configuration Manager

This module handles loading, accessing, and validating configuration settings
for all Windows Reset Toolkit components.
"""

import copy
import json
import os
from typing import Any, Dict, List, Optional

from ResetToolkit.logger import get_module_logger

logger = get_module_logger('config_manager')

CONFIG_FILE_NAME = "reset_toolkit.json"
CONFIG_ENV_VAR = "RESET_TOOLKIT_CONFIG"

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# Default configuration file paths to check, after $RESET_TOOLKIT_CONFIG
DEFAULT_CONFIG_PATHS = [
    # Current directory
    CONFIG_FILE_NAME,
    # Package directory
    os.path.join(_PACKAGE_DIR, CONFIG_FILE_NAME),
    # Repository root
    os.path.join(os.path.dirname(_PACKAGE_DIR), CONFIG_FILE_NAME),
    # Machine-wide location used by enterprise deployments
    os.path.join("%PROGRAMDATA%", "WindowsResetToolkit", CONFIG_FILE_NAME),
]

_APP_DATA_DIR = os.path.join(
    os.environ.get('LOCALAPPDATA', os.path.expanduser('~')), "WindowsResetToolkit"
)
DEFAULT_BACKUP_DIR = os.path.join(_APP_DATA_DIR, "Backups")
DEFAULT_LOG_FILE = os.path.join(_APP_DATA_DIR, "Logs", "reset_toolkit.log")

# Registry keys and files each reset area touches
DEFAULT_BACKUP_SETS = {
    "display": {
        "registry": [
            r"HKCU\Control Panel\Desktop",
            r"HKCU\Control Panel\Colors",
            r"HKLM\SYSTEM\CurrentControlSet\Control\GraphicsDrivers\Configuration",
        ],
        "files": [],
    },
    "audio": {
        "registry": [
            r"HKCU\Software\Microsoft\Multimedia\Audio",
            r"HKCU\AppEvents\Schemes",
            r"HKLM\SOFTWARE\Microsoft\Windows\CurrentVersion\MMDevices\Audio",
        ],
        "files": [],
    },
    "network": {
        "registry": [
            r"HKLM\SYSTEM\CurrentControlSet\Services\Tcpip\Parameters",
            r"HKLM\SYSTEM\CurrentControlSet\Services\Dnscache\Parameters",
            r"HKLM\SYSTEM\CurrentControlSet\Services\NlaSvc\Parameters\Internet",
            r"HKCU\Software\Microsoft\Windows\CurrentVersion\Internet Settings",
        ],
        "files": [
            r"%SystemRoot%\System32\drivers\etc\hosts",
        ],
    },
    "uac": {
        "registry": [
            r"HKLM\SOFTWARE\Microsoft\Windows\CurrentVersion\Policies\System",
        ],
        "files": [],
    },
    "defender": {
        "registry": [
            r"HKLM\SOFTWARE\Policies\Microsoft\Windows Defender",
            r"HKLM\SOFTWARE\Microsoft\Windows Defender\Exclusions",
        ],
        "files": [],
    },
    "search": {
        "registry": [
            r"HKLM\SOFTWARE\Microsoft\Windows Search",
            r"HKCU\Software\Microsoft\Windows\CurrentVersion\Search",
        ],
        "files": [],
    },
    "start_menu": {
        "registry": [
            r"HKCU\Software\Microsoft\Windows\CurrentVersion\Explorer\Advanced",
            r"HKCU\Software\Microsoft\Windows\CurrentVersion\CloudStore",
        ],
        "files": [
            r"%LOCALAPPDATA%\Microsoft\Windows\Shell\LayoutModification.xml",
        ],
    },
    "fonts": {
        "registry": [
            r"HKLM\SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts",
            r"HKLM\SOFTWARE\Microsoft\Windows NT\CurrentVersion\FontSubstitutes",
        ],
        "files": [],
    },
    "power": {
        "registry": [
            r"HKLM\SYSTEM\CurrentControlSet\Control\Power",
        ],
        "files": [],
    },
    "time": {
        "registry": [
            r"HKLM\SYSTEM\CurrentControlSet\Control\TimeZoneInformation",
            r"HKLM\SYSTEM\CurrentControlSet\Services\W32Time\Parameters",
        ],
        "files": [],
    },
    "explorer": {
        "registry": [
            r"HKCU\Software\Microsoft\Windows\CurrentVersion\Explorer",
        ],
        "files": [],
    },
    "services": {
        "registry": [
            r"HKLM\SYSTEM\CurrentControlSet\Services\wuauserv",
            r"HKLM\SYSTEM\CurrentControlSet\Services\BITS",
            r"HKLM\SYSTEM\CurrentControlSet\Services\WSearch",
        ],
        "files": [],
    },
    "group_policy": {
        "registry": [
            r"HKLM\SOFTWARE\Policies",
            r"HKCU\Software\Policies",
        ],
        "files": [
            r"%SystemRoot%\System32\GroupPolicy\Machine\Registry.pol",
            r"%SystemRoot%\System32\GroupPolicy\User\Registry.pol",
        ],
    },
}

# Default configuration values if no config file is found
DEFAULT_CONFIG = {
    "version": "1.2.0",
    "description": "Windows Reset Toolkit",
    "backup": {
        "root_dir": DEFAULT_BACKUP_DIR,
        "compress": False,
        "retention_days": 30,
        "keep_latest": 1,
        "verify_on_restore": True,
        "rollback_on_failure": True,
        "registry_timeout": 30
    },
    "logging": {
        "log_file": DEFAULT_LOG_FILE,
        "verbosity": 1,
        "max_size": 5242880,
        "backup_count": 3
    },
    "maintenance": {
        "task_name": "WindowsResetToolkit Backup Cleanup",
        "schedule": "DAILY",
        "start_time": "03:00"
    },
    "prompts": {
        "assume_yes": False
    },
    "backup_sets": DEFAULT_BACKUP_SETS
}

def expand_path(path: str) -> str:
    """Expand %VAR%, $VAR and ~ in a path."""
    # Windows style first, since os.path.expandvars only knows %VAR% on nt
    for env_var, value in os.environ.items():
        var_placeholder = f"%{env_var}%"
        if var_placeholder in path:
            path = path.replace(var_placeholder, value)

    return os.path.expanduser(os.path.expandvars(path))

def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge override into a copy of base.

    Nested dictionaries are merged key by key; every other value in override
    replaces the one in base.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged

class ConfigManager:
    """Configuration manager for the Windows Reset Toolkit."""

    _instance = None
    _config = None
    _config_path = None

    def __new__(cls):
        """Singleton pattern to ensure only one configuration manager exists."""
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _candidate_paths(self) -> List[str]:
        paths = []
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            paths.append(env_path)
        paths.extend(DEFAULT_CONFIG_PATHS)
        return [expand_path(p) for p in paths]

    def _load_config(self, path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from file or use defaults.

        Args:
            path: Explicit file to load instead of searching the default paths

        Returns:
            Dict: Configuration dictionary
        """
        candidates = [expand_path(path)] if path else self._candidate_paths()

        for candidate in candidates:
            if not os.path.exists(candidate):
                continue
            try:
                with open(candidate, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("top level must be a JSON object")
                self._config = deep_merge(DEFAULT_CONFIG, loaded)
                self._config_path = candidate
                logger.info(f"Loaded configuration from {candidate}")
                return self._config
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading config from {candidate}: {e}")

        logger.debug("No configuration file found, using default values")
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._config_path = None
        return self._config

    def reload(self, path: Optional[str] = None) -> Dict[str, Any]:
        """
        Reload configuration, optionally from a specific file.

        Args:
            path: Configuration file to load

        Returns:
            Dict: The reloaded configuration
        """
        return self._load_config(path)

    def save_config(self, path: Optional[str] = None) -> bool:
        """
        Save the current configuration to a file.

        Args:
            path: Path to save the configuration file

        Returns:
            bool: True if successful, False otherwise
        """
        if path is None:
            path = self._config_path or DEFAULT_CONFIG_PATHS[0]

        try:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self._config, f, indent=2)

            self._config_path = path
            logger.info(f"Saved configuration to {path}")
            return True
        except OSError as e:
            logger.error(f"Error saving config to {path}: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using a dot-separated path.

        Args:
            key_path: Dot-separated path to the configuration value
            default: Default value to return if the key is not found

        Returns:
            Value from the configuration, or default if not found
        """
        if self._config is None:
            self._load_config()

        value = self._config
        try:
            for key in key_path.split('.'):
                value = value[key]
            return value
        except (KeyError, TypeError):
            logger.debug(f"Configuration key '{key_path}' not found, using default: {default}")
            return default

    def update(self, key_path: str, value: Any, save: bool = False) -> bool:
        """
        Update a configuration value using a dot-separated path.

        Missing intermediate sections are created.

        Args:
            key_path: Dot-separated path to the configuration value
            value: New value to set
            save: Whether to save the configuration to file after updating

        Returns:
            bool: True if successful, False otherwise
        """
        if self._config is None:
            self._load_config()

        keys = key_path.split('.')
        parent = self._config
        try:
            for key in keys[:-1]:
                parent = parent.setdefault(key, {})
            parent[keys[-1]] = value
        except (AttributeError, TypeError) as e:
            logger.error(f"Error updating config key '{key_path}': {e}")
            return False

        if save:
            return self.save_config()
        return True

    def get_all(self) -> Dict[str, Any]:
        """
        Get the entire configuration dictionary.

        Returns:
            Dict: The complete configuration
        """
        if self._config is None:
            self._load_config()

        return self._config

    def get_path(self) -> Optional[str]:
        """
        Get the path to the loaded configuration file.

        Returns:
            str: Path to the configuration file, or None if using defaults
        """
        return self._config_path

    def get_backup_dir(self, override: Optional[str] = None) -> str:
        """
        Get the absolute backup directory for the current user.

        Args:
            override: Directory given on the command line, if any

        Returns:
            str: Expanded absolute path
        """
        return os.path.abspath(expand_path(
            override or self.get("backup.root_dir") or DEFAULT_BACKUP_DIR
        ))

    def get_backup_set(self, name: str) -> Optional[Dict[str, List[str]]]:
        """
        Get a named backup set with its paths expanded.

        Args:
            name: Backup set name (e.g. "network")

        Returns:
            Dict with "registry" and "files" lists, or None if unknown
        """
        backup_set = self.get(f"backup_sets.{name}")
        if not isinstance(backup_set, dict):
            return None

        return {
            "registry": list(backup_set.get("registry", [])),
            "files": [expand_path(p) for p in backup_set.get("files", [])],
        }

# Create a global instance
config = ConfigManager()

def get_config() -> ConfigManager:
    """
    Get the configuration manager instance.

    Returns:
        ConfigManager: Configuration manager instance
    """
    return config
