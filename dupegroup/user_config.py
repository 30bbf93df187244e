"""
User configuration management for DupeGroup.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.dupegroup/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.dupegroup/config.json

Example config.json:
{
    "default_threshold": 10,
    "default_hash_size": 8,
    "hash_algorithm": "phash",
    "grouping_mode": "anchor",
    "default_workers": null,
    "report_filename": "dedup_report.json"
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    DEFAULT_THRESHOLD,
    DEFAULT_HASH_SIZE,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_GROUPING_MODE,
    DEFAULT_WORKERS,
    DEFAULT_REPORT_FILENAME,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is loaded lazily and cached until reload() is called.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DUPEGROUP_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path.home() / '.dupegroup'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file_path}: expected a JSON object")
            return {}
        logger.debug(f"Loaded configuration from {self.config_file_path}")
        return data

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers, null etc.
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_threshold(self) -> int:
        """Hamming distance threshold (strictly less than)."""
        return self.get('default_threshold', default=DEFAULT_THRESHOLD, env_var='DUPEGROUP_THRESHOLD')

    @property
    def default_hash_size(self) -> int:
        """Hash resolution; fingerprints are hash_size ** 2 bits."""
        return self.get('default_hash_size', default=DEFAULT_HASH_SIZE, env_var='DUPEGROUP_HASH_SIZE')

    @property
    def hash_algorithm(self) -> str:
        return self.get('hash_algorithm', default=DEFAULT_HASH_ALGORITHM, env_var='DUPEGROUP_ALGORITHM')

    @property
    def grouping_mode(self) -> str:
        return self.get('grouping_mode', default=DEFAULT_GROUPING_MODE, env_var='DUPEGROUP_MODE')

    @property
    def default_workers(self) -> Optional[int]:
        """Number of parallel workers for hashing (None = CPU count)."""
        return self.get('default_workers', default=DEFAULT_WORKERS, env_var='DUPEGROUP_WORKERS')

    @property
    def report_filename(self) -> str:
        """Name of the JSON report written into the scanned directory."""
        return self.get('report_filename', default=DEFAULT_REPORT_FILENAME, env_var='DUPEGROUP_REPORT')

    def as_dict(self) -> dict:
        return {
            'default_threshold': self.default_threshold,
            'default_hash_size': self.default_hash_size,
            'hash_algorithm': self.hash_algorithm,
            'grouping_mode': self.grouping_mode,
            'default_workers': self.default_workers,
            'report_filename': self.report_filename,
        }

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "DupeGroup User Configuration",
            "default_threshold": DEFAULT_THRESHOLD,
            "default_hash_size": DEFAULT_HASH_SIZE,
            "hash_algorithm": DEFAULT_HASH_ALGORITHM,
            "grouping_mode": DEFAULT_GROUPING_MODE,
            "default_workers": DEFAULT_WORKERS,
            "report_filename": DEFAULT_REPORT_FILENAME,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False

        logger.info(f"Created example config file at {self.config_file_path}")
        self.reload()
        return True


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
