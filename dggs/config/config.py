# dggs/config/config.py
"""Configuration manager with YAML override support."""

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from . import defaults

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager with YAML override support."""

    def __init__(self, config_file: Optional[Path] = None):
        self.settings = self.load_defaults()

        # Auto-discover config.yml when no file is given
        if config_file is None:
            config_file = self._find_config_file()
        elif not isinstance(config_file, Path):
            config_file = Path(config_file)

        if config_file and config_file.exists():
            self._load_yaml_config(config_file)
            self.config_file: Optional[Path] = config_file
            logger.debug(f"Loaded configuration from {config_file}")
        else:
            self.config_file = None
            logger.debug("No config.yml found - using defaults only")

    def _find_config_file(self) -> Optional[Path]:
        """Find config.yml with multiple fallback locations."""
        env_location = os.environ.get('DGGS_CONFIG')
        if env_location:
            return Path(env_location)

        potential_locations = [
            Path.cwd() / 'config.yml',
            defaults.PROJECT_ROOT / 'config.yml',
            Path.home() / '.dggs' / 'config.yml',
        ]

        for location in potential_locations:
            if location.exists() and location.is_file():
                return location

        return None

    def load_defaults(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'paths': copy.deepcopy(defaults.PATHS),
            'grids': copy.deepcopy(defaults.GRIDS),
            'earth': copy.deepcopy(defaults.EARTH),
            'logging': copy.deepcopy(defaults.LOGGING),
            'processing_bounds': copy.deepcopy(defaults.PROCESSING_BOUNDS),
        }

    def _load_yaml_config(self, config_file: Path):
        """Load and merge configuration from a YAML file."""
        with open(config_file, 'r') as file:
            yaml_config = yaml.safe_load(file)
            if yaml_config:
                self._deep_merge(self.settings, yaml_config)

    def _deep_merge(self, base: dict, override: dict):
        """Deep merge override into base dictionary."""
        for key, value in override.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def grids(self) -> Dict[str, Any]:
        return self.settings['grids']

    @property
    def earth(self) -> Dict[str, Any]:
        return self.settings['earth']

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings['logging']

    @property
    def processing_bounds(self) -> Dict[str, Any]:
        return self.settings['processing_bounds']

    @property
    def paths(self) -> Dict[str, Any]:
        return self.settings['paths']


# Global configuration instance
config = Config()
