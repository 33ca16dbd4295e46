"""
indicore configuration management

Loads the indicator and numeric configurations and validates them against
their JSON Schemas.
"""

import json
import logging
from typing import Dict, Any, Optional
from pathlib import Path

import jsonschema

from indicore.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent

# config name -> (file, schema file)
CONFIG_FILES = {
    'indicators': ('indicators.json', 'indicators.schema.json'),
    'numeric': ('numeric.json', 'numeric.schema.json'),
}


class ConfigLoader:
    """Loads and manages library configurations."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files
                (default: the directory of this package)

        Raises:
            ConfigurationError: If a present file is not valid JSON or fails
                schema validation
        """
        self.config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self.configs = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name)

    def _load(self, config_name: str) -> Dict[str, Any]:
        filename, schema_filename = CONFIG_FILES[config_name]
        config_path = self.config_dir / filename
        if not config_path.exists():
            logger.debug("config_missing", extra={"config": config_name, "path": str(config_path)})
            return {}

        try:
            with open(config_path, 'r') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

        # Validate with JSON Schema when one is shipped next to the config
        schema_path = self.config_dir / schema_filename
        if not schema_path.exists():
            schema_path = CONFIG_DIR / schema_filename
        if schema_path.exists():
            with open(schema_path, 'r') as sf:
                schema = json.load(sf)
            try:
                jsonschema.validate(instance=config, schema=schema)
            except jsonschema.ValidationError as e:
                raise ConfigurationError(f"{config_path} failed validation: {e.message}") from e

        logger.debug("config_loaded", extra={"config": config_name, "path": str(config_path)})
        return config

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all configurations.

        Returns:
            Dictionary of all configurations
        """
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration.

        Args:
            config_name: Name of configuration to reload

        Raises:
            KeyError: If config_name is unknown
            ConfigurationError: If the reloaded file is invalid (the previous
                configuration is kept)
        """
        if config_name not in CONFIG_FILES:
            raise KeyError(f"Unknown configuration: {config_name!r}")
        self.configs[config_name] = self._load(config_name)


# Global configuration loader instance
config_loader = ConfigLoader()
