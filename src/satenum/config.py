"""
Configuration management for SATEnum.
Uses OmegaConf for flexible configuration handling.
"""

import json
import logging
import os
from typing import Any

import omegaconf
import yaml
from omegaconf import DictConfig, OmegaConf

# Set up logging
logger = logging.getLogger(__name__)


class SolverConfig:
    """
    Configuration manager for SATEnum.
    Handles loading, merging, and accessing configuration parameters.
    """

    DEFAULT_CONFIG = {
        "solver": {
            "name": "dfs",
            # Above this many literals the DFS solver walks an explicit stack
            "max_recursion_depth": 900,
        },
        "enumeration": {
            "limit": None,
        },
        "output": {
            "style": "normal",
            "color": True,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    }

    def __init__(self, config_path: str | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to configuration file (YAML or JSON)
        """
        self.config: DictConfig = OmegaConf.create(self.DEFAULT_CONFIG)

        if config_path:
            self._load_config_file(config_path)

    def _load_config_file(self, config_path: str) -> None:
        """
        Load configuration from a file and merge it over the current values.

        A missing file is logged and ignored; a malformed file raises.

        Args:
            config_path: Path to configuration file
        """
        if not os.path.exists(config_path):
            logger.warning(f"Configuration file not found: {config_path}")
            return

        # JSON is a subset of YAML, so one loader covers both formats
        with open(config_path) as f:
            file_config = yaml.safe_load(f) or {}

        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        self.config = OmegaConf.merge(self.config, file_config)
        logger.debug(f"Loaded configuration from {config_path}")

    def update(self, config_dict: dict[str, Any]) -> None:
        """
        Update the configuration with the given dictionary.

        Args:
            config_dict: Dictionary to update the configuration with
        """
        self.config = OmegaConf.merge(self.config, config_dict)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        Supports dot notation for nested keys (e.g., "solver.name").

        Args:
            key: Configuration key
            default: Default value if key not found or null

        Returns:
            Configuration value
        """
        try:
            value = OmegaConf.select(self.config, key)
        except omegaconf.errors.OmegaConfBaseException:
            return default
        if value is None:
            return default
        if isinstance(value, DictConfig):
            return OmegaConf.to_container(value, resolve=True)
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key.
        Supports dot notation for nested keys (e.g., "output.style").

        Args:
            key: Configuration key
            value: Value to set
        """
        OmegaConf.update(self.config, key, value, merge=True)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary representation of the configuration
        """
        return OmegaConf.to_container(self.config, resolve=True)

    def save(self, file_path: str) -> None:
        """
        Save the configuration to a file. The format follows the extension.

        Args:
            file_path: Path to save the configuration to (.yaml, .yml or .json)
        """
        os.makedirs(os.path.dirname(os.path.abspath(file_path)), exist_ok=True)

        if file_path.endswith(".yaml") or file_path.endswith(".yml"):
            OmegaConf.save(self.config, file_path)
        elif file_path.endswith(".json"):
            with open(file_path, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
        else:
            raise ValueError(f"Unsupported file format for configuration: {file_path}")

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


# Create a global configuration instance
config = SolverConfig()


def load_config(config_path: str | None = None) -> SolverConfig:
    """
    Load configuration from a file and make it the global configuration.

    Args:
        config_path: Path to configuration file; None restores the defaults

    Returns:
        Configuration instance
    """
    global config
    config = SolverConfig(config_path)
    return config


def get_config() -> SolverConfig:
    """
    Get the global configuration instance.

    Returns:
        Configuration instance
    """
    return config
