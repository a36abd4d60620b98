"""
Configuration Factory - Centralized configuration management for service packages
Provides validated runtime settings and loading of custom service configuration.
"""

import os
import logging
from typing import Any, Dict, Optional
from enum import Enum
from dataclasses import dataclass

import yaml


LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}


class Environment(Enum):
    """Environment types for configuration"""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ConfigError(Exception):
    """Configuration-related errors"""
    pass


def parse_log_level(level: str) -> int:
    """
    Convert a log level name to its logging constant.

    Raises:
        ConfigError: If the name is not a known level
    """
    try:
        return LOG_LEVELS[level.lower()]
    except KeyError:
        raise ConfigError(f"Invalid log_level: {level}")


def load_configuration_file(path: str) -> Dict[str, Dict[str, Any]]:
    """
    Load custom service configuration from a YAML file.

    The document maps service names to settings mappings. An empty document
    yields an empty configuration.

    Args:
        path: Path to the YAML file

    Returns:
        Configuration keyed by service name

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ConfigError: If the document structure is invalid
    """
    logger = logging.getLogger(__name__)

    try:
        with open(path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file)
    except FileNotFoundError:
        logger.error(f"Configuration file not found: {path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {path}: {e}")
        raise

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file root must be a mapping: {path}")

    for service_name, settings in data.items():
        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration for '{service_name}' must be a mapping")

    logger.info(f"Loaded configuration for {len(data)} services from {path}")
    return data


@dataclass
class AppConfig:
    """Runtime configuration with validation"""

    log_level: str = 'info'

    # Optional YAML file with custom configuration per service name
    configuration_file: Optional[str] = None

    environment: Environment = Environment.DEVELOPMENT

    def __post_init__(self):
        """Validate configuration after initialization"""
        parse_log_level(self.log_level)

        if self.configuration_file is not None and not self.configuration_file.strip():
            raise ConfigError("Invalid configuration_file: empty path")

    @classmethod
    def from_environment(cls, env_prefix: str = 'SERVICE_PACKAGES_') -> 'AppConfig':
        """
        Build configuration from environment variables.

        Reads <prefix>ENV, <prefix>LOG_LEVEL and <prefix>CONFIGURATION_FILE.

        Raises:
            ConfigError: If a value is invalid
        """
        env_name = os.environ.get(f"{env_prefix}ENV", 'development')
        try:
            environment = Environment(env_name)
        except ValueError:
            raise ConfigError(f"Invalid environment: {env_name}")

        return cls(
            log_level=os.environ.get(f"{env_prefix}LOG_LEVEL", 'info'),
            configuration_file=os.environ.get(f"{env_prefix}CONFIGURATION_FILE"),
            environment=environment
        )

    def load_service_configuration(self) -> Dict[str, Dict[str, Any]]:
        """Load the custom service configuration file, empty when none is set."""
        if self.configuration_file is None:
            return {}
        return load_configuration_file(self.configuration_file)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode"""
        return self.environment == Environment.TESTING


# Configuration loaded for the current process
_config: Optional[AppConfig] = None


def load_config(env_prefix: str = 'SERVICE_PACKAGES_') -> AppConfig:
    """Load configuration from environment variables and make it current"""
    global _config
    _config = AppConfig.from_environment(env_prefix)
    logging.getLogger(__name__).info(f"Configuration loaded for environment: {_config.environment.value}")
    return _config


def load_config_from_dict(config_dict: Dict[str, Any]) -> AppConfig:
    """Load configuration from a dictionary (useful for testing)"""
    global _config
    config_dict = dict(config_dict)
    if isinstance(config_dict.get('environment'), str):
        config_dict['environment'] = Environment(config_dict['environment'])
    _config = AppConfig(**config_dict)
    return _config


def get_config() -> AppConfig:
    """
    Get the current configuration.

    Raises:
        ConfigError: If no configuration has been loaded
    """
    if _config is None:
        raise ConfigError("Configuration not loaded. Call load_config() or load_config_from_dict() first.")
    return _config


def reset_config() -> None:
    """Forget the current configuration (for testing)"""
    global _config
    _config = None
