"""
Container bootstrap - builds a container with custom configuration and packages.

Custom configuration is placed in the container before any package is
registered, so defaults declared by packages never shadow it.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from config_factory import AppConfig, load_configuration_file, parse_log_level
from service_packages.container import Container, ServiceProvider
from service_packages.packages import Package
from service_packages.utils import merge_recessive

logger = logging.getLogger(__name__)


def configure_logging(level: str = 'info') -> None:
    """
    Configure root logging for scripts using the container.

    Raises:
        ConfigError: If the level is not a known log level
    """
    logging.basicConfig(
        level=parse_log_level(level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def configure_container(
    configuration: Optional[Dict[str, Dict[str, Any]]] = None,
    configuration_file: Optional[str] = None,
    packages: Iterable[ServiceProvider] = (),
    config: Optional[AppConfig] = None
) -> Container:
    """
    Create a container seeded with custom configuration and register packages.

    Args:
        configuration: Custom configuration keyed by service name
        configuration_file: Optional YAML file with custom configuration,
            overridden by values in configuration
        packages: Packages registered in order
        config: Runtime configuration; its configuration_file is used when
            no configuration_file is given

    Returns:
        Configured container
    """
    custom: Dict[str, Dict[str, Any]] = {}

    if configuration_file is not None:
        custom = load_configuration_file(configuration_file)
    elif config is not None:
        custom = config.load_service_configuration()

    for service_name, settings in (configuration or {}).items():
        custom[service_name] = merge_recessive(custom.get(service_name, {}), settings)

    container = Container({Package.SERVICE_NAME_CONFIGURATION: custom})

    count = 0
    for package in packages:
        container.register(package)
        count += 1

    logger.info(f"Configured container with {len(custom)} configured services and {count} packages")
    return container
