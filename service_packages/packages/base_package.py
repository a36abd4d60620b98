"""
Base Package - Registration contract for reusable groups of services

Provides:
- Idempotent binding to a single container instance
- Service and alias declaration
- Tags: named, ordered groups of service names
- Layered default configuration where custom settings always win

Custom configuration must be present in the container before a package
declares its defaults, and a service factory must read its configuration
after the defaults have been declared.
"""

import logging
import warnings
from typing import Any, Callable, Dict, List, Optional

from service_packages.container.service_container import Container, ServiceProvider
from service_packages.core.errors import PackageError, PackageErrorKind
from service_packages.utils.merge_utils import copy_settings, merge_recessive

ServiceFactory = Callable[[Container], Any]


class TagRegistry(dict):
    """Mapping of tag name to the ordered list of service names carrying it."""

    def add(self, tag_name: str, service_name: str) -> None:
        """Append a service name to a tag. Duplicates are kept."""
        self.setdefault(tag_name, []).append(service_name)

    def service_names(self, tag_name: str) -> List[str]:
        """Get the service names for a tag, empty if the tag is unknown."""
        return list(self.get(tag_name, []))


class Package(ServiceProvider):
    """
    Base class for packages registering services on a container.

    Subclasses override register() and must call super().register(container)
    before declaring anything:

        class MyPackage(Package):
            def register(self, container):
                super().register(container)
                self.declare_configuration('SomeService', {'some_value': 0})
                ...

    The reserved container keys are class attributes so that packages sharing
    one container agree on where tags and configuration live.
    """

    SERVICE_NAME_TAG = 'tag'
    SERVICE_NAME_CONFIGURATION = 'configuration'

    # Enable missing support registries when registering. Existing registries are kept.
    auto_tag_support = False
    auto_configuration_support = False

    def __init__(self, container: Optional[Container] = None):
        """
        Initialize the package.

        Args:
            container: Optional container to bind immediately
        """
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._container = container

    @property
    def container(self) -> Container:
        """The bound container."""
        if self._container is None:
            raise RuntimeError(f"{self.__class__.__name__} is not bound to a container")
        return self._container

    @property
    def is_bound(self) -> bool:
        """Check if a container is bound"""
        return self._container is not None

    def bind(self, container: Container) -> None:
        """Adopt the container unless one is already bound."""
        if self._container is None:
            self._container = container
            self._logger.debug(f"{self.__class__.__name__} bound to {container!r}")

    def register(self, container: Container) -> None:
        """
        Register services on the given container.

        This method should only declare services, tags and configuration.
        It should not resolve services. Overriding methods must call it first.

        Args:
            container: A container instance
        """
        self.bind(container)

        if self.auto_tag_support and not self.has_tag_support():
            self.enable_tag_support()

        if self.auto_configuration_support and not self.has_configuration_support():
            self.enable_configuration_support()

    # Services

    def declare_service(self, service_name: str, factory: ServiceFactory) -> None:
        """Store a service factory under a name, replacing any previous one."""
        self.container[service_name] = factory
        self._logger.debug(f"Declared service: {service_name}")

    def declare_service_alias(self, alias_name: str, service_name: str) -> None:
        """Declare a service that resolves to whatever is registered under service_name."""
        self.declare_service(alias_name, lambda container: container[service_name])

    # Tags

    def enable_tag_support(self) -> None:
        """
        Add tag support.

        WARNING: This replaces an existing tag registry with an empty one. Check
        has_tag_support() first.
        """
        self.container[self.SERVICE_NAME_TAG] = TagRegistry()
        self._logger.debug("Tag support enabled")

    def remove_tag_support(self) -> None:
        """Remove tag support. Deprecated."""
        warnings.warn("remove_tag_support() is deprecated", DeprecationWarning, stacklevel=2)
        self._logger.warning("Removing tag support")
        del self.container[self.SERVICE_NAME_TAG]

    def has_tag_support(self, should_fail: bool = False) -> bool:
        """
        Check for existing tag support.

        Args:
            should_fail: Raise instead of returning False

        Raises:
            PackageError: If unsupported and should_fail is set
        """
        tag_support = (
            self.SERVICE_NAME_TAG in self.container
            and isinstance(self.container[self.SERVICE_NAME_TAG], TagRegistry)
        )

        if not tag_support and should_fail:
            raise PackageError(
                PackageErrorKind.MISSING_TAG_SUPPORT,
                "Container does not have tag support!",
                {'package': self.__class__.__name__}
            )

        return tag_support

    def declare_tag(self, tag_name: str, service_name: str) -> None:
        """Tag a service. Tag support is not checked here."""
        self.container[self.SERVICE_NAME_TAG].add(tag_name, service_name)
        self._logger.debug(f"Tagged {service_name} with {tag_name}")

    def declare_tag_and_service(self, tag_name: str, service_name: str, factory: ServiceFactory) -> None:
        """
        Tag a service and declare it.

        Raises:
            PackageError: If the container has no tag support
        """
        if self.has_tag_support(True):
            self.declare_tag(tag_name, service_name)

        self.declare_service(service_name, factory)

    def resolve_tag(self, tag_name: str) -> List[Any]:
        """
        Resolve every service carrying a tag, in tagging order.

        Raises:
            PackageError: If the container has no tag support
        """
        self.has_tag_support(True)
        registry: TagRegistry = self.container[self.SERVICE_NAME_TAG]
        return [self.container[service_name] for service_name in registry.service_names(tag_name)]

    # Configuration

    def enable_configuration_support(self) -> None:
        """
        Add configuration support.

        WARNING: This replaces an existing configuration registry with an empty
        one. Check has_configuration_support() first.
        """
        self.container[self.SERVICE_NAME_CONFIGURATION] = {}
        self._logger.debug("Configuration support enabled")

    def remove_configuration_support(self) -> None:
        """Remove configuration support. Deprecated."""
        warnings.warn("remove_configuration_support() is deprecated", DeprecationWarning, stacklevel=2)
        self._logger.warning("Removing configuration support")
        del self.container[self.SERVICE_NAME_CONFIGURATION]

    def has_configuration_support(self, should_fail: bool = False) -> bool:
        """
        Check for existing configuration support.

        Args:
            should_fail: Raise instead of returning False

        Raises:
            PackageError: If unsupported and should_fail is set
        """
        configuration_support = (
            self.SERVICE_NAME_CONFIGURATION in self.container
            and isinstance(self.container[self.SERVICE_NAME_CONFIGURATION], dict)
        )

        if not configuration_support and should_fail:
            raise PackageError(
                PackageErrorKind.MISSING_CONFIGURATION_SUPPORT,
                "Container does not have configuration support!",
                {'package': self.__class__.__name__}
            )

        return configuration_support

    def declare_configuration(self, service_name: str, defaults: Dict[str, Any]) -> None:
        """
        Declare default configuration for a service.

        Settings already stored for the service win over the defaults,
        recursively. Without configuration support this does nothing.

        WARNING: Custom configuration must be in the container before the
        package is registered, otherwise the defaults shadow nothing.

        Args:
            service_name: Service the configuration belongs to
            defaults: Default settings
        """
        if not self.has_configuration_support():
            self._logger.debug(f"No configuration support, skipping defaults for {service_name}")
            return

        registry = self.container[self.SERVICE_NAME_CONFIGURATION]

        settings = registry.get(service_name)
        if not isinstance(settings, dict):
            settings = {}

        # Replace the registry so that snapshots taken earlier stay untouched.
        configuration = dict(registry)
        configuration[service_name] = merge_recessive(defaults, settings)
        self.container[self.SERVICE_NAME_CONFIGURATION] = configuration
        self._logger.debug(f"Declared configuration for {service_name}")

    def get_configuration(self, service_name: str, default: Any = None) -> Any:
        """
        Get a copy of the settings stored for a service.

        Returns:
            The settings, or default when there are none
        """
        if not self.has_configuration_support():
            return default

        registry = self.container[self.SERVICE_NAME_CONFIGURATION]
        if service_name not in registry:
            return default
        return copy_settings(registry[service_name])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(bound={self.is_bound})"
