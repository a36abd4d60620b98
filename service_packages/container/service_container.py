"""
Service Container for Dependency Injection

This module provides a key-value service locator that stores plain values
and lazily invoked service factories. Packages and other service providers
register their definitions against a single container instance.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class ServiceNotRegisteredError(KeyError):
    """Raised when attempting to get a service that hasn't been registered."""
    pass


class InvalidServiceError(TypeError):
    """Raised when a definition cannot be used as a service factory."""
    pass


class ServiceProvider(ABC):
    """Contract for objects that register services on a container."""

    @abstractmethod
    def register(self, container: 'Container') -> None:
        """
        Register services on the given container.

        Args:
            container: The container to register definitions on
        """
        pass


class Container:
    """
    A service container mapping names to values or service factories.

    A callable stored under a name is a shared service factory: it is invoked
    with the container on first resolution and its result is cached. Callables
    marked with factory() are invoked on every resolution, callables marked
    with protect() are returned as-is. Anything else is returned as stored.
    """

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[int, Callable] = {}
        self._protected: Dict[int, Callable] = {}

        for name, value in (values or {}).items():
            self[name] = value

    def __setitem__(self, name: str, value: Any) -> None:
        """Define a value or service factory, replacing any previous definition."""
        previous = self._values.get(name)
        if name in self._values:
            logger.debug(f"Replacing definition: {name}")
        self._values[name] = value
        self._instances.pop(name, None)
        if previous is not None:
            self._forget(previous)
        logger.debug(f"Registered definition: {name}")

    def __getitem__(self, name: str) -> Any:
        """
        Get a value or service by name.

        Args:
            name: The name of the value or service to retrieve

        Returns:
            The stored value, or the instance built by the stored factory

        Raises:
            ServiceNotRegisteredError: If nothing has been registered under the name
        """
        if name not in self._values:
            raise ServiceNotRegisteredError(f"Service '{name}' is not registered")

        if name in self._instances:
            return self._instances[name]

        definition = self._values[name]

        if not callable(definition) or id(definition) in self._protected:
            return definition

        if id(definition) in self._factories:
            return definition(self)

        logger.debug(f"Creating shared instance for: {name}")
        instance = definition(self)
        self._instances[name] = instance
        return instance

    def __delitem__(self, name: str) -> None:
        if name not in self._values:
            raise ServiceNotRegisteredError(f"Service '{name}' is not registered")

        definition = self._values.pop(name)
        self._instances.pop(name, None)
        self._forget(definition)
        logger.debug(f"Removed definition: {name}")

    def _forget(self, definition: Any) -> None:
        """Drop factory and protect marks of a definition no name holds any more."""
        if any(value is definition for value in self._values.values()):
            return
        self._factories.pop(id(definition), None)
        self._protected.pop(id(definition), None)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def has_service(self, name: str) -> bool:
        """Check if a value or service is registered."""
        return name in self._values

    def keys(self) -> List[str]:
        """Get list of all registered names"""
        return list(self._values)

    def factory(self, definition: Callable) -> Callable:
        """
        Mark a callable as a transient factory, invoked on every resolution.

        The mark belongs to the callable, so every name holding it resolves
        transiently. It is dropped once no name holds the callable.

        Returns:
            The same callable, so it can be assigned directly
        """
        if not callable(definition):
            raise InvalidServiceError("Service definition is not a callable")

        self._factories[id(definition)] = definition
        return definition

    def protect(self, definition: Callable) -> Callable:
        """Mark a callable as a plain value so it is never invoked."""
        if not callable(definition):
            raise InvalidServiceError("Callable is not a callable")

        self._protected[id(definition)] = definition
        return definition

    def raw(self, name: str) -> Any:
        """Get the stored definition for a name without invoking it."""
        if name not in self._values:
            raise ServiceNotRegisteredError(f"Service '{name}' is not registered")
        return self._values[name]

    def extend(self, name: str, extender: Callable[[Any, 'Container'], Any]) -> Callable:
        """
        Wrap an existing service factory.

        The extender receives the instance built by the original factory and
        the container, and returns the (possibly replaced) instance.

        Raises:
            ServiceNotRegisteredError: If the name is not registered
            InvalidServiceError: If the definition is not a service factory
        """
        definition = self.raw(name)

        if not callable(definition) or id(definition) in self._protected:
            raise InvalidServiceError(f"Service '{name}' does not contain an object definition")

        if not callable(extender):
            raise InvalidServiceError("Extension service definition is not a callable")

        def extended(container: 'Container') -> Any:
            return extender(definition(container), container)

        if id(definition) in self._factories:
            self._factories[id(extended)] = extended

        self[name] = extended
        return extended

    def register(self, provider: ServiceProvider, values: Optional[Dict[str, Any]] = None) -> 'Container':
        """
        Register a service provider and then apply extra values.

        Returns:
            Self for method chaining
        """
        provider.register(self)

        for name, value in (values or {}).items():
            self[name] = value

        logger.debug(f"Registered provider: {type(provider).__name__}")
        return self

    def __repr__(self) -> str:
        return f"Container(definitions={len(self._values)}, instances={len(self._instances)})"
