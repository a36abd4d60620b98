"""
Container package for dependency injection.
"""

from .service_container import Container, ServiceProvider, ServiceNotRegisteredError, InvalidServiceError

__all__ = [
    'Container',
    'ServiceProvider',
    'ServiceNotRegisteredError',
    'InvalidServiceError'
]
