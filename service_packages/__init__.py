"""
service_packages - reusable groups of services for a dependency injection container.
"""

from service_packages.container import Container, ServiceProvider, ServiceNotRegisteredError, InvalidServiceError
from service_packages.core import PackageError, PackageErrorKind
from service_packages.packages import Package, TagRegistry

__version__ = '0.1.0'

__all__ = [
    'Container',
    'ServiceProvider',
    'ServiceNotRegisteredError',
    'InvalidServiceError',
    'PackageError',
    'PackageErrorKind',
    'Package',
    'TagRegistry'
]
