"""
Package base classes.
"""

from .base_package import Package, TagRegistry, ServiceFactory

__all__ = [
    'Package',
    'TagRegistry',
    'ServiceFactory'
]
