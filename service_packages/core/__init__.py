"""
Core definitions shared by the container and the package base.
"""

from .errors import PackageError, PackageErrorKind

__all__ = [
    'PackageError',
    'PackageErrorKind'
]
