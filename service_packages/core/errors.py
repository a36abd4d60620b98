"""
Core error definitions for service packages

Provides error kinds and the package exception that don't depend on other modules.
"""

from enum import Enum
from typing import Any, Dict, Optional


class PackageErrorKind(Enum):
    """Standardized error kinds raised while a package registers itself."""

    # Support registry errors
    MISSING_TAG_SUPPORT = "MISSING_TAG_SUPPORT"
    MISSING_CONFIGURATION_SUPPORT = "MISSING_CONFIGURATION_SUPPORT"


class PackageError(Exception):
    """Raised when a package requires a support registry the container lacks."""

    def __init__(self, kind: PackageErrorKind, message: str, details: Optional[Dict[str, Any]] = None):
        self.kind = kind
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary suitable for structured logging."""
        return {
            'kind': self.kind.value,
            'message': self.message,
            'details': self.details,
        }

    def __repr__(self) -> str:
        return f"PackageError(kind={self.kind.value}, message={self.message!r})"
