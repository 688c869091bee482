"""Custom exception hierarchy for the property loader."""
from __future__ import annotations

from typing import Optional


class PropfileException(Exception):
    """Base exception for all property loading errors."""
    pass


class ConfigurationError(PropfileException):
    """Raised when configuration is invalid or missing."""
    pass


class MissingDefaultsError(ConfigurationError):
    """Raised when the bundled defaults for a property file cannot be read.

    The bundled layer is mandatory; its absence is a packaging defect and
    the read is aborted without returning a partial mapping.
    """

    def __init__(self, name: str, resource: str, cause: Optional[BaseException] = None):
        self.name = name
        self.resource = resource
        self.cause = cause
        message = f"No bundled defaults for '{name}' ({resource})"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class PropertyValueError(ConfigurationError):
    """Raised when a property is missing or cannot be converted."""
    pass
