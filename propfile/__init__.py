"""Layered `.properties` loading.

Reads a named property file from three layers and merges them:
- bundled: shipped inside the package (mandatory)
- local: in the current working directory
- global: in ``~/<namespace>/``

Later layers overwrite keys from earlier ones.
"""
from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    MissingDefaultsError,
    PropertyValueError,
    PropfileException,
)
from .loader import DEFAULT_NAMESPACE, Layer, LayeredConfigLoader, property_filename
from .parser import load_properties, parse_properties
from .service import PropertiesService, PropertiesServiceFactory

__all__ = [
    "ConfigurationError",
    "DEFAULT_NAMESPACE",
    "Layer",
    "LayeredConfigLoader",
    "MissingDefaultsError",
    "PropertiesService",
    "PropertiesServiceFactory",
    "PropertyValueError",
    "PropfileException",
    "load_properties",
    "parse_properties",
    "property_filename",
]
