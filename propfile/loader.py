"""Layered property file loader.

Reads ``<name>.properties`` from three layers, in order:
1. Bundled defaults shipped inside a package (mandatory)
2. The current working directory
3. ``<home>/<namespace>/``

Each layer that is present overwrites keys set by the previous ones, so
global settings win over local settings, which win over the bundled
defaults.
"""
from __future__ import annotations

from enum import IntEnum
from importlib import resources as importlib_resources
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Union

from loguru import logger

from .exceptions import MissingDefaultsError
from .parser import load_properties

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

DEFAULT_NAMESPACE = "namespace-not-set"
DEFAULT_RESOURCE_PACKAGE = "propfile.resources"
PROPERTIES_SUFFIX = ".properties"

# Package name, or any directory-like object with joinpath() (Path, Traversable)
ResourceRoot = Union[str, Path, "Traversable"]


class Layer(IntEnum):
    """Property sources ordered by precedence (higher overrides lower)."""
    BUNDLED = 1
    LOCAL = 2
    GLOBAL = 3


def property_filename(name: str) -> str:
    """Map a logical configuration name to its file name."""
    return f"{name}{PROPERTIES_SUFFIX}"


class LayeredConfigLoader:
    """Loads and merges a named property file from all layers.

    The loader holds no state besides its construction arguments, so the
    same instance can serve any number of ``read`` calls.

    Example:
        loader = LayeredConfigLoader(namespace=".myapp")
        props = loader.read("app")  # bundled app.properties, then ./app.properties,
                                    # then ~/.myapp/app.properties

    Attributes:
        namespace: Sub-directory of the home directory holding global files
    """

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        resources: Optional[ResourceRoot] = None,
        home: Optional[Path] = None,
        cwd: Optional[Path] = None,
        logger_instance=logger,
    ):
        """
        Args:
            namespace: Global layer sub-directory name
            resources: Bundled resource root, either a package name or a
                directory; defaults to ``propfile.resources``
            home: Home directory override; ``Path.home()`` when omitted
            cwd: Working directory override; ``Path.cwd()`` when omitted
            logger_instance: Logger receiving the load diagnostics
        """
        self.namespace = namespace
        self._resources = resources if resources is not None else DEFAULT_RESOURCE_PACKAGE
        self._home = Path(home) if home is not None else None
        self._cwd = Path(cwd) if cwd is not None else None
        self.logger = logger_instance

    def read(self, name: str) -> Dict[str, str]:
        """Read all layers of ``name`` and return the merged properties.

        Args:
            name: Logical configuration name, without the suffix

        Returns:
            Merged mapping of key to value

        Raises:
            MissingDefaultsError: If the bundled layer is absent or unreadable
        """
        filename = property_filename(name)
        properties: Dict[str, str] = {}

        properties.update(self._read_bundled(name, filename))

        local_path = self._local_path(filename)
        local = self._read_optional(Layer.LOCAL, local_path)
        if local is not None:
            properties.update(local)

        global_path = self._global_path(filename)
        global_ = self._read_optional(Layer.GLOBAL, global_path)
        if global_ is not None:
            properties.update(global_)

        return properties

    def sources(self, name: str) -> Dict[Layer, str]:
        """Describe where each layer of ``name`` is looked up."""
        filename = property_filename(name)
        return {
            Layer.BUNDLED: self._describe_resource(filename),
            Layer.LOCAL: str(self._local_path(filename)),
            Layer.GLOBAL: str(self._global_path(filename)),
        }

    # ---------- Layers ----------
    def _read_bundled(self, name: str, filename: str) -> Dict[str, str]:
        location = self._describe_resource(filename)
        try:
            resource = self._resource_root().joinpath(filename)
            with resource.open("r", encoding="utf-8") as stream:
                properties = load_properties(stream, source=location)
        except (OSError, UnicodeDecodeError, ImportError, TypeError, ValueError) as e:
            self.logger.trace(f"No bundled properties ({location})")
            raise MissingDefaultsError(name, location, e) from e

        self._log_loaded(Layer.BUNDLED, location, properties)
        return properties

    def _read_optional(self, layer: Layer, path: Path) -> Optional[Dict[str, str]]:
        try:
            with open(path, "r", encoding="utf-8") as stream:
                properties = load_properties(stream, source=str(path))
        except (OSError, UnicodeDecodeError) as e:
            self.logger.trace(f"No {layer.name.lower()} properties ({path}): {e}")
            return None

        self._log_loaded(layer, str(path), properties)
        return properties

    def _log_loaded(self, layer: Layer, location: str, properties: Mapping[str, str]) -> None:
        self.logger.debug(
            f"{layer.name.capitalize()} properties ({location}):\n{format_properties(properties)}"
        )

    # ---------- Paths ----------
    def _resource_root(self):
        if isinstance(self._resources, str):
            return importlib_resources.files(self._resources)
        return self._resources

    def _describe_resource(self, filename: str) -> str:
        if isinstance(self._resources, str):
            return f"resource://{self._resources}/{filename}"
        return str(self._resources.joinpath(filename))

    def _local_path(self, filename: str) -> Path:
        cwd = self._cwd if self._cwd is not None else Path.cwd()
        return cwd / filename

    def _global_path(self, filename: str) -> Path:
        home = self._home if self._home is not None else Path.home()
        return home / self.namespace / filename


def format_properties(properties: Mapping[str, str]) -> str:
    """Render properties as sorted ``key = value`` lines aligned on the widest key."""
    if not properties:
        return "(empty)"
    width = max(len(key) for key in properties)
    return "\n".join(f"{key:<{width}} = {value}" for key, value in sorted(properties.items()))


__all__ = [
    "DEFAULT_NAMESPACE",
    "Layer",
    "LayeredConfigLoader",
    "format_properties",
    "property_filename",
]
