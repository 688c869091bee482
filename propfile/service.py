"""Typed, read-only access to loaded properties.

Wraps the plain string mapping returned by the loader so callers can ask
for booleans, numbers and lists without repeating conversion code.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

from .exceptions import PropertyValueError
from .loader import DEFAULT_NAMESPACE, LayeredConfigLoader

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}


class PropertiesService:
    """Facade over a merged property mapping.

    Example:
        service = PropertiesService({"db.port": "5432", "debug": "yes"})
        service.get_int("db.port")  # 5432
        service.get_bool("debug")   # True
    """

    def __init__(self, properties: Mapping[str, str]):
        self._properties: Dict[str, str] = dict(properties)

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def keys(self) -> List[str]:
        return list(self._properties)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a raw string value."""
        return self._properties.get(key, default)

    def require(self, key: str) -> str:
        """Get a raw string value that must be present.

        Raises:
            PropertyValueError: If the key is not set in any layer
        """
        try:
            return self._properties[key]
        except KeyError:
            raise PropertyValueError(f"Required property '{key}' is not set") from None

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Parse a boolean property.

        Accepts "1", "true", "yes", "y", "on" and their negatives,
        case-insensitively.

        Raises:
            PropertyValueError: If the value is not a recognised boolean
        """
        raw = self._properties.get(key)
        if raw is None:
            return default
        value = raw.strip().lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise PropertyValueError(f"Property '{key}' is not a boolean: {raw!r}")

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        raw = self._properties.get(key)
        if raw is None:
            return default
        try:
            return int(raw.strip())
        except ValueError:
            raise PropertyValueError(f"Property '{key}' is not an integer: {raw!r}") from None

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        raw = self._properties.get(key)
        if raw is None:
            return default
        try:
            return float(raw.strip())
        except ValueError:
            raise PropertyValueError(f"Property '{key}' is not a number: {raw!r}") from None

    def get_list(self, key: str, sep: str = ",", default: Optional[List[str]] = None) -> List[str]:
        """Split a property on ``sep``, dropping blank items."""
        raw = self._properties.get(key)
        if raw is None:
            return list(default) if default is not None else []
        return [item.strip() for item in raw.split(sep) if item.strip()]

    def with_prefix(self, prefix: str) -> "PropertiesService":
        """Return the properties under ``prefix`` with the prefix removed.

        ``with_prefix("db.")`` turns ``db.host`` into ``host``.
        """
        return PropertiesService({
            key[len(prefix):]: value
            for key, value in self._properties.items()
            if key.startswith(prefix)
        })

    def to_dict(self) -> Dict[str, str]:
        """Copy of the underlying mapping."""
        return dict(self._properties)


class PropertiesServiceFactory:
    """Factory for creating PropertiesService instances."""

    @staticmethod
    def create(name: str, namespace: str = DEFAULT_NAMESPACE, **loader_kwargs: Any) -> PropertiesService:
        """Load ``name`` through a new loader and wrap the result.

        Args:
            name: Logical configuration name
            namespace: Global layer sub-directory name
            **loader_kwargs: Extra LayeredConfigLoader arguments

        Returns:
            PropertiesService over the merged properties

        Raises:
            MissingDefaultsError: If the bundled layer is missing
        """
        loader = LayeredConfigLoader(namespace=namespace, **loader_kwargs)
        return PropertiesService(loader.read(name))

    @staticmethod
    def create_from_properties(properties: Mapping[str, str]) -> PropertiesService:
        return PropertiesService(properties)


__all__ = ["PropertiesService", "PropertiesServiceFactory"]
