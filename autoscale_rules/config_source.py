"""Flat key/value access to the scheduler configuration.

Keys are colon-separated paths into a nested mapping, the way tsuru-style
YAML configuration files address them::

    docker:
      scheduler:
        total-memory-metadata: memory
        max-used-memory: 0.8
      auto-scale:
        metadata-filter: pool=legacy
        max-container-count: 10

``docker:scheduler:max-used-memory`` then resolves to ``0.8``. A missing key
or a value that cannot be read as the requested type is reported as absent,
never as an error.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import yaml

from autoscale_rules.config import Settings

_MISSING = object()

_TRUE_STRINGS = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "f", "false", "no", "off"})


class ConfigSource(Protocol):
    """Typed getters returning ``(value, present)``."""

    def get_string(self, key: str) -> tuple[str, bool]: ...

    def get_int(self, key: str) -> tuple[int, bool]: ...

    def get_float(self, key: str) -> tuple[float, bool]: ...

    def get_bool(self, key: str) -> tuple[bool, bool]: ...


class MappingConfigSource:
    """ConfigSource over an in-memory (usually YAML-loaded) mapping."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data: Mapping[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MappingConfigSource":
        """Load a configuration file. An empty file yields an empty source."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        return cls(data)

    def _lookup(self, key: str) -> Any:
        if key in self._data:
            return self._data[key]
        node: Any = self._data
        for part in key.split(":"):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def get_string(self, key: str) -> tuple[str, bool]:
        value = self._lookup(key)
        if isinstance(value, str):
            return value, True
        if isinstance(value, bool):
            return ("true" if value else "false"), True
        if isinstance(value, (int, float)):
            return str(value), True
        return "", False

    def get_int(self, key: str) -> tuple[int, bool]:
        value = self._lookup(key)
        if isinstance(value, bool):
            return 0, False
        if isinstance(value, int):
            return value, True
        if isinstance(value, str):
            try:
                return int(value.strip()), True
            except ValueError:
                return 0, False
        return 0, False

    def get_float(self, key: str) -> tuple[float, bool]:
        value = self._lookup(key)
        if isinstance(value, bool):
            return 0.0, False
        if isinstance(value, (int, float)):
            return float(value), True
        if isinstance(value, str):
            try:
                return float(value.strip()), True
            except ValueError:
                return 0.0, False
        return 0.0, False

    def get_bool(self, key: str) -> tuple[bool, bool]:
        value = self._lookup(key)
        if isinstance(value, bool):
            return value, True
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True, True
            if lowered in _FALSE_STRINGS:
                return False, True
        return False, False


def load_config_source(settings: Settings) -> MappingConfigSource:
    """Build the ConfigSource named by ``settings.scheduler_config_path``."""
    if settings.scheduler_config_path:
        return MappingConfigSource.from_yaml(settings.scheduler_config_path)
    return MappingConfigSource()
