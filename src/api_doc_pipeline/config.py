"""Read-only access to hierarchical configuration.

Keys are addressed with colon-separated paths such as ``OpenApi:Document:Title``.
Each path segment is matched case-insensitively, so an ``openapi:`` section in
YAML answers to ``OpenApi``.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from api_doc_pipeline.values import to_primitive

SEPARATOR = ":"

_MISSING = object()


class ConfigurationMissing(Exception):
    """A required configuration value or section is absent or unusable."""

    def __init__(self, path: str, reason: str = "is not configured"):
        self.path = path
        super().__init__(f"Configuration value '{path}' {reason}.")


def join_path(*parts: str) -> str:
    return SEPARATOR.join(p for p in parts if p)


class Configuration:
    """A view over a configuration tree, rooted at ``path``."""

    def __init__(self, data: Mapping[str, Any] | None = None, path: str = ""):
        self._data = data if data is not None else {}
        self.path = path

    def section_exists(self, name: str) -> bool:
        """True if ``name`` is present at all, even when it holds nothing."""
        return self._find(name) is not _MISSING

    def section(self, name: str) -> "Configuration | None":
        node = self._find(name)
        if node is _MISSING:
            return None
        if node is None:
            node = {}
        full_path = join_path(self.path, name)
        if not isinstance(node, Mapping):
            raise ConfigurationMissing(full_path, "is not a configuration section")
        return Configuration(node, full_path)

    def required_value(self, section: str, key: str) -> str:
        """Return the value at ``section:key``, raising if it is not set."""
        relative = join_path(section, key)
        full_path = join_path(self.path, relative)
        node = self._find(relative)
        if node is _MISSING or node is None:
            raise ConfigurationMissing(full_path)

        value = to_primitive(node)
        if not value.supported:
            raise ConfigurationMissing(full_path, "is not a scalar value")
        return value.render()

    def children(self, name: str) -> dict[str, str]:
        """Return the scalar children of a subtree, in declaration order.

        An absent, empty or non-mapping subtree is treated as missing.
        """
        full_path = join_path(self.path, name)
        node = self._find(name)
        if node is _MISSING or node is None:
            raise ConfigurationMissing(full_path)
        if not isinstance(node, Mapping):
            raise ConfigurationMissing(full_path, "is not a configuration section")
        if not node:
            raise ConfigurationMissing(full_path, "is empty")

        result = {}
        for key, raw in node.items():
            value = to_primitive(raw)
            if not value.supported:
                raise ConfigurationMissing(join_path(full_path, str(key)), "is not a scalar value")
            result[str(key)] = value.render()
        return result

    def _find(self, name: str) -> Any:
        node: Any = self._data
        for part in name.split(SEPARATOR):
            if not isinstance(node, Mapping):
                return _MISSING
            node = _lookup(node, part)
            if node is _MISSING:
                return _MISSING
        return node


def _lookup(node: Mapping[str, Any], key: str) -> Any:
    if key in node:
        return node[key]
    folded = key.casefold()
    for candidate, value in node.items():
        if str(candidate).casefold() == folded:
            return value
    return _MISSING


def load_configuration(file_path: Path) -> Configuration:
    """Load an appsettings-style YAML (or JSON) file."""
    text = file_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return Configuration()
    if not isinstance(data, Mapping):
        raise ConfigurationMissing(str(file_path), "does not contain a configuration mapping")
    return Configuration(data)
