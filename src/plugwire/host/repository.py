"""Configuration repository.

Nested mapping with dotted-key access, seeded from Settings and an optional
operator configuration file.

Example:
    config = Repository({"plugin_demo": {"x": 1}})
    config.get("plugin_demo.x")          # 1
    config.set("plugin_demo.y", 3)
    config.get("missing", default={})    # {}
"""

from __future__ import annotations

import copy
from typing import Any

_MISSING = object()


class Repository:
    """Dotted-key configuration store."""

    def __init__(self, items: dict[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = copy.deepcopy(items) if items else {}

    def has(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key.

        Args:
            key: Dotted key ("plugin_demo.x")
            default: Returned when the key is missing

        Returns:
            The stored value or ``default``
        """
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        """Set a value by dotted key, creating intermediate mappings."""
        *parents, last = key.split(".")
        node = self._items
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[last] = value

    def all(self) -> dict[str, Any]:
        """Deep copy of every item."""
        return copy.deepcopy(self._items)

    def _lookup(self, key: str) -> Any:
        node: Any = self._items
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def __getitem__(self, key: str) -> Any:
        value = self._lookup(key)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"Repository({sorted(self._items)})"
