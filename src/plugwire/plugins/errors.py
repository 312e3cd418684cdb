"""Exceptions raised while resolving, constructing and booting plugins.

Every error here aborts application startup. The plugin manager stamps the
originating plugin identifier onto the exception (``exc.plugin``) before
re-raising, so the failure points at the plugin that caused it.
"""

from __future__ import annotations

from pathlib import Path


class PluginError(Exception):
    """Base exception for plugin errors."""

    def __init__(self, message: str, *, plugin: str | None = None) -> None:
        super().__init__(message)
        self.plugin = plugin

    def __str__(self) -> str:
        message = super().__str__()
        if self.plugin:
            return f"[{self.plugin}] {message}"
        return message


class InvalidConfiguration(PluginError):
    """A plugin declares invalid identity or configuration data."""

    pass


class ResourceNotFound(PluginError):
    """A config file, route file or resource directory is missing."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        plugin: str | None = None,
    ) -> None:
        super().__init__(message, plugin=plugin)
        self.path = Path(path) if path is not None else None


class PluginLoadError(PluginError):
    """A plugin identifier cannot be resolved to a plugin class."""

    pass


class PluginBootError(PluginError):
    """A plugin raised an unexpected exception from ``boot()``."""

    pass
