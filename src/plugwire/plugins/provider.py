"""Host-side glue that loads configured plugins during startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from plugwire.plugins.manager import PluginManager

if TYPE_CHECKING:
    from plugwire.host.container import Application

logger = logging.getLogger(__name__)

# Package defaults for the "plugins" config entry
DEFAULT_CONFIG: dict[str, object] = {"plugins": []}


class PluginServiceProvider:
    """Registers the plugin manager and boots configured plugins.

    register() runs before any provider boots; boot() builds the manager
    from the "plugins" config entry.
    """

    def __init__(self, app: Application) -> None:
        self.app = app

    def register(self) -> None:
        config = self.app["config"]
        for key, value in DEFAULT_CONFIG.items():
            if not config.has(key):
                config.set(key, value)

        self.app.singleton(
            PluginManager,
            lambda app: PluginManager.get_instance(app, app["config"].get("plugins", [])),
        )

    def boot(self) -> PluginManager:
        plugins = self.app["config"].get("plugins", [])
        logger.debug(f"Configured plugins: {plugins}")
        return PluginManager.get_instance(self.app, plugins)
