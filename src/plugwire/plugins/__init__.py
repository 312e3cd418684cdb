"""Plugin system for plugwire hosts.

Provides:
- Plugin base class with registration helpers for config, routes, views
  and migrations
- PluginManager that resolves, deduplicates and boots configured plugins
- PluginServiceProvider that wires the manager into host startup

Example - Creating a plugin:

    from plugwire.plugins import Plugin

    class ArticlesPlugin(Plugin):
        name = "articles"
        version = "1.0.0"

        def boot(self) -> None:
            self.enable_config()
            self.enable_routes(prefix="/articles")
            self.enable_views()
            self.enable_migrations()

Example - Configuring plugins (environment or .env):

    PLUGWIRE_PLUGINS='["acme.articles:ArticlesPlugin"]'

Example - Advertising a plugin in pyproject.toml:

    [project.entry-points."plugwire.plugins"]
    articles = "acme.articles:ArticlesPlugin"
"""

from plugwire.plugins.base import (
    CONFIG_PREFIX,
    Plugin,
    PluginDescriptor,
    camel_case,
)
from plugwire.plugins.errors import (
    InvalidConfiguration,
    PluginBootError,
    PluginError,
    PluginLoadError,
    ResourceNotFound,
)
from plugwire.plugins.loader import (
    ENTRY_POINT_GROUP,
    discover_entry_points,
    load_config_file,
    plugin_identifier,
    resolve_plugin_class,
)
from plugwire.plugins.manager import PluginManager
from plugwire.plugins.provider import PluginServiceProvider

__all__ = [
    # Base
    "Plugin",
    "PluginDescriptor",
    "CONFIG_PREFIX",
    "camel_case",
    # Manager
    "PluginManager",
    "PluginServiceProvider",
    # Errors
    "PluginError",
    "InvalidConfiguration",
    "ResourceNotFound",
    "PluginLoadError",
    "PluginBootError",
    # Loader
    "ENTRY_POINT_GROUP",
    "discover_entry_points",
    "load_config_file",
    "plugin_identifier",
    "resolve_plugin_class",
]
