"""plugwire - plugin loading for FastAPI hosts.

Plugins declare config defaults, route groups, view namespaces and migration
paths; the plugin manager boots them once, in configuration order.
"""

__version__ = "0.1.0"

from plugwire.plugins import (
    InvalidConfiguration,
    Plugin,
    PluginError,
    PluginManager,
    PluginServiceProvider,
    ResourceNotFound,
)

__all__ = [
    "__version__",
    "Plugin",
    "PluginManager",
    "PluginServiceProvider",
    "PluginError",
    "InvalidConfiguration",
    "ResourceNotFound",
]
