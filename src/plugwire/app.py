"""Application factory for plugwire hosts.

Creates the application with:
- A service container holding config, router, views and migrator
- Operator configuration loaded from Settings and an optional config file
- Plugins resolved and booted synchronously, in configuration order

A failing plugin aborts startup; create_app() raises instead of returning a
partially wired application.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI

from plugwire.config import Settings
from plugwire.config import settings as default_settings
from plugwire.host.container import Application
from plugwire.host.migrations import Migrator
from plugwire.host.repository import Repository
from plugwire.host.routing import Router
from plugwire.host.views import ViewFactory
from plugwire.observability import configure_logging
from plugwire.plugins.loader import load_config_file
from plugwire.plugins.manager import PluginManager
from plugwire.plugins.provider import PluginServiceProvider

logger = logging.getLogger(__name__)


def load_config_items(settings: Settings) -> dict[str, Any]:
    """Merge the operator config file with values from Settings.

    A non-empty PLUGWIRE_PLUGINS list replaces the file's "plugins" entry.
    Mappings such as "app" are merged one level deep; Settings values win.
    """
    items: dict[str, Any] = {}
    if settings.config_file is not None:
        items = load_config_file(settings.config_file)
        logger.info(f"Loaded operator config from {settings.config_file}")

    for key, value in settings.config_items().items():
        if key == "plugins" and not value and "plugins" in items:
            continue
        if isinstance(value, dict) and isinstance(items.get(key), dict):
            value = {**items[key], **value}
        items[key] = value
    return items


def build_application(
    settings: Settings | None = None,
    http: FastAPI | None = None,
) -> Application:
    """Create the service container and register host services.

    Plugins are not booted yet; call boot_application() for that.
    """
    settings = settings or default_settings
    http = http or FastAPI(title=settings.app_name)

    app = Application()
    app.instance("settings", settings)
    app.instance("http", http)
    app.instance("config", Repository(load_config_items(settings)))
    app.singleton("router", lambda app: Router(app.make("http")))
    app.singleton("view", lambda app: ViewFactory())
    app.singleton("migrator", lambda app: Migrator())

    provider = PluginServiceProvider(app)
    provider.register()
    app.instance(PluginServiceProvider, provider)
    return app


def boot_application(app: Application) -> PluginManager:
    """Boot every configured plugin."""
    provider: PluginServiceProvider = app.make(PluginServiceProvider)
    manager = provider.boot()
    logger.info(f"Plugins ready: {manager.names()}")
    return manager


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application with plugin routes mounted
    """
    settings = settings or default_settings

    configure_logging(json_format=settings.json_logs, level=settings.log_level)
    logger.info(f"Starting {settings.app_name} ({settings.env})")

    http = FastAPI(title=settings.app_name)
    app = build_application(settings, http)
    boot_application(app)

    http.state.container = app
    return http
