"""Plugin manager: resolves, deduplicates and boots configured plugins.

The manager is a memoizing factory bound to the application context. The
first ``get_instance`` call builds it and boots every configured plugin in
list order; later calls return the same manager and ignore their arguments.
A failed boot is sticky: later calls re-raise the original error.

Example:
    manager = PluginManager.get_instance(app, [
        "acme.articles:ArticlesPlugin",
        "acme.comments:CommentsPlugin",
    ])

    manager.get_plugin("acme.articles:ArticlesPlugin")
    manager.names()  # ["articles", "comments"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import TYPE_CHECKING

from plugwire.observability.logging import LogContext
from plugwire.plugins.base import Plugin, plugin_type_id
from plugwire.plugins.errors import PluginBootError, PluginError
from plugwire.plugins.loader import plugin_identifier, resolve_plugin_class

if TYPE_CHECKING:
    from plugwire.host.container import Application

logger = logging.getLogger(__name__)

PluginReference = str | type[Plugin]


class PluginManager:
    """Registry of booted plugins, keyed by identifier.

    Append-only: plugins are never unregistered or re-booted. References to
    the same class ("pkg.mod:Cls", "pkg.mod.Cls" or the class itself)
    collapse to the first occurrence; later spellings become aliases.

    If a plugin fails, the manager keeps the error and every later
    ``get_instance`` call re-raises it instead of returning a partially
    booted manager.
    """

    def __init__(self, app: Application) -> None:
        """Initialize an empty manager (use get_instance() instead)."""
        self._app = app
        self._plugins: dict[str, Plugin] = {}
        # reference identifier or plugin type id -> registry identifier
        self._aliases: dict[str, str] = {}
        self._failure: PluginError | None = None

    @classmethod
    def get_instance(
        cls,
        app: Application,
        plugins: Iterable[PluginReference] | None = None,
    ) -> PluginManager:
        """Get the manager bound to ``app``, building and booting it on first call.

        Args:
            app: Host application context
            plugins: Plugin identifiers or classes, in boot order

        Returns:
            The manager for ``app``

        Raises:
            PluginError: If any plugin fails to resolve, construct or boot,
                now or during an earlier call for the same ``app``
        """
        if app.resolved(cls):
            manager: PluginManager = app.make(cls)
        else:
            manager = cls(app)
            app.instance(cls, manager)
            try:
                manager._load(plugins or [])
            except PluginError as e:
                manager._failure = e
                raise

        if manager._failure is not None:
            raise manager._failure
        return manager

    @property
    def failed(self) -> bool:
        """True if startup was aborted by a plugin error."""
        return self._failure is not None

    def _load(self, references: Iterable[PluginReference]) -> None:
        references = list(references)
        logger.info(f"Booting {len(references)} configured plugins")

        for reference in references:
            identifier = plugin_identifier(reference)

            if identifier in self._aliases:
                logger.debug(f"Skipping duplicate plugin identifier: {identifier}")
                continue

            with LogContext(plugin=identifier), self._failures(identifier):
                plugin_class = resolve_plugin_class(reference)
                type_id = plugin_type_id(plugin_class)

                if type_id in self._aliases:
                    self._aliases[identifier] = self._aliases[type_id]
                    logger.debug(
                        f"Skipping {identifier}: same plugin as {self._aliases[type_id]}"
                    )
                    continue

                plugin = plugin_class(self._app)
                self._plugins[identifier] = plugin
                self._aliases[identifier] = identifier
                self._aliases[type_id] = identifier
                plugin.boot()

            logger.info(f"Booted plugin {plugin.name} ({identifier})")

    @contextmanager
    def _failures(self, identifier: str) -> Iterator[None]:
        """Stamp ``identifier`` onto plugin errors; wrap anything else."""
        try:
            yield
        except PluginError as e:
            e.plugin = identifier
            logger.error(f"Plugin {identifier} failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Plugin {identifier} failed to boot: {e}")
            raise PluginBootError(f"Failed to boot plugin: {e}", plugin=identifier) from e

    @property
    def plugins(self) -> Mapping[str, Plugin]:
        """Booted plugins by identifier (read-only view)."""
        return MappingProxyType(self._plugins)

    def get_plugin(self, identifier: PluginReference) -> Plugin | None:
        """Get a booted plugin by identifier, alias or class."""
        key = self._aliases.get(plugin_identifier(identifier))
        return self._plugins.get(key) if key is not None else None

    def is_loaded(self, identifier: PluginReference) -> bool:
        return plugin_identifier(identifier) in self._aliases

    def names(self) -> list[str]:
        """Plugin names in boot order."""
        return [plugin.name for plugin in self._plugins.values()]

    def __iter__(self) -> Iterator[Plugin]:
        return iter(self._plugins.values())

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, identifier: object) -> bool:
        if isinstance(identifier, (str, type)):
            return self.is_loaded(identifier)
        return False
