"""Base class for plugwire plugins.

Provides the contract every plugin implements:
- Plugin identity (name, version, description)
- The boot() entry point, called exactly once by the plugin manager
- Registration helpers that attach the plugin to host services

Example:
    class ArticlesPlugin(Plugin):
        name = "articles"
        version = "1.0.0"
        description = "Articles and comments"

        def boot(self) -> None:
            self.enable_config()
            self.enable_routes(prefix="/articles")
            self.enable_views()
            self.enable_migrations()

A plugin's files live next to the module that defines the class:

    acme/articles/
        __init__.py          # defines ArticlesPlugin
        config.yaml          # enable_config()
        routes.py            # enable_routes()
        resources/views/     # enable_views()
        database/migrations/ # enable_migrations()
        http/controllers/    # route actions referenced as "module:function"
"""

from __future__ import annotations

import inspect
import logging
import re
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from plugwire.plugins.errors import InvalidConfiguration, ResourceNotFound
from plugwire.plugins.loader import load_config_file, load_route_file

if TYPE_CHECKING:
    from plugwire.host.container import Application
    from plugwire.host.migrations import Migrator
    from plugwire.host.views import View

logger = logging.getLogger(__name__)

# Per-plugin config entries live under "plugin_<name>"
CONFIG_PREFIX = "plugin_"

VIEW_NAMESPACE_PREFIX = "plugin:"
PLUGIN_SUFFIX = "Plugin"
CONTROLLER_SUFFIX = "http.controllers"


def camel_case(value: str) -> str:
    """Convert a value to lower camel case.

    "Articles" -> "articles", "BlogPosts" -> "blogPosts", "blog_posts" -> "blogPosts"
    """
    words = [w for w in re.split(r"[\s_\-]+", value) if w]
    studly = "".join(w[0].upper() + w[1:] for w in words)
    return studly[:1].lower() + studly[1:]


@dataclass(frozen=True)
class PluginDescriptor:
    """Static metadata describing a plugin class.

    Attributes:
        name: Plugin name (unique identifier)
        version: Plugin version
        description: Plugin description
        type_id: Fully-qualified class identifier (module.QualName)
        short_name: Unqualified class name
        package: Import package that owns the defining module
        root_path: Directory holding the plugin's files
    """

    name: str
    version: str
    description: str
    type_id: str
    short_name: str
    package: str
    root_path: Path

    @property
    def controller_namespace(self) -> str:
        """Package that route actions are resolved against."""
        if self.package:
            return f"{self.package}.{CONTROLLER_SUFFIX}"
        return CONTROLLER_SUFFIX

    @property
    def view_namespace(self) -> str:
        """View namespace derived from the class name.

        ArticlesPlugin is reachable through "plugin:articles::<view name>".

        Raises:
            InvalidConfiguration: If the class name does not end with "Plugin"
                or nothing remains once the suffix is removed
        """
        stem = self.short_name.removesuffix(PLUGIN_SUFFIX)
        if stem == self.short_name or not stem:
            raise InvalidConfiguration(
                f"Cannot derive a view namespace from class name {self.short_name!r}: "
                f"expected '<Name>{PLUGIN_SUFFIX}'",
                plugin=self.type_id,
            )
        return VIEW_NAMESPACE_PREFIX + camel_case(stem)


class Plugin(ABC):
    """Base class for all plugins.

    Each plugin must define:
    - name: Non-empty plugin identifier
    - boot: Called once by the manager to register extension points

    Plugins can optionally define:
    - description, version: Free-form metadata
    - root_path: Directory holding the plugin's files (derived from the
      defining module when not set)
    """

    # Required metadata
    name: str = ""

    # Optional metadata
    description: str = ""
    version: str = ""
    root_path: ClassVar[Path | str | None] = None

    def __init__(self, app: Application) -> None:
        """Initialize plugin.

        Args:
            app: Host application context

        Raises:
            InvalidConfiguration: If the plugin has no name
        """
        self._app = app
        self._check_plugin_name()

    def __setattr__(self, key: str, value: Any) -> None:
        if key == "name" and "_app" in self.__dict__:
            raise AttributeError("Plugin name is immutable")
        super().__setattr__(key, value)

    def _check_plugin_name(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidConfiguration(
                "Missing plugin name.", plugin=plugin_type_id(type(self))
            )

    @property
    def app(self) -> Application:
        """Host application context."""
        return self._app

    @abstractmethod
    def boot(self) -> None:
        """Register the plugin's extension points with the host.

        Called exactly once per plugin instance.
        """
        pass

    @cached_property
    def descriptor(self) -> PluginDescriptor:
        """Static metadata for this plugin, computed on first access."""
        cls = type(self)
        return PluginDescriptor(
            name=self.name,
            version=self.version,
            description=self.description,
            type_id=plugin_type_id(cls),
            short_name=cls.__name__,
            package=_owning_package(cls),
            root_path=_root_path(cls),
        )

    def get_plugin_path(self) -> Path:
        """Directory containing the plugin's defining module."""
        return self.descriptor.root_path

    @property
    def controller_namespace(self) -> str:
        return self.descriptor.controller_namespace

    @property
    def view_namespace(self) -> str:
        return self.descriptor.view_namespace

    def enable_config(self, path: str = "config.yaml", key: str = "") -> None:
        """Merge the plugin's default configuration into the host config.

        Values already present under ``key`` win; the plugin's file only
        fills the keys the host has not set.

        Args:
            path: Config file relative to the plugin directory
            key: Config key (defaults to "plugin_<name>")
        """
        fragment = load_config_file(self.get_plugin_path() / path)
        key = key or f"{CONFIG_PREFIX}{self.name}"

        config = self.app["config"]
        existing = config.get(key, {})
        if not isinstance(existing, dict):
            raise InvalidConfiguration(
                f"Config entry {key!r} is not a mapping and cannot take plugin defaults"
            )

        config.set(key, {**fragment, **existing})
        logger.debug(f"Plugin {self.name} merged config {path} into {key!r}")

    def enable_routes(self, path: str = "routes.py", prefix: str = "") -> None:
        """Register the plugin's routes inside its controller namespace.

        The route file runs with ``router`` (the route group) and ``plugin``
        in its globals.

        Args:
            path: Route file relative to the plugin directory
            prefix: URL prefix for every route in the group
        """
        route_file = self.get_plugin_path() / path
        if not route_file.is_file():
            raise ResourceNotFound(f"Route file not found: {route_file}", path=route_file)

        def register(group: Any) -> None:
            load_route_file(
                route_file,
                f"plugwire_routes_{self.name}",
                router=group,
                plugin=self,
            )

        options = {
            "namespace": self.controller_namespace,
            "prefix": prefix,
            "tags": [self.name],
        }
        self.app.router.group(options, register)
        logger.debug(f"Plugin {self.name} registered routes from {path}")

    def enable_views(self, path: str = "views") -> None:
        """Register the plugin's view namespace.

        Eg: view("plugin:articles::index")

        Args:
            path: View directory relative to "<plugin>/resources"
        """
        directory = self.get_plugin_path() / "resources" / path
        if not directory.is_dir():
            raise ResourceNotFound(f"View directory not found: {directory}", path=directory)

        self.app["view"].add_namespace(self.view_namespace, directory)

    def enable_migrations(self, paths: str | Path | Sequence[str | Path] = "migrations") -> None:
        """Register migration search paths once the migrator is resolved.

        Args:
            paths: One path or an ordered sequence of paths relative to
                "<plugin>/database"
        """
        if isinstance(paths, (str, Path)):
            paths = [paths]
        directories = [self.get_plugin_path() / "database" / p for p in paths]

        def register(migrator: Migrator) -> None:
            for directory in directories:
                if not directory.is_dir():
                    raise ResourceNotFound(
                        f"Migration directory not found: {directory}",
                        path=directory,
                        plugin=self.descriptor.type_id,
                    )
                migrator.add_path(directory)

        self.app.after_resolving("migrator", register)

    def view_name(self, view: str) -> str:
        """Fully-qualified name of one of the plugin's views."""
        return f"{self.view_namespace}::{view}"

    def view(self, view: str) -> View:
        """Return one of the plugin's views."""
        return self.app["view"].make(self.view_name(view))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} version={self.version!r}>"


def plugin_type_id(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _owning_package(cls: type) -> str:
    module = sys.modules.get(cls.__module__)
    package = getattr(module, "__package__", None)
    if package is not None:
        return package
    return cls.__module__.rpartition(".")[0]


def _root_path(cls: type[Plugin]) -> Path:
    if cls.root_path is not None:
        return Path(cls.root_path)
    try:
        return Path(inspect.getfile(cls)).resolve().parent
    except (TypeError, OSError) as e:
        raise InvalidConfiguration(
            f"Cannot locate the source file of {cls.__qualname__}; set root_path",
            plugin=plugin_type_id(cls),
        ) from e
