"""Plugin resolution and file loading.

Resolves plugin identifiers to classes and loads the files plugins ship:
- Dotted identifiers ("package.module:ClassName" or "package.module.ClassName")
- Direct class references
- Python entry points (plugwire.plugins group), for listing installed plugins
- YAML/JSON configuration fragments
- Route files executed as throwaway modules

Example:
    plugin_class = resolve_plugin_class("acme.articles:ArticlesPlugin")
    fragment = load_config_file(Path("acme/articles/config.yaml"))
"""

from __future__ import annotations

import importlib
import importlib.util
import json
import logging
import re
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

import yaml

from plugwire.plugins.errors import (
    InvalidConfiguration,
    PluginLoadError,
    ResourceNotFound,
)

if TYPE_CHECKING:
    from plugwire.plugins.base import Plugin

logger = logging.getLogger(__name__)

# Entry point group for plugin discovery
ENTRY_POINT_GROUP = "plugwire.plugins"


def plugin_identifier(reference: str | type[Plugin]) -> str:
    """Return the registry key for a plugin reference.

    Strings are used verbatim; classes are keyed by ``module.QualName``.
    """
    if isinstance(reference, str):
        return reference.strip()
    return f"{reference.__module__}.{reference.__qualname__}"


def resolve_plugin_class(reference: str | type[Plugin]) -> type[Plugin]:
    """Resolve a plugin reference to a Plugin subclass.

    Args:
        reference: Dotted identifier or Plugin subclass

    Returns:
        The plugin class

    Raises:
        PluginLoadError: If the reference cannot be imported or is not a plugin
    """
    from plugwire.plugins.base import Plugin

    identifier = plugin_identifier(reference)

    if isinstance(reference, str):
        if not identifier:
            raise PluginLoadError("Empty plugin identifier")
        obj = _import_object(identifier)
    else:
        obj = reference

    if not (isinstance(obj, type) and issubclass(obj, Plugin)) or obj is Plugin:
        raise PluginLoadError(f"Not a Plugin subclass: {identifier}", plugin=identifier)

    return obj


def _import_object(identifier: str) -> Any:
    """Import ``module:attr`` or ``module.attr``."""
    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
    else:
        module_name, _, attr_path = identifier.rpartition(".")

    if not module_name or not attr_path:
        raise PluginLoadError(f"Invalid plugin identifier: {identifier}", plugin=identifier)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise PluginLoadError(
            f"Cannot import module {module_name!r}: {e}", plugin=identifier
        ) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise PluginLoadError(
                f"Module {module_name!r} has no attribute {attr_path!r}",
                plugin=identifier,
            ) from e

    return obj


def discover_entry_points(group: str = ENTRY_POINT_GROUP) -> dict[str, str]:
    """List plugins advertised by installed distributions.

    Discovery only lists identifiers; nothing is imported or booted.

    Returns:
        Dict mapping entry point names to identifiers ("module:attr")
    """
    discovered: dict[str, str] = {}
    for ep in entry_points(group=group):
        discovered[ep.name] = ep.value
        logger.debug(f"Discovered plugin entry point: {ep.name} -> {ep.value}")
    return discovered


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON mapping from disk.

    Args:
        path: Path to the configuration file

    Returns:
        The parsed mapping (empty for an empty YAML document)

    Raises:
        ResourceNotFound: If the file does not exist
        InvalidConfiguration: If the file does not hold a mapping
    """
    if not path.is_file():
        raise ResourceNotFound(f"Config file not found: {path}", path=path)

    content = path.read_text(encoding="utf-8")

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfiguration(f"Failed to parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfiguration(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def load_route_file(path: Path, module_name: str, **namespace: Any) -> ModuleType:
    """Execute a route file as a module with extra globals injected.

    Args:
        path: Path to the route file
        module_name: Name given to the throwaway module
        **namespace: Globals visible to the route file (e.g. ``router``)

    Returns:
        The executed module

    Raises:
        ResourceNotFound: If the file does not exist
    """
    if not path.is_file():
        raise ResourceNotFound(f"Route file not found: {path}", path=path)

    module_name = re.sub(r"\W", "_", module_name)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ResourceNotFound(f"Could not create module spec for {path}", path=path)

    module = importlib.util.module_from_spec(spec)
    module.__dict__.update(namespace)
    spec.loader.exec_module(module)
    logger.debug(f"Executed route file {path} as {module_name}")
    return module
