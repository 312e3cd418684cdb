"""Application context: a small service container.

Services are registered under string or type keys and resolved by key.
Plugins only rely on ``make``/item access and ``after_resolving``.

Example:
    app = Application()
    app.singleton("migrator", lambda app: Migrator())
    app.after_resolving("migrator", lambda migrator: migrator.add_path(path))

    app.make("migrator")  # builds the migrator, then runs the callback
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

ServiceKey = str | type
Factory = Callable[["Application"], Any]
ResolvedCallback = Callable[[Any], None]


class BindingResolutionError(LookupError):
    """No binding exists for the requested service key."""

    pass


@dataclass
class Binding:
    """Registration of a service factory."""

    factory: Factory
    shared: bool = False


class Application:
    """Service locator shared by the host and its plugins.

    After-resolving callbacks are one-shot: each runs once, the first time
    its service is built (or immediately if the service already exists).
    If a callback raises, the callbacks queued after it run on the next
    resolution of the same key.
    """

    def __init__(self) -> None:
        self._bindings: dict[ServiceKey, Binding] = {}
        self._instances: dict[ServiceKey, Any] = {}
        self._pending: dict[ServiceKey, list[ResolvedCallback]] = {}
        self.instance("app", self)

    def bind(self, key: ServiceKey, factory: Factory, shared: bool = False) -> None:
        """Register a factory for ``key``.

        Args:
            key: Service key
            factory: Callable receiving the application, returning the service
            shared: Build once and reuse the same object
        """
        self._instances.pop(key, None)
        self._bindings[key] = Binding(factory=factory, shared=shared)

    def singleton(self, key: ServiceKey, factory: Factory) -> None:
        """Register a shared factory for ``key``."""
        self.bind(key, factory, shared=True)

    def instance(self, key: ServiceKey, obj: Any) -> Any:
        """Register an existing object as the shared service for ``key``."""
        self._instances[key] = obj
        self._fire_pending(key, obj)
        return obj

    def bound(self, key: ServiceKey) -> bool:
        """Check if ``key`` has a binding or an instance."""
        return key in self._instances or key in self._bindings

    def resolved(self, key: ServiceKey) -> bool:
        """Check if a shared service for ``key`` already exists."""
        return key in self._instances

    def make(self, key: ServiceKey) -> Any:
        """Resolve a service by key.

        Raises:
            BindingResolutionError: If nothing is bound to ``key``
        """
        if key in self._instances:
            obj = self._instances[key]
            self._fire_pending(key, obj)
            return obj

        binding = self._bindings.get(key)
        if binding is None:
            raise BindingResolutionError(f"No service bound for {_key_name(key)}")

        obj = binding.factory(self)
        if binding.shared:
            self._instances[key] = obj

        self._fire_pending(key, obj)
        return obj

    def after_resolving(self, key: ServiceKey, callback: ResolvedCallback) -> None:
        """Run ``callback`` with the service once it becomes available.

        If the service was already resolved the callback runs immediately.
        """
        self._pending.setdefault(key, []).append(callback)
        if key in self._instances:
            self._fire_pending(key, self._instances[key])

    def _fire_pending(self, key: ServiceKey, obj: Any) -> None:
        # Pop one at a time: if a callback raises, the ones after it stay
        # pending and run on the next resolution.
        callbacks = self._pending.get(key)
        if callbacks:
            logger.debug(f"Running {len(callbacks)} after-resolving callbacks for {_key_name(key)}")
        while callbacks:
            callback = callbacks.pop(0)
            callback(obj)
        self._pending.pop(key, None)

    def __getitem__(self, key: ServiceKey) -> Any:
        return self.make(key)

    def __contains__(self, key: ServiceKey) -> bool:
        return self.bound(key)

    @property
    def config(self) -> Any:
        """The configuration repository."""
        return self.make("config")

    @property
    def router(self) -> Any:
        """The host router."""
        return self.make("router")


def _key_name(key: ServiceKey) -> str:
    return key if isinstance(key, str) else key.__qualname__
