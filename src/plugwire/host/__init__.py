"""Reference host services used by plugins.

- Application: service container with after-resolving callbacks
- Repository: dotted-key configuration store
- Router / RouteGroup: FastAPI route groups with namespaced actions
- ViewFactory: namespaced view lookup and rendering
- Migrator: Alembic migration search paths
"""

from plugwire.host.container import Application, BindingResolutionError
from plugwire.host.migrations import Migrator
from plugwire.host.repository import Repository
from plugwire.host.routing import RouteActionError, RouteGroup, Router
from plugwire.host.views import View, ViewFactory, ViewNotFoundError

__all__ = [
    "Application",
    "BindingResolutionError",
    "Repository",
    "Router",
    "RouteGroup",
    "RouteActionError",
    "ViewFactory",
    "View",
    "ViewNotFoundError",
    "Migrator",
]
