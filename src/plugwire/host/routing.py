"""Route groups on top of FastAPI.

A route group is an APIRouter bound to a controller namespace. String
actions ("module:function") are resolved relative to that namespace, so a
plugin's route file can refer to its own controllers by short name:

    # acme/articles/routes.py, executed inside the group
    router.get("/", "articles:index")     # acme.articles.http.controllers.articles.index
    router.post("/", create_article)      # plain callables work too
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence
from typing import Any

from fastapi import APIRouter, FastAPI

logger = logging.getLogger(__name__)

Action = str | Callable[..., Any]


class RouteActionError(LookupError):
    """A string route action cannot be resolved."""

    pass


class RouteGroup:
    """Routes sharing a controller namespace, URL prefix and tags."""

    def __init__(
        self,
        namespace: str = "",
        prefix: str = "",
        tags: Sequence[str] | None = None,
    ) -> None:
        self.namespace = namespace
        self.router = APIRouter(prefix=prefix, tags=list(tags or []))

    def resolve_action(self, action: Action) -> Callable[..., Any]:
        """Resolve an action to a callable endpoint.

        Args:
            action: Callable, or "module:function" relative to the namespace

        Raises:
            RouteActionError: If the module or function cannot be found
        """
        if callable(action):
            return action

        module_name, sep, attr = action.partition(":")
        if not sep or not module_name or not attr:
            raise RouteActionError(f"Route action must look like 'module:function': {action!r}")

        if self.namespace:
            module_name = f"{self.namespace}.{module_name}"

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise RouteActionError(f"Cannot import controller module {module_name!r}: {e}") from e

        endpoint = getattr(module, attr, None)
        if not callable(endpoint):
            raise RouteActionError(f"Controller {module_name!r} has no callable {attr!r}")
        return endpoint

    def add(self, methods: Sequence[str], path: str, action: Action, **kwargs: Any) -> None:
        """Register a route for the given HTTP methods."""
        endpoint = self.resolve_action(action)
        self.router.add_api_route(path, endpoint, methods=list(methods), **kwargs)
        logger.debug(f"Route {','.join(methods)} {self.router.prefix}{path} -> {action!r}")

    def get(self, path: str, action: Action, **kwargs: Any) -> None:
        self.add(["GET"], path, action, **kwargs)

    def post(self, path: str, action: Action, **kwargs: Any) -> None:
        self.add(["POST"], path, action, **kwargs)

    def put(self, path: str, action: Action, **kwargs: Any) -> None:
        self.add(["PUT"], path, action, **kwargs)

    def patch(self, path: str, action: Action, **kwargs: Any) -> None:
        self.add(["PATCH"], path, action, **kwargs)

    def delete(self, path: str, action: Action, **kwargs: Any) -> None:
        self.add(["DELETE"], path, action, **kwargs)

    def include_router(self, router: APIRouter, **kwargs: Any) -> None:
        """Mount an existing APIRouter inside this group."""
        self.router.include_router(router, **kwargs)


class Router:
    """Host router: opens route groups and mounts them on the FastAPI app."""

    def __init__(self, http: FastAPI) -> None:
        self.http = http
        self._groups: list[RouteGroup] = []

    @property
    def groups(self) -> list[RouteGroup]:
        """Registered groups in registration order."""
        return list(self._groups)

    def group(self, options: dict[str, Any], callback: Callable[[RouteGroup], None]) -> RouteGroup:
        """Open a route group, let ``callback`` declare its routes, then mount it.

        Args:
            options: "namespace", "prefix" and "tags" for the group
            callback: Receives the group and declares routes on it

        Returns:
            The mounted group
        """
        group = RouteGroup(
            namespace=options.get("namespace", ""),
            prefix=options.get("prefix", ""),
            tags=options.get("tags"),
        )
        callback(group)
        self.http.include_router(group.router)
        self._groups.append(group)
        logger.debug(
            f"Mounted route group {group.namespace or '<root>'} "
            f"with {len(group.router.routes)} routes"
        )
        return group
