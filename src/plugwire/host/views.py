"""Namespaced view lookup.

Views are addressed as "<namespace>::<dotted.name>". The namespace maps to
one or more directories; the dotted name maps to a file below them:

    views.add_namespace("plugin:articles", Path("acme/articles/resources/views"))
    views.render("plugin:articles::emails.welcome", user="ada")
    # renders acme/articles/resources/views/emails/welcome.html

Templates use ``string.Template`` placeholders ($name / ${name}).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from string import Template
from typing import Any

logger = logging.getLogger(__name__)

NAMESPACE_DELIMITER = "::"
DEFAULT_EXTENSIONS = (".html", ".txt")


class ViewNotFoundError(LookupError):
    """A view name does not map to a file."""

    pass


@dataclass
class View:
    """A resolvable view reference."""

    factory: ViewFactory
    name: str
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> Path:
        return self.factory.find(self.name)

    def with_data(self, **data: Any) -> View:
        self.data.update(data)
        return self

    def render(self, **data: Any) -> str:
        context = {**self.data, **data}
        return self.factory.render(self.name, **context)

    def __str__(self) -> str:
        return self.name


class ViewFactory:
    """Maps view namespaces to directories and renders views."""

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> None:
        self.extensions = extensions
        self._namespaces: dict[str, list[Path]] = {}
        self._paths: list[Path] = []

    @property
    def namespaces(self) -> dict[str, list[Path]]:
        return {ns: list(dirs) for ns, dirs in self._namespaces.items()}

    def add_location(self, directory: Path) -> None:
        """Add a directory for views without a namespace."""
        self._paths.append(Path(directory))

    def add_namespace(self, namespace: str, directory: Path | str) -> None:
        """Add a directory for ``namespace``; later directories are searched last."""
        self._namespaces.setdefault(namespace, []).append(Path(directory))
        logger.debug(f"View namespace {namespace} -> {directory}")

    def make(self, name: str, **data: Any) -> View:
        return View(factory=self, name=name, data=dict(data))

    def exists(self, name: str) -> bool:
        try:
            self.find(name)
        except ViewNotFoundError:
            return False
        return True

    def find(self, name: str) -> Path:
        """Locate the file for a view name.

        Raises:
            ViewNotFoundError: If no directory holds the view
        """
        if NAMESPACE_DELIMITER in name:
            namespace, _, view = name.partition(NAMESPACE_DELIMITER)
            if namespace not in self._namespaces:
                raise ViewNotFoundError(f"No hint path defined for [{namespace}]")
            directories = self._namespaces[namespace]
        else:
            view = name
            directories = self._paths

        relative = Path(*view.split("."))
        for directory in directories:
            for ext in self.extensions:
                candidate = directory / relative.with_name(relative.name + ext)
                if candidate.is_file():
                    return candidate

        raise ViewNotFoundError(f"View [{name}] not found")

    def render(self, name: str, **context: Any) -> str:
        template = Template(self.find(name).read_text(encoding="utf-8"))
        return template.safe_substitute(context)
