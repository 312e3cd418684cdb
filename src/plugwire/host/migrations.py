"""Migration search path registry.

Collects directories holding Alembic revision scripts. Plugins add their
directories once the migrator is resolved; the host turns the collected
paths into an Alembic configuration:

    migrator = app.make("migrator")
    cfg = migrator.alembic_config("acme/migrations")
    command.upgrade(cfg, "heads")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic.config import Config

logger = logging.getLogger(__name__)


class Migrator:
    """Ordered, de-duplicated set of migration directories."""

    def __init__(self, paths: list[Path] | None = None) -> None:
        self._paths: list[Path] = []
        for path in paths or []:
            self.add_path(path)

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def add_path(self, directory: Path | str) -> None:
        """Add a migration search path (ignored if already present)."""
        directory = Path(directory)
        if directory in self._paths:
            return
        self._paths.append(directory)
        logger.debug(f"Registered migration path {directory}")

    def alembic_config(self, script_location: Path | str, database_url: str | None = None) -> Config:
        """Build an Alembic config whose version locations are the registered paths.

        Args:
            script_location: Directory holding the host's Alembic env.py
            database_url: Optional SQLAlchemy URL

        Returns:
            Alembic Config ready for ``alembic.command`` calls
        """
        cfg = Config()
        cfg.set_main_option("script_location", str(script_location))
        cfg.set_main_option("version_path_separator", "os")
        if self._paths:
            cfg.set_main_option(
                "version_locations", os.pathsep.join(str(p) for p in self._paths)
            )
        if database_url:
            cfg.set_main_option("sqlalchemy.url", database_url)
        return cfg
