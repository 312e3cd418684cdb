"""CLI command for listing migration search paths.

Resolving the migrator runs every plugin's deferred registration, so the
output shows exactly what an Alembic run would see.

Usage:
    plugwire migrations
    plugwire migrations --alembic
"""

from __future__ import annotations

import typer

from plugwire.plugins.errors import PluginError

app = typer.Typer(help="List migration search paths registered by plugins")


@app.callback(invoke_without_command=True)
def migrations(
    alembic: bool = typer.Option(
        False,
        "--alembic",
        "-a",
        help="Print the Alembic version_locations value instead",
    ),
) -> None:
    """Boot plugins, resolve the migrator and print its search paths."""
    from plugwire.app import boot_application, build_application
    from plugwire.config import Settings

    settings = Settings()
    try:
        app = build_application(settings)
        boot_application(app)
        migrator = app.make("migrator")
    except PluginError as e:
        typer.echo(f"Plugin error: {e}", err=True)
        raise typer.Exit(code=1) from e

    if alembic:
        script_location = settings.alembic_script_location or "migrations"
        cfg = migrator.alembic_config(script_location, settings.database_url)
        typer.echo(cfg.get_main_option("version_locations") or "")
        return

    for path in migrator.paths:
        typer.echo(str(path))
