"""CLI commands for inspecting plugins.

Usage:
    plugwire plugins list
    plugwire plugins list --format json
    plugwire plugins discover
"""

from __future__ import annotations

import json

import typer

from plugwire.plugins.errors import PluginError

app = typer.Typer(help="Inspect configured and installed plugins", no_args_is_help=True)


@app.command("list")
def list_plugins(
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text, json",
    ),
) -> None:
    """Boot the configured plugins and list them in boot order."""
    from rich.console import Console
    from rich.table import Table

    from plugwire.app import boot_application, build_application
    from plugwire.config import Settings

    try:
        manager = boot_application(build_application(Settings()))
    except PluginError as e:
        typer.echo(f"Plugin error: {e}", err=True)
        raise typer.Exit(code=1) from e

    rows = [
        {
            "identifier": identifier,
            "name": plugin.name,
            "version": plugin.version,
            "description": plugin.description,
            "path": str(plugin.get_plugin_path()),
        }
        for identifier, plugin in manager.plugins.items()
    ]

    if output_format == "json":
        typer.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        typer.echo("No plugins configured.")
        return

    table = Table(title="Plugins")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Identifier")
    table.add_column("Path", style="dim")
    for row in rows:
        table.add_row(row["name"], row["version"], row["identifier"], row["path"])
    Console().print(table)


@app.command("discover")
def discover() -> None:
    """List plugins advertised by installed packages (entry points)."""
    from plugwire.plugins.loader import ENTRY_POINT_GROUP, discover_entry_points

    found = discover_entry_points()
    if not found:
        typer.echo(f"No entry points found in group {ENTRY_POINT_GROUP!r}.")
        return

    for name, identifier in sorted(found.items()):
        typer.echo(f"{name}: {identifier}")
