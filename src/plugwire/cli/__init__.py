"""CLI commands for plugwire.

Provides command-line interface using Typer:
- plugwire plugins list: Boot configured plugins and list them
- plugwire plugins discover: List plugins advertised via entry points
- plugwire migrations: Print migration search paths registered by plugins
- plugwire serve: Run the host application

Usage:
    plugwire --help
    PLUGWIRE_PLUGINS='["acme.articles:ArticlesPlugin"]' plugwire plugins list
"""

import typer

from plugwire.cli.migrations_cmd import app as migrations_app
from plugwire.cli.plugins_cmd import app as plugins_app
from plugwire.cli.serve import app as serve_app

# Main CLI application
app = typer.Typer(
    name="plugwire",
    help="plugwire: plugin loading for FastAPI hosts",
    no_args_is_help=True,
)

app.add_typer(plugins_app, name="plugins")
app.add_typer(migrations_app, name="migrations")
app.add_typer(serve_app, name="serve")


@app.callback()
def callback() -> None:
    """plugwire: plugin loading for FastAPI hosts."""
    pass


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
