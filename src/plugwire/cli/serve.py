"""CLI command for running the host application.

Usage:
    plugwire serve
    plugwire serve --port 8080 --host 0.0.0.0
    plugwire serve --reload --log-level debug
"""

from __future__ import annotations

import typer

app = typer.Typer(help="Run the plugwire host application")


@app.callback(invoke_without_command=True)
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        "-h",
        help="Host to bind to",
    ),
    port: int = typer.Option(
        8080,
        "--port",
        "-p",
        help="Port to listen on",
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        "-r",
        help="Enable auto-reload for development",
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error",
    ),
) -> None:
    """Run the host application.

    Plugins boot while the application is created; a failing plugin stops
    the server from starting.
    """
    import uvicorn

    typer.echo("Starting plugwire host...")
    typer.echo(f"  Host: {host}")
    typer.echo(f"  Port: {port}")
    typer.echo(f"  Log level: {log_level}")
    if reload:
        typer.echo("  Reload: enabled")
    typer.echo()

    uvicorn.run(
        app="plugwire.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
    )
