"""
CLI tool for running and inspecting the relay.

Provides commands for starting the uvicorn server and for viewing the
effective settings.
"""

import os

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from connected_screens.logging import logger
from connected_screens.settings import app_settings

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="connected-screens",
    help="Connected screens relay - run the server and inspect its settings",
    add_completion=False,
)
console = Console()


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(
        None, "--host", "-h", help="Bind address (defaults to HOST setting)"
    ),
    port: int = typer.Option(
        None, "--port", "-p", help="Bind port (defaults to PORT setting)"
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Restart the server on code changes"
    ),
):
    """
    Start the relay with uvicorn.

    Example:
        connected-screens serve --port 8081
    """
    # The environment carries overrides into the reload subprocess
    if host:
        app_settings.HOST = host
        os.environ["HOST"] = host
    if port:
        app_settings.PORT = port
        os.environ["PORT"] = str(port)

    logger.info(
        f"Starting WebSocket server on "
        f"ws://{app_settings.HOST}:{app_settings.PORT}{app_settings.WS_PATH}"
    )
    uvicorn.run(
        "connected_screens:application",
        factory=True,
        host=app_settings.HOST,
        port=app_settings.PORT,
        reload=reload,
        log_config=None,  # keep the handlers set up by connected_screens.logging
    )


@typer_app.command(name="settings")
def show_settings():
    """
    Display the effective settings as a table.

    Values come from the environment, a local .env file or the defaults.
    """
    table = Table("Setting", "Value", title="Effective settings", show_lines=True)

    for name, value in app_settings.model_dump(mode="json").items():
        table.add_row(f"[cyan]{name}[/cyan]", str(value))

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    typer_app()
