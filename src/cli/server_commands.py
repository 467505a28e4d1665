"""HTTP server CLI commands."""

import typer
import uvicorn
from rich.panel import Panel

from src.bookclub.runtime.context import get_config

from .utils import console

APP_IMPORT_PATH = "src.bookclub.api.http.app:app"


def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the book club API server.

    Host and port default to the values in config.yaml; keep-alive, shutdown
    and concurrency limits always come from the server section.
    """
    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Book Club API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        APP_IMPORT_PATH,
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        timeout_keep_alive=config.server.timeout_keep_alive,
        timeout_graceful_shutdown=config.server.timeout_graceful_shutdown,
        limit_concurrency=config.server.limit_concurrency,
        # Request logs come from the application middleware
        access_log=False,
        log_config=None,
    )
