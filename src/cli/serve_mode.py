"""Serve mode: run the intake / drafts HTTP API."""

import typer
import uvicorn

from src.api import create_app
from src.config import API_HOST, API_PORT

from .shared import console, logger


def serve(
    host: str = typer.Option(API_HOST, "--host", "-h", help="Bind host"),
    port: int = typer.Option(API_PORT, "--port", "-p", help="Port for the API server"),
) -> None:
    """Start the HTTP API (intake webhook and draft endpoints)."""
    log = logger.bind(command="serve", host=host, port=port)
    log.info("serve.start")
    console.print(f"[dim]Serving on http://{host}:{port} (Ctrl+C to stop)[/dim]")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")
