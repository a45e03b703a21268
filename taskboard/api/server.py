"""``taskboard-server`` entry point."""

from __future__ import annotations

import typer
import uvicorn

from taskboard.config import SETTINGS
from taskboard.infra.logging import setup_logging

app = typer.Typer(name="taskboard-server", help="Serve the TaskBoard JSON API.", add_completion=False)


@app.command()
def serve(
    host: str = typer.Option(SETTINGS.api_host, "--host", help="Host to bind to"),
    port: int = typer.Option(SETTINGS.api_port, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the board API with uvicorn."""
    setup_logging("taskboard-server.log")
    typer.echo(f"Starting TaskBoard API at http://{host}:{port} ({SETTINGS.store_backend} store)")
    uvicorn.run(
        "taskboard.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
