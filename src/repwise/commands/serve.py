"""Web server command."""

import click

from ..config import get_settings
from .base import ensure_initialized


@click.command()
@click.option("--host", default=None, help="Host to bind to (default: from settings)")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to (default: from settings)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool):
    """Start the local progress API.

    Examples:

        # Start on the configured port (8000)
        repwise serve

        # Start on a custom port
        repwise serve --port 3000

        # Development mode with auto-reload
        repwise serve --reload
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo()
    click.echo(click.style("Starting repwise API...", fg="green"))
    click.echo()
    click.echo(f"  Local:   http://{host}:{port}")
    click.echo()
    click.echo("Press Ctrl+C to stop the server.")
    click.echo()

    uvicorn.run(
        create_app() if not reload else "repwise.web:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=reload,
    )
