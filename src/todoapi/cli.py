"""CLI interface for the todo service."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from todoapi.config import get_settings
from todoapi.database import close_db, init_db

app = typer.Typer(
    name="todoapi",
    help="Todo & Category HTTP JSON service.",
    no_args_is_help=True,
)
console = Console()


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


@app.command("init-db")
def init_database():
    """Create the todo and category tables if they do not exist."""

    async def _init():
        try:
            await init_db()
        finally:
            await close_db()

    settings = get_settings()
    console.print(f"Initializing database at [cyan]{settings.masked_url}[/cyan]")
    run_async(_init())
    console.print("[green]✓[/green] Tables ready")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the API server."""
    from todoapi.main import run_server

    settings = get_settings()
    console.print(
        f"[bold]Starting server at http://{host or settings.api_host}:{port or settings.api_port}[/bold]"
    )
    run_server(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
