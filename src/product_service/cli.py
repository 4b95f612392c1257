"""Command-line interface: run the server and manage the schema."""

import typer
from rich.console import Console
from rich.panel import Panel

from src.product_service.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="product-service",
    help="Product Service - serve the API and manage its database schema",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind, defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind, defaults to app.port"),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    from src.product_service.api.http.app import app as http_app

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port
    console.print(
        Panel.fit(
            f"[bold green]Starting {config.app.name} at http://{bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(http_app, host=bind_host, port=bind_port, access_log=False)


@app.command(name="init-db")
def init_db_command(
    reset: bool = typer.Option(
        False, "--reset", help="Drop every table first. [red]Destroys all data.[/red]"
    ),
) -> None:
    """Create the database schema."""
    from src.product_service.api.utils.app_startup import configure_logging
    from src.product_service.runtime.init_db import init_db

    configure_logging()
    if reset:
        console.print("[bold red]Dropping all tables before creating the schema[/bold red]")

    if not init_db(reset=reset):
        console.print("[red]Database initialization failed[/red]")
        raise typer.Exit(1)
    console.print("[green]Database schema ready[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
