"""Command line interface for running and seeding the coffee shop service."""

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from src.coffee_shop.core.exceptions import CoffeeShopError, StoreConnectionError
from src.coffee_shop.core.services.catalog_service import CatalogService
from src.coffee_shop.core.services.database.store import DocumentStoreService
from src.coffee_shop.entities.coffee import CoffeeRepository
from src.coffee_shop.runtime.config.config_template import load_templated_yaml
from src.coffee_shop.runtime.context import get_config, set_config

console = Console()

app = typer.Typer(
    name="coffee-shop",
    help="Coffee shop catalog service",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main_options(
    config_file: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        help="Configuration file to use instead of config.yaml",
    ),
) -> None:
    """Coffee shop catalog service."""
    if config_file is None:
        return
    set_config(load_templated_yaml(config_file))
    # Reload workers start a fresh interpreter and read the file themselves
    os.environ["APP_CONFIG_FILE"] = str(config_file)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (config app.host)"),
    port: int | None = typer.Option(None, help="Port to bind (config app.port)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the HTTP service with uvicorn."""
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Serving coffee shop on {bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.coffee_shop.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
    )


@app.command(name="import-seed")
def import_seed(
    seed_file: Path | None = typer.Option(
        None, help="Seed file to import (config catalog.seed_file)"
    ),
) -> None:
    """Insert the coffees of a seed file, stopping at the first failure."""
    config = get_config()
    path = seed_file or Path(config.catalog.seed_file)

    try:
        with DocumentStoreService(config.database) as store:
            catalog = CatalogService(CoffeeRepository(store), seed_file=path)
            message = catalog.import_seed()
    except StoreConnectionError as e:
        console.print(f"[red]Cannot reach document store:[/red] {e}")
        raise typer.Exit(2) from e
    except CoffeeShopError as e:
        console.print(f"[red]Import failed:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[green]{message}[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
