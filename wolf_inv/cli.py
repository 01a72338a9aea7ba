"""CLI entry point for wolf-inv.

Launches the interactive dashboard, or prints the inventory and checks
connectivity without the TUI.
"""

import logging
from pathlib import Path
from typing import Optional

import platformdirs
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .clients.rest_client import InventoryClient
from .core.config import APP_NAME, WolfConfig, load_config
from .core.errors import ConfigError, InventoryError
from .session.table import COLUMNS, status_style
from .theme import style_for

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# CLI app
app = typer.Typer(
    name=APP_NAME,
    help="wolf-inv - Server inventory dashboard",
    add_completion=False,
)

console = Console()


def default_log_file() -> Path:
    """Log file location; the terminal belongs to the dashboard."""
    return Path(platformdirs.user_log_dir(APP_NAME)) / f"{APP_NAME}.log"


def setup_logging(verbose: bool, log_file: Optional[Path]) -> None:
    """Send log records to a file.

    Args:
        verbose: Log at DEBUG instead of INFO.
        log_file: Destination. Uses ``default_log_file()`` if None.
    """
    path = log_file or default_log_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(path, encoding="utf-8")],
        force=True,
    )
    # request logging from httpx is noisy at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"{APP_NAME} version {__version__}")
        raise typer.Exit()


def _load_or_exit(config_path: Optional[Path]) -> WolfConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(1)


ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config.json (apiBaseURL, apiToken)",
)
VerboseOption = typer.Option(False, "--verbose", help="Enable verbose logging")
LogFileOption = typer.Option(None, "--log-file", help="Write logs to this file")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Server inventory dashboard. Without a command, launches the TUI."""
    if ctx.invoked_subcommand is None:
        run(config_path=config_path, verbose=verbose, log_file=log_file)


@app.command()
def run(
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Launch the interactive dashboard."""
    setup_logging(verbose, log_file)
    config = _load_or_exit(config_path)
    logger.info(f"Starting dashboard against {config.api_base_url}")

    from .tui import run_tui

    run_tui(config)


def list_inventory(
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Print the inventory once and exit."""
    setup_logging(verbose, log_file)
    config = _load_or_exit(config_path)

    try:
        with console.status("Fetching inventory..."):
            entries = InventoryClient(config).list_entries()
    except InventoryError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not entries:
        console.print("No servers in inventory.")
        return

    table = Table(title="Server Inventory")
    for column in COLUMNS:
        table.add_column(column.title, min_width=min(column.width, 12))

    for entry in entries:
        table.add_row(
            entry.name,
            entry.address,
            entry.location,
            Text(entry.status, style=style_for(status_style(entry.status))),
            entry.last_report,
        )

    console.print(table)


@app.command()
def check(
    config_path: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
    log_file: Optional[Path] = LogFileOption,
) -> None:
    """Check configuration and connectivity."""
    setup_logging(verbose, log_file)
    config = _load_or_exit(config_path)

    console.print("[bold]Configuration Check[/bold]\n")
    console.print(f"[green]Config file:[/green] {config.source}")
    console.print(f"[green]API base URL:[/green] {config.api_base_url}")
    if config.api_token:
        console.print(f"[green]API token:[/green] {config.api_token[:4]}...")
    else:
        console.print("[yellow]API token:[/yellow] not set")

    console.print("\n[bold]Testing connectivity...[/bold]")
    try:
        with console.status("Listing inventory..."):
            entries = InventoryClient(config).list_entries()
    except InventoryError as e:
        console.print(f"[red]Inventory request failed:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Connected.[/green] {len(entries)} servers in inventory.")


app.command("list")(list_inventory)


if __name__ == "__main__":
    app()
