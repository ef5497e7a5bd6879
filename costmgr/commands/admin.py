"""Admin commands for initializing costmgr and managing settings."""

import sys
import tomllib

from rich.console import Console

from costmgr.config import (
    DEFAULT_RATES_URL,
    clear_rates_url,
    create_default_config,
    get_config_path,
    get_rates_url,
    set_rates_url,
)
from costmgr.errors import StoreError
from costmgr.store.queries import count_costs
from costmgr.store.schema import DB_VERSION, get_db_path, open_store

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize costmgr database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    try:
        console.print(f"[cyan]Opening database at {db_path}...[/cyan]")
        handle = open_store(db_path, DB_VERSION)
        console.print(f"[green]✓[/green] Database ready (schema version {handle.version})")

        if config_path.exists() and not force:
            console.print(f"[dim]Config already exists: {config_path}[/dim]")
            console.print("[yellow]Use 'costmgr init --force' to reset it[/yellow]")
        else:
            create_default_config(config_path)
            console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")

        console.print(f"\n[green]Initialization complete![/green] {count_costs(handle)} costs stored", style="bold")

    except StoreError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def rates_command(set_url: str | None = None, clear: bool = False) -> None:
    """Show or change the exchange rates URL."""
    try:
        if clear:
            clear_rates_url()
            console.print(f"[green]✓[/green] Rates URL reset to default: {DEFAULT_RATES_URL}")
            return

        if set_url is not None:
            set_rates_url(set_url)
            console.print(f"[green]✓[/green] Rates URL set to: {get_rates_url()}")
            return

        url = get_rates_url()
        suffix = " [dim](default)[/dim]" if url == DEFAULT_RATES_URL else ""
        console.print(f"Rates URL: {url}{suffix}")

    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
