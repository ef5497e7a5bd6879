"""Commands for recording and listing cost items."""

import asyncio
import sys

from rich.console import Console
from rich.table import Table

from costmgr.dates import month_label, resolve_period
from costmgr.domain.costs import parse_sum, validate_new_cost
from costmgr.domain.models import SUGGESTED_CATEGORIES
from costmgr.errors import StoreError
from costmgr.store.aio import add_cost_async, get_costs_by_month_async, open_store_async
from costmgr.store.schema import get_db_path

console = Console()


def add_command(amount: str, currency: str, category: str, description: str) -> None:
    """Record a new cost item dated today."""
    value = parse_sum(amount)
    if value is None:
        console.print(f"[red]Invalid sum: {amount}[/red]", style="bold")
        sys.exit(1)

    new_cost, error = validate_new_cost(value, currency, category, description)
    if error or new_cost is None:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    async def run():
        handle = await open_store_async(get_db_path())
        return await add_cost_async(handle, new_cost)

    try:
        item = asyncio.run(run())
    except StoreError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Added #{item.id}: {item.sum:,.2f} {item.currency} "
        f"[magenta]{item.category}[/magenta] - {item.description} "
        f"[dim]({item.year}-{item.month:02d}-{item.day:02d})[/dim]"
    )
    if item.category not in SUGGESTED_CATEGORIES:
        console.print(f"[dim]Note: suggested categories are {', '.join(SUGGESTED_CATEGORIES)}[/dim]")


def list_command(year: int | None = None, month: str | None = None) -> None:
    """List cost items of one month in their original currencies."""
    try:
        report_year, report_month = resolve_period(year, month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    async def run():
        handle = await open_store_async(get_db_path())
        return await get_costs_by_month_async(handle, report_year, report_month)

    try:
        costs = asyncio.run(run())
    except StoreError as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not costs:
        console.print(f"[yellow]No costs found for {month_label(report_year, report_month)}[/yellow]")
        return

    table = Table(title=f"Costs - {month_label(report_year, report_month)} ({len(costs)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Day", style="cyan", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Sum", justify="right")
    table.add_column("Currency")

    for item in costs:
        table.add_row(str(item.id), str(item.day), item.category, item.description, f"{item.sum:,.2f}", item.currency)

    console.print(table)
