"""CLI entry point for costmgr."""

import logging

import typer
from rich.logging import RichHandler

from costmgr.commands.admin import init_command, rates_command
from costmgr.commands.costs import add_command, list_command
from costmgr.commands.report import report_command, yearly_command

app = typer.Typer(
    name="costmgr",
    help="Cost Manager - record expenses and report them in any supported currency",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Cost Manager - record expenses and report them in any supported currency."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize costmgr database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: str = typer.Argument(..., help="Sum spent, e.g. 12.50"),
    currency: str = typer.Argument(..., help="Currency code: USD, GBP, EURO or ILS"),
    category: str = typer.Argument(..., help="Category, e.g. Food, Car, Bills"),
    description: str = typer.Argument(..., help="What the cost was for"),
) -> None:
    """Add a cost item dated today."""
    add_command(amount, currency, category, description)


@app.command(name="list")
def list_costs(
    year: int = typer.Option(None, "--year", help="Year (default: current year)"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """List your costs for a month in their original currencies."""
    list_command(year, month)


@app.command(name="report")
def report(
    year: int = typer.Option(None, "--year", help="Year (default: current year)"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    currency: str = typer.Option("USD", "--currency", "-c", help="Currency for the total"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    categories: bool = typer.Option(True, help="Show totals by category"),
) -> None:
    """Show a month's costs with a converted total."""
    report_command(year, month, currency, as_json, categories)


@app.command(name="yearly")
def yearly(
    year: int = typer.Option(None, "--year", help="Year (default: current year)"),
    currency: str = typer.Option("USD", "--currency", "-c", help="Currency for the totals"),
) -> None:
    """Show the total of each month of a year."""
    yearly_command(year, currency)


@app.command(name="rates")
def rates(
    set_url: str = typer.Option(None, "--set", help="Set the exchange rates URL"),
    clear: bool = typer.Option(False, "--clear", help="Restore the default exchange rates URL"),
) -> None:
    """Show or change the exchange rates URL."""
    rates_command(set_url, clear)


if __name__ == "__main__":
    app()
