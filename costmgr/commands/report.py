"""Report commands for viewing converted monthly and yearly totals."""

import asyncio
import json
import sys
import tomllib

from rich.console import Console
from rich.table import Table

from costmgr.dates import month_label, resolve_period, short_month_label
from costmgr.domain.costs import normalize_currency
from costmgr.domain.models import RateTable
from costmgr.domain.report import (
    MonthlyReport,
    MonthTotal,
    calculate_category_totals,
    calculate_histogram_bar_length,
)
from costmgr.errors import ConversionError, RatesUnavailableError, StoreError
from costmgr.rates import CachedRateSource, HttpRateSource
from costmgr.reporting import build_monthly_report, build_yearly_totals
from costmgr.store.aio import open_store_async
from costmgr.store.schema import get_db_path

console = Console()


def exit_with_error(error: Exception) -> None:
    """Print a report failure and exit with status 1."""
    if isinstance(error, StoreError):
        console.print(f"[red]Database error: {error}[/red]", style="bold")
    elif isinstance(error, RatesUnavailableError):
        console.print(f"[red]Exchange rates unavailable: {error}[/red]", style="bold")
        console.print("[dim]Check the rates URL with 'costmgr rates'[/dim]")
    elif isinstance(error, ConversionError):
        console.print(f"[red]Conversion error: {error}[/red]", style="bold")
    else:
        console.print(f"[red]Config error: {error}[/red]", style="bold")
    sys.exit(1)


def render_monthly_report(report: MonthlyReport) -> None:
    """Render the itemized costs and the converted total."""
    period = month_label(report.year, report.month)
    currency = report.total.currency

    console.print(f"[bold cyan]{period}[/bold cyan]\n")

    if not report.costs:
        console.print("[dim]No costs recorded this month[/dim]")
    else:
        table = Table(title=f"Costs ({len(report.costs)})")
        table.add_column("Day", style="cyan", justify="right")
        table.add_column("Category", style="magenta")
        table.add_column("Description", style="white")
        table.add_column("Sum", justify="right")
        table.add_column("Currency")

        for item in report.costs:
            table.add_row(str(item.day), item.category, item.description, f"{item.sum:,.2f}", item.currency)

        console.print(table)

    console.print(f"\n[bold]Total:[/bold] {report.total.total:,.2f} {currency}")


def render_category_breakdown(report: MonthlyReport, rates: RateTable, bar_width: int = 30) -> None:
    """Render converted totals per category with histogram bars."""
    categories = calculate_category_totals(report.costs, rates, report.total.currency)
    if not categories:
        return

    console.print(f"\n[bold]By category ({report.total.currency}):[/bold]\n")
    max_amount = max(cat.total for cat in categories)
    for cat in categories:
        bar = "█" * calculate_histogram_bar_length(cat.total, max_amount, bar_width)
        console.print(f"  {cat.category:12} {cat.total:>12,.2f} {bar}")


def render_yearly_totals(year: int, currency: str, totals: list[MonthTotal], bar_width: int = 40) -> None:
    """Render the twelve monthly totals of a year."""
    console.print(f"[bold cyan]{year} totals ({currency})[/bold cyan]\n")

    max_amount = max((t.total for t in totals), default=0.0)
    for month_total in totals:
        bar = "█" * calculate_histogram_bar_length(month_total.total, max_amount, bar_width)
        console.print(f"  {short_month_label(month_total.month)} {month_total.total:>12,.2f} {bar}")

    console.print(f"\n  [bold]Sum of months:[/bold] {sum(t.total for t in totals):,.2f} {currency}")


def report_command(
    year: int | None = None,
    month: str | None = None,
    currency: str = "USD",
    as_json: bool = False,
    categories: bool = True,
) -> None:
    """Show one month's costs with a total converted to currency."""
    try:
        report_year, report_month = resolve_period(year, month)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    code = normalize_currency(currency)
    # One fetch serves the report and the category breakdown
    rate_source = CachedRateSource(HttpRateSource(), ttl_seconds=60)

    async def run():
        handle = await open_store_async(get_db_path())
        report = await build_monthly_report(handle, report_year, report_month, code, rate_source)
        return report, rate_source.fetch()

    try:
        report, rates = asyncio.run(run())
    except (StoreError, RatesUnavailableError, ConversionError, tomllib.TOMLDecodeError) as e:
        exit_with_error(e)
        return

    if as_json:
        console.print_json(json.dumps(report.to_dict()))
        return

    render_monthly_report(report)
    if categories:
        render_category_breakdown(report, rates)


def yearly_command(year: int | None = None, currency: str = "USD") -> None:
    """Show each month's total for a year, converted to currency."""
    try:
        report_year, _ = resolve_period(year, None)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    code = normalize_currency(currency)

    async def run():
        handle = await open_store_async(get_db_path())
        return await build_yearly_totals(handle, report_year, code)

    try:
        totals = asyncio.run(run())
    except (StoreError, RatesUnavailableError, ConversionError, tomllib.TOMLDecodeError) as e:
        exit_with_error(e)
        return

    render_yearly_totals(report_year, code, totals)
