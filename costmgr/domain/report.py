"""Pure functions for report calculations and aggregations.

This module contains the functional core for reporting:
- No I/O operations (no database, no network)
- No side effects
- Pure data transformations over CostItems and a RateTable

Stored items are never converted in place; conversion only feeds totals.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from costmgr.domain.conversion import convert, convert_unrounded, get_rate, round_money
from costmgr.domain.models import DEFAULT_CATEGORY, CostItem, RateTable


@dataclass(frozen=True)
class ReportTotal:
    """Grand total of a report in one currency."""

    currency: str
    total: float


@dataclass(frozen=True)
class MonthlyReport:
    """Immutable monthly report data."""

    year: int
    month: int
    costs: list[CostItem]
    total: ReportTotal

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "costs": [item.to_dict() for item in self.costs],
            "total": {"currency": self.total.currency, "total": self.total.total},
        }


@dataclass(frozen=True)
class MonthTotal:
    """Total for one month of a yearly series."""

    month: int
    total: float


@dataclass(frozen=True)
class CategoryTotal:
    """Converted total for one category."""

    category: str
    total: float


def calculate_total(costs: Iterable[CostItem], rates: RateTable, currency: str) -> float:
    """Sum converted amounts, rounding only the final total.

    Args:
        costs: Cost items in their stored currencies.
        rates: Rate table relative to the reference currency.
        currency: Target currency code.

    Returns:
        Total in the target currency, rounded to cents.

    Raises:
        UnknownCurrencyError: If a currency is missing from rates.
        InvalidRateError: If a rate is unusable.
    """
    total = 0.0
    for item in costs:
        total += convert_unrounded(item.sum, item.currency, currency, rates)
    return round_money(total)


def create_monthly_report(
    year: int,
    month: int,
    costs: list[CostItem],
    rates: RateTable,
    currency: str,
) -> MonthlyReport:
    """Create a monthly report with one converted grand total.

    The target currency is checked against the rate table even when the month
    has no items, so an unknown currency never yields a silent zero.

    Args:
        year: Report year.
        month: Report month (1-12).
        costs: Cost items stored for that month.
        rates: Rate table relative to the reference currency.
        currency: Target currency code for the total.

    Returns:
        MonthlyReport listing items unconverted, plus the converted total.
    """
    get_rate(currency, rates)

    return MonthlyReport(
        year=year,
        month=month,
        costs=list(costs),
        total=ReportTotal(currency=currency, total=calculate_total(costs, rates, currency)),
    )


def create_yearly_totals(
    year: int,
    costs_by_month: Mapping[int, list[CostItem]],
    rates: RateTable,
    currency: str,
) -> list[MonthTotal]:
    """Create per-month totals for months 1..12.

    Each month goes through create_monthly_report, so totals are rounded per
    month rather than once for the whole year.

    Args:
        year: Report year.
        costs_by_month: Cost items keyed by month number. Missing months are empty.
        rates: Rate table relative to the reference currency.
        currency: Target currency code.

    Returns:
        Twelve MonthTotal entries in month order.
    """
    totals = []
    for month in range(1, 13):
        report = create_monthly_report(year, month, costs_by_month.get(month, []), rates, currency)
        totals.append(MonthTotal(month=month, total=report.total.total))
    return totals


def calculate_category_totals(
    costs: Iterable[CostItem],
    rates: RateTable,
    currency: str,
) -> list[CategoryTotal]:
    """Group converted amounts by category.

    Items without a category are counted under "Other".

    Returns:
        CategoryTotal entries sorted by total, largest first.
    """
    by_category: dict[str, float] = {}
    for item in costs:
        category = item.category or DEFAULT_CATEGORY
        by_category[category] = by_category.get(category, 0.0) + convert(item.sum, item.currency, currency, rates)

    totals = [CategoryTotal(category=cat, total=round_money(amount)) for cat, amount in by_category.items()]
    return sorted(totals, key=lambda x: x.total, reverse=True)


def calculate_histogram_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
