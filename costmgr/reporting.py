"""Build monthly and yearly reports from the store and the rate source.

Item retrieval and the rate fetch are independent, so they run concurrently;
conversion starts once both are done. Any failure aborts the whole report.
"""

import asyncio
import logging

from costmgr.domain.models import RateTable
from costmgr.domain.report import MonthlyReport, MonthTotal, create_monthly_report, create_yearly_totals
from costmgr.rates import HttpRateSource, RateSource
from costmgr.store.aio import get_costs_by_month_async
from costmgr.store.schema import StoreHandle

logger = logging.getLogger(__name__)


async def fetch_rates_async(rate_source: RateSource) -> RateTable:
    return await asyncio.to_thread(rate_source.fetch)


async def build_monthly_report(
    handle: StoreHandle,
    year: int,
    month: int,
    currency: str,
    rate_source: RateSource | None = None,
) -> MonthlyReport:
    """Build the report for one month with a total in the given currency.

    Args:
        handle: Opened store.
        year: Report year.
        month: Report month (1-12).
        currency: Target currency code for the total.
        rate_source: Where to get current rates. Defaults to the configured URL.

    Returns:
        MonthlyReport with items in their stored currencies.

    Raises:
        ReadError: If the items cannot be read.
        RatesUnavailableError: If the rates cannot be fetched.
        UnknownCurrencyError: If a needed currency is missing from the rates.
        InvalidRateError: If a needed rate is unusable.
    """
    if rate_source is None:
        rate_source = HttpRateSource()

    costs, rates = await asyncio.gather(
        get_costs_by_month_async(handle, year, month),
        fetch_rates_async(rate_source),
    )
    logger.debug("Building %d-%02d report in %s from %d costs", year, month, currency, len(costs))
    return create_monthly_report(year, month, costs, rates, currency)


async def build_yearly_totals(
    handle: StoreHandle,
    year: int,
    currency: str,
    rate_source: RateSource | None = None,
) -> list[MonthTotal]:
    """Build the per-month totals of a year.

    Rates are fetched once and shared by all twelve months.

    Args:
        handle: Opened store.
        year: Report year.
        currency: Target currency code.
        rate_source: Where to get current rates. Defaults to the configured URL.

    Returns:
        Twelve MonthTotal entries, January first.

    Raises:
        ReadError: If any month cannot be read.
        RatesUnavailableError: If the rates cannot be fetched.
        UnknownCurrencyError: If a needed currency is missing from the rates.
        InvalidRateError: If a needed rate is unusable.
    """
    if rate_source is None:
        rate_source = HttpRateSource()

    rates, *monthly_costs = await asyncio.gather(
        fetch_rates_async(rate_source),
        *(get_costs_by_month_async(handle, year, month) for month in range(1, 13)),
    )
    costs_by_month = dict(zip(range(1, 13), monthly_costs))
    logger.debug("Building %d totals in %s", year, currency)
    return create_yearly_totals(year, costs_by_month, rates, currency)
