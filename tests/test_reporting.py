"""Tests for costmgr.reporting async report builds."""

from datetime import date
from pathlib import Path

import pytest

from costmgr.domain.models import NewCost
from costmgr.errors import RatesUnavailableError, ReadError, UnknownCurrencyError
from costmgr.rates import StaticRateSource
from costmgr.reporting import build_monthly_report, build_yearly_totals
from costmgr.store import DB_VERSION, StoreHandle, add_cost

JUNE = date(2025, 6, 10)


class DownRateSource:
    def fetch(self):
        raise RatesUnavailableError("rates server is down")


@pytest.fixture
def june_store(store: StoreHandle) -> StoreHandle:
    add_cost(store, NewCost(sum=100, currency="USD", category="Food", description="Groceries"), today=JUNE)
    add_cost(store, NewCost(sum=50, currency="GBP", category="Car", description="Fuel"), today=JUNE)
    add_cost(store, NewCost(sum=70, currency="EURO", category="Food", description="Dinner"), today=JUNE)
    return store


class TestBuildMonthlyReport:
    """Tests for build_monthly_report."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, june_store: StoreHandle, rates) -> None:
        """Should total mixed currencies and keep items as entered."""
        report = await build_monthly_report(june_store, 2025, 6, "USD", StaticRateSource(rates))

        assert report.total.currency == "USD"
        assert report.total.total == 283.33
        assert [(c.sum, c.currency, c.category) for c in report.costs] == [
            (100, "USD", "Food"),
            (50, "GBP", "Car"),
            (70, "EURO", "Food"),
        ]

    @pytest.mark.asyncio
    async def test_huge_sum(self, store: StoreHandle, rates) -> None:
        """Should total a sum beyond the default decimal precision."""
        add_cost(store, NewCost(sum=1e26, currency="USD", category="Food", description="Big"), today=JUNE)

        report = await build_monthly_report(store, 2025, 6, "USD", StaticRateSource(rates))

        assert report.total.total == 1e26

    @pytest.mark.asyncio
    async def test_empty_month(self, store: StoreHandle, rates) -> None:
        """Should return an empty report rather than fail."""
        report = await build_monthly_report(store, 2025, 1, "ILS", StaticRateSource(rates))

        assert report.to_dict() == {"year": 2025, "month": 1, "costs": [], "total": {"currency": "ILS", "total": 0}}

    @pytest.mark.asyncio
    async def test_fetches_rates_per_call(self, june_store: StoreHandle, counting_source) -> None:
        """Should fetch fresh rates for every report."""
        await build_monthly_report(june_store, 2025, 6, "USD", counting_source)
        await build_monthly_report(june_store, 2025, 6, "GBP", counting_source)

        assert counting_source.calls == 2

    @pytest.mark.asyncio
    async def test_uses_current_rates(self, june_store: StoreHandle) -> None:
        """Should convert with the rates of the moment, not those at entry time."""
        report = await build_monthly_report(
            june_store, 2025, 6, "USD", StaticRateSource({"USD": 1, "GBP": 0.5, "EURO": 0.5})
        )

        assert report.total.total == 340.0

    @pytest.mark.asyncio
    async def test_rates_unavailable(self, june_store: StoreHandle) -> None:
        """Should fail the whole report when rates cannot be fetched."""
        with pytest.raises(RatesUnavailableError):
            await build_monthly_report(june_store, 2025, 6, "USD", DownRateSource())

    @pytest.mark.asyncio
    async def test_incomplete_rate_table(self, june_store: StoreHandle) -> None:
        """Should fail rather than treat a missing rate as zero."""
        with pytest.raises(UnknownCurrencyError) as exc_info:
            await build_monthly_report(june_store, 2025, 6, "USD", StaticRateSource({"USD": 1, "GBP": 0.6}))
        assert exc_info.value.code == "EURO"

    @pytest.mark.asyncio
    async def test_read_error(self, tmp_path: Path, rates) -> None:
        """Should surface store failures."""
        handle = StoreHandle(path=tmp_path / "empty.db", version=DB_VERSION)

        with pytest.raises(ReadError):
            await build_monthly_report(handle, 2025, 6, "USD", StaticRateSource(rates))

    @pytest.mark.asyncio
    async def test_default_source_uses_configured_url(
        self, june_store: StoreHandle, fake_get, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should fetch from the configured rates URL when no source is given."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))

        report = await build_monthly_report(june_store, 2025, 6, "USD")

        assert report.total.total == 283.33
        assert fake_get.calls[0]["url"] == "http://localhost:3000/rates"


class TestBuildYearlyTotals:
    """Tests for build_yearly_totals."""

    @pytest.mark.asyncio
    async def test_single_month(self, june_store: StoreHandle, rates) -> None:
        """Should give eleven zero months and June matching its monthly report."""
        source = StaticRateSource(rates)
        totals = await build_yearly_totals(june_store, 2025, "USD", source)
        june = await build_monthly_report(june_store, 2025, 6, "USD", source)

        assert [t.month for t in totals] == list(range(1, 13))
        assert totals[5].total == june.total.total == 283.33
        assert [t.total for t in totals if t.month != 6] == [0] * 11

    @pytest.mark.asyncio
    async def test_fetches_rates_once(self, june_store: StoreHandle, counting_source) -> None:
        """Should share one rate table across all twelve months."""
        await build_yearly_totals(june_store, 2025, "USD", counting_source)

        assert counting_source.calls == 1

    @pytest.mark.asyncio
    async def test_other_year_is_empty(self, june_store: StoreHandle, rates) -> None:
        """Should not count items from another year."""
        totals = await build_yearly_totals(june_store, 2024, "USD", StaticRateSource(rates))

        assert all(t.total == 0 for t in totals)

    @pytest.mark.asyncio
    async def test_rates_unavailable(self, june_store: StoreHandle) -> None:
        """Should fail the whole year when rates cannot be fetched."""
        with pytest.raises(RatesUnavailableError):
            await build_yearly_totals(june_store, 2025, "USD", DownRateSource())

    @pytest.mark.asyncio
    async def test_unknown_currency(self, june_store: StoreHandle, rates) -> None:
        """Should fail the whole year for an unknown target currency."""
        with pytest.raises(UnknownCurrencyError):
            await build_yearly_totals(june_store, 2025, "XYZ", StaticRateSource(rates))
