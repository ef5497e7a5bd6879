"""Exchange rate source interactions."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import requests

from costmgr.config import get_rates_url
from costmgr.domain.models import RateTable
from costmgr.errors import RatesUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class RateSource(Protocol):
    """Anything that can produce the current rate table."""

    def fetch(self) -> RateTable: ...


def parse_rates(payload: object) -> RateTable:
    """Validate a decoded rates payload.

    Values are only checked to be numbers; zero or negative rates are left for
    the converter to reject.

    Args:
        payload: Decoded JSON body.

    Returns:
        Rate table of currency code -> rate.

    Raises:
        RatesUnavailableError: If the payload is not an object of numbers.
    """
    if not isinstance(payload, dict):
        raise RatesUnavailableError("Rates response is not a JSON object")

    rates: RateTable = {}
    for code, value in payload.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RatesUnavailableError(f"Rate for {code} is not a number: {value!r}")
        try:
            rates[str(code)] = float(value)
        except OverflowError as e:
            raise RatesUnavailableError(f"Rate for {code} is out of range") from e

    if rates and 1.0 not in rates.values():
        logger.warning("Rate table has no reference currency at 1: %s", rates)

    return rates


def fetch_rates(url: str, timeout: float = DEFAULT_TIMEOUT) -> RateTable:
    """Fetch the current rate table.

    Args:
        url: Rate source endpoint.
        timeout: Request timeout in seconds.

    Returns:
        Rate table of currency code -> rate.

    Raises:
        RatesUnavailableError: If the request fails, returns a non-2xx status,
            or the body is not a JSON object of numbers.
    """
    headers = {"Accept": "application/json"}
    logger.debug("Fetching rates from %s", url)
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RatesUnavailableError(f"Failed to fetch rates from {url}: {e}") from e

    try:
        payload = response.json()
    except ValueError as e:
        raise RatesUnavailableError(f"Rates from {url} are not valid JSON") from e

    return parse_rates(payload)


@dataclass
class HttpRateSource:
    """Rate source backed by the configured HTTP endpoint.

    Without a pinned url, the preference is re-read on every fetch so a
    changed setting applies to the next report.
    """

    url: str | None = None
    config_path: Path | None = None
    timeout: float = DEFAULT_TIMEOUT

    def resolve_url(self) -> str:
        if self.url:
            return self.url
        return get_rates_url(self.config_path)

    def fetch(self) -> RateTable:
        return fetch_rates(self.resolve_url(), self.timeout)


@dataclass(frozen=True)
class StaticRateSource:
    """Fixed, in-memory rate table."""

    rates: RateTable

    def fetch(self) -> RateTable:
        return dict(self.rates)


@dataclass
class CachedRateSource:
    """Keep the last fetched table for ttl_seconds.

    Opt-in only: reports built with a plain source always see fresh rates.
    """

    source: RateSource
    ttl_seconds: float = 60.0
    _rates: RateTable | None = field(default=None, init=False, repr=False)
    _expires_at: float = field(default=0.0, init=False, repr=False)

    def fetch(self) -> RateTable:
        now = time.monotonic()
        if self._rates is not None and now < self._expires_at:
            return dict(self._rates)

        rates = self.source.fetch()
        self._rates = rates
        self._expires_at = now + self.ttl_seconds
        return dict(rates)

    def invalidate(self) -> None:
        self._rates = None
        self._expires_at = 0.0
