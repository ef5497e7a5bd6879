"""Domain types for costmgr.

These types describe what the store keeps and what reports return:
- CurrencyCode: one of the supported currency codes (e.g. "USD")
- RateTable: currency code -> rate relative to the reference currency
- NewCost: the caller-supplied part of a cost item
- CostItem: a stored cost item with its id and insertion date
"""

from dataclasses import asdict, dataclass
from typing import Any, NewType

# Currency codes as used by the rate source (note "EURO", not "EUR")
CurrencyCode = NewType("CurrencyCode", str)

# Rates are relative to the reference currency, whose rate is exactly 1
RateTable = dict[str, float]

SUPPORTED_CURRENCIES: tuple[CurrencyCode, ...] = (
    CurrencyCode("USD"),
    CurrencyCode("GBP"),
    CurrencyCode("EURO"),
    CurrencyCode("ILS"),
)

SUGGESTED_CATEGORIES: tuple[str, ...] = ("Food", "Car", "Education", "Bills", "Shopping", "Health", "Other")

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class NewCost:
    """Cost item fields supplied by the caller."""

    sum: float
    currency: str
    category: str
    description: str


@dataclass(frozen=True)
class CostItem:
    """Immutable stored cost item."""

    id: int
    sum: float
    currency: str
    category: str
    description: str
    year: int
    month: int
    day: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
