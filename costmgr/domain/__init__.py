"""Domain models and pure functions for costmgr.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations (no database, no network)
- Currency conversion and report aggregation
"""

from costmgr.domain.models import CostItem, CurrencyCode, NewCost, RateTable

__all__ = ["CostItem", "CurrencyCode", "NewCost", "RateTable"]
