"""Database store layer - provides persistence for cost items.

This module re-exports all public database functions for easy importing.
"""

from costmgr.store.aio import add_cost_async, get_costs_by_month_async, open_store_async
from costmgr.store.queries import add_cost, count_costs, get_costs_by_month
from costmgr.store.schema import DB_VERSION, StoreHandle, database_exists, get_db_path, open_store

__all__ = [
    # Schema
    "DB_VERSION",
    "StoreHandle",
    "database_exists",
    "get_db_path",
    "open_store",
    # Queries
    "add_cost",
    "count_costs",
    "get_costs_by_month",
    # Async
    "add_cost_async",
    "get_costs_by_month_async",
    "open_store_async",
]
