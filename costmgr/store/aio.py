"""Async wrappers around the store operations.

sqlite calls block, so each operation runs on a worker thread. Errors are the
same typed exceptions the sync functions raise.
"""

import asyncio
from datetime import date
from pathlib import Path

from costmgr.domain.models import CostItem, NewCost
from costmgr.store.queries import add_cost, get_costs_by_month
from costmgr.store.schema import DB_VERSION, StoreHandle, open_store


async def open_store_async(db_path: Path | None = None, version: int = DB_VERSION) -> StoreHandle:
    return await asyncio.to_thread(open_store, db_path, version)


async def add_cost_async(handle: StoreHandle, cost: NewCost, today: date | None = None) -> CostItem:
    return await asyncio.to_thread(add_cost, handle, cost, today)


async def get_costs_by_month_async(handle: StoreHandle, year: int, month: int) -> list[CostItem]:
    return await asyncio.to_thread(get_costs_by_month, handle, year, month)
