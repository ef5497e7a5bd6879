"""Database query functions."""

import logging
import sqlite3
from datetime import date
from typing import Any

from costmgr.domain.models import CostItem, NewCost
from costmgr.errors import ReadError, WriteError
from costmgr.store.schema import StoreHandle

logger = logging.getLogger(__name__)

COST_COLUMNS = "id, sum, currency, category, description, year, month, day"


def _connect(handle: StoreHandle) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        handle: Opened store.

    Returns:
        Database connection with row_factory configured.
    """
    # mode=rw: never create a missing database file
    conn = sqlite3.connect(f"{handle.path.resolve().as_uri()}?mode=rw", uri=True)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_cost(row: sqlite3.Row) -> CostItem:
    return CostItem(**dict(row))


def add_cost(handle: StoreHandle, cost: NewCost, today: date | None = None) -> CostItem:
    """Insert a cost item, stamping it with the insertion date.

    The store does not validate the cost; sum and currency are kept exactly as
    given.

    Args:
        handle: Opened store.
        cost: Caller-supplied cost fields.
        today: Insertion date. If None, uses the local current date.

    Returns:
        The stored CostItem, including its assigned id and date fields.

    Raises:
        WriteError: If the insert cannot be committed.
    """
    if today is None:
        today = date.today()

    params: dict[str, Any] = {
        "sum": cost.sum,
        "currency": cost.currency,
        "category": cost.category,
        "description": cost.description,
        "year": today.year,
        "month": today.month,
        "day": today.day,
    }

    try:
        conn = _connect(handle)
    except sqlite3.Error as e:
        raise WriteError(f"Cannot open database: {e}") from e

    try:
        with conn:
            cursor = conn.execute(
                """
                INSERT INTO costs (sum, currency, category, description, year, month, day)
                VALUES (:sum, :currency, :category, :description, :year, :month, :day)
                """,
                params,
            )
            cost_id = cursor.lastrowid
    except sqlite3.Error as e:
        raise WriteError(f"Cannot save cost: {e}") from e
    finally:
        conn.close()

    if cost_id is None:
        raise WriteError("Database did not assign an id to the new cost")

    logger.debug("Stored cost %d (%s %s)", cost_id, cost.sum, cost.currency)
    return CostItem(id=cost_id, **params)


def get_costs_by_month(handle: StoreHandle, year: int, month: int) -> list[CostItem]:
    """Get all cost items inserted in a given month.

    Served by the (year, month) index.

    Args:
        handle: Opened store.
        year: Year to match.
        month: Month to match (1-12).

    Returns:
        Cost items in insertion order. Empty if none match.

    Raises:
        ReadError: If the lookup fails.
    """
    try:
        conn = _connect(handle)
    except sqlite3.Error as e:
        raise ReadError(f"Cannot open database: {e}") from e

    try:
        cursor = conn.execute(
            f"SELECT {COST_COLUMNS} FROM costs INDEXED BY idx_costs_year_month "
            "WHERE year = ? AND month = ? ORDER BY id",
            (year, month),
        )
        rows = cursor.fetchall()
    except sqlite3.Error as e:
        raise ReadError(f"Cannot read costs for {year}-{month:02d}: {e}") from e
    finally:
        conn.close()

    logger.debug("Found %d costs for %d-%02d", len(rows), year, month)
    return [_row_to_cost(row) for row in rows]


def count_costs(handle: StoreHandle) -> int:
    """Count all stored cost items.

    Raises:
        ReadError: If the count fails.
    """
    try:
        conn = _connect(handle)
    except sqlite3.Error as e:
        raise ReadError(f"Cannot open database: {e}") from e

    try:
        return int(conn.execute("SELECT COUNT(*) FROM costs").fetchone()[0])
    except sqlite3.Error as e:
        raise ReadError(f"Cannot count costs: {e}") from e
    finally:
        conn.close()
