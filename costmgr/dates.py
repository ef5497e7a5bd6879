"""Date utilities for costmgr.

Pure functions for month parsing and formatting.
"""

from datetime import MAXYEAR, MINYEAR, date, datetime


def parse_month(month: str) -> tuple[int, int]:
    """Parse a month string.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month_number).

    Raises:
        ValueError: If the string is not a valid YYYY-MM month.
    """
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def month_label(year: int, month: int) -> str:
    """Human-readable month (e.g., "January 2025").

    Raises:
        ValueError: If month is not in 1-12.
    """
    return date(year, month, 1).strftime("%B %Y")


def short_month_label(month: int) -> str:
    """Three-letter month name (e.g., "Jan")."""
    return date(2000, month, 1).strftime("%b")


def resolve_period(year: int | None, month: str | None, today: date | None = None) -> tuple[int, int]:
    """Work out which month a command should report on.

    Args:
        year: Explicit year, used with the current month if month is None.
        month: Explicit month in YYYY-MM format; takes precedence over year.
        today: Reference date. If None, uses the local current date.

    Returns:
        Tuple of (year, month_number).

    Raises:
        ValueError: If month is not YYYY-MM or year is outside MINYEAR..MAXYEAR.
    """
    if month:
        try:
            return parse_month(month)
        except ValueError as e:
            raise ValueError(f"Invalid month: {month} (expected YYYY-MM)") from e

    if year is not None and not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"Invalid year: {year} (expected {MINYEAR}-{MAXYEAR})")

    if today is None:
        today = date.today()
    return (year if year is not None else today.year), today.month
