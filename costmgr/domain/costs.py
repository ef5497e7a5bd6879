"""Pure functions for validating cost input before it reaches the store.

The store accepts any values of the right type; checking that a cost makes
sense is the caller's job, and these helpers are how the CLI does it.
"""

import math

from costmgr.domain.models import DEFAULT_CATEGORY, SUPPORTED_CURRENCIES, NewCost


def parse_sum(value: str) -> float | None:
    """Parse a user-entered amount.

    Args:
        value: Amount string (e.g. "12.50" or "1,200").

    Returns:
        Amount as float, or None if the string is not a number.
    """
    try:
        return float(value.strip().replace(",", ""))
    except ValueError:
        return None


def normalize_currency(value: str) -> str:
    """Normalize a currency code for comparison (e.g. " usd " -> "USD")."""
    return value.strip().upper()


def validate_new_cost(
    amount: float,
    currency: str,
    category: str,
    description: str,
) -> tuple[NewCost | None, str | None]:
    """Validate cost fields and build a NewCost.

    Args:
        amount: Amount in currency.
        currency: Currency code.
        category: Category label. Blank falls back to "Other".
        description: What the cost was for.

    Returns:
        Tuple of (new_cost, error):
        - new_cost: NewCost if valid, None otherwise
        - error: Error message if invalid, None otherwise
    """
    if not math.isfinite(amount) or amount <= 0:
        return None, "Sum must be a positive number"

    code = normalize_currency(currency)
    if code not in SUPPORTED_CURRENCIES:
        return None, f"Unsupported currency '{currency}' (use one of: {', '.join(SUPPORTED_CURRENCIES)})"

    text = description.strip()
    if not text:
        return None, "Description is required"

    return NewCost(sum=amount, currency=code, category=category.strip() or DEFAULT_CATEGORY, description=text), None
