"""Pure currency conversion through the reference currency.

Every rate in a RateTable is expressed relative to the reference currency
(rate exactly 1), so converting between two codes goes via the reference:

    normalized = amount / rates[from_code]
    result = normalized * rates[to_code]

Rounding is to 2 decimal places, half away from zero, applied to the shortest
decimal representation of the float (so 1.005 rounds to 1.01).
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from costmgr.domain.models import RateTable
from costmgr.errors import InvalidRateError, UnknownCurrencyError

CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round an amount to 2 decimal places, half away from zero.

    Args:
        value: Amount to round.

    Returns:
        Rounded amount. Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value

    amount = Decimal(repr(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the two decimals
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return float(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def get_rate(code: str, rates: RateTable) -> float:
    """Look up a usable rate for a currency code.

    Args:
        code: Currency code.
        rates: Rate table relative to the reference currency.

    Returns:
        The rate for the code.

    Raises:
        UnknownCurrencyError: If the code is not in the table.
        InvalidRateError: If the rate is zero, negative, or not a finite number.
    """
    if code not in rates:
        raise UnknownCurrencyError(code)

    rate = rates[code]
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise InvalidRateError(code, rate)
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidRateError(code, rate)
    return float(rate)


def convert_unrounded(amount: float, from_code: str, to_code: str, rates: RateTable) -> float:
    """Convert an amount between currencies without rounding.

    Args:
        amount: Amount in from_code.
        from_code: Source currency code.
        to_code: Target currency code.
        rates: Rate table relative to the reference currency.

    Returns:
        Amount in to_code, unrounded.

    Raises:
        UnknownCurrencyError: If either code is missing from rates.
        InvalidRateError: If either rate is unusable.
    """
    from_rate = get_rate(from_code, rates)
    to_rate = get_rate(to_code, rates)
    normalized = amount / from_rate
    return normalized * to_rate


def convert(amount: float, from_code: str, to_code: str, rates: RateTable) -> float:
    """Convert an amount between currencies, rounded to cents.

    Identity conversions go through the same arithmetic as any other pair.

    Raises:
        UnknownCurrencyError: If either code is missing from rates.
        InvalidRateError: If either rate is unusable.
    """
    return round_money(convert_unrounded(amount, from_code, to_code, rates))
