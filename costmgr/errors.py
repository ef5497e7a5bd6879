"""Exception types raised by the costmgr core.

Store, rate source and converter failures each surface as their own type so
callers can tell them apart. Backend exceptions are chained as ``__cause__``.
"""


class CostManagerError(Exception):
    """Base class for all costmgr errors."""


class StoreError(CostManagerError):
    """Base class for cost store failures."""


class StoreOpenError(StoreError):
    """Raised when the cost database cannot be opened or upgraded."""


class WriteError(StoreError):
    """Raised when a cost item cannot be committed."""


class ReadError(StoreError):
    """Raised when cost items cannot be read back."""


class RatesUnavailableError(CostManagerError):
    """Raised when the exchange rates cannot be fetched or parsed."""


class ConversionError(CostManagerError):
    """Base class for currency conversion failures."""


class UnknownCurrencyError(ConversionError):
    """Raised when a currency code is missing from the rate table."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown currency: {code}")
        self.code = code


class InvalidRateError(ConversionError):
    """Raised when a rate table entry cannot be used for conversion."""

    def __init__(self, code: str, rate: object) -> None:
        super().__init__(f"Invalid rate for {code}: {rate!r}")
        self.code = code
        self.rate = rate
