"""Custom exceptions for the signal desk.

Only the market-data boundary raises these. The signal core never raises
for expected conditions such as short histories or flat series.
"""


class MeanRevError(Exception):
    """Base exception for all signal desk errors."""


class MarketDataUnavailable(MeanRevError):
    """Raised when the exchange cannot supply tickers or funding history."""


class UnknownSymbolError(MeanRevError):
    """Raised when an asset code has no configured perpetual contract."""
