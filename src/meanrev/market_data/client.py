"""Abstract market data client interface.

The scanner depends only on this interface, keeping exchange-specific
payload parsing isolated in the concrete implementation. Implementations
return typed values, never raw exchange dicts.
"""

from abc import ABC, abstractmethod

from meanrev.models import FundingSample, TickerSnapshot


class MarketDataClient(ABC):
    """Abstract base class for public market data sources."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (CRITICAL for ccxt async)."""
        ...

    @abstractmethod
    def tracked_symbols(self) -> list[str]:
        """Return the asset codes this client can serve (e.g., ["BTC", "ETH"])."""
        ...

    @abstractmethod
    async def fetch_ticker(self, asset: str) -> TickerSnapshot:
        """Fetch current price and funding rate for an asset's perpetual."""
        ...

    @abstractmethod
    async def fetch_funding_history(
        self, asset: str, limit: int | None = None
    ) -> list[FundingSample]:
        """Fetch historical funding samples, ordered oldest-first.

        Returns at most ``limit`` of the most recent samples when given.
        """
        ...
