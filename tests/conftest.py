"""Shared test fixtures for the funding-rate signal desk."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

import pytest

from meanrev.config import AnalysisSettings, AppSettings, MarketDataSettings
from meanrev.exceptions import MarketDataUnavailable, UnknownSymbolError
from meanrev.market_data.client import MarketDataClient
from meanrev.models import FundingSample, TickerSnapshot

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def build_samples(rates: list[Decimal], start: datetime = BASE_TIME) -> list[FundingSample]:
    """Build 8h-spaced FundingSamples, oldest-first, from relative rates."""
    return [
        FundingSample(
            timestamp=start + timedelta(hours=8 * i),
            funding_rate=rate * Decimal("50000"),
            relative_funding_rate=rate,
        )
        for i, rate in enumerate(rates)
    ]


def alternating_rates(n: int = 90, amplitude: Decimal = Decimal("0.0005")) -> list[Decimal]:
    """+a, -a, +a, ... : mean 0, population std exactly ``amplitude``."""
    return [amplitude if i % 2 == 0 else -amplitude for i in range(n)]


class FakeMarketDataClient(MarketDataClient):
    """In-memory MarketDataClient with per-symbol canned data or failures."""

    def __init__(
        self,
        tickers: dict[str, TickerSnapshot],
        histories: dict[str, list[FundingSample]],
        failures: dict[str, Exception] | None = None,
    ) -> None:
        self._tickers = tickers
        self._histories = histories
        self._failures = failures or {}
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    def tracked_symbols(self) -> list[str]:
        return list(self._tickers)

    async def fetch_ticker(self, asset: str) -> TickerSnapshot:
        if asset in self._failures:
            raise self._failures[asset]
        if asset not in self._tickers:
            raise UnknownSymbolError(f"No perpetual configured for {asset}")
        return self._tickers[asset]

    async def fetch_funding_history(
        self, asset: str, limit: int | None = None
    ) -> list[FundingSample]:
        history = self._histories.get(asset, [])
        return history[-limit:] if limit else history


@pytest.fixture
def make_samples() -> Callable[..., list[FundingSample]]:
    """Factory building evenly spaced FundingSamples from rates."""
    return build_samples


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    """Default analysis settings (90-period lookback)."""
    return AnalysisSettings()


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults and a three-symbol universe."""
    return AppSettings(
        log_level="DEBUG",
        market=MarketDataSettings(
            symbols={"BTC": "BTC/USD:USD", "ETH": "ETH/USD:USD", "SOL": "SOL/USD:USD"},
        ),
    )


@pytest.fixture
def fake_client() -> FakeMarketDataClient:
    """Three symbols: BTC extreme positive funding, ETH too short, SOL exchange down."""
    btc_history = build_samples(alternating_rates(100))
    eth_history = build_samples([Decimal("0.0001")] * 20)
    return FakeMarketDataClient(
        tickers={
            "BTC": TickerSnapshot(
                symbol="BTC",
                price=Decimal("60000"),
                funding_rate=Decimal("0.0015"),
                open_24h=Decimal("59000"),
            ),
            "ETH": TickerSnapshot(symbol="ETH", price=Decimal("3000")),
            "SOL": TickerSnapshot(symbol="SOL", price=Decimal("150")),
        },
        histories={"BTC": btc_history, "ETH": eth_history, "SOL": []},
        failures={"SOL": MarketDataUnavailable("Ticker unavailable for SOL: timeout")},
    )
