"""Kraken Futures market data client via ccxt async.

Only public endpoints are used, so no API key is required. Raw ccxt
payloads are validated and converted to FundingSample / TickerSnapshot
here; malformed records are skipped rather than passed to the signal core.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import ccxt
import ccxt.async_support as ccxt_async

from meanrev.config import MarketDataSettings
from meanrev.exceptions import MarketDataUnavailable, UnknownSymbolError
from meanrev.logging import get_logger
from meanrev.market_data.client import MarketDataClient
from meanrev.models import FundingSample, TickerSnapshot

logger = get_logger(__name__)

_ZERO = Decimal("0")


def _to_decimal(value: Any) -> Decimal | None:
    """Convert a wire value to Decimal via str, None when missing or malformed."""
    if value is None or value == "":
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def parse_funding_record(record: dict) -> FundingSample | None:
    """Convert one ccxt funding-history record to a FundingSample.

    Kraken reports both an absolute and a relative rate in the raw ``info``
    payload. The relative rate is preferred for analysis; ccxt's normalized
    ``fundingRate`` is the fallback.

    Returns:
        FundingSample, or None when timestamp or rate is unusable.
    """
    info = record.get("info") or {}
    timestamp_ms = record.get("timestamp")
    if timestamp_ms is None:
        return None

    normalized = _to_decimal(record.get("fundingRate"))
    relative = _to_decimal(info.get("relativeFundingRate"))
    absolute = _to_decimal(info.get("fundingRate"))

    if relative is None:
        relative = normalized
    if absolute is None:
        absolute = normalized
    if relative is None or absolute is None:
        return None

    return FundingSample(
        timestamp=datetime.fromtimestamp(int(timestamp_ms) / 1000, tz=timezone.utc),
        funding_rate=absolute,
        relative_funding_rate=relative,
    )


class KrakenFuturesClient(MarketDataClient):
    """Public market data client for Kraken Futures perpetuals using ccxt async."""

    def __init__(self, settings: MarketDataSettings) -> None:
        self._settings = settings
        exchange_class = getattr(ccxt_async, settings.exchange_id)
        self._exchange = exchange_class(
            {
                "enableRateLimit": True,
                "timeout": settings.request_timeout_ms,
                "options": {"defaultType": "swap"},
            }
        )
        self._markets: dict = {}

    @property
    def exchange(self) -> Any:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        """Initialize connection by loading markets."""
        logger.info("connecting_to_exchange", exchange=self._settings.exchange_id)
        try:
            self._markets = await self._exchange.load_markets()
        except ccxt.BaseError as e:
            raise MarketDataUnavailable(f"Failed to load markets: {e}") from e
        logger.info(
            "exchange_connected",
            exchange=self._settings.exchange_id,
            market_count=len(self._markets),
        )

    async def close(self) -> None:
        """Clean up ccxt async resources. CRITICAL: must be called to avoid resource leaks."""
        logger.info("closing_exchange_connection")
        await self._exchange.close()

    def tracked_symbols(self) -> list[str]:
        return list(self._settings.symbols)

    def resolve_symbol(self, asset: str) -> str:
        """Map an asset code (e.g., "btc") to its unified perpetual symbol."""
        symbol = self._settings.symbols.get(asset.upper())
        if symbol is None:
            raise UnknownSymbolError(f"No perpetual configured for {asset}")
        return symbol

    async def fetch_ticker(self, asset: str) -> TickerSnapshot:
        """Fetch last price, 24h open and the current relative funding rate.

        The funding rate comes from ccxt's fetch_funding_rate when the exchange
        supports it; None otherwise (callers then fall back to history).
        """
        symbol = self.resolve_symbol(asset)
        try:
            ticker = await self._exchange.fetch_ticker(symbol)
            funding_rate: Decimal | None = None
            if self._exchange.has.get("fetchFundingRate"):
                funding = await self._exchange.fetch_funding_rate(symbol)
                funding_rate = _to_decimal(funding.get("fundingRate"))
        except ccxt.BaseError as e:
            raise MarketDataUnavailable(f"Ticker unavailable for {asset}: {e}") from e

        price = _to_decimal(ticker.get("last")) or _to_decimal(ticker.get("close"))
        if price is None:
            raise MarketDataUnavailable(f"No price for {asset}")

        info = ticker.get("info") or {}
        return TickerSnapshot(
            symbol=asset.upper(),
            price=price,
            funding_rate=funding_rate,
            open_24h=_to_decimal(ticker.get("open")) or _ZERO,
            mark_price=_to_decimal(info.get("markPrice")) or _ZERO,
        )

    async def fetch_funding_history(
        self, asset: str, limit: int | None = None
    ) -> list[FundingSample]:
        """Fetch and convert historical funding rates, oldest-first.

        Kraken returns the full history in one call; the most recent
        ``limit`` (default history_limit) samples are kept.
        """
        symbol = self.resolve_symbol(asset)
        limit = limit or self._settings.history_limit
        try:
            records = await self._exchange.fetch_funding_rate_history(symbol)
        except ccxt.BaseError as e:
            raise MarketDataUnavailable(
                f"Funding history unavailable for {asset}: {e}"
            ) from e

        samples: list[FundingSample] = []
        skipped = 0
        for record in records or []:
            sample = parse_funding_record(record)
            if sample is None:
                skipped += 1
                continue
            samples.append(sample)

        if skipped:
            logger.warning("malformed_funding_records", asset=asset, skipped=skipped)

        samples.sort(key=lambda s: s.timestamp)
        logger.debug("fetched_funding_history", asset=asset, count=len(samples))
        return samples[-limit:]
