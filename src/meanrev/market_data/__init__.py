"""Market data layer -- Kraken Futures client and the batch signal scanner."""

from meanrev.market_data.client import MarketDataClient
from meanrev.market_data.kraken_client import KrakenFuturesClient, parse_funding_record
from meanrev.market_data.scanner import SignalScanner

__all__ = ["KrakenFuturesClient", "MarketDataClient", "SignalScanner", "parse_funding_record"]
