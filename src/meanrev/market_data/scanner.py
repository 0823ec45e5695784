"""Batch signal scanner across all tracked symbols.

Each symbol's fetch-and-analyse pipeline runs as its own task via
asyncio.gather. Symbols share no state, so a network failure or a short
history for one symbol only produces an error entry for that symbol; the
rest of the batch completes normally.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

from meanrev.config import MarketDataSettings
from meanrev.exceptions import MeanRevError
from meanrev.logging import get_logger, symbol_context
from meanrev.market_data.client import MarketDataClient
from meanrev.models import AnalysisResult, FundingSample, ScanReport, TickerSnapshot
from meanrev.signals.engine import SignalEngine

logger = get_logger(__name__)


@dataclass
class _SymbolOutcome:
    """Result of scanning one symbol, successful or not."""

    symbol: str
    analysis: AnalysisResult | None = None
    ticker: TickerSnapshot | None = None
    history: list[FundingSample] | None = None
    error: str | None = None


class SignalScanner:
    """Fetches market data for every tracked symbol and runs the SignalEngine.

    Remembers the most recent report and the latest analysis per symbol so
    the position endpoint can size a signal without re-fetching.

    Args:
        client: Market data source.
        engine: Signal engine applied to each symbol.
        settings: History limit and chart sample count.
    """

    def __init__(
        self,
        client: MarketDataClient,
        engine: SignalEngine,
        settings: MarketDataSettings | None = None,
    ) -> None:
        self._client = client
        self._engine = engine
        self._settings = settings or MarketDataSettings()
        self._latest: ScanReport | None = None
        self._analyses: dict[str, AnalysisResult] = {}

    @property
    def latest(self) -> ScanReport | None:
        """Most recent scan report, None before the first scan."""
        return self._latest

    def tracked_symbols(self) -> list[str]:
        return self._client.tracked_symbols()

    def get_analysis(self, symbol: str) -> AnalysisResult | None:
        """Return the latest analysis for an asset code, or None."""
        return self._analyses.get(symbol.upper())

    async def scan(self, symbols: list[str] | None = None) -> ScanReport:
        """Analyse the given asset codes (default: all tracked) concurrently.

        Args:
            symbols: Asset codes to scan. Unknown codes produce error entries.

        Returns:
            ScanReport with analyses sorted by |z-score| descending.
        """
        targets = [s.upper() for s in symbols] if symbols else self.tracked_symbols()
        now = datetime.now(timezone.utc)

        outcomes = await asyncio.gather(
            *(self._scan_symbol(symbol, now) for symbol in targets)
        )

        report = ScanReport(timestamp=now)
        for outcome in outcomes:
            if outcome.ticker is not None:
                report.tickers[outcome.symbol] = outcome.ticker
            if outcome.history is not None:
                report.funding_history[outcome.symbol] = outcome.history[
                    -self._settings.chart_points:
                ]
            if outcome.analysis is not None:
                report.analyses.append(outcome.analysis)
                self._analyses[outcome.symbol] = outcome.analysis
            else:
                self._analyses.pop(outcome.symbol, None)
            if outcome.error is not None:
                report.errors.append({"symbol": outcome.symbol, "error": outcome.error})

        report.analyses.sort(key=lambda a: abs(a.z_score), reverse=True)
        self._latest = report

        logger.info(
            "scan_complete",
            symbols=len(targets),
            signals=len(report.analyses),
            errors=len(report.errors),
        )
        return report

    async def _scan_symbol(self, symbol: str, now: datetime) -> _SymbolOutcome:
        """Fetch and analyse one symbol, converting failures to an error entry."""
        with symbol_context(symbol):
            outcome = _SymbolOutcome(symbol=symbol)
            try:
                ticker, history = await asyncio.gather(
                    self._client.fetch_ticker(symbol),
                    self._client.fetch_funding_history(
                        symbol, limit=self._settings.history_limit
                    ),
                )
            except MeanRevError as e:
                logger.warning("market_data_unavailable", error=str(e))
                outcome.error = str(e)
                return outcome
            except Exception as e:
                logger.warning("symbol_scan_failed", error=str(e), exc_info=True)
                outcome.error = f"Error processing {symbol}: {e}"
                return outcome

            outcome.ticker = ticker
            outcome.history = history

            if not history:
                outcome.error = "No funding data available"
                return outcome

            outcome.analysis = self._engine.analyze(
                symbol,
                history,
                price=ticker.price,
                current_rate=ticker.funding_rate,
                now=now,
            )
            if outcome.analysis is None:
                outcome.error = self._engine.insufficient_data_reason(symbol, history)
            return outcome
