"""Signal engine running the full mean-reversion pipeline for one symbol.

Pipeline:
1. Order samples by timestamp and take the lookback window
2. Window statistics and z-score of the current rate
3. Short-window trend and reversal detection
4. Confirmation scoring
5. Dual-gated classification
6. Edge score and win probability

Graceful degradation: a symbol with too little history yields None (with a
reason from insufficient_data_reason), never an exception, so one symbol
cannot abort a batch.

CRITICAL: All computations use Decimal. Never use float for signal scores.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal

from meanrev.config import AnalysisSettings
from meanrev.logging import get_logger
from meanrev.models import FUNDING_PERIODS_PER_YEAR, AnalysisResult, FundingSample
from meanrev.signals.classifier import classify_signal
from meanrev.signals.confirmations import score_confirmations
from meanrev.signals.edge import compute_edge_score, estimate_win_probability
from meanrev.signals.statistics import compute_stats
from meanrev.signals.trend import detect_reversal
from meanrev.signals.zscore import zscore_from_stats

logger = get_logger(__name__)

_ZERO = Decimal("0")


def order_samples(samples: Sequence[FundingSample]) -> list[FundingSample]:
    """Sort samples strictly ascending by timestamp.

    When two samples share a timestamp the one appearing later in the input
    wins, so a re-fetched record replaces the stale one.
    """
    by_timestamp: dict[datetime, FundingSample] = {}
    for sample in samples:
        by_timestamp[sample.timestamp] = sample
    return [by_timestamp[ts] for ts in sorted(by_timestamp)]


class SignalEngine:
    """Turns a funding rate history into an AnalysisResult.

    Stateless apart from its settings, so one instance can analyse any
    number of symbols, concurrently or not.

    Args:
        settings: Lookback, trend window and confirmation parameters.
    """

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self._settings = settings or AnalysisSettings()

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    def insufficient_data_reason(
        self, symbol: str, samples: Sequence[FundingSample]
    ) -> str | None:
        """Return a diagnostic string when ``samples`` is too short to analyse.

        Only distinct timestamps count toward the minimum history.
        """
        return self._shortfall(symbol, len(order_samples(samples)))

    def _shortfall(self, symbol: str, count: int) -> str | None:
        if count < self._settings.min_history:
            return f"Insufficient data for {symbol}: {count} < {self._settings.min_history}"
        return None

    def analyze(
        self,
        symbol: str,
        samples: Sequence[FundingSample],
        price: Decimal,
        current_rate: Decimal | None = None,
        now: datetime | None = None,
    ) -> AnalysisResult | None:
        """Analyse one symbol's funding history against its current rate.

        Args:
            symbol: Asset code used to label the result (e.g., "BTC").
            samples: Historical funding samples in any order.
            price: Current contract price.
            current_rate: Current relative funding rate. Defaults to the most
                recent sample's rate.
            now: Result timestamp. Defaults to the current UTC time and never
                affects any numeric field.

        Returns:
            AnalysisResult, or None when history is insufficient.
        """
        ordered = order_samples(samples)
        reason = self._shortfall(symbol, len(ordered))
        if reason is not None:
            logger.warning("insufficient_history", symbol=symbol, reason=reason)
            return None

        rates = [s.relative_funding_rate for s in ordered]
        if current_rate is None:
            current_rate = rates[-1]

        window = rates[-self._settings.lookback_periods:]
        mean, std = compute_stats(window)
        z_score = (
            zscore_from_stats(current_rate, mean, std)
            if len(rates) >= self._settings.min_zscore_samples
            else _ZERO
        )

        trend, reversing = detect_reversal(
            rates, current_rate, mean, window=self._settings.trend_window
        )
        confirmations, details = score_confirmations(
            z_score,
            current_rate,
            window,
            reversing,
            proximity=self._settings.extreme_proximity,
        )
        signal = classify_signal(z_score, confirmations)

        result = AnalysisResult(
            symbol=symbol,
            price=price,
            current_rate=current_rate,
            mean=mean,
            std=std,
            z_score=z_score,
            signal=signal,
            confirmations=confirmations,
            confirmation_details=tuple(details),
            edge_score=compute_edge_score(z_score, confirmations),
            win_probability=estimate_win_probability(z_score, confirmations, reversing),
            is_funding_reversing=reversing,
            funding_trend=trend,
            annualized_rate=current_rate * FUNDING_PERIODS_PER_YEAR,
            timestamp=now or datetime.now(timezone.utc),
        )

        logger.info(
            "funding_signal",
            symbol=symbol,
            signal=signal.value,
            z_score=str(z_score),
            confirmations=confirmations,
            edge_score=str(result.edge_score),
            win_probability=str(result.win_probability),
            reversing=reversing,
        )
        return result
