"""Shared data models for the funding-rate signal desk.

CRITICAL: All rate, price and money values use Decimal. Never use float for
funding rates, statistics, or position sizes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

#: Funding periods per year at 8h intervals (3 per day * 365 days).
FUNDING_PERIODS_PER_YEAR = Decimal("1095")


class SignalType(str, Enum):
    """Seven-level mean-reversion signal, ordered most-short to most-long.

    SHORT-side classes fire on high positive z-scores (longs paying an
    extreme premium), LONG-side classes on the mirrored negative z-scores.
    """

    ULTRA_SHORT = "ULTRA_SHORT"
    STRONG_SHORT = "STRONG_SHORT"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"
    LONG = "LONG"
    STRONG_LONG = "STRONG_LONG"
    ULTRA_LONG = "ULTRA_LONG"

    @property
    def direction(self) -> str | None:
        """Trade direction implied by the signal, None for NEUTRAL."""
        if "LONG" in self.value:
            return "LONG"
        if "SHORT" in self.value:
            return "SHORT"
        return None

    @property
    def is_actionable(self) -> bool:
        return self is not SignalType.NEUTRAL


@dataclass(frozen=True)
class FundingSample:
    """A single historical funding rate observation.

    ``relative_funding_rate`` is the rate as a fraction of contract value and
    is what the signal engine analyses. ``funding_rate`` is kept as reported
    by the exchange (absolute, per contract on Kraken Futures).
    """

    timestamp: datetime
    funding_rate: Decimal
    relative_funding_rate: Decimal

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "funding_rate": str(self.funding_rate),
            "relative_funding_rate": str(self.relative_funding_rate),
        }


@dataclass(frozen=True)
class TickerSnapshot:
    """Current price and funding rate for a single perpetual contract."""

    symbol: str
    price: Decimal
    funding_rate: Decimal | None = None  # relative, per funding period
    open_24h: Decimal = _ZERO
    mark_price: Decimal = _ZERO

    @property
    def price_change_24h(self) -> Decimal:
        """24h price change in percent, 0 when no opening price is known."""
        if self.open_24h <= _ZERO:
            return _ZERO
        return (self.price - self.open_24h) / self.open_24h * _HUNDRED

    @property
    def annualized_rate(self) -> Decimal:
        """Funding rate projected to a yearly basis (3 periods/day)."""
        if self.funding_rate is None:
            return _ZERO
        return self.funding_rate * FUNDING_PERIODS_PER_YEAR

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "symbol": self.symbol,
            "price": str(self.price),
            "funding_rate": str(self.funding_rate) if self.funding_rate is not None else None,
            "open_24h": str(self.open_24h),
            "mark_price": str(self.mark_price),
            "price_change_24h": str(self.price_change_24h),
            "annualized_rate": str(self.annualized_rate),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete mean-reversion analysis of one symbol at one point in time.

    Created fresh by SignalEngine.analyze and never mutated afterwards.
    """

    symbol: str
    price: Decimal
    current_rate: Decimal
    mean: Decimal
    std: Decimal
    z_score: Decimal
    signal: SignalType
    confirmations: int
    confirmation_details: tuple[str, ...]
    edge_score: Decimal  # 0-100
    win_probability: Decimal  # 0.50-0.80
    is_funding_reversing: bool
    funding_trend: Decimal  # slope per funding period over the trend window
    timestamp: datetime
    annualized_rate: Decimal = _ZERO

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "symbol": self.symbol,
            "price": str(self.price),
            "current_rate": str(self.current_rate),
            "mean": str(self.mean),
            "std": str(self.std),
            "z_score": str(self.z_score),
            "signal": self.signal.value,
            "confirmations": self.confirmations,
            "confirmation_details": list(self.confirmation_details),
            "edge_score": str(self.edge_score),
            "win_probability": str(self.win_probability),
            "is_funding_reversing": self.is_funding_reversing,
            "funding_trend": str(self.funding_trend),
            "annualized_rate": str(self.annualized_rate),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class PositionSizing:
    """Risk-bounded position size and exit levels for one analysis."""

    direction: str  # "LONG" or "SHORT"
    position_size: Decimal  # notional in quote currency
    leverage: int
    risk_amount: Decimal
    risk_percent: Decimal  # effective fraction of capital at risk
    stop_loss_percent: Decimal
    take_profit_percent: Decimal
    stop_loss_price: Decimal
    take_profit_price: Decimal
    expected_value: Decimal  # per unit of notional
    meets_profile: bool = False

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "direction": self.direction,
            "position_size": str(self.position_size),
            "leverage": self.leverage,
            "risk_amount": str(self.risk_amount),
            "risk_percent": str(self.risk_percent),
            "stop_loss_percent": str(self.stop_loss_percent),
            "take_profit_percent": str(self.take_profit_percent),
            "stop_loss_price": str(self.stop_loss_price),
            "take_profit_price": str(self.take_profit_price),
            "expected_value": str(self.expected_value),
            "meets_profile": self.meets_profile,
        }


@dataclass(frozen=True)
class Progress:
    """Linear and log-scaled progress from a start capital toward a goal."""

    linear_progress: Decimal
    log_progress: Decimal
    total_doublings: Decimal
    completed_doublings: Decimal
    doublings_remaining: Decimal

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "linear_progress": str(self.linear_progress),
            "log_progress": str(self.log_progress),
            "total_doublings": str(self.total_doublings),
            "completed_doublings": str(self.completed_doublings),
            "doublings_remaining": str(self.doublings_remaining),
        }


@dataclass
class ScanReport:
    """Outcome of one scan across all tracked symbols.

    ``analyses`` holds only symbols with enough history; everything else
    appears in ``errors`` with a reason so the batch is never aborted.
    """

    timestamp: datetime
    analyses: list[AnalysisResult] = field(default_factory=list)
    tickers: dict[str, TickerSnapshot] = field(default_factory=dict)
    funding_history: dict[str, list[FundingSample]] = field(default_factory=dict)
    errors: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "signals": [a.to_dict() for a in self.analyses],
            "errors": list(self.errors),
        }
