"""Short-window funding trend and reversal detection.

A funding rate sitting above its mean while the recent slope points down
(or below the mean while the slope points up) is turning back toward the
mean, which is a leading indicator for the reversion trade.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

_ZERO = Decimal("0")


def compute_funding_trend(recent: Sequence[Decimal]) -> Decimal:
    """Average change per period across the recent window.

    Formula: (last - first) / (n - 1)

    Args:
        recent: Most recent funding rates ordered oldest-first.

    Returns:
        Slope per funding period. 0 with fewer than 2 values.
    """
    if len(recent) < 2:
        return _ZERO
    return (recent[-1] - recent[0]) / Decimal(len(recent) - 1)


def is_funding_reversing(current: Decimal, mean: Decimal, trend: Decimal) -> bool:
    """Return True when momentum is turning against the prevailing extreme."""
    return (current > mean and trend < _ZERO) or (current < mean and trend > _ZERO)


def detect_reversal(
    rates: Sequence[Decimal],
    current: Decimal,
    mean: Decimal,
    window: int = 6,
) -> tuple[Decimal, bool]:
    """Compute the trend over the last ``window`` rates and the reversal flag.

    Args:
        rates: Historical funding rates ordered oldest-first.
        current: The funding rate being evaluated.
        mean: Lookback window mean.
        window: Number of trailing periods used for the slope.

    Returns:
        ``(trend, reversing)`` tuple.
    """
    trend = compute_funding_trend(list(rates[-window:]))
    return trend, is_funding_reversing(current, mean, trend)
