"""Z-score of the current funding rate against its lookback window.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from meanrev.signals.statistics import compute_stats

_ZERO = Decimal("0")


def zscore_from_stats(current: Decimal, mean: Decimal, std: Decimal) -> Decimal:
    """Return ``(current - mean) / std``, or 0 when the window is flat."""
    if std == _ZERO:
        return _ZERO
    return (current - mean) / std


def compute_zscore(
    history: Sequence[Decimal],
    current: Decimal,
    lookback: int = 90,
    min_samples: int = 10,
) -> Decimal:
    """Compute how many standard deviations ``current`` lies from the window mean.

    Graceful degradation: fewer than ``min_samples`` historical values is not
    an error, it simply yields a z-score of 0.

    Args:
        history: Historical funding rates ordered oldest-first.
        current: The funding rate being evaluated.
        lookback: Number of most recent values forming the window.
        min_samples: Minimum history length required for a non-zero score.

    Returns:
        Z-score as Decimal. 0 on insufficient data or zero deviation.
    """
    if len(history) < min_samples:
        return _ZERO

    window = list(history[-lookback:])
    mean, std = compute_stats(window)
    return zscore_from_stats(current, mean, std)
