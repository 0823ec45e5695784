"""Window statistics for funding rate normalization.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

_ZERO = Decimal("0")


def compute_stats(values: Sequence[Decimal]) -> tuple[Decimal, Decimal]:
    """Compute mean and population standard deviation of a sample window.

    Uses the population variance (N denominator): the window is the complete
    reference distribution for the current observation.

    Args:
        values: Sample window, ordered oldest-first.

    Returns:
        ``(mean, std)`` tuple. ``(0, 0)`` for an empty window.
    """
    if not values:
        return _ZERO, _ZERO

    n = Decimal(len(values))
    mean = sum(values, _ZERO) / n
    variance = sum(((v - mean) ** 2 for v in values), _ZERO) / n
    return mean, variance.sqrt()
