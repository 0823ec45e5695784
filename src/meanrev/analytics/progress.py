"""Capital progress toward a goal, linear and log-scaled.

Capital compounding under fixed-fraction risk grows geometrically, so the
log-scaled figure (doublings completed / doublings needed) is the one worth
showing: linear progress badly understates early gains.

Logarithms use Decimal.ln() so the result stays in Decimal end to end.
"""

from decimal import Decimal

from meanrev.models import Progress

_ZERO = Decimal("0")
_ONE = Decimal("1")
_LN2 = Decimal("2").ln()


def _clamp_unit(value: Decimal) -> Decimal:
    return max(_ZERO, min(_ONE, value))


def log2(value: Decimal) -> Decimal:
    """Base-2 logarithm of a positive Decimal."""
    return value.ln() / _LN2


def calculate_progress(
    current: Decimal,
    start: Decimal = Decimal("5000"),
    goal: Decimal = Decimal("100000"),
) -> Progress:
    """Compute progress from ``start`` toward ``goal`` at ``current`` capital.

    Formula:
        linear = clamp((current - start) / (goal - start), 0, 1)
        total_doublings = log2(goal / start)
        completed_doublings = log2(current / start)
        log = clamp(completed_doublings / total_doublings, 0, 1)

    Args:
        current: Current capital (positive).
        start: Starting capital (positive, below goal).
        goal: Target capital.

    Returns:
        Progress with both measures and the doubling counts. The doubling
        counts are not clamped, so completed_doublings goes negative below
        the start capital.
    """
    linear = (current - start) / (goal - start)
    total_doublings = log2(goal / start)
    completed_doublings = log2(current / start)

    return Progress(
        linear_progress=_clamp_unit(linear),
        log_progress=_clamp_unit(completed_doublings / total_doublings),
        total_doublings=total_doublings,
        completed_doublings=completed_doublings,
        doublings_remaining=total_doublings - completed_doublings,
    )
