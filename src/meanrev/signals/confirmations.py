"""Confirmation scoring for funding rate extremes.

Each condition is evaluated independently and they stack: a rate at 3.1
sigma satisfies all four z-score thresholds and earns four confirmations.
"""

from collections.abc import Sequence
from decimal import Decimal

#: Z-score thresholds in evaluation order, with their explanation.
Z_CONFIRMATIONS: tuple[tuple[Decimal, str], ...] = (
    (Decimal("1.8"), "Z-Score: {z:.2f}σ"),
    (Decimal("2.0"), "Above 2σ threshold"),
    (Decimal("2.5"), "Extreme deviation (2.5σ+)"),
    (Decimal("3.0"), "Ultra extreme (3σ+)"),
)

REVERSAL_DETAIL = "Funding trend reversing"
EXTREME_DETAIL = "Near historical extreme"


def is_near_extreme(
    current: Decimal,
    window: Sequence[Decimal],
    proximity: Decimal = Decimal("0.9"),
) -> bool:
    """Return True when ``current`` is beyond ``proximity`` of the window max or min.

    A flat window has no extreme to be near, so it never confirms.
    """
    if not window:
        return False
    high, low = max(window), min(window)
    if high == low:
        return False
    return current > high * proximity or current < low * proximity


def score_confirmations(
    z_score: Decimal,
    current: Decimal,
    window: Sequence[Decimal],
    is_reversing: bool,
    proximity: Decimal = Decimal("0.9"),
) -> tuple[int, list[str]]:
    """Count corroborating conditions and explain each one.

    Args:
        z_score: Z-score of the current rate.
        current: The funding rate being evaluated.
        window: Lookback window the z-score was computed over.
        is_reversing: Output of the trend reversal detector.
        proximity: Fraction of the window extreme that counts as "near".

    Returns:
        ``(confirmations, details)`` with details in evaluation order.
    """
    details: list[str] = []
    abs_z = abs(z_score)

    for threshold, template in Z_CONFIRMATIONS:
        if abs_z >= threshold:
            details.append(template.format(z=z_score))

    if is_reversing:
        details.append(REVERSAL_DETAIL)

    if is_near_extreme(current, window, proximity):
        details.append(EXTREME_DETAIL)

    return len(details), details
