"""Edge score and win probability estimation.

Heuristic calibration, not a fitted model: both metrics reward statistical
extremity and breadth of confirmation, and both are bounded.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

EDGE_CAP = Decimal("100")
EDGE_Z_WEIGHT = Decimal("15")
EDGE_CONFIRMATION_WEIGHT = Decimal("12")

WIN_PROBABILITY_FLOOR = Decimal("0.50")
WIN_PROBABILITY_CAP = Decimal("0.80")
Z_BONUS_RATE = Decimal("0.05")
Z_BONUS_CAP = Decimal("0.15")
CONFIRMATION_BONUS = Decimal("0.03")
REVERSAL_BONUS = Decimal("0.05")

_ZERO = Decimal("0")


def compute_edge_score(z_score: Decimal, confirmations: int) -> Decimal:
    """Blend deviation magnitude and confirmation count into a 0-100 score.

    Formula: min(100, |z| * 15 + confirmations * 12)
    """
    raw = abs(z_score) * EDGE_Z_WEIGHT + Decimal(confirmations) * EDGE_CONFIRMATION_WEIGHT
    return max(_ZERO, min(EDGE_CAP, raw))


def estimate_win_probability(
    z_score: Decimal,
    confirmations: int,
    is_reversing: bool = False,
) -> Decimal:
    """Estimate the probability the reversion trade hits its target first.

    Formula:
        p = 0.50 + min(0.15, |z| * 0.05) + confirmations * 0.03 (+ 0.05 if reversing)

    Clamped to [0.50, 0.80]: never worse than a coin flip, never overconfident.
    """
    probability = (
        WIN_PROBABILITY_FLOOR
        + min(Z_BONUS_CAP, abs(z_score) * Z_BONUS_RATE)
        + Decimal(confirmations) * CONFIRMATION_BONUS
    )
    if is_reversing:
        probability += REVERSAL_BONUS
    return max(WIN_PROBABILITY_FLOOR, min(WIN_PROBABILITY_CAP, probability))
