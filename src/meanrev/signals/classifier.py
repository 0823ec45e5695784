"""Dual-gated signal classification.

Both the z-score magnitude and the confirmation count must clear their
thresholds. A large z-score with few confirmations degrades to a weaker
class or NEUTRAL.
"""

from decimal import Decimal

from meanrev.models import SignalType

#: (z threshold, min confirmations, signal) for the SHORT side, most extreme first.
#: The LONG side uses the same rows with the z-score sign flipped.
SIGNAL_RULES: tuple[tuple[Decimal, int, SignalType], ...] = (
    (Decimal("3.0"), 5, SignalType.ULTRA_SHORT),
    (Decimal("2.5"), 4, SignalType.STRONG_SHORT),
    (Decimal("2.0"), 3, SignalType.SHORT),
    (Decimal("1.8"), 2, SignalType.SHORT),
)

_MIRROR: dict[SignalType, SignalType] = {
    SignalType.ULTRA_SHORT: SignalType.ULTRA_LONG,
    SignalType.STRONG_SHORT: SignalType.STRONG_LONG,
    SignalType.SHORT: SignalType.LONG,
    SignalType.NEUTRAL: SignalType.NEUTRAL,
    SignalType.LONG: SignalType.SHORT,
    SignalType.STRONG_LONG: SignalType.STRONG_SHORT,
    SignalType.ULTRA_LONG: SignalType.ULTRA_SHORT,
}


def mirror_signal(signal: SignalType) -> SignalType:
    """Return the opposite-side signal of the same strength."""
    return _MIRROR[signal]


def classify_signal(z_score: Decimal, confirmations: int) -> SignalType:
    """Map a z-score and confirmation count to one of seven signal classes.

    Rules are evaluated as first match, SHORT side before LONG side, most
    extreme first within each side.

    Args:
        z_score: Z-score of the current funding rate.
        confirmations: Number of corroborating conditions.

    Returns:
        SignalType, NEUTRAL when no rule matches.
    """
    for threshold, min_confirmations, signal in SIGNAL_RULES:
        if z_score >= threshold and confirmations >= min_confirmations:
            return signal

    for threshold, min_confirmations, signal in SIGNAL_RULES:
        if z_score <= -threshold and confirmations >= min_confirmations:
            return mirror_signal(signal)

    return SignalType.NEUTRAL
