"""Risk-bounded position sizing for mean-reversion signals.

All calculations use Decimal arithmetic exclusively -- no float conversions.

Position sizing flow:
1. Scale the profile's risk fraction and leverage by signal strength
2. Clamp risk to max_risk_fraction and leverage to max_leverage
3. risk_amount = capital * effective_risk
4. position_size = risk_amount / stop_loss_percent, capped at
   max_position_fraction of capital
5. Stop and target prices around entry, mirrored for shorts
6. Expected value per unit of notional at the fixed reward:risk ratio
"""

from decimal import ROUND_HALF_UP, Decimal

from meanrev.config import SizingSettings
from meanrev.logging import get_logger
from meanrev.models import AnalysisResult, PositionSizing, SignalType
from meanrev.position.profiles import RiskMode, get_profile

logger = get_logger(__name__)

_ONE = Decimal("1")

#: Signal strength tag -> (risk multiplier, leverage multiplier).
_STRENGTH_MULTIPLIERS: tuple[tuple[str, Decimal, Decimal], ...] = (
    ("ULTRA", Decimal("1.5"), Decimal("1.3")),
    ("STRONG", Decimal("1.2"), Decimal("1.15")),
)


def strength_multipliers(signal: SignalType) -> tuple[Decimal, Decimal]:
    """Return (risk, leverage) multipliers for a signal's strength tag."""
    for tag, risk_multiplier, leverage_multiplier in _STRENGTH_MULTIPLIERS:
        if tag in signal.value:
            return risk_multiplier, leverage_multiplier
    return _ONE, _ONE


class PositionSizer:
    """Derives position size, leverage and exit levels from an analysis.

    No error paths: capital is assumed positive and the analysis populated.
    Callers are expected to size only actionable (non-NEUTRAL) signals.

    Args:
        settings: Global caps and stop/target parameters.
    """

    def __init__(self, settings: SizingSettings | None = None) -> None:
        self._settings = settings or SizingSettings()

    def calculate(
        self,
        analysis: AnalysisResult,
        capital: Decimal,
        risk_mode: RiskMode | str,
    ) -> PositionSizing:
        """Size a trade on ``analysis`` for the given capital and risk mode.

        Args:
            analysis: Signal, price and win probability to size.
            capital: Account capital in quote currency.
            risk_mode: Selected risk profile.

        Returns:
            PositionSizing with size, leverage, exit prices and expected value.
        """
        settings = self._settings
        profile = get_profile(risk_mode)
        risk_multiplier, leverage_multiplier = strength_multipliers(analysis.signal)

        effective_risk = min(
            profile.risk_per_trade * risk_multiplier, settings.max_risk_fraction
        )
        scaled_leverage = (Decimal(profile.max_leverage) * leverage_multiplier).quantize(
            _ONE, rounding=ROUND_HALF_UP
        )
        leverage = min(int(scaled_leverage), settings.max_leverage)

        risk_amount = capital * effective_risk
        stop_loss_percent = settings.stop_loss_percent
        take_profit_percent = stop_loss_percent * settings.reward_risk_ratio

        position_size = min(
            risk_amount / stop_loss_percent,
            capital * settings.max_position_fraction,
        )

        direction = "LONG" if "LONG" in analysis.signal.value else "SHORT"
        price = analysis.price
        if direction == "LONG":
            stop_loss_price = price * (_ONE - stop_loss_percent)
            take_profit_price = price * (_ONE + take_profit_percent)
        else:
            stop_loss_price = price * (_ONE + stop_loss_percent)
            take_profit_price = price * (_ONE - take_profit_percent)

        win_probability = analysis.win_probability
        expected_value = (
            win_probability * take_profit_percent
            - (_ONE - win_probability) * stop_loss_percent
        )

        sizing = PositionSizing(
            direction=direction,
            position_size=position_size,
            leverage=leverage,
            risk_amount=risk_amount,
            risk_percent=effective_risk,
            stop_loss_percent=stop_loss_percent,
            take_profit_percent=take_profit_percent,
            stop_loss_price=stop_loss_price,
            take_profit_price=take_profit_price,
            expected_value=expected_value,
            meets_profile=profile.accepts(analysis),
        )

        logger.debug(
            "position_sized",
            symbol=analysis.symbol,
            signal=analysis.signal.value,
            risk_mode=profile.mode.value,
            capital=str(capital),
            position_size=str(position_size),
            leverage=leverage,
            risk_amount=str(risk_amount),
        )
        return sizing
