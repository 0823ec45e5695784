"""Tests for risk-bounded position sizing.

Tests verify:
- Worked example: MEDIUM profile, STRONG_LONG, 5000 capital
- Strength multipliers and the global risk/leverage caps
- Position size never exceeds 40% of capital
- Stop/target prices mirror for shorts
- Expected value from win probability and the 2:1 reward:risk ratio
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from meanrev.config import SizingSettings
from meanrev.models import AnalysisResult, SignalType
from meanrev.position.profiles import RiskMode
from meanrev.position.sizing import PositionSizer, strength_multipliers


def _analysis(
    signal: SignalType,
    z_score: Decimal = Decimal("-2.7"),
    confirmations: int = 4,
    price: Decimal = Decimal("100"),
    win_probability: Decimal = Decimal("0.70"),
) -> AnalysisResult:
    return AnalysisResult(
        symbol="BTC",
        price=price,
        current_rate=Decimal("-0.001"),
        mean=Decimal("0"),
        std=Decimal("0.0004"),
        z_score=z_score,
        signal=signal,
        confirmations=confirmations,
        confirmation_details=(),
        edge_score=Decimal("88.5"),
        win_probability=win_probability,
        is_funding_reversing=False,
        funding_trend=Decimal("0"),
        timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def sizer() -> PositionSizer:
    return PositionSizer()


class TestStrengthMultipliers:
    """Tests for signal strength scaling."""

    @pytest.mark.parametrize(
        "signal,expected",
        [
            (SignalType.ULTRA_SHORT, (Decimal("1.5"), Decimal("1.3"))),
            (SignalType.ULTRA_LONG, (Decimal("1.5"), Decimal("1.3"))),
            (SignalType.STRONG_LONG, (Decimal("1.2"), Decimal("1.15"))),
            (SignalType.SHORT, (Decimal("1"), Decimal("1"))),
            (SignalType.LONG, (Decimal("1"), Decimal("1"))),
        ],
    )
    def test_multipliers(self, signal, expected) -> None:
        assert strength_multipliers(signal) == expected


class TestWorkedExample:
    """capital 5000, MEDIUM, STRONG_LONG at price 100."""

    def test_sizing(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.MEDIUM
        )

        assert result.direction == "LONG"
        assert result.risk_percent == Decimal("0.036")
        assert result.risk_amount == Decimal("180")
        assert result.position_size == Decimal("2000")
        assert result.leverage == 6
        assert result.stop_loss_percent == Decimal("0.015")
        assert result.take_profit_percent == Decimal("0.030")
        assert result.stop_loss_price == Decimal("98.5")
        assert result.take_profit_price == Decimal("103")

    def test_expected_value(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.MEDIUM
        )
        # 0.70 * 0.03 - 0.30 * 0.015
        assert result.expected_value == Decimal("0.0165")

    def test_accepts_string_mode(self, sizer) -> None:
        by_enum = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.MEDIUM
        )
        by_name = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), "MEDIUM"
        )
        assert by_enum == by_name


class TestCaps:
    """Global ceilings on risk, leverage and notional."""

    def test_ultra_risk_capped_at_ten_percent(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.ULTRA_SHORT, Decimal("3.2"), 6),
            Decimal("5000"),
            RiskMode.ULTRA,
        )
        # 0.08 * 1.5 = 0.12 -> capped
        assert result.risk_percent == Decimal("0.10")
        assert result.risk_amount == Decimal("500")
        assert result.leverage == 13

    def test_leverage_capped_by_settings(self) -> None:
        sizer = PositionSizer(SizingSettings(max_leverage=8))
        result = sizer.calculate(
            _analysis(SignalType.ULTRA_SHORT, Decimal("3.2"), 6),
            Decimal("5000"),
            RiskMode.ULTRA,
        )
        assert result.leverage == 8

    @pytest.mark.parametrize("mode", list(RiskMode))
    @pytest.mark.parametrize(
        "signal", [SignalType.SHORT, SignalType.STRONG_LONG, SignalType.ULTRA_SHORT]
    )
    def test_position_never_exceeds_forty_percent(self, sizer, mode, signal) -> None:
        capital = Decimal("12345")
        result = sizer.calculate(_analysis(signal), capital, mode)
        assert result.position_size <= capital * Decimal("0.40")
        assert result.risk_percent <= Decimal("0.10")
        assert result.leverage <= 15

    def test_uncapped_when_stop_is_wide(self) -> None:
        sizer = PositionSizer(SizingSettings(stop_loss_percent=Decimal("0.10")))
        result = sizer.calculate(_analysis(SignalType.LONG), Decimal("1000"), RiskMode.LOW)
        # 1000 * 0.02 / 0.10 = 200, below the 400 cap
        assert result.position_size == Decimal("200")
        assert result.leverage == 3


class TestDirection:
    """Exit prices for shorts mirror longs around entry."""

    def test_short_exits(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.SHORT, Decimal("2.1"), 3), Decimal("5000"), RiskMode.LOW
        )
        assert result.direction == "SHORT"
        assert result.stop_loss_price == Decimal("101.5")
        assert result.take_profit_price == Decimal("97")
        assert result.stop_loss_price > Decimal("100") > result.take_profit_price

    def test_long_exits(self, sizer) -> None:
        result = sizer.calculate(_analysis(SignalType.LONG), Decimal("5000"), RiskMode.LOW)
        assert result.stop_loss_price < Decimal("100") < result.take_profit_price


class TestMeetsProfile:
    """Profile quality bar is reported, not enforced."""

    def test_meets_medium(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.MEDIUM
        )
        assert result.meets_profile is True

    def test_below_ultra_bar_still_sized(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.ULTRA
        )
        assert result.meets_profile is False
        assert result.position_size > Decimal("0")

    def test_to_dict(self, sizer) -> None:
        result = sizer.calculate(
            _analysis(SignalType.STRONG_LONG), Decimal("5000"), RiskMode.MEDIUM
        )
        payload = result.to_dict()
        assert payload["leverage"] == 6
        assert payload["direction"] == "LONG"
        assert Decimal(payload["position_size"]) == Decimal("2000")
