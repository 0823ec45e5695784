"""Tests for short-window funding trend and reversal detection."""

from decimal import Decimal

from meanrev.signals.trend import (
    compute_funding_trend,
    detect_reversal,
    is_funding_reversing,
)


class TestComputeFundingTrend:
    """Tests for compute_funding_trend."""

    def test_slope_of_linear_series(self) -> None:
        """(last - first) / (n - 1)."""
        values = [Decimal(v) for v in (1, 2, 3, 4, 5, 6)]
        assert compute_funding_trend(values) == Decimal("1")

    def test_falling_series(self) -> None:
        values = [Decimal("0.0006"), Decimal("0.0001")]
        assert compute_funding_trend(values) == Decimal("-0.0005")

    def test_fewer_than_two_values_is_flat(self) -> None:
        assert compute_funding_trend([]) == Decimal("0")
        assert compute_funding_trend([Decimal("0.001")]) == Decimal("0")

    def test_only_endpoints_matter(self) -> None:
        values = [Decimal("1"), Decimal("100"), Decimal("-50"), Decimal("3")]
        assert compute_funding_trend(values) == Decimal("2") / Decimal("3")


class TestIsFundingReversing:
    """Tests for is_funding_reversing."""

    def test_above_mean_falling_is_reversing(self) -> None:
        assert is_funding_reversing(Decimal("0.002"), Decimal("0"), Decimal("-0.0001"))

    def test_below_mean_rising_is_reversing(self) -> None:
        assert is_funding_reversing(Decimal("-0.002"), Decimal("0"), Decimal("0.0001"))

    def test_above_mean_rising_is_not_reversing(self) -> None:
        assert not is_funding_reversing(Decimal("0.002"), Decimal("0"), Decimal("0.0001"))

    def test_below_mean_falling_is_not_reversing(self) -> None:
        assert not is_funding_reversing(Decimal("-0.002"), Decimal("0"), Decimal("-0.0001"))

    def test_flat_trend_is_not_reversing(self) -> None:
        assert not is_funding_reversing(Decimal("0.002"), Decimal("0"), Decimal("0"))

    def test_at_mean_is_not_reversing(self) -> None:
        assert not is_funding_reversing(Decimal("0"), Decimal("0"), Decimal("-1"))


class TestDetectReversal:
    """Tests for detect_reversal over the trailing window."""

    def test_uses_trailing_window_only(self) -> None:
        """Earlier values outside the 6-period window are ignored."""
        rates = [Decimal("-1")] * 10 + [Decimal(v) for v in (6, 5, 4, 3, 2, 1)]
        trend, reversing = detect_reversal(rates, Decimal("10"), Decimal("0"), window=6)
        assert trend == Decimal("-1")
        assert reversing is True

    def test_single_rate_window(self) -> None:
        trend, reversing = detect_reversal([Decimal("0.001")], Decimal("0.002"), Decimal("0"))
        assert trend == Decimal("0")
        assert reversing is False
